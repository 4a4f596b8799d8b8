"""Shared constants and configuration defaults for mpdwire."""

# Connection defaults
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6600
DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_BUFFER_SIZE = 4096

# Idle defaults
DEFAULT_IDLE_DRAIN_TIMEOUT = 0.1  # 100 ms per drain call

# Logging defaults
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "console"

# Wire protocol
RESPONSE_OK = "OK"
RESPONSE_ACK = "ACK"
LINE_TERMINATOR = "\r\n"
KEY_VALUE_SEPARATOR = ": "
ENCODING = "utf-8"
