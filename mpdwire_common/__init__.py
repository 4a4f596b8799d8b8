"""mpdwire common - configuration, constants, exceptions and logging
shared by the client package and its command-line tool.
"""

__version__ = "0.1.0"

from .config import MPDWireConfig, config
from .constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    RESPONSE_OK,
    RESPONSE_ACK,
)
from .exceptions import (
    AckCode,
    MPDError,
    MPDConnectionError,
    MPDWriteError,
    MPDTimeoutError,
    MPDProtocolError,
    UnsupportedCommandError,
    InvalidArgumentError,
)
from .logging import (
    configure_structlog,
    get_bound_logger,
    operation_context,
    clear_context,
)

__all__ = [
    "MPDWireConfig",
    "config",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "RESPONSE_OK",
    "RESPONSE_ACK",
    "AckCode",
    "MPDError",
    "MPDConnectionError",
    "MPDWriteError",
    "MPDTimeoutError",
    "MPDProtocolError",
    "UnsupportedCommandError",
    "InvalidArgumentError",
    "configure_structlog",
    "get_bound_logger",
    "operation_context",
    "clear_context",
]
