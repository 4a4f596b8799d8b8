"""Shared configuration management using pydantic-settings.

Environment Variables:
    MPD_HOST - Daemon host, IP address or absolute Unix socket path (default: localhost)
    MPD_PORT - Daemon TCP port (default: 6600)
    MPD_PASSWORD - Password sent right after the greeting (default: none)
    MPD_CONNECT_TIMEOUT - Seconds allowed for socket open and greeting (default: 5.0)
    MPD_SOCKET_TIMEOUT - Default read deadline in seconds (default: none, block)
    MPD_IDLE_TIMEOUT - Deadline for the first idle call (default: none, block)
    MPD_IDLE_DRAIN_TIMEOUT - Deadline for each idle drain call (default: 0.1)
    MPD_IDLE_DRAIN - Force the idle drain loop on or off (default: auto)
    MPD_LOG_LEVEL - Logging level (default: WARNING)
    MPD_LOG_FORMAT - Log format: json or console (default: console)

Example:
    export MPD_HOST=/run/mpd/socket
    export MPD_LOG_LEVEL=DEBUG
    mpdwire status
"""

from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import Optional, Literal

from .constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_IDLE_DRAIN_TIMEOUT,
    DEFAULT_LOG_LEVEL,
)


class MPDWireConfig(BaseSettings):
    """Connection, idle and logging settings for the client."""

    # Connection
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    password: Optional[str] = None
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    socket_timeout: Optional[float] = None

    # Idle long-poll
    idle_timeout: Optional[float] = None
    idle_drain_timeout: float = DEFAULT_IDLE_DRAIN_TIMEOUT
    idle_drain: Optional[bool] = None  # None means decide from the transport

    # Logging
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: Literal["json", "console"] = "console"

    model_config = {
        "env_prefix": "MPD_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }

    @field_validator('port', mode='after')
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError(f"Port out of range: {v}")
        return v

    @field_validator('connect_timeout', 'socket_timeout', 'idle_timeout',
                     'idle_drain_timeout', mode='after')
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    def get_log_level(self) -> str:
        """Get log level string for structlog."""
        return self.log_level.upper()

    def __str__(self) -> str:
        return f"MPDWireConfig(host={self.host}, port={self.port})"


# Global configuration instance
config = MPDWireConfig()
