"""Exception classes for mpdwire.

Every failure the client surfaces is one of these, carrying enough
structured detail (code, message, details) to branch on programmatically.
"""

from enum import IntEnum
from typing import Optional, Dict, Any


class AckCode(IntEnum):
    """Numeric error codes the daemon places in an ACK line."""
    NOT_LIST = 1
    ARG = 2
    PASSWORD = 3
    PERMISSION = 4
    UNKNOWN = 5
    NO_EXIST = 50
    PLAYLIST_MAX = 51
    SYSTEM = 52
    PLAYLIST_LOAD = 53
    UPDATE_ALREADY = 54
    PLAYER_SYNC = 55
    EXIST = 56


class MPDError(Exception):
    """Base exception for all mpdwire errors."""

    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a plain dictionary (used by the CLI's JSON output)."""
        result = {"message": self.message}
        if self.code:
            result["code"] = self.code
        if self.details:
            result["details"] = self.details
        return result


class MPDConnectionError(MPDError):
    """Raised when the socket cannot be opened, the greeting is bad, or the stream ends."""

    def __init__(self, message: str = "Failed to connect to daemon", **kwargs):
        super().__init__(message, code="CONNECTION_ERROR", **kwargs)


class MPDWriteError(MPDError):
    """Raised when the transport rejects a write."""

    def __init__(self, message: str = "Failed to write to daemon socket", **kwargs):
        super().__init__(message, code="WRITE_ERROR", **kwargs)


class MPDTimeoutError(MPDError):
    """Raised when a deadline elapses before a terminator line arrives."""

    def __init__(self, message: str = "Command timed out", **kwargs):
        super().__init__(message, code="TIMEOUT_ERROR", **kwargs)


class MPDProtocolError(MPDError):
    """Raised when the daemon answers with an ACK line.

    Carries the four fields of ``ACK [<code>@<index>] {<command>} <message>``.
    """

    def __init__(self, error_code: int, command_index: int,
                 current_command: str, message: str, **kwargs):
        super().__init__(message, code="PROTOCOL_ERROR", **kwargs)
        self.error_code = error_code
        self.command_index = command_index
        self.current_command = current_command
        self.details.update({
            "error_code": error_code,
            "command_index": command_index,
            "current_command": current_command,
        })

    @property
    def ack(self) -> Optional[AckCode]:
        """The known AckCode for this error, or None for codes we don't name."""
        try:
            return AckCode(self.error_code)
        except ValueError:
            return None

    def __str__(self) -> str:
        return f"[{self.error_code}@{self.command_index}] {{{self.current_command}}} {self.message}"


class UnsupportedCommandError(MPDError):
    """Raised for a verb outside the command catalogue; nothing is sent."""

    def __init__(self, verb: str, **kwargs):
        super().__init__(f"Unsupported command: {verb}", code="UNSUPPORTED_COMMAND", **kwargs)
        self.verb = verb


class InvalidArgumentError(MPDError):
    """Raised for an argument that cannot be sent on one wire line; nothing is sent."""

    def __init__(self, argument: str, **kwargs):
        super().__init__(f"Argument contains a line break: {argument!r}",
                         code="INVALID_ARGUMENT", **kwargs)
        self.argument = argument
