#!/usr/bin/env python3
"""
Frame Reader - splits the daemon's line stream into one response per command.

Every line read is one of:
  - blank: skipped (the daemon occasionally emits them mid-stream)
  - "OK": success terminator, the frame is complete
  - "ACK [<code>@<index>] {<command>} <message>": error terminator
  - anything else: a data line of the current frame

A deadline expiry before a terminator leaves the stream in an unknown
state, so the connection is discarded rather than resynchronized.
"""

import re
from typing import List, Optional, Tuple, TYPE_CHECKING

from mpdwire_common.constants import RESPONSE_OK, RESPONSE_ACK
from mpdwire_common.exceptions import (
    MPDConnectionError, MPDProtocolError, MPDTimeoutError
)
from mpdwire_common.logging import get_bound_logger

if TYPE_CHECKING:
    from .runner import ConnectionState

logger = get_bound_logger("frame_reader")

ACK_PATTERN = re.compile(r"^ACK \[(\d+)@(\d+)\] \{(.*?)\} (.*)$")
GREETING_PATTERN = re.compile(r"^OK (\S+) (\S+)$")


def parse_ack(line: str) -> Optional[MPDProtocolError]:
    """Build the protocol error for an ACK line, or None if it doesn't match the grammar."""
    match = ACK_PATTERN.match(line)
    if not match:
        return None
    code, index, command, message = match.groups()
    return MPDProtocolError(
        error_code=int(code),
        command_index=int(index),
        current_command=command,
        message=message,
    )


def parse_greeting(line: str) -> Tuple[str, str]:
    """
    Parse the greeting sent on connect.

    Returns:
        (implementation_name, version)

    Raises:
        MPDConnectionError: If the line is an ACK or not shaped "OK <name> <version>"
    """
    line = line.strip()
    if line.startswith(RESPONSE_ACK):
        error = parse_ack(line)
        reason = error.message if error else line
        raise MPDConnectionError(f"Connection failed: {reason}")
    match = GREETING_PATTERN.match(line)
    if not match:
        raise MPDConnectionError(f"Connection failed: unexpected greeting {line!r}")
    return match.group(1), match.group(2)


class FrameReader:
    """Reads one frame from the connection's current transport."""

    def __init__(self, state: "ConnectionState"):
        self.state = state

    def read_frame(self) -> List[str]:
        """
        Read lines until a terminator.

        Returns:
            The data lines of the frame, in order

        Raises:
            MPDProtocolError: On an ACK terminator
            MPDTimeoutError: If the read deadline elapses; the connection is discarded
            MPDConnectionError: If the stream ends first; the connection is discarded
        """
        transport = self.state.transport
        if transport is None:
            raise MPDConnectionError("Not connected")

        lines: List[str] = []
        while True:
            try:
                line = transport.read_line().strip()
            except TimeoutError:
                self.state.discard("timeout")
                raise MPDTimeoutError(details={"lines_read": len(lines)})
            except EOFError:
                self.state.discard("eof")
                raise MPDConnectionError("Connection closed by daemon",
                                         details={"lines_read": len(lines)})

            if not line:
                continue
            if line == RESPONSE_OK:
                return lines
            if line.startswith(RESPONSE_ACK):
                error = parse_ack(line)
                if error is not None:
                    logger.info("command.failed", error_code=error.error_code,
                                current_command=error.current_command)
                    raise error
            lines.append(line)
