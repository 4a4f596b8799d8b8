#!/usr/bin/env python3
"""
Command Runner - one request/response exchange with the daemon.

The protocol is strictly request/response with no pipelining, so a runner
holds one connection and serializes its callers with a lock. Connecting is
implicit: a call made while disconnected opens a fresh connection first.
"""

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence

from mpdwire_common.constants import DEFAULT_CONNECT_TIMEOUT
from mpdwire_common.exceptions import InvalidArgumentError, MPDConnectionError, MPDWriteError
from mpdwire_common.logging import get_bound_logger, operation_context

from .catalogue import LIST_COMMANDS, GROUPED_COMMANDS, UNACKNOWLEDGED_COMMANDS
from .frames import FrameReader, parse_greeting
from .parser import ParsedValue, parse_response
from .transport import Transport, TransportFactory, is_local_address, open_transport

logger = get_bound_logger("command_runner")


def encode_command(verb: str, args: Iterable[Any] = ()) -> str:
    """
    Build the wire line for a command.

    Each argument is double-quoted with embedded quotes backslash-escaped;
    the verb itself is never quoted. Only quotes are escaped, so an argument
    ending in a backslash escapes its own closing quote.

    Raises:
        InvalidArgumentError: If an argument contains a line break, which
            would split the command across two wire lines

    >>> encode_command("find", ["title", 'say "hi"'])
    'find "title" "say \\\\"hi\\\\""'
    """
    parts = [str(verb)]
    for arg in args:
        arg = str(arg)
        if "\n" in arg or "\r" in arg:
            raise InvalidArgumentError(arg)
        parts.append('"' + arg.replace('"', '\\"') + '"')
    return " ".join(parts)


@dataclass
class ConnectionState:
    """The single connection a runner owns."""
    transport: Optional[Transport] = None
    connected: bool = False
    version: Optional[str] = None

    def attach(self, transport: Transport, version: str) -> None:
        self.transport = transport
        self.connected = True
        self.version = version

    def discard(self, reason: str) -> None:
        """Close and forget the transport; it is never reused."""
        transport = self.transport
        self.transport = None
        self.connected = False
        self.version = None
        if transport is not None:
            logger.info("connection.discarded", reason=reason)
            transport.close()


class CommandRunner:
    """Sends one command at a time and parses its response."""

    def __init__(self,
                 host: str,
                 port: int,
                 password: Optional[str] = None,
                 connect_timeout: Optional[float] = DEFAULT_CONNECT_TIMEOUT,
                 socket_timeout: Optional[float] = None,
                 transport_factory: TransportFactory = open_transport,
                 list_commands: Iterable[str] = LIST_COMMANDS,
                 grouped_commands: Optional[Dict[str, str]] = None):
        """
        Args:
            host: Daemon host, IP address, or absolute Unix socket path
            port: Daemon TCP port
            password: Sent with the "password" verb right after the greeting
            connect_timeout: Seconds allowed for socket open and greeting
            socket_timeout: Default read deadline; None blocks
            transport_factory: Opens a new transport for each connection
            list_commands: Verbs whose result is always a list
            grouped_commands: Verb -> grouping key for verbs with named sub-objects
        """
        self.host = host
        self.port = port
        self.password = password
        self.connect_timeout = connect_timeout
        self.socket_timeout = socket_timeout
        self.transport_factory = transport_factory
        self.list_commands = frozenset(list_commands)
        self.grouped_commands = dict(GROUPED_COMMANDS if grouped_commands is None else grouped_commands)

        self.state = ConnectionState()
        self.frames = FrameReader(self.state)
        self.lock = threading.RLock()

    @property
    def connected(self) -> bool:
        return self.state.connected

    @property
    def is_local(self) -> bool:
        """Whether the daemon is reached over a low-latency (loopback or Unix) link."""
        transport = self.state.transport
        if transport is not None:
            return transport.is_local
        return is_local_address(self.host)

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> bool:
        """
        Open the connection and read the greeting; a no-op when already connected.

        Raises:
            MPDConnectionError: If the socket can't be opened or the greeting is bad
            MPDProtocolError: If the configured password is rejected
        """
        with self.lock:
            if self.state.connected:
                return True

            try:
                transport = self.transport_factory(
                    self.host, self.port, self.connect_timeout, self.socket_timeout
                )
            except OSError as e:
                raise MPDConnectionError(
                    f"Connection failed: {e}",
                    details={"host": self.host, "port": self.port}
                ) from e

            try:
                greeting = transport.read_line()
                _, version = parse_greeting(greeting)
            except (EOFError, OSError) as e:
                transport.close()
                raise MPDConnectionError(
                    f"Connection failed: no greeting ({e})",
                    details={"host": self.host, "port": self.port}
                ) from e
            except MPDConnectionError:
                transport.close()
                raise

            transport.set_timeout(transport.default_timeout)
            self.state.attach(transport, version)
            logger.info("connection.opened", host=self.host, port=self.port, version=version)

            if self.password is not None:
                self.run("password", [self.password])
            return True

    def disconnect(self) -> None:
        """Say goodbye to the daemon (best effort) and close the socket."""
        with self.lock:
            transport = self.state.transport
            if transport is None:
                return
            try:
                transport.write_line("close")
            except OSError as e:
                logger.debug("connection.close_not_sent", error=str(e))
            self.state.discard("disconnect")
            logger.info("connection.closed", host=self.host, port=self.port)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def run(self, verb: str, args: Sequence[Any] = (),
            timeout: Optional[float] = None) -> ParsedValue:
        """
        Send one command and return its parsed response.

        Args:
            verb: Command name
            args: Arguments, each quoted individually
            timeout: Read deadline for this call only; None keeps the transport default

        Raises:
            InvalidArgumentError: If an argument contains a line break; nothing is sent
            MPDConnectionError: If no connection exists and connecting fails
            MPDWriteError: If the transport rejects the write
            MPDProtocolError: If the daemon answers with ACK
            MPDTimeoutError: If the deadline elapses; the connection is discarded
        """
        line = encode_command(verb, args)
        with self.lock, operation_context(command=verb):
            self.connect()

            if verb in UNACKNOWLEDGED_COMMANDS:
                self._write(line, verb, len(args))
                self.state.discard(verb)
                return True

            started = time.monotonic()
            with self._deadline(timeout):
                self._write(line, verb, len(args))
                lines = self.frames.read_frame()
                result = parse_response(
                    lines,
                    expects_list=verb in self.list_commands,
                    grouping_key=self.grouped_commands.get(verb),
                )
            logger.debug("command.completed", verb=verb, lines=len(lines),
                         duration_ms=(time.monotonic() - started) * 1000)
            return result

    def _write(self, line: str, verb: str, arg_count: int) -> None:
        transport = self.state.transport
        if transport is None:
            raise MPDConnectionError("Not connected")
        logger.debug("command.sent", verb=verb, arg_count=arg_count)
        try:
            transport.write_line(line)
        except OSError as e:
            self.state.discard("write failed")
            raise MPDWriteError(f"Failed to write to daemon socket: {e}",
                                details={"command": verb}) from e

    @contextmanager
    def _deadline(self, timeout: Optional[float]):
        """Install a per-call read deadline and restore the default afterwards."""
        if timeout is None:
            yield
            return
        self.state.transport.set_timeout(timeout)
        try:
            yield
        finally:
            # A timeout inside discards the transport; nothing left to restore then
            transport = self.state.transport
            if transport is not None:
                transport.set_timeout(transport.default_timeout)
