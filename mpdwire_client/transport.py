#!/usr/bin/env python3
"""
Line transport over TCP or Unix sockets.

A transport is one open connection to the daemon. It is never reopened:
once closed (explicitly, or after a deadline expiry left the stream in an
unknown state) the runner asks the factory for a fresh one.

read_line() reports the two ways a read can end without a line as distinct
exceptions: TimeoutError when the current deadline elapses, EOFError when
the peer closed the stream.
"""

import ipaddress
import socket
from typing import Optional, Protocol

from mpdwire_common.constants import ENCODING, LINE_TERMINATOR, DEFAULT_READ_BUFFER_SIZE


class Transport(Protocol):
    """What the frame reader and command runner need from a connection."""

    default_timeout: Optional[float]
    is_local: bool

    def set_timeout(self, timeout: Optional[float]) -> None: ...

    def write_line(self, line: str) -> None: ...

    def read_line(self) -> str: ...

    def close(self) -> None: ...


class TransportFactory(Protocol):
    def __call__(self, host: str, port: int, connect_timeout: Optional[float],
                 default_timeout: Optional[float]) -> Transport: ...


def is_local_address(host: str) -> bool:
    """True for Unix socket paths, 'localhost' and loopback addresses."""
    if host.startswith("/") or host == "localhost":
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


class SocketTransport:
    """Blocking line reader/writer around a connected socket."""

    def __init__(self, sock: socket.socket, default_timeout: Optional[float] = None,
                 is_local: bool = False):
        self.sock = sock
        self.default_timeout = default_timeout
        self.is_local = is_local
        self.buf = b""
        self.sock.settimeout(default_timeout)

    def set_timeout(self, timeout: Optional[float]) -> None:
        self.sock.settimeout(timeout)

    def write_line(self, line: str) -> None:
        self.sock.sendall((line + LINE_TERMINATOR).encode(ENCODING))

    def read_line(self) -> str:
        while True:
            newline = self.buf.find(b"\n")
            if newline >= 0:
                raw, self.buf = self.buf[:newline], self.buf[newline + 1:]
                return raw.decode(ENCODING, errors="replace").strip()
            try:
                chunk = self.sock.recv(DEFAULT_READ_BUFFER_SIZE)
            except socket.timeout as e:
                raise TimeoutError("read deadline elapsed") from e
            if not chunk:
                raise EOFError("connection closed")
            self.buf += chunk

    def close(self) -> None:
        try:
            self.sock.close()
        finally:
            self.buf = b""


def open_transport(host: str, port: int, connect_timeout: Optional[float] = None,
                   default_timeout: Optional[float] = None) -> SocketTransport:
    """Open a TCP connection, or a Unix socket connection when host is a path.

    Raises:
        OSError: If the socket cannot be opened
    """
    if host.startswith("/"):
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(connect_timeout)
        try:
            sock.connect(host)
        except OSError:
            sock.close()
            raise
    else:
        sock = socket.create_connection((host, port), timeout=connect_timeout)

    transport = SocketTransport(sock, default_timeout=default_timeout,
                                is_local=is_local_address(host))
    # The greeting is read under the connect timeout; the runner installs the
    # default once the handshake is done.
    transport.set_timeout(connect_timeout)
    return transport
