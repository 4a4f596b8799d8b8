"""Shared fixtures: an in-memory transport that replays a scripted daemon."""

from typing import List, Optional

import pytest

from mpdwire_common.config import MPDWireConfig

GREETING = "OK MPD 0.23.5"


class ScriptedTransport:
    """Replays a list of lines; exception instances in the script are raised instead."""

    def __init__(self, script, default_timeout: Optional[float] = None, is_local: bool = True):
        self.script = list(script)
        self.default_timeout = default_timeout
        self.is_local = is_local
        self.written: List[str] = []
        self.timeouts: List[Optional[float]] = []
        self.closed = False
        self.fail_writes = False

    def set_timeout(self, timeout):
        self.timeouts.append(timeout)

    def write_line(self, line):
        if self.fail_writes:
            raise BrokenPipeError("broken pipe")
        self.written.append(line)

    def read_line(self):
        if not self.script:
            raise EOFError("script exhausted")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self):
        self.closed = True


class TransportFactory:
    """Hands out one scripted transport per connection attempt."""

    def __init__(self, *scripts, is_local: bool = True):
        self.transports = [ScriptedTransport(s, is_local=is_local) for s in scripts]
        self.opened: List[ScriptedTransport] = []
        self.calls = []

    def __call__(self, host, port, connect_timeout, default_timeout):
        self.calls.append((host, port, connect_timeout, default_timeout))
        if not self.transports:
            raise ConnectionRefusedError("no more scripted connections")
        transport = self.transports.pop(0)
        transport.default_timeout = default_timeout
        self.opened.append(transport)
        return transport


@pytest.fixture
def settings():
    """Settings that ignore the environment so tests don't depend on MPD_* variables."""
    return MPDWireConfig(
        _env_file=None,
        host="localhost",
        port=6600,
        password=None,
        socket_timeout=30.0,
        idle_timeout=None,
        idle_drain=None,
    )


@pytest.fixture
def scripted():
    """Build a TransportFactory from one script per connection.

    Usage:
        factory = scripted([GREETING, "volume: 50", "OK"])
    """
    def make(*scripts, is_local: bool = True) -> TransportFactory:
        return TransportFactory(*scripts, is_local=is_local)
    return make
