#!/usr/bin/env python3
"""
mpdwire client

Caller-facing client: one method per verb in the catalogue, generated once
when this module is imported, all routed through a single CommandRunner.

Usage:
    from mpdwire_client import MPDClient

    with MPDClient(host="localhost", port=6600) as client:
        client.play()
        status = client.status()        # {"volume": "80", "state": "play", ...}
        outputs = client.outputs()      # [{"outputid": "0", ...}, ...]
        changed = client.idle("player") # "player", or ["player", "mixer"]
"""

from typing import Any, Dict, Iterable, Optional

from mpdwire_common.config import MPDWireConfig, config as default_config
from mpdwire_common.exceptions import UnsupportedCommandError

from .catalogue import COMMANDS, LIST_COMMANDS
from .idle import IdleSession
from .parser import ParsedValue
from .runner import CommandRunner
from .transport import TransportFactory, open_transport


class MPDClient:
    """
    Blocking client for one daemon connection.

    Calls are serialized, one command in flight per connection. Threads that
    need commands in parallel should each use their own client.
    """

    def __init__(self,
                 host: Optional[str] = None,
                 port: Optional[int] = None,
                 password: Optional[str] = None,
                 settings: Optional[MPDWireConfig] = None,
                 transport_factory: TransportFactory = open_transport,
                 list_commands: Iterable[str] = LIST_COMMANDS,
                 grouped_commands: Optional[Dict[str, str]] = None):
        settings = settings or default_config
        self.settings = settings
        self.runner = CommandRunner(
            host=host if host is not None else settings.host,
            port=port if port is not None else settings.port,
            password=password if password is not None else settings.password,
            connect_timeout=settings.connect_timeout,
            socket_timeout=settings.socket_timeout,
            transport_factory=transport_factory,
            list_commands=list_commands,
            grouped_commands=grouped_commands,
        )
        self.idle_session = IdleSession(
            self.runner,
            idle_timeout=settings.idle_timeout,
            drain_timeout=settings.idle_drain_timeout,
            drain=settings.idle_drain,
        )

    def __enter__(self) -> "MPDClient":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()

    def __repr__(self) -> str:
        return f"MPDClient(host={self.runner.host!r}, port={self.runner.port}, connected={self.connected})"

    @property
    def connected(self) -> bool:
        return self.runner.connected

    @property
    def version(self) -> Optional[str]:
        """Protocol version from the daemon's greeting, None while disconnected."""
        return self.runner.state.version

    def connect(self) -> bool:
        return self.runner.connect()

    def disconnect(self) -> None:
        self.runner.disconnect()

    def command(self, verb: str, *args: Any, timeout: Optional[float] = None) -> ParsedValue:
        """
        Run any catalogue verb by name.

        "idle" goes through the idle session and ignores timeout; "close"
        disconnects.

        Raises:
            UnsupportedCommandError: If verb is not in the catalogue; nothing is sent
        """
        if verb not in COMMANDS:
            raise UnsupportedCommandError(verb)
        if verb == "idle":
            return self.idle_session.idle(args)
        if verb == "close":
            self.disconnect()
            return True
        return self.runner.run(verb, args, timeout=timeout)


def _make_command(verb: str):
    def command(self: MPDClient, *args: Any, timeout: Optional[float] = None) -> ParsedValue:
        return self.command(verb, *args, timeout=timeout)

    command.__name__ = verb
    command.__qualname__ = f"MPDClient.{verb}"
    command.__doc__ = f'Send "{verb}" and return the parsed response.'
    return command


for _verb in COMMANDS:
    if not hasattr(MPDClient, _verb):
        setattr(MPDClient, _verb, _make_command(_verb))
del _verb
