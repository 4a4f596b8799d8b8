#!/usr/bin/env python3
"""
mpdwire client - blocking client for the music player daemon's text protocol

Sends one command at a time, reads the framed response up to its OK/ACK
terminator, and turns the daemon's flat "key: value" lines into strings,
records, lists of records or maps of named records.

Usage:
    from mpdwire_client import MPDClient

    with MPDClient() as client:
        print(client.status())
        for song in client.playlistinfo():
            print(song["file"])
"""

from .client import MPDClient
from .runner import CommandRunner, ConnectionState, encode_command
from .frames import FrameReader
from .parser import parse_response
from .idle import IdleSession
from .transport import SocketTransport, Transport, open_transport
from mpdwire_common.exceptions import (
    AckCode,
    MPDError,
    MPDConnectionError,
    MPDWriteError,
    MPDTimeoutError,
    MPDProtocolError,
    UnsupportedCommandError,
    InvalidArgumentError,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "MPDClient",

    # Building blocks
    "CommandRunner",
    "ConnectionState",
    "FrameReader",
    "IdleSession",
    "SocketTransport",
    "Transport",
    "encode_command",
    "open_transport",
    "parse_response",

    # Exceptions
    "AckCode",
    "MPDError",
    "MPDConnectionError",
    "MPDWriteError",
    "MPDTimeoutError",
    "MPDProtocolError",
    "UnsupportedCommandError",
    "InvalidArgumentError",
]
