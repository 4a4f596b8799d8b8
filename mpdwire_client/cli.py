#!/usr/bin/env python3
"""
mpdwire command-line tool

Usage:
    mpdwire status
    mpdwire --host /run/mpd/socket find artist "The Beatles"
    mpdwire --json outputs
    mpdwire watch player mixer
"""

import argparse
import json
import sys
from typing import List, Optional

from mpdwire_common.config import config
from mpdwire_common.exceptions import MPDError
from mpdwire_common.logging import configure_structlog

from .catalogue import COMMANDS
from .client import MPDClient
from .parser import ParsedValue


def format_value(value: ParsedValue) -> str:
    """Render a parsed response the way the daemon would print it."""
    if value is True:
        return "OK"
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        lines = []
        for key, item in value.items():
            if isinstance(item, dict):
                lines.append(f"{key}:")
                lines.extend(f"  {k}: {', '.join(v) if isinstance(v, list) else v}"
                             for k, v in item.items())
            else:
                lines.append(f"{key}: {item}")
        return "\n".join(lines)
    separator = "\n" if all(isinstance(item, str) for item in value) else "\n\n"
    return separator.join(format_value(item) for item in value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mpdwire", description="Talk to a music player daemon")
    parser.add_argument('--host', default=None,
                        help=f'Daemon host or socket path (default: {config.host})')
    parser.add_argument('--port', '-p', type=int, default=None,
                        help=f'Daemon port (default: {config.port})')
    parser.add_argument('--password', default=None,
                        help='Password to send after connecting')
    parser.add_argument('--timeout', '-t', type=float, default=None,
                        help='Response deadline in seconds for the command')
    parser.add_argument('--json', action='store_true',
                        help='Print the parsed response as JSON')
    parser.add_argument('command', help='Protocol verb, or "watch" to follow idle events')
    parser.add_argument('args', nargs='*', help='Command arguments')
    return parser


def watch(client: MPDClient, subsystems: List[str], as_json: bool) -> None:
    while True:
        changed = client.idle(*subsystems)
        batches = changed if isinstance(changed, list) else [changed]
        for batch in batches:
            print(json.dumps(batch) if as_json else format_value(batch), flush=True)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_structlog(log_level=config.get_log_level(), log_format=config.log_format, force=True)

    if args.command != "watch" and args.command not in COMMANDS:
        print(f"Error: unknown command '{args.command}'", file=sys.stderr)
        return 2

    client = MPDClient(host=args.host, port=args.port, password=args.password)
    try:
        if args.command == "watch":
            watch(client, args.args, args.json)
            return 0
        result = client.command(args.command, *args.args, timeout=args.timeout)
        print(json.dumps(result, indent=2) if args.json else format_value(result))
        return 0
    except MPDError as e:
        if args.json:
            print(json.dumps(e.to_dict()), file=sys.stderr)
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    finally:
        client.disconnect()


if __name__ == "__main__":
    sys.exit(main())
