"""Command-line interface: `crux status | ssh-config | uri | serve`."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from crux import __version__
from crux.config import load_settings
from crux.errors import CruxError
from crux.uri import MutableUri
from crux.vagrant.client import DefaultVagrantClient

logger = logging.getLogger(__name__)


def _name_value(text: str) -> tuple[str, str]:
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    return name, value


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="crux",
        description="Query vagrant machines and build URIs.",
    )
    parser.add_argument("--version", action="version", version=f"crux {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML settings file. Defaults to $CRUX_CONFIG when set.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    status = sub.add_parser("status", help="Show vagrant machine status.")
    status.add_argument("--json", action="store_true", help="Print status as JSON.")

    ssh = sub.add_parser("ssh-config", help="Write vagrant ssh-config to a file.")
    ssh.add_argument("machines", nargs="*", help="Machine names (default: all).")
    ssh.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write to this file instead of a temp file that is removed on exit.",
    )

    uri = sub.add_parser("uri", help="Parse a URI and optionally modify its query.")
    uri.add_argument("uri", help="URI to start from.")
    uri.add_argument(
        "--query",
        type=_name_value,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Append a query parameter (repeatable).",
    )
    uri.add_argument(
        "--set",
        type=_name_value,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Replace all values of a query parameter (repeatable).",
    )
    uri.add_argument("--json", action="store_true", help="Print components as JSON.")

    sub.add_parser("serve", help="Run the MCP server over stdio.")

    return parser.parse_args(argv)


def _cmd_status(args: argparse.Namespace) -> int:
    client = DefaultVagrantClient(load_settings(args.config))
    status = client.status()
    if args.json:
        print(json.dumps([s.to_dict() for s in status.values()], indent=2))
        return 0
    if not status:
        print("No machines defined.")
        return 0
    width = max(len(name) for name in status)
    for machine in status.values():
        provider = f" ({machine.provider})" if machine.provider else ""
        print(f"{machine.name.ljust(width)}  {machine.state}{provider}")
    return 0


def _cmd_ssh_config(args: argparse.Namespace) -> int:
    client = DefaultVagrantClient(load_settings(args.config))
    if args.output is not None:
        client.ssh_config_write(args.output, *args.machines)
        print(args.output)
    else:
        # temp file is removed at exit, so print the content rather than the path
        path = client.ssh_config(*args.machines)
        sys.stdout.write(path.read_text(encoding="utf-8"))
    return 0


def _cmd_uri(args: argparse.Namespace) -> int:
    uri = MutableUri.parse(args.uri)
    for name, value in args.query:
        uri.query(name, value)
    for name, value in args.set:
        uri.set_query(name, value)

    if not args.json:
        print(uri)
        return 0

    print(json.dumps(uri.to_immutable().to_dict(), indent=2))
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    from crux.server import mcp

    mcp.run(transport="stdio")
    return 0


_COMMANDS = {
    "status": _cmd_status,
    "ssh-config": _cmd_ssh_config,
    "uri": _cmd_uri,
    "serve": _cmd_serve,
}


def run(argv: list[str] | None = None) -> int:
    """Parse arguments, dispatch the subcommand and return the exit status."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        return _COMMANDS[args.command](args)
    except CruxError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"crux: error: {exc}", file=sys.stderr)
        return 1
