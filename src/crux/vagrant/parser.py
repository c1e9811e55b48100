"""Parse vagrant's machine-readable output.

Each record is one line of comma-separated fields::

    timestamp,target,type,data...

Commas inside data are escaped by vagrant as ``%!(VAGRANT_COMMA)`` and
newlines as a literal ``\\n``.
"""

from __future__ import annotations

import logging

from crux.models import MachineStatus

logger = logging.getLogger(__name__)

_COMMA_ESCAPE = "%!(VAGRANT_COMMA)"


def parse_lines(output: str) -> list[str]:
    """Split captured stdout into lines, dropping blank ones."""
    return [line.rstrip("\r") for line in output.splitlines() if line.strip()]


def unescape(value: str) -> str:
    return value.replace(_COMMA_ESCAPE, ",").replace("\\n", "\n").replace("\\r", "\r")


def split_record(line: str) -> tuple[str, str, str, list[str]] | None:
    """Split one record into (timestamp, target, type, data).

    Returns None for lines that do not have at least the three leading fields.
    """
    fields = line.split(",")
    if len(fields) < 3:
        return None
    timestamp, target, kind = fields[0], fields[1], fields[2]
    return timestamp, target, kind, [unescape(f) for f in fields[3:]]


def parse_status(lines: list[str]) -> dict[str, MachineStatus]:
    """Build a machine name -> MachineStatus mapping from status output lines.

    Machines keep the order in which they first appear. A machine that never
    gets a ``state`` record is left out.
    """
    records: dict[str, dict[str, str]] = {}

    for line in lines:
        record = split_record(line)
        if record is None:
            logger.debug("Skipping malformed machine-readable line: %r", line)
            continue
        _, target, kind, data = record
        if not target:
            # ui/metadata lines that are not about a specific machine
            continue

        value = data[0] if data else ""
        fields = records.setdefault(target, {})
        match kind:
            case "state":
                fields["state"] = value
                fields["raw"] = line
            case "provider-name":
                fields["provider"] = value
            case "state-human-short":
                fields["state_human_short"] = value
            case "state-human-long":
                fields["state_human_long"] = value

    result: dict[str, MachineStatus] = {}
    for name, fields in records.items():
        if "state" not in fields:
            continue
        result[name] = MachineStatus(name=name, **fields)
    return result
