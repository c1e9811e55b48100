"""Save `vagrant ssh-config` output to disk."""

from __future__ import annotations

import atexit
import contextlib
import logging
import os
import tempfile
from pathlib import Path

from crux.errors import VagrantError

logger = logging.getLogger(__name__)

# Directives that break OpenSSH on some hosts (notably Windows): the known
# hosts line is dropped and the identity file path loses its quotes.
_DROP_DIRECTIVE = "UserKnownHostsFile"
_UNQUOTE_DIRECTIVE = "IdentityFile"

_temp_files: list[Path] = []


def filter_ssh_config(text: str) -> list[str]:
    """Return the config lines with the problematic directives fixed up."""
    lines: list[str] = []
    for line in text.splitlines():
        if _DROP_DIRECTIVE in line:
            continue
        if _UNQUOTE_DIRECTIVE in line:
            line = line.replace('"', "")
        lines.append(line)
    return lines


def write_ssh_config(path: Path | str, text: str) -> Path:
    """Write filtered ssh-config text to ``path``, replacing its contents.

    Raises:
        VagrantError: If the file cannot be written.
    """
    path = Path(path)
    content = "\n".join(filter_ssh_config(text))
    if content:
        content += "\n"
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise VagrantError(f"Failed to write ssh-config {path}: {exc}") from exc
    logger.debug("Wrote ssh-config to %s", path)
    return path


def create_temp_file() -> Path:
    """Create an empty ``vagrant.*.ssh-config`` temp file, removed at exit.

    Raises:
        VagrantError: If the temp file cannot be created.
    """
    try:
        fd, name = tempfile.mkstemp(prefix="vagrant.", suffix=".ssh-config")
        os.close(fd)
    except OSError as exc:
        raise VagrantError(f"Failed to create ssh-config temp file: {exc}") from exc
    path = Path(name)
    _temp_files.append(path)
    return path


def remove_temp_file(path: Path) -> None:
    """Delete a temp file made by create_temp_file() and stop tracking it."""
    with contextlib.suppress(ValueError):
        _temp_files.remove(path)
    with contextlib.suppress(OSError):
        path.unlink()


@atexit.register
def _remove_temp_files() -> None:
    for path in _temp_files:
        with contextlib.suppress(OSError):
            path.unlink()
    _temp_files.clear()
