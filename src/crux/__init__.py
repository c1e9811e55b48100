"""crux: small utilities for URIs and the vagrant command-line tool."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _distribution_version

_DIST_NAME = "crux"
_UNINSTALLED_VERSION = "0.0.0+local"


def _resolve_version() -> str:
    # a source checkout that was never installed has no metadata
    try:
        return _distribution_version(_DIST_NAME)
    except PackageNotFoundError:
        return _UNINSTALLED_VERSION


__version__ = _resolve_version()


def main() -> None:
    """Console script entry point; exits with the status of the command run."""
    from crux.cli import run

    raise SystemExit(run())
