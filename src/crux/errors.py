"""Exception hierarchy for crux.

All exceptions inherit from CruxError (single catch point).
Messages are meant to be shown as-is: short, actionable, no stack traces.
"""

from __future__ import annotations


class CruxError(Exception):
    """Base exception for all crux errors."""


class UriFormatError(CruxError, ValueError):
    """A URI string could not be parsed into its components."""


class VagrantError(CruxError):
    """The vagrant executable failed, timed out, or its output could not be saved."""


class ConfigError(CruxError):
    """Error reading or validating crux settings."""
