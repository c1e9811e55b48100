"""Settings for the vagrant client: defaults, optional YAML file, env overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

import yaml

from crux.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV = "CRUX_CONFIG"
EXECUTABLE_ENV = "CRUX_VAGRANT_EXECUTABLE"
TIMEOUT_ENV = "CRUX_VAGRANT_TIMEOUT"
DIRECTORY_ENV = "CRUX_VAGRANT_DIR"

DEFAULT_EXECUTABLE = "vagrant"
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True, slots=True)
class VagrantSettings:
    """How to invoke the vagrant executable."""

    executable: str = DEFAULT_EXECUTABLE
    timeout: float = DEFAULT_TIMEOUT
    working_directory: Path | None = None  # None = current directory


def load_settings(
    path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> VagrantSettings:
    """Resolve settings from defaults, a YAML file and environment variables.

    The file is ``path`` if given, else the file named by ``CRUX_CONFIG``.
    It may hold a top-level ``vagrant`` mapping with ``executable``,
    ``timeout`` and ``working_directory``. ``CRUX_VAGRANT_EXECUTABLE``,
    ``CRUX_VAGRANT_TIMEOUT`` and ``CRUX_VAGRANT_DIR`` override the file.

    Raises:
        ConfigError: If the file cannot be read or a value is invalid.
    """
    source = env if env is not None else os.environ
    settings = VagrantSettings()

    config_path = path or source.get(CONFIG_ENV)
    if config_path:
        settings = _apply_mapping(settings, _load_file(Path(config_path)), str(config_path))

    overrides: dict[str, object] = {}
    if source.get(EXECUTABLE_ENV):
        overrides["executable"] = source[EXECUTABLE_ENV]
    if source.get(TIMEOUT_ENV):
        overrides["timeout"] = source[TIMEOUT_ENV]
    if source.get(DIRECTORY_ENV):
        overrides["working_directory"] = source[DIRECTORY_ENV]
    if overrides:
        settings = _apply_mapping(settings, overrides, "environment")

    return settings


def _load_file(path: Path) -> dict[str, object]:
    """Read the ``vagrant`` section of a YAML settings file."""
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read settings file '{path}': {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid settings format in {path}: expected a YAML mapping.")

    section = data.get("vagrant", {})
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"Invalid settings format in {path}: 'vagrant' must be a mapping.")
    logger.debug("Loaded settings from %s", path)
    return section


def _apply_mapping(
    settings: VagrantSettings, values: Mapping[str, object], source: str
) -> VagrantSettings:
    changes: dict[str, object] = {}

    if values.get("executable"):
        changes["executable"] = str(values["executable"])

    if values.get("timeout") is not None:
        changes["timeout"] = _parse_timeout(values["timeout"], source)

    if values.get("working_directory"):
        changes["working_directory"] = Path(str(values["working_directory"])).expanduser()

    return replace(settings, **changes)


def _parse_timeout(value: object, source: str) -> float:
    try:
        timeout = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid vagrant timeout {value!r} in {source}.") from None
    if timeout <= 0:
        raise ConfigError(f"Vagrant timeout must be positive, got {timeout} in {source}.")
    return timeout
