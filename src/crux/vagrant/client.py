"""Vagrant client that shells out to the vagrant executable."""

from __future__ import annotations

import logging
from pathlib import Path

from crux.config import VagrantSettings
from crux.errors import VagrantError
from crux.models import MachineStatus
from crux.vagrant.base import VagrantClientPort
from crux.vagrant.parser import parse_lines, parse_status
from crux.vagrant.ssh_config import create_temp_file, remove_temp_file, write_ssh_config
from crux.vagrant.subprocess import run_command

logger = logging.getLogger(__name__)


class DefaultVagrantClient:
    """Runs ``vagrant status --machine-readable`` and ``vagrant ssh-config``.

    Status and temp ssh-config files are cached per client; pass
    ``refresh=True`` to run vagrant again.
    """

    def __init__(self, settings: VagrantSettings | None = None) -> None:
        self._settings = settings or VagrantSettings()
        self._status: dict[str, MachineStatus] | None = None
        self._ssh_configs: dict[tuple[str, ...], Path] = {}

    @property
    def settings(self) -> VagrantSettings:
        return self._settings

    @property
    def working_directory(self) -> Path | None:
        return self._settings.working_directory

    def status(self, refresh: bool = False) -> dict[str, MachineStatus]:
        if self._status is None or refresh:
            output = self._run("status", "--machine-readable")
            self._status = parse_status(parse_lines(output))
            logger.debug("vagrant reported %d machine(s)", len(self._status))
        return dict(self._status)

    def are_all_machines_running(self, refresh: bool = False) -> bool:
        status = self.status(refresh)
        # at least one machine needs to be defined
        if not status:
            return False
        return all(s.running for s in status.values())

    def are_any_machines_running(self, refresh: bool = False) -> bool:
        return any(s.running for s in self.status(refresh).values())

    def machines_running(self, refresh: bool = False) -> list[str]:
        return [s.name for s in self.status(refresh).values() if s.running]

    def ssh_config(self, *machine_names: str, refresh: bool = False) -> Path:
        key = tuple(machine_names)
        cached = self._ssh_configs.get(key)
        if cached is not None and cached.exists():
            if refresh:
                # rewritten in place, so the path handed out earlier stays valid
                self.ssh_config_write(cached, *machine_names)
            return cached

        if cached is not None:
            remove_temp_file(cached)
        path = create_temp_file()
        try:
            self.ssh_config_write(path, *machine_names)
        except VagrantError:
            remove_temp_file(path)
            raise
        self._ssh_configs[key] = path
        return path

    def ssh_config_write(self, ssh_config_file: Path | str, *machine_names: str) -> None:
        output = self._run("ssh-config", *machine_names)
        write_ssh_config(ssh_config_file, output)

    def _run(self, *args: str) -> str:
        """Run vagrant with ``args`` and return its stdout.

        Raises:
            VagrantError: If vagrant cannot be started, times out, or exits non-zero.
        """
        cmd = [self._settings.executable, *args]
        display = " ".join(cmd)
        try:
            code, stdout, stderr = run_command(
                cmd,
                cwd=self._settings.working_directory,
                timeout=self._settings.timeout,
            )
        except OSError as exc:
            raise VagrantError(f"Failed to run '{display}': {exc}") from exc

        if code < 0:
            message = stderr.strip() or "killed by a signal"
            logger.warning("'%s' ended with code %d", display, code)
            raise VagrantError(f"'{display}' failed with code {code}: {message}")
        if code != 0:
            message = (stderr or stdout).strip() or "no output"
            logger.warning("'%s' exited with code %d", display, code)
            raise VagrantError(f"'{display}' failed with exit code {code}: {message}")
        return stdout


class EmptyVagrantClient:
    """A client with no machines, used when vagrant is unavailable."""

    def __init__(self, working_directory: Path | None = None) -> None:
        self._working_directory = working_directory

    @property
    def working_directory(self) -> Path | None:
        return self._working_directory

    def status(self, refresh: bool = False) -> dict[str, MachineStatus]:
        return {}

    def are_all_machines_running(self, refresh: bool = False) -> bool:
        return False

    def are_any_machines_running(self, refresh: bool = False) -> bool:
        return False

    def machines_running(self, refresh: bool = False) -> list[str]:
        return []

    def ssh_config(self, *machine_names: str, refresh: bool = False) -> Path:
        raise VagrantError("No vagrant machines available (empty client).")

    def ssh_config_write(self, ssh_config_file: Path | str, *machine_names: str) -> None:
        raise VagrantError("No vagrant machines available (empty client).")


def safe_load(settings: VagrantSettings | None = None) -> VagrantClientPort:
    """Build a client and prefetch status and ssh-config.

    Falls back to an EmptyVagrantClient if vagrant fails, which makes it
    handy as a module-level fixture in test suites that may run without
    vagrant installed.
    """
    settings = settings or VagrantSettings()
    client = DefaultVagrantClient(settings)
    try:
        client.status()
        client.ssh_config()
    except VagrantError as exc:
        logger.warning("Vagrant unavailable, using empty client: %s", exc)
        return EmptyVagrantClient(settings.working_directory)
    return client
