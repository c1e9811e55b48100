"""Port: querying vagrant machines."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from crux.models import MachineStatus


class VagrantClientPort(Protocol):
    """Port for reading machine status and ssh-config from vagrant."""

    @property
    def working_directory(self) -> Path | None:
        """Directory holding the Vagrantfile (None = current directory)."""
        ...

    def status(self, refresh: bool = False) -> dict[str, MachineStatus]:
        """Machine name -> status, cached until refresh=True."""
        ...

    def are_all_machines_running(self, refresh: bool = False) -> bool:
        """True if at least one machine exists and every machine is running."""
        ...

    def are_any_machines_running(self, refresh: bool = False) -> bool:
        """True if any machine is running."""
        ...

    def machines_running(self, refresh: bool = False) -> list[str]:
        """Names of running machines, in status order."""
        ...

    def ssh_config(self, *machine_names: str, refresh: bool = False) -> Path:
        """Write ssh-config for the machines to a temp file and return its path."""
        ...

    def ssh_config_write(self, ssh_config_file: Path | str, *machine_names: str) -> None:
        """Write ssh-config for the machines to the given file."""
        ...
