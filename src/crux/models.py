"""Domain models for crux. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

# ─── Enumerations ─────────────────────────────────────────────


class MachineState(StrEnum):
    """Well-known values of the `state` record in vagrant machine-readable output.

    Providers may report other states; MachineStatus.state keeps whatever
    string vagrant printed.
    """

    RUNNING = "running"
    POWEROFF = "poweroff"
    SAVED = "saved"
    ABORTED = "aborted"
    NOT_CREATED = "not_created"


# ─── Vagrant Models ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MachineStatus:
    """Status of a single machine as reported by `vagrant status --machine-readable`."""

    name: str
    state: str
    raw: str = ""  # the raw `state` line this record was built from
    provider: str = ""
    state_human_short: str = ""
    state_human_long: str = ""

    @property
    def running(self) -> bool:
        return self.state == MachineState.RUNNING

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "state": self.state,
            "running": self.running,
            "provider": self.provider,
            "state_human_short": self.state_human_short,
            "state_human_long": self.state_human_long,
        }
