"""Shared test fixtures."""

from __future__ import annotations

import pytest

from crux.config import CONFIG_ENV, DIRECTORY_ENV, EXECUTABLE_ENV, TIMEOUT_ENV
from crux.vagrant.ssh_config import _remove_temp_files


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's CRUX_* variables out of the tests."""
    for name in (CONFIG_ENV, EXECUTABLE_ENV, TIMEOUT_ENV, DIRECTORY_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _clean_temp_ssh_configs():
    """Remove ssh-config temp files written during a test."""
    yield
    _remove_temp_files()
