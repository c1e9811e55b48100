"""Thin client over the vagrant command-line tool."""

from __future__ import annotations

from crux.vagrant.base import VagrantClientPort
from crux.vagrant.client import DefaultVagrantClient, EmptyVagrantClient, safe_load

__all__ = ["DefaultVagrantClient", "EmptyVagrantClient", "VagrantClientPort", "safe_load"]
