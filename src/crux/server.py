"""MCP server exposing the vagrant client and URI helpers as tools."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from crux.config import load_settings
from crux.tools.uri import build_uri, parse_uri
from crux.tools.vagrant import vagrant_ssh_config, vagrant_status
from crux.vagrant.base import VagrantClientPort
from crux.vagrant.client import DefaultVagrantClient


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state across all tool invocations."""

    vagrant: VagrantClientPort


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Build the vagrant client once from settings -- the composition root."""
    yield AppContext(vagrant=DefaultVagrantClient(load_settings()))


mcp = FastMCP(
    "crux",
    instructions=(
        "crux reads the state of Vagrant machines and works with URIs.\n\n"
        "- **vagrant_status** -- status of each machine in the Vagrantfile "
        "(running, poweroff, not_created, ...). Results are cached; pass "
        "refresh=True after starting or stopping machines.\n"
        "- **vagrant_ssh_config** -- writes an OpenSSH config file for the "
        "machines and returns its path and content.\n"
        "- **parse_uri** -- split a URI into its components; repeated query "
        "parameters keep every value in order.\n"
        "- **build_uri** -- assemble a URI from components or modify an existing one."
    ),
    lifespan=app_lifespan,
)

# ─── Read-only tools ──────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(vagrant_status)
mcp.tool(annotations=ToolAnnotations(destructiveHint=False))(vagrant_ssh_config)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(parse_uri)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(build_uri)
