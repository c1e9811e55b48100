"""vagrant_status and vagrant_ssh_config tools -- read machine state from vagrant."""

from __future__ import annotations

import asyncio
import logging

from mcp.server.fastmcp import Context

from crux.errors import CruxError
from crux.tools._helpers import vagrant_client
from crux.vagrant.base import VagrantClientPort

logger = logging.getLogger(__name__)


def _status_report(client: VagrantClientPort, refresh: bool) -> dict[str, object]:
    # only the first call may refresh, the rest read the cached status
    status = client.status(refresh)
    return {
        "success": True,
        "machines": [s.to_dict() for s in status.values()],
        "all_running": client.are_all_machines_running(),
        "any_running": client.are_any_machines_running(),
        "running": client.machines_running(),
    }


async def vagrant_status(ctx: Context, refresh: bool = False) -> dict[str, object]:
    """Report the status of every machine in the Vagrantfile.

    Args:
        refresh: Run `vagrant status` again instead of using the cached result.

    Returns:
        Result with: success, machines (name, state, running, provider...),
        all_running, any_running, running (names of running machines).
    """
    try:
        client = vagrant_client(ctx)
        result = await asyncio.to_thread(_status_report, client, refresh)
    except CruxError as exc:
        return {"success": False, "error": str(exc)}
    except Exception as exc:
        await ctx.error(f"Unexpected error in vagrant_status: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}

    return result


async def vagrant_ssh_config(
    ctx: Context,
    machines: list[str] | None = None,
    refresh: bool = False,
) -> dict[str, object]:
    """Write `vagrant ssh-config` for the machines to a temp file.

    Args:
        machines: Machine names to include. Empty means every machine.
        refresh: Run `vagrant ssh-config` again even if a file was written before.

    Returns:
        Result with: success, path (the ssh-config file), content.
    """
    names = list(machines or [])
    try:
        client = vagrant_client(ctx)
        path = await asyncio.to_thread(lambda: client.ssh_config(*names, refresh=refresh))
        content = path.read_text(encoding="utf-8")
    except CruxError as exc:
        return {"success": False, "error": str(exc)}
    except Exception as exc:
        await ctx.error(f"Unexpected error in vagrant_ssh_config: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}

    logger.info("ssh-config for %s written to %s", names or "all machines", path)
    return {"success": True, "path": str(path), "content": content}
