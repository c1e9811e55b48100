"""Access to the vagrant client held by the server lifespan."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import Context

if TYPE_CHECKING:
    from crux.vagrant.base import VagrantClientPort


def vagrant_client(ctx: Context) -> VagrantClientPort:
    """Return the client created by ``app_lifespan``.

    Raises TypeError when the server was started without that lifespan.
    """
    from crux.server import AppContext

    app = ctx.request_context.lifespan_context
    if not isinstance(app, AppContext):
        raise TypeError(f"crux tools need an AppContext lifespan, got {type(app).__name__}")
    return app.vagrant
