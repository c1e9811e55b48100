"""parse_uri and build_uri tools -- split and assemble URIs."""

from __future__ import annotations

from crux.errors import UriFormatError
from crux.uri import MutableUri


async def parse_uri(uri: str) -> dict[str, object]:
    """Split a URI into scheme, user_info, host, port, path, query and fragment.

    Query parameters keep their order; repeated names collect every value.
    """
    try:
        parsed = MutableUri.parse(uri).to_immutable()
    except UriFormatError as exc:
        return {"success": False, "error": str(exc)}
    return {"success": True, **parsed.to_dict()}


async def build_uri(
    base: str = "",
    scheme: str = "",
    host: str = "",
    port: int | None = None,
    path: str = "",
    query: list[list[str]] | None = None,
    set_query: dict[str, str] | None = None,
    fragment: str = "",
) -> dict[str, object]:
    """Build a URI, optionally starting from ``base`` and overriding parts.

    Args:
        base: Existing URI to start from.
        scheme, host, port, path, fragment: Replace that component when given.
        query: [name, value] pairs appended in order (repeats allowed).
        set_query: name -> value, replacing every earlier value of name.
    """
    try:
        builder = MutableUri.parse(base) if base else MutableUri()
    except UriFormatError as exc:
        return {"success": False, "error": str(exc)}

    if scheme:
        builder.scheme(scheme)
    if host:
        builder.host(host)
    if port is not None:
        builder.port(port)
    if path:
        builder.path(path)
    for pair in query or []:
        if len(pair) != 2:
            return {"success": False, "error": f"Query pair must be [name, value], got {pair!r}"}
        builder.query(pair[0], pair[1])
    for name, value in (set_query or {}).items():
        builder.set_query(name, value)
    if fragment:
        builder.fragment(fragment)

    return {"success": True, **builder.to_immutable().to_dict()}
