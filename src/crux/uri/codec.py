"""Splitting URI strings into components and joining them back together.

Only user-info, query names/values and the fragment are percent-encoded on
the way out. The path is carried raw in both directions so an already
encoded path is never encoded twice.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from urllib.parse import quote_plus, unquote_plus, urlsplit

from crux.errors import UriFormatError


@dataclass(frozen=True, slots=True)
class UriParts:
    """Decoded components of a URI string, as produced by split_uri()."""

    scheme: str | None = None
    user_info: str | None = None
    host: str | None = None
    port: int | None = None
    path: str | None = None
    query: tuple[tuple[str, str | None], ...] | None = None
    fragment: str | None = None


def encode(value: str, safe: str = "") -> str:
    """Form-encode a component value (spaces become '+')."""
    return quote_plus(value, safe=safe)


def decode(value: str) -> str:
    """Reverse of encode(): '%XX' escapes and '+' are decoded."""
    return unquote_plus(value)


def split_query(raw_query: str) -> list[tuple[str, str | None]]:
    """Split a raw query string into decoded (name, value) pairs in order.

    A segment without '=' yields a None value. A segment with more than
    one '=' is rejected.

    Raises:
        UriFormatError: If a segment contains more than one '=' character.
    """
    pairs: list[tuple[str, str | None]] = []
    for pair in raw_query.split("&"):
        if not pair:
            continue
        nv = pair.split("=")
        match len(nv):
            case 1:
                pairs.append((decode(nv[0]), None))
            case 2:
                pairs.append((decode(nv[0]), decode(nv[1])))
            case _:
                raise UriFormatError(
                    f"Name value pair [{pair}] in query [{raw_query}] has more than one = char"
                )
    return pairs


def _host_of(hostinfo: str) -> str:
    # IPv6 literals keep their brackets, like they are written in the URI.
    if hostinfo.startswith("["):
        end = hostinfo.find("]")
        return hostinfo if end < 0 else hostinfo[: end + 1]
    return hostinfo.partition(":")[0]


def split_uri(text: str) -> UriParts:
    """Split a URI string into decoded components.

    Raises:
        UriFormatError: If the string is not a valid URI or has a bad port
            or query pair.
    """
    try:
        parts = urlsplit(text)
    except ValueError as exc:
        raise UriFormatError(f"Invalid URI [{text}]: {exc}") from exc

    user_info: str | None = None
    host: str | None = None
    port: int | None = None
    if parts.netloc:
        raw_user_info, at, hostinfo = parts.netloc.rpartition("@")
        if at:
            user_info = decode(raw_user_info)
        host = _host_of(hostinfo) or None
        try:
            port = parts.port
        except ValueError as exc:
            raise UriFormatError(f"Invalid port in URI [{text}]: {exc}") from exc

    query = tuple(split_query(parts.query)) if parts.query else None

    return UriParts(
        scheme=parts.scheme or None,
        user_info=user_info,
        host=host,
        port=port,
        path=parts.path or None,
        query=query,
        fragment=decode(parts.fragment) if parts.fragment else None,
    )


def encode_query(query: Mapping[str, Sequence[str | None]] | None) -> str:
    """Join query parameters into 'name=value' pairs in insertion order."""
    if not query:
        return ""
    pairs: list[str] = []
    for name, values in query.items():
        for value in values:
            if value is None:
                pairs.append(encode(name))
            else:
                pairs.append(f"{encode(name)}={encode(value)}")
    return "&".join(pairs)


def format_uri(
    scheme: str | None = None,
    user_info: str | None = None,
    host: str | None = None,
    port: int | None = None,
    path: str | None = None,
    query: Mapping[str, Sequence[str | None]] | None = None,
    fragment: str | None = None,
) -> str:
    """Assemble a URI string from components, encoding all but the path.

    User-info is held decoded, so every ':' in it is written as the
    user/password separator. A user name that contained an encoded '%3A'
    comes back with a literal ':' and splits differently.
    """
    out: list[str] = []

    if scheme is not None:
        out.append(f"{scheme}:")

    if host is not None:
        out.append("//")
        if user_info is not None:
            out.append(f"{encode(user_info, safe=':')}@")
        out.append(host)
        if port is not None:
            out.append(f":{port}")

    if path is not None:
        out.append(path)

    encoded_query = encode_query(query)
    if encoded_query:
        out.append(f"?{encoded_query}")

    if fragment is not None:
        out.append(f"#{encode(fragment)}")

    return "".join(out)
