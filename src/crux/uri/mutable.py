"""Fluent, modifiable URI builder."""

from __future__ import annotations

import httpx

from crux.uri.codec import format_uri, split_uri
from crux.uri.model import Uri


class MutableUri:
    """Helps to build a URI.

    Unlike Uri (or urllib.parse results) this one can be modified after it
    has been created, with a simple fluent style::

        MutableUri().scheme("http").host("example.com").path("/a").query("x", "1")

    Accepts a URI string, a Uri, another MutableUri or an httpx.URL to start from.
    """

    def __init__(self, uri: str | Uri | MutableUri | httpx.URL | None = None) -> None:
        self._scheme: str | None = None
        self._user_info: str | None = None
        self._host: str | None = None
        self._port: int | None = None
        self._path: str | None = None
        self._query: dict[str, list[str | None]] = {}
        self._fragment: str | None = None

        if uri is None:
            return
        if isinstance(uri, (Uri, MutableUri)):
            self._copy_from(uri)
        else:
            self._apply(str(uri))

    @classmethod
    def parse(cls, text: str) -> MutableUri:
        """Parse a URI string.

        Raises:
            UriFormatError: If the string cannot be split into valid components.
        """
        return cls(text)

    # ─── Accessors ────────────────────────────────────────────

    def get_scheme(self) -> str | None:
        return self._scheme

    def get_user_info(self) -> str | None:
        return self._user_info

    def get_host(self) -> str | None:
        return self._host

    def get_port(self) -> int | None:
        return self._port

    def get_path(self) -> str | None:
        return self._path

    def get_fragment(self) -> str | None:
        return self._fragment

    def get_query(self) -> dict[str, tuple[str | None, ...]]:
        return {name: tuple(values) for name, values in self._query.items()}

    def query_all(self, name: str) -> tuple[str | None, ...]:
        return tuple(self._query.get(name, ()))

    def query_first(self, name: str) -> str | None:
        values = self._query.get(name)
        return values[0] if values else None

    # ─── Fluent setters ───────────────────────────────────────

    def scheme(self, scheme: str | None) -> MutableUri:
        self._scheme = scheme
        return self

    def user_info(self, user_info: str | None) -> MutableUri:
        self._user_info = user_info
        return self

    def host(self, host: str | None) -> MutableUri:
        self._host = host
        return self

    def port(self, port: int | None) -> MutableUri:
        self._port = port
        return self

    def path(self, path: str | None) -> MutableUri:
        self._path = path
        return self

    def fragment(self, fragment: str | None) -> MutableUri:
        self._fragment = fragment
        return self

    def query(self, name: str, value: str | None) -> MutableUri:
        """Append a value for ``name``, keeping any earlier values."""
        self._query_values(name).append(value)
        return self

    def set_query(self, name: str, value: str | None) -> MutableUri:
        """Replace every earlier value of ``name`` with ``value``."""
        values = self._query_values(name)
        values.clear()
        values.append(value)
        return self

    def remove_query(self, name: str) -> MutableUri:
        self._query.pop(name, None)
        return self

    def _query_values(self, name: str) -> list[str | None]:
        if name is None:
            raise ValueError("name cannot be None")
        return self._query.setdefault(name, [])

    # ─── Conversion ───────────────────────────────────────────

    def to_immutable(self) -> Uri:
        return Uri(
            scheme=self._scheme,
            user_info=self._user_info,
            host=self._host,
            port=self._port,
            path=self._path,
            query=self.get_query(),
            fragment=self._fragment,
        )

    def to_url(self) -> httpx.URL:
        return httpx.URL(str(self))

    def _copy_from(self, other: Uri | MutableUri) -> None:
        if isinstance(other, MutableUri):
            other = other.to_immutable()
        self._scheme = other.scheme
        self._user_info = other.user_info
        self._host = other.host
        self._port = other.port
        self._path = other.path
        self._query = {name: list(values) for name, values in other.query.items()}
        self._fragment = other.fragment

    def _apply(self, text: str) -> None:
        parts = split_uri(text)
        if parts.scheme is not None:
            self._scheme = parts.scheme
        if parts.user_info is not None:
            self._user_info = parts.user_info
        if parts.host is not None:
            self._host = parts.host
        if parts.port is not None:
            self._port = parts.port
        if parts.path is not None:
            self._path = parts.path
        if parts.query is not None:
            # rebuild from scratch, a parsed query replaces what was there
            self._query = {}
            for name, value in parts.query:
                self.query(name, value)
        if parts.fragment is not None:
            self._fragment = parts.fragment

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MutableUri):
            return NotImplemented
        return self.to_immutable() == other.to_immutable()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MutableUri({str(self)!r})"

    def __str__(self) -> str:
        return format_uri(
            scheme=self._scheme,
            user_info=self._user_info,
            host=self._host,
            port=self._port,
            path=self._path,
            query=self._query,
            fragment=self._fragment,
        )
