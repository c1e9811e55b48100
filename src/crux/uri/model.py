"""Immutable URI value."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

import httpx

from crux.uri.codec import format_uri

if TYPE_CHECKING:
    from crux.uri.mutable import MutableUri


@dataclass(frozen=True, slots=True)
class Uri:
    """A URI split into components.

    ``query`` maps each parameter name to its values in the order they were
    added; names keep their first-insertion order. A ``None`` value stands
    for a bare name without '='.

    The query is kept as a read-only mapping of tuples; a Uri is hashable
    and never changes after construction.
    """

    scheme: str | None = None
    user_info: str | None = None
    host: str | None = None
    port: int | None = None
    path: str | None = None
    query: Mapping[str, tuple[str | None, ...]] = field(default_factory=dict)
    fragment: str | None = None

    def __post_init__(self) -> None:
        frozen = {name: tuple(values) for name, values in self.query.items()}
        object.__setattr__(self, "query", MappingProxyType(frozen))

    def __hash__(self) -> int:
        return hash(
            (
                self.scheme,
                self.user_info,
                self.host,
                self.port,
                self.path,
                frozenset(self.query.items()),
                self.fragment,
            )
        )

    def query_all(self, name: str) -> tuple[str | None, ...]:
        return self.query.get(name, ())

    def query_first(self, name: str) -> str | None:
        values = self.query_all(name)
        return values[0] if values else None

    def to_dict(self) -> dict[str, object]:
        return {
            "uri": str(self),
            "scheme": self.scheme,
            "user_info": self.user_info,
            "host": self.host,
            "port": self.port,
            "path": self.path,
            "query": {name: list(values) for name, values in self.query.items()},
            "fragment": self.fragment,
        }

    def to_mutable(self) -> MutableUri:
        from crux.uri.mutable import MutableUri

        return MutableUri(self)

    def to_url(self) -> httpx.URL:
        """Return the URI as an httpx.URL, e.g. to hand to an httpx client."""
        return httpx.URL(str(self))

    def __str__(self) -> str:
        return format_uri(
            scheme=self.scheme,
            user_info=self.user_info,
            host=self.host,
            port=self.port,
            path=self.path,
            query=self.query,
            fragment=self.fragment,
        )
