"""URI building and parsing with ordered, repeatable query parameters."""

from __future__ import annotations

from crux.uri.model import Uri
from crux.uri.mutable import MutableUri

__all__ = ["MutableUri", "Uri"]
