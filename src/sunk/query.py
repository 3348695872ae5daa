"""Request parameter builder for Subsonic API calls."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Set, Tuple
from urllib.parse import urlencode

Pairs = Tuple[Tuple[str, str], ...]


def to_query_value(value: Any) -> str:
    """Convert a parameter value to its wire string.

    Booleans become ``true``/``false``, integers are written in decimal,
    enums are written as their value and everything else goes through ``str``.

    Examples:
        >>> to_query_value(True)
        'true'
        >>> to_query_value(320)
        '320'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return to_query_value(value.value)
    return str(value)


class Query:
    """Ordered, additive builder of request parameters.

    Each key is added once; repeated keys only come from maybe_arg_list().

    Example:
        >>> Query.with_arg("id", 27).maybe_arg("maxBitRate", None).build()
        (('id', '27'),)
    """

    def __init__(self):
        self._pairs: List[Tuple[str, str]] = []
        self._keys: Set[str] = set()

    @classmethod
    def with_arg(cls, key: str, value: Any) -> "Query":
        """Create a builder seeded with one mandatory pair."""
        return cls().arg(key, value)

    def _claim(self, key: str) -> None:
        if key in self._keys:
            raise ValueError(f"Query parameter '{key}' already set")
        self._keys.add(key)

    def arg(self, key: str, value: Any) -> "Query":
        """Append a mandatory parameter."""
        self._claim(key)
        self._pairs.append((key, to_query_value(value)))
        return self

    def maybe_arg(self, key: str, value: Optional[Any]) -> "Query":
        """Append a parameter only when value is not None."""
        if value is not None:
            self.arg(key, value)
        return self

    def maybe_arg_list(self, key: str, values: Optional[Iterable[Any]]) -> "Query":
        """Append one ``key=value`` pair per element, preserving order.

        Nothing is added when values is None or empty.
        """
        if values is None:
            return self
        values = list(values)
        if not values:
            return self
        self._claim(key)
        for value in values:
            self._pairs.append((key, to_query_value(value)))
        return self

    def build(self) -> Pairs:
        """Finalize into an immutable ordered sequence of pairs."""
        return tuple(self._pairs)

    def encode(self) -> str:
        """Serialize into a URL-encoded query string."""
        return urlencode(self.build())

    def __repr__(self) -> str:
        return f"Query({self.build()!r})"


@dataclass(frozen=True)
class SearchPage:
    """Window into a paged result list.

    Attributes:
        count: Maximum number of results to return
        offset: Number of results to skip
    """

    count: int = 20
    offset: int = 0

    def __post_init__(self):
        if self.count < 0 or self.offset < 0:
            raise ValueError("count and offset must be non-negative")

    def next(self) -> "SearchPage":
        """Return the page immediately after this one."""
        return SearchPage(count=self.count, offset=self.offset + self.count)

    def apply(self, query: Query, prefix: str = "") -> Query:
        """Add ``<prefix>Count`` and ``<prefix>Offset`` (or count/offset) to a query."""
        if prefix:
            return query.arg(f"{prefix}Count", self.count).arg(f"{prefix}Offset", self.offset)
        return query.arg("count", self.count).arg("offset", self.offset)
