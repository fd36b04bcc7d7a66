"""Facet field listing and count aggregation."""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

FacetPairs: TypeAlias = list[tuple[Any, int]]


def _pairs(entries: Sequence[Any]) -> FacetPairs:
    """Accept ``[v, n, v, n, ...]`` or ``[[v, n], ...]``; keep engine order."""
    if entries and all(
        isinstance(e, Sequence) and not isinstance(e, str) and len(e) == 2
        for e in entries
    ):
        return [(e[0], e[1]) for e in entries]
    flat = list(entries)
    return list(zip(flat[0::2], flat[1::2], strict=False))


class FacetAggregator:
    """Read-only views over ``facet_counts.facet_fields``."""

    def __init__(self, facet_fields: Mapping[str, Sequence[Any]]) -> None:
        self._facet_fields = facet_fields

    def facet_fields(self) -> list[str]:
        return sorted(self._facet_fields)

    def facet_values(self, field: str) -> FacetPairs | None:
        """``(value, count)`` pairs for *field* in engine (count-ranked) order."""
        entries = self._facet_fields.get(field)
        if entries is None:
            return None
        return _pairs(entries)

    def facet_counts(self) -> dict[str, dict[Any, int]]:
        counts: dict[str, dict[Any, int]] = {}
        for field in self.facet_fields():
            counts[field] = dict(self.facet_values(field) or ())
        return counts
