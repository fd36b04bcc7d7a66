"""Decoding of the engine's ``fq`` (filter query) parameter.

The engine echoes ``fq`` back either as a bare string or as a list of
strings, one constraint per entry, e.g.::

    fq = ['-assigned_by:"UniProt"', "taxon:NCBITaxon:9606"]

Each entry becomes a ``FilterClause``; ``decode_filters`` folds clauses into
``{field: {value: polarity}}`` where polarity ``True`` is an inclusive
filter and ``False`` an exclusive (negated) one.

Functions:

* ``parse_filter_clause`` — one ``fq`` entry to a ``FilterClause``.
* ``iter_filter_clauses`` — normalise string-or-list and parse each entry.
* ``decode_filters`` — the folded polarity map.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TypeAlias

FilterMap: TypeAlias = dict[str, dict[str, bool]]


@dataclass(frozen=True, slots=True)
class FilterClause:
    """Single field constraint from ``fq``."""

    field: str
    value: str
    polarity: bool = True


def _unquote(value: str) -> str:
    """Drop one outer pair of double quotes, if present."""
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def parse_filter_clause(item: str) -> FilterClause:
    """Parse ``[+|-]field:value``.

    Only the first colon separates field from value, so identifiers such as
    ``GO:0022008`` survive intact. A leading ``-`` negates the clause; a
    leading ``+`` is dropped.
    """
    field, _, value = item.partition(":")
    polarity = True
    if field.startswith("-"):
        polarity = False
        field = field[1:]
    elif field.startswith("+"):
        field = field[1:]
    return FilterClause(field=field, value=_unquote(value), polarity=polarity)


def iter_filter_clauses(fq: str | Sequence[str] | None) -> Iterator[FilterClause]:
    if not fq:
        return
    items = [fq] if isinstance(fq, str) else fq
    for item in items:
        if isinstance(item, str):
            yield parse_filter_clause(item)


def decode_filters(fq: str | Sequence[str] | None) -> FilterMap:
    """Fold ``fq`` into ``{field: {value: polarity}}``; later entries win."""
    result: FilterMap = {}
    for clause in iter_filter_clauses(fq):
        result.setdefault(clause.field, {})[clause.value] = clause.polarity
    return result
