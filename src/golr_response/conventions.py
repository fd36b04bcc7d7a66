"""Field naming conventions consumed from the search engine's schema.

The engine never describes its fields to us; instead, every identifier
field ``<field>`` may be accompanied by sibling fields that follow a fixed
naming pattern:

* ``<field>_label`` — human-readable label(s) for the identifier(s).
* ``<field>_map`` / ``<field>_closure_map`` / ``<field>_list_map`` —
  JSON-encoded ``{identifier: label}`` strings.
* ``<field>_label_searchable`` / ``<field>_searchable`` — variants that
  may carry highlighting.

Probing orders are declared here once and read by the resolvers.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FieldConventions:
    """Suffixes and probing orders for auxiliary document fields."""

    id_field: str = "id"
    label_suffix: str = "_label"
    label_map_suffixes: tuple[str, ...] = ("_map", "_closure_map", "_list_map")
    highlight_suffixes: tuple[str, ...] = (
        "_label_searchable",
        "_label",
        "_searchable",
        "",
    )

    def label_field(self, field: str) -> str:
        return field + self.label_suffix

    def label_map_fields(self, field: str) -> tuple[str, ...]:
        """Map field names for *field*, in probing order."""
        return tuple(field + suffix for suffix in self.label_map_suffixes)

    def highlight_fields(self, field: str) -> tuple[str, ...]:
        """Highlighting keys for *field*, in probing order."""
        return tuple(field + suffix for suffix in self.highlight_suffixes)


DEFAULT_CONVENTIONS = FieldConventions()
