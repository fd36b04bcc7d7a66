"""Highlight fragment lookup.

The engine returns highlighting as ``{doc_id: {field: [fragment, ...]}}``
where each fragment is the field value with matched terms wrapped in HTML
tags. ``HighlightMatcher.highlight_for`` finds the fragment whose text,
with every tag removed, is exactly the raw value the caller already has.
"""
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

from golr_response.conventions import DEFAULT_CONVENTIONS, FieldConventions
from golr_response.document_index import DocumentIndex

_TAG_RE = re.compile(r"<[^>]*>")

Highlighting: TypeAlias = Mapping[str, Mapping[str, Sequence[str]]]


def strip_tags(fragment: str) -> str:
    """Remove every ``<...>`` span. Entities are left alone."""
    return _TAG_RE.sub("", fragment)


class HighlightMatcher:
    """Match raw field values against the engine's highlighted fragments."""

    def __init__(
        self,
        highlighting: Highlighting,
        index: DocumentIndex,
        *,
        conventions: FieldConventions = DEFAULT_CONVENTIONS,
    ) -> None:
        self._highlighting = highlighting
        self._index = index
        self._conventions = conventions

    def entry_for(self, doc_key: object) -> Mapping[str, Sequence[str]] | None:
        """Highlighting entry for a document identifier or position."""
        if not self._highlighting:
            return None
        if isinstance(doc_key, str):
            entry = self._highlighting.get(doc_key)
            if entry:
                return entry

        # Not keyed directly; try doc_key as a position.
        doc_id = self._index.identifier_at(doc_key)
        if not isinstance(doc_id, str):
            return None
        return self._highlighting.get(doc_id) or None

    def fragments_for(self, doc_key: object, field: str) -> Sequence[str] | None:
        """First non-empty fragment list among *field*'s highlight keys."""
        entry = self.entry_for(doc_key)
        if entry is None:
            return None
        for key in self._conventions.highlight_fields(field):
            fragments = entry.get(key)
            if fragments:
                return fragments
        return None

    def highlight_for(self, doc_key: object, field: str, raw_item: str) -> str | None:
        """Return the first fragment whose tag-stripped text equals *raw_item*."""
        fragments = self.fragments_for(doc_key, field)
        if fragments is None:
            return None
        if isinstance(fragments, str):
            fragments = [fragments]
        for fragment in fragments:
            if isinstance(fragment, str) and strip_tags(fragment) == raw_item:
                return fragment
        return None

    def merge_into(self, doc: Mapping[str, Any]) -> dict[str, Any]:
        """Copy of *doc* with every highlighted field replaced by its fragments."""
        merged = dict(doc)
        doc_id = doc.get(self._conventions.id_field)
        entry = self._highlighting.get(doc_id) if isinstance(doc_id, str) else None
        if not entry:
            return merged
        for key in doc:
            fragments = entry.get(key)
            if fragments is not None:
                merged[key] = fragments
        return merged
