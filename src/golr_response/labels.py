"""Label resolution for identifier-valued document fields.

Given a document, a field and one identifier from that field, find the
human-readable label. Strategies, first hit wins:

1. ``<field>_label`` is a plain string: return it.
2. ``<field>_label`` and ``<field>`` are both one-element lists: return
   the sole label.
3. When ``<field>_label`` is a multi-valued list, probe the JSON-encoded
   maps ``<field>_map``, ``<field>_closure_map``,
   ``<field>_list_map`` (see ``FieldConventions.label_map_suffixes``) for
   the identifier.

Decoded maps are cached per ``(document id, map field)``. The cache only
grows; entries stay valid because the backing response never changes.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

import orjson

from golr_response.conventions import DEFAULT_CONVENTIONS, FieldConventions
from golr_response.document_index import Document, DocumentIndex
from golr_response.errors import LabelMapDecodeError

log = logging.getLogger(__name__)

LabelMap: TypeAlias = Mapping[str, Any]


def _is_list(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


class LabelResolver:
    """Resolve labels through ``_label`` fields and cached label maps."""

    def __init__(
        self,
        index: DocumentIndex,
        *,
        conventions: FieldConventions = DEFAULT_CONVENTIONS,
    ) -> None:
        self._index = index
        self._conventions = conventions
        self._maps: dict[tuple[Any, str], LabelMap] = {}
        self._lock = threading.Lock()

    @property
    def cache_size(self) -> int:
        return len(self._maps)

    def is_cached(self, doc_id: object, map_field: str) -> bool:
        return (doc_id, map_field) in self._maps

    def label_for(
        self,
        doc_key: object,
        field: str,
        item_id: str | None = None,
    ) -> str | None:
        """Return the label of *item_id* in *field* of document *doc_key*.

        *item_id* may be omitted when the field holds a single identifier.
        Returns ``None`` when the document or field is missing or nothing
        resolves. Raises ``LabelMapDecodeError`` if a present label map is
        malformed.
        """
        doc = self._index.get(doc_key)
        if doc is None or field not in doc:
            return None

        labels = doc.get(self._conventions.label_field(field))
        if isinstance(labels, str) and labels:
            return labels
        # Label maps only back multi-valued label lists.
        if not _is_list(labels) or not labels:
            return None
        if len(labels) == 1:
            ids = doc.get(field)
            if _is_list(ids) and len(ids) == 1:
                return labels[0]

        if item_id is None:
            return None
        doc_id = doc.get(self._conventions.id_field, doc_key)
        for map_field in self._conventions.label_map_fields(field):
            label_map = self._label_map(doc, doc_id, map_field)
            if label_map is None:
                continue
            label = label_map.get(item_id)
            if label:
                return label
        return None

    def _label_map(self, doc: Document, doc_id: Any, map_field: str) -> LabelMap | None:
        raw = doc.get(map_field)
        if not isinstance(raw, str) or not raw:
            return None

        key = (doc_id, map_field)
        cached = self._maps.get(key)
        if cached is not None:
            return cached

        with self._lock:
            cached = self._maps.get(key)
            if cached is not None:
                return cached
            try:
                decoded = orjson.loads(raw)
            except orjson.JSONDecodeError as exc:
                raise LabelMapDecodeError(doc_id, map_field, str(exc)) from exc
            if not isinstance(decoded, Mapping):
                raise LabelMapDecodeError(
                    doc_id, map_field, f"expected an object, got {type(decoded).__name__}"
                )
            log.debug("Decoded label map %s for %r (%d entries)", map_field, doc_id, len(decoded))
            self._maps[key] = decoded
            return decoded
