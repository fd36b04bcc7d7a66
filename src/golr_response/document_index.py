"""Position and identifier lookup over the response's document list.

A key is first tried as a zero-based position; only when that fails is it
treated as a document identifier. The identifier index is built in one
pass, at most once, the first time a key misses positionally. It is never
rebuilt: the document list is immutable for the life of the envelope.

Note that an identifier that happens to spell a valid position (``"3"``)
can never be reached by identifier.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

log = logging.getLogger(__name__)

Document: TypeAlias = Mapping[str, Any]


def as_position(key: object, size: int) -> int | None:
    """Interpret *key* as an in-range position, or return ``None``.

    Integers and strings of ASCII digits count as positions. Booleans and
    negative numbers never do.
    """
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        pos = key
    elif isinstance(key, str) and key.isascii() and key.isdigit():
        pos = int(key)
    else:
        return None
    if 0 <= pos < size:
        return pos
    return None


class DocumentIndex:
    """Lazy bidirectional ``identifier <-> position`` index."""

    __slots__ = ("_docs", "_id_field", "_id_to_pos", "_pos_to_id", "_lock")

    def __init__(self, docs: Sequence[Document], *, id_field: str = "id") -> None:
        self._docs = docs
        self._id_field = id_field
        self._id_to_pos: dict[Any, int] | None = None
        self._pos_to_id: dict[int, Any] | None = None
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._docs)

    @property
    def is_built(self) -> bool:
        return self._id_to_pos is not None

    def _ensure_built(self) -> tuple[dict[Any, int], dict[int, Any]]:
        id_to_pos, pos_to_id = self._id_to_pos, self._pos_to_id
        if id_to_pos is not None and pos_to_id is not None:
            return id_to_pos, pos_to_id
        with self._lock:
            if self._id_to_pos is None or self._pos_to_id is None:
                id_to_pos = {}
                pos_to_id = {}
                for pos, doc in enumerate(self._docs):
                    doc_id = doc.get(self._id_field)
                    id_to_pos[doc_id] = pos
                    pos_to_id[pos] = doc_id
                log.debug("Built document index over %d documents", len(pos_to_id))
                # Publish both maps together.
                self._pos_to_id = pos_to_id
                self._id_to_pos = id_to_pos
            return self._id_to_pos, self._pos_to_id

    def get(self, key: object) -> Document | None:
        """Return the document at position *key*, else with identifier *key*."""
        pos = as_position(key, len(self._docs))
        if pos is not None:
            return self._docs[pos]
        id_to_pos, _ = self._ensure_built()
        try:
            found = id_to_pos.get(key)
        except TypeError:  # unhashable key
            return None
        if found is None:
            return None
        return self._docs[found]

    def position_of(self, identifier: object) -> int | None:
        id_to_pos, _ = self._ensure_built()
        try:
            return id_to_pos.get(identifier)
        except TypeError:
            return None

    def identifier_at(self, position: object) -> Any | None:
        """Identifier of the document at *position* (int or digit string)."""
        pos = as_position(position, len(self._docs))
        if pos is None:
            return None
        _, pos_to_id = self._ensure_built()
        return pos_to_id.get(pos)
