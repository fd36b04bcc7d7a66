"""Read-only interpretation of a faceted-search (Solr-style) response.

``ResponseEnvelope`` wraps one decoded response tree::

    responseHeader: {status, params: {q, fq, rows, packet, callback_type, ...}}
    response:       {numFound, start, maxScore, docs: [...]}
    facet_counts:   {facet_fields: {field: [value, count, ...]}}
    highlighting:   {doc_id: {field: [fragment, ...]}}

It answers questions about the response (did it succeed, what was asked,
where are we in paging) and delegates document, label, highlight and
facet lookups to the components that own the corresponding caches. The
tree is never modified; every cache relies on that.

Parse status lives in a separate ``JsonEnvelope`` held by composition.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

from golr_response.conventions import DEFAULT_CONVENTIONS, FieldConventions
from golr_response.document_index import Document, DocumentIndex
from golr_response.facets import FacetAggregator, FacetPairs
from golr_response.highlights import HighlightMatcher
from golr_response.io_utils import parse_payload
from golr_response.labels import LabelResolver
from golr_response.query_filters import FilterMap, decode_filters

log = logging.getLogger(__name__)

Payload: TypeAlias = str | bytes | Mapping[str, Any] | None


class JsonEnvelope:
    """Parse status and raw access for a JSON object payload.

    Accepts JSON text (``str``/``bytes``) or an already-decoded mapping.
    Anything that does not yield a JSON object is not well formed.
    """

    __slots__ = ("_raw", "_raw_string")

    def __init__(self, payload: Payload) -> None:
        self._raw_string: str | None = None
        self._raw: Mapping[str, Any] | None = None
        if isinstance(payload, (str, bytes)):
            self._raw_string = (
                payload.decode("utf-8", errors="replace")
                if isinstance(payload, bytes)
                else payload
            )
            self._raw = parse_payload(payload)
            if self._raw is None:
                log.debug("Payload is not a JSON object (%d chars)", len(self._raw_string))
        elif isinstance(payload, Mapping):
            self._raw = payload

    def is_well_formed(self) -> bool:
        return self._raw is not None

    @property
    def raw(self) -> Mapping[str, Any] | None:
        return self._raw

    @property
    def raw_string(self) -> str | None:
        return self._raw_string


def _mapping(value: object) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _is_zero(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0


def _as_int(value: object) -> int | None:
    """Integer value of a numeric param or count; None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None


class ResponseEnvelope:
    """Validated, cached view over a single engine response."""

    def __init__(
        self,
        payload: Payload,
        *,
        conventions: FieldConventions = DEFAULT_CONVENTIONS,
    ) -> None:
        self._json = JsonEnvelope(payload)
        self._conventions = conventions
        self._success: bool | None = None

        root = _mapping(self._json.raw)
        docs = _mapping(root.get("response")).get("docs")
        if not isinstance(docs, Sequence) or isinstance(docs, str):
            docs = []
        self._docs: Sequence[Document] = docs
        self._index = DocumentIndex(docs, id_field=conventions.id_field)
        self._labels = LabelResolver(self._index, conventions=conventions)
        self._highlights = HighlightMatcher(
            _mapping(root.get("highlighting")),
            self._index,
            conventions=conventions,
        )
        self._facets = FacetAggregator(
            _mapping(_mapping(root.get("facet_counts")).get("facet_fields"))
        )

    # ------------------------------------------------------------------
    # Validity
    # ------------------------------------------------------------------

    def is_well_formed(self) -> bool:
        return self._json.is_well_formed()

    def is_successful(self) -> bool:
        """Structural check of the envelope; computed once.

        True iff ``responseHeader.status == 0``, ``responseHeader.params``
        is present, ``response`` carries ``numFound``, ``start``,
        ``maxScore`` and ``docs``, and ``facet_counts.facet_fields`` is
        present. Values are not otherwise validated.
        """
        if self._success is None:
            self._success = self._check_success()
        return self._success

    def _check_success(self) -> bool:
        root = self._json.raw
        if root is None:
            return False
        header = root.get("responseHeader")
        response = root.get("response")
        facet_counts = root.get("facet_counts")
        if not isinstance(header, Mapping) or not isinstance(response, Mapping):
            return False
        if not isinstance(facet_counts, Mapping):
            return False
        return (
            _is_zero(header.get("status"))
            and header.get("params") is not None
            and all(key in response for key in ("numFound", "start", "maxScore"))
            and response.get("docs") is not None
            and facet_counts.get("facet_fields") is not None
        )

    def okay(self) -> bool:
        """Alias for ``is_successful``."""
        return self.is_successful()

    def message(self) -> str:
        if not self.is_well_formed():
            return "unparsable payload"
        if not self.is_successful():
            return "incomplete response"
        return "ok"

    def raw(self) -> Mapping[str, Any] | None:
        return self._json.raw

    def raw_string(self) -> str | None:
        return self._json.raw_string

    @property
    def document_index(self) -> DocumentIndex:
        return self._index

    @property
    def label_resolver(self) -> LabelResolver:
        return self._labels

    # ------------------------------------------------------------------
    # Query parameters
    # ------------------------------------------------------------------

    def parameters(self) -> Mapping[str, Any]:
        header = _mapping(_mapping(self._json.raw).get("responseHeader"))
        return _mapping(header.get("params"))

    def parameter(self, key: str) -> Any | None:
        return self.parameters().get(key)

    def query(self) -> str | None:
        return self.parameter("q") or None

    def callback_type(self) -> str | None:
        """Callback type echoed in the query (e.g. ``"reset"``), if any."""
        return self.parameter("callback_type") or None

    def packet(self) -> int | None:
        value = self.parameter("packet")
        if not value:
            return None
        return _as_int(value)

    def decode_filters(self) -> FilterMap:
        return decode_filters(self.parameter("fq"))

    # ------------------------------------------------------------------
    # Paging
    # ------------------------------------------------------------------

    def _response_int(self, key: str, default: int) -> int:
        value = _mapping(_mapping(self._json.raw).get("response")).get(key)
        found = _as_int(value)
        return default if found is None else found

    def row_step(self) -> int | None:
        return _as_int(self.parameter("rows"))

    def total_documents(self) -> int:
        return self._response_int("numFound", 0)

    def start_document(self) -> int:
        """One-based number of the first document in this response."""
        return self._response_int("start", 0) + 1

    def end_document(self) -> int:
        return self.start_document() + len(self._docs) - 1

    def paging_possible(self) -> bool:
        rows = self.row_step()
        return rows is not None and self.total_documents() > rows

    def can_page_back(self) -> bool:
        return self.start_document() > 1

    def can_page_forward(self) -> bool:
        return self.total_documents() > self.end_document()

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def documents(self) -> Sequence[Document]:
        return self._docs

    def get_document(self, key: object) -> Document | None:
        """Document at position *key*, else the one with identifier *key*."""
        return self._index.get(key)

    def get_document_field(self, key: object, field: str) -> Any | None:
        doc = self._index.get(key)
        if doc is None:
            return None
        return doc.get(field)

    def label_for(self, doc_key: object, field: str, item_id: str | None = None) -> str | None:
        return self._labels.label_for(doc_key, field, item_id)

    def highlight_for(self, doc_key: object, field: str, raw_item: str) -> str | None:
        return self._highlights.highlight_for(doc_key, field, raw_item)

    def highlighted_documents(self) -> list[dict[str, Any]]:
        """Documents with highlighted fields swapped in for their raw values."""
        return [self._highlights.merge_into(doc) for doc in self._docs]

    # ------------------------------------------------------------------
    # Facets
    # ------------------------------------------------------------------

    def facet_fields(self) -> list[str]:
        return self._facets.facet_fields()

    def facet_values(self, field: str) -> FacetPairs | None:
        return self._facets.facet_values(field)

    def facet_counts(self) -> dict[str, dict[Any, int]]:
        return self._facets.facet_counts()
