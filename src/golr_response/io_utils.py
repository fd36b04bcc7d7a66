"""JSON decoding and response-file loading.

All JSON handled by this package goes through orjson: the response payload
itself and the JSON-encoded label maps embedded in documents.
"""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson

from golr_response.conventions import DEFAULT_CONVENTIONS, FieldConventions
from golr_response.errors import ResponseFileError

if TYPE_CHECKING:
    from golr_response.envelope import ResponseEnvelope


def parse_payload(raw: str | bytes) -> dict[str, Any] | None:
    """Decode a response payload, or ``None`` if it is not a JSON object."""
    try:
        obj = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return None
    if not isinstance(obj, Mapping):
        return None
    return dict(obj)


def load_response(
    path: Path,
    *,
    conventions: FieldConventions = DEFAULT_CONVENTIONS,
) -> ResponseEnvelope:
    """Read a saved engine response from *path* and wrap it in an envelope."""
    from golr_response.envelope import ResponseEnvelope

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ResponseFileError(path, exc.strerror or str(exc)) from exc
    return ResponseEnvelope(raw, conventions=conventions)
