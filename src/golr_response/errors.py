"""Exceptions raised by the response layer.

Lookup misses are never errors here (they return ``None``); only broken
engine contracts surface as exceptions.
"""
from __future__ import annotations

from pathlib import Path


class LabelMapDecodeError(ValueError):
    """Raised when an auxiliary ``*_map`` field is present but not a JSON object."""

    def __init__(self, doc_id: object, map_field: str, reason: str) -> None:
        self.doc_id = doc_id
        self.map_field = map_field
        super().__init__(
            f"Malformed label map {map_field!r} in document {doc_id!r}: {reason}"
        )


class ResponseFileError(RuntimeError):
    """Raised when a saved response file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot read response file {path}: {reason}")
