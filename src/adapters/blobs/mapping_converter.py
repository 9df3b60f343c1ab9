"""Mapping-backed state blobs.

Structured values are plain mappings keyed by strings; blobs are instances
of a `dict` subclass so that host methods can annotate their parameters with
a concrete blob type.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class CompoundBlob(dict):
    """Default mutable state blob: a compound of named entries."""


class MappingBlobConverter:
    """`StateBlobConverter` for mapping-shaped state."""

    def __init__(self, blob_type: type = CompoundBlob) -> None:
        if not (isinstance(blob_type, type) and issubclass(blob_type, dict)):
            raise TypeError(f"Blob type must be a dict subclass, got {blob_type!r}")
        self.blob_type = blob_type

    def empty_value(self) -> dict[str, Any]:
        return {}

    def to_opaque(self, value: Mapping[str, Any]) -> Any:
        return self.blob_type(value)

    def from_opaque(self, blob: Any) -> dict[str, Any] | None:
        # A compound only holds named entries; anything else is not state.
        if not isinstance(blob, Mapping):
            return None
        if not all(isinstance(key, str) for key in blob):
            return None
        return dict(blob)

    def is_empty(self, value: Mapping[str, Any]) -> bool:
        return len(value) == 0
