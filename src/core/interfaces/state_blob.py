"""Contract for the opaque state blob.

The resolver never looks inside a blob. It only converts structured values
to and from blobs and asks whether a structured value is empty.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StateBlobConverter(Protocol):
    blob_type: type

    def empty_value(self) -> Any:
        """A fresh structured value holding no state."""

        ...

    def to_opaque(self, value: Any) -> Any:
        """Build a fresh blob holding `value`."""

        ...

    def from_opaque(self, blob: Any) -> Any | None:
        """Derive a structured value, or `None` if `blob` is not a well-formed container."""

        ...

    def is_empty(self, value: Any) -> bool:
        ...
