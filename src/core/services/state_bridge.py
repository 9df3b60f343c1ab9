"""Load and extract state on live instances through resolved capabilities."""

from __future__ import annotations

from typing import Any

from core.domain.models import ResolvedCapabilities
from core.interfaces import StateBlobConverter


class StateBridge:
    """Hydrates instances from structured values and reads their state back.

    Works for both protocols: a save operation that returns a blob wins over
    the mutated scratch blob.
    """

    def __init__(self, capabilities: ResolvedCapabilities, converter: StateBlobConverter) -> None:
        self._capabilities = capabilities
        self._converter = converter

    @property
    def capabilities(self) -> ResolvedCapabilities:
        return self._capabilities

    def load_into(self, instance: Any, value: Any) -> None:
        blob = self._converter.to_opaque(value)
        self._capabilities.load_operation.invoke(instance, blob)

    def extract(self, instance: Any) -> Any:
        scratch = self._converter.to_opaque(self._converter.empty_value())
        returned = self._capabilities.save_operation.invoke(instance, scratch)

        value = self._converter.from_opaque(scratch if returned is None else returned)
        if value is None:
            raise ValueError(
                f"{self._capabilities.save_operation} produced no structured state"
            )
        return value
