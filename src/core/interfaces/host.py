"""Contract for the host platform's readiness and version facts."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import HostVersion


@runtime_checkable
class HostEnvironment(Protocol):
    def active_contexts(self) -> Sequence[str]:
        """Names of the worlds/contexts currently loaded by the host."""

        ...

    def version(self) -> HostVersion | None:
        """Host version, if known."""

        ...
