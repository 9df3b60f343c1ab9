"""Host environment with fixed facts (CLI, tests, embedded use)."""

from __future__ import annotations

from typing import Sequence

from core.domain.models import HostVersion


class StaticHostEnvironment:
    def __init__(self, contexts: Sequence[str] = (), version: HostVersion | None = None) -> None:
        self._contexts = tuple(contexts)
        self._version = version

    def active_contexts(self) -> Sequence[str]:
        return self._contexts

    def version(self) -> HostVersion | None:
        return self._version
