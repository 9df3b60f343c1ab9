"""Contract for candidate-member enumeration."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import CandidateOperation, MethodShape


@runtime_checkable
class CandidateEnumerator(Protocol):
    def find_methods(self, owner: type, shape: MethodShape) -> Sequence[CandidateOperation]:
        """Return the members of `owner` matching `shape`.

        No match yields an empty sequence, never an error.
        """

        ...
