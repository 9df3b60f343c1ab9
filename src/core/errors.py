"""Errors raised by capability resolution.

All of them are fatal for the resolution attempt: there is no retry and no
partial result. A candidate whose probe yields no structured value is not an
error; the resolver skips it.
"""

from __future__ import annotations

from core.domain.models import CandidateOperation, ProtocolVariant, Role


class CapabilityResolutionError(Exception):
    """Base class for resolution failures."""


class PreconditionError(CapabilityResolutionError):
    """Resolution attempted before the host environment is ready."""


class MissingCapabilityError(CapabilityResolutionError):
    """One or both roles stayed unassigned after probing."""

    def __init__(
        self,
        missing: tuple[Role, ...],
        *,
        load: CandidateOperation | None = None,
        save: CandidateOperation | None = None,
    ) -> None:
        self.missing = missing
        self.load = load
        self.save = save
        names = " and ".join(role.value for role in missing)
        super().__init__(f"Missing {names} operation: L|{load} -> S|{save}")


class AmbiguousCapabilityError(CapabilityResolutionError):
    """More than one candidate classified to the same role within one scan."""

    def __init__(
        self,
        *,
        variant: ProtocolVariant,
        role: Role,
        first: CandidateOperation,
        second: CandidateOperation,
    ) -> None:
        self.variant = variant
        self.role = role
        self.first = first
        self.second = second
        if variant is ProtocolVariant.RETURNING_METHOD:
            message = "Duplicated save method (post threshold)"
        elif role is Role.LOAD:
            message = "Duplicated candidate for loading"
        else:
            message = "Duplicated candidate for saving"
        super().__init__(f"{message}: {first} / {second}")


class ProbeInvocationError(CapabilityResolutionError):
    """A candidate raised while being probed with an empty blob."""

    def __init__(self, candidate: CandidateOperation, cause: BaseException) -> None:
        self.candidate = candidate
        super().__init__(f"Probing {candidate} raised {type(cause).__name__}: {cause}")
