"""Domain models for capability resolution.

What lives here:
- Value objects describing *what* is being resolved (roles, shapes,
  candidates, results) without knowing how members are enumerated or how
  state blobs are encoded.
- Frozen dataclasses for anything holding live Python objects (types,
  functions); Pydantic v2 models for the serialisable evidence trail.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Role(str, Enum):
    """Semantic role a candidate operation can play."""

    LOAD = "load"
    SAVE = "save"


class ProtocolVariant(str, Enum):
    """The two probing procedures, one per host era."""

    VOID_PROCEDURE = "void-procedure"
    RETURNING_METHOD = "returning-method"


class ProbeOutcome(str, Enum):
    LOAD = "load"
    SAVE = "save"
    SKIPPED_NO_VALUE = "skipped-no-value"
    SKIPPED_EMPTY = "skipped-empty"


@dataclass(frozen=True)
class MethodShape:
    """Structural query for candidate members.

    `returns=None` means "returns nothing" (a procedure).
    """

    returns: type | None
    params: tuple[type, ...]
    must_be_public: bool = True
    must_not_be_static: bool = True

    @classmethod
    def procedure(cls, blob_type: type) -> "MethodShape":
        return cls(returns=None, params=(blob_type,))

    @classmethod
    def function(cls, blob_type: type) -> "MethodShape":
        return cls(returns=blob_type, params=(blob_type,))

    def describe(self) -> str:
        ret = "None" if self.returns is None else self.returns.__name__
        params = ", ".join(p.__name__ for p in self.params)
        return f"({params}) -> {ret}"


@dataclass(frozen=True)
class CandidateOperation:
    """One enumerated member of the opaque type, not yet known to be role-bearing."""

    name: str
    owner: type
    function: Callable[..., Any]
    shape: MethodShape
    static: bool = False
    # Look the member up on the instance so subclass overrides run.
    virtual: bool = False

    @property
    def qualified_name(self) -> str:
        return f"{self.owner.__name__}.{self.name}"

    def invoke(self, instance: Any, blob: Any) -> Any:
        if self.static:
            return self.function(blob)
        if self.virtual:
            return getattr(instance, self.name)(blob)
        return self.function(instance, blob)

    def __str__(self) -> str:
        return self.qualified_name


@dataclass(frozen=True)
class PartialCapabilities:
    """Roles found by a single protocol variant; either slot may be empty."""

    load: CandidateOperation | None = None
    save: CandidateOperation | None = None

    def overlay(self, other: "PartialCapabilities") -> "PartialCapabilities":
        """Merge `other` on top of `self`; filled slots of `other` win."""

        return PartialCapabilities(
            load=other.load if other.load is not None else self.load,
            save=other.save if other.save is not None else self.save,
        )

    def missing_roles(self) -> tuple[Role, ...]:
        missing: list[Role] = []
        if self.load is None:
            missing.append(Role.LOAD)
        if self.save is None:
            missing.append(Role.SAVE)
        return tuple(missing)


@dataclass(frozen=True)
class ResolvedCapabilities:
    """Exactly one load and one save operation for the inspected base type."""

    load_operation: CandidateOperation
    save_operation: CandidateOperation
    variant: ProtocolVariant

    def __post_init__(self) -> None:
        if self.load_operation is None or self.save_operation is None:
            raise ValueError("ResolvedCapabilities requires both a load and a save operation")


_VERSION_RE = re.compile(r"^v?(\d+)[._](\d+)(?:[._](?:R)?(\d+))?")


class HostVersion(BaseModel):
    """Host platform version as reported by an external detector."""

    model_config = ConfigDict(frozen=True)

    major: int = Field(..., ge=0, description="Major version component.")
    minor: int = Field(..., ge=0, description="Minor version component.")
    patch: int = Field(default=0, ge=0, description="Patch (or revision) component.")

    @classmethod
    def parse(cls, raw: str) -> "HostVersion":
        """Parse `1.12.2`, `1.8` or package-style `v1_8_R3` strings."""

        match = _VERSION_RE.match(raw.strip())
        if not match:
            raise ValueError(f"Unrecognised host version: {raw!r}")
        major, minor, patch = match.groups()
        return cls(major=int(major), minor=int(minor), patch=int(patch or 0))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class VersionThreshold(BaseModel):
    """Last host version that still uses the void-procedure protocol."""

    model_config = ConfigDict(frozen=True)

    major: int = Field(default=1, ge=0)
    minor: int = Field(default=8, ge=0)

    def select_variant(self, version: HostVersion) -> ProtocolVariant:
        if version.major > self.major or version.minor > self.minor:
            return ProtocolVariant.RETURNING_METHOD
        return ProtocolVariant.VOID_PROCEDURE


class ProbeObservation(BaseModel):
    """Evidence recorded for one probed candidate."""

    variant: ProtocolVariant
    candidate: str = Field(..., min_length=1)
    outcome: ProbeOutcome


class ResolutionReport(BaseModel):
    """Serialisable summary of one resolution attempt."""

    base_type: str = Field(..., min_length=1, description="Qualified name of the inspected type.")
    variant: ProtocolVariant
    host_version: HostVersion | None = None
    load_operation: str | None = None
    save_operation: str | None = None
    observations: list[ProbeObservation] = Field(default_factory=list)
    resolved_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Moment the report was produced (UTC).",
    )
