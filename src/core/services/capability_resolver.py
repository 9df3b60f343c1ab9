"""Behavioural discovery of the load/save operations of an opaque type.

The host's persistence methods have no stable name or calling convention
across releases, so candidates are found by shape and classified by what
they do to a fresh, empty state blob:

- void-procedure protocol: a procedure that leaves the probe empty only
  consumed it (load); one that fills it wrote state into it (save).
- returning-method protocol: the void-procedure scan runs first to find the
  load operation, then any blob-returning method whose result is non-empty
  takes the save slot.

Probing is strictly sequential; every candidate gets its own probe blob.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from core.domain.models import (
    CandidateOperation,
    HostVersion,
    MethodShape,
    PartialCapabilities,
    ProbeObservation,
    ProbeOutcome,
    ProtocolVariant,
    ResolutionReport,
    ResolvedCapabilities,
    Role,
    VersionThreshold,
)
from core.errors import (
    AmbiguousCapabilityError,
    MissingCapabilityError,
    PreconditionError,
    ProbeInvocationError,
)
from core.interfaces import (
    CandidateEnumerator,
    HostEnvironment,
    SampleProvider,
    StateBlobConverter,
)

logger = logging.getLogger(__name__)

ProbeResult = tuple[PartialCapabilities, list[ProbeObservation]]


@contextmanager
def sample_scope(provider: SampleProvider) -> Iterator[Any]:
    """Spawn one sample and remove it on every exit path."""

    sample = provider.spawn()
    try:
        yield sample
    finally:
        provider.remove()


def _invoke(candidate: CandidateOperation, sample: Any, blob: Any) -> Any:
    try:
        return candidate.invoke(sample, blob)
    except Exception as exc:
        raise ProbeInvocationError(candidate, exc) from exc


def probe_void_procedures(
    sample: Any,
    candidates: Sequence[CandidateOperation],
    converter: StateBlobConverter,
) -> ProbeResult:
    """Classify procedures by whether they leave an empty probe blob filled."""

    variant = ProtocolVariant.VOID_PROCEDURE
    load: CandidateOperation | None = None
    save: CandidateOperation | None = None
    observations: list[ProbeObservation] = []

    for candidate in candidates:
        probe = converter.to_opaque(converter.empty_value())
        _invoke(candidate, sample, probe)

        value = converter.from_opaque(probe)
        if value is None:
            logger.debug("%s left no structured value, skipping", candidate)
            observations.append(
                ProbeObservation(
                    variant=variant,
                    candidate=candidate.qualified_name,
                    outcome=ProbeOutcome.SKIPPED_NO_VALUE,
                )
            )
            continue

        if converter.is_empty(value):
            if load is not None:
                raise AmbiguousCapabilityError(
                    variant=variant, role=Role.LOAD, first=load, second=candidate
                )
            load = candidate
            outcome = ProbeOutcome.LOAD
        else:
            if save is not None:
                raise AmbiguousCapabilityError(
                    variant=variant, role=Role.SAVE, first=save, second=candidate
                )
            save = candidate
            outcome = ProbeOutcome.SAVE

        logger.debug("%s classified as %s", candidate, outcome.value)
        observations.append(
            ProbeObservation(variant=variant, candidate=candidate.qualified_name, outcome=outcome)
        )

    return PartialCapabilities(load=load, save=save), observations


def probe_returning_methods(
    sample: Any,
    candidates: Sequence[CandidateOperation],
    converter: StateBlobConverter,
) -> ProbeResult:
    """Classify blob-returning methods by whether their result holds state."""

    variant = ProtocolVariant.RETURNING_METHOD
    save: CandidateOperation | None = None
    observations: list[ProbeObservation] = []

    for candidate in candidates:
        probe = converter.to_opaque(converter.empty_value())
        returned = _invoke(candidate, sample, probe)

        value = None if returned is None else converter.from_opaque(returned)
        if value is None:
            outcome = ProbeOutcome.SKIPPED_NO_VALUE
        elif converter.is_empty(value):
            outcome = ProbeOutcome.SKIPPED_EMPTY
        else:
            if save is not None:
                raise AmbiguousCapabilityError(
                    variant=variant, role=Role.SAVE, first=save, second=candidate
                )
            save = candidate
            outcome = ProbeOutcome.SAVE

        logger.debug("%s classified as %s", candidate, outcome.value)
        observations.append(
            ProbeObservation(variant=variant, candidate=candidate.qualified_name, outcome=outcome)
        )

    return PartialCapabilities(save=save), observations


class CapabilityResolver:
    """Resolves the load and save operations of one opaque base type.

    A resolver is not reentrant: concurrent resolutions need their own
    sample providers. The returned `ResolvedCapabilities` is immutable and
    can be shared freely.
    """

    def __init__(self, converter: StateBlobConverter, environment: HostEnvironment) -> None:
        self._converter = converter
        self._environment = environment

    def _check_ready(self) -> None:
        if not self._environment.active_contexts():
            raise PreconditionError(
                "Capability resolution requested before at least one host context was loaded"
            )

    def resolve(
        self,
        sample_provider: SampleProvider,
        enumerator: CandidateEnumerator,
        variant: ProtocolVariant,
    ) -> ResolvedCapabilities:
        capabilities, _ = self.resolve_with_report(sample_provider, enumerator, variant)
        return capabilities

    def resolve_for_host(
        self,
        sample_provider: SampleProvider,
        enumerator: CandidateEnumerator,
        threshold: VersionThreshold,
    ) -> tuple[ResolvedCapabilities, ResolutionReport]:
        """Pick the protocol variant from the host's reported version, then resolve."""

        self._check_ready()
        version = self._environment.version()
        if version is None:
            raise PreconditionError("Host did not report a version; pass a protocol variant explicitly")
        variant = threshold.select_variant(version)
        logger.info("Host %s uses the %s protocol", version, variant.value)
        return self.resolve_with_report(sample_provider, enumerator, variant, host_version=version)

    def resolve_with_report(
        self,
        sample_provider: SampleProvider,
        enumerator: CandidateEnumerator,
        variant: ProtocolVariant,
        *,
        host_version: HostVersion | None = None,
    ) -> tuple[ResolvedCapabilities, ResolutionReport]:
        self._check_ready()

        converter = self._converter
        blob_type = converter.blob_type

        with sample_scope(sample_provider) as sample:
            base_type = sample_provider.base_type()
            procedures = enumerator.find_methods(base_type, MethodShape.procedure(blob_type))
            found, observations = probe_void_procedures(sample, procedures, converter)

            if variant is ProtocolVariant.RETURNING_METHOD:
                functions = enumerator.find_methods(base_type, MethodShape.function(blob_type))
                returning, extra = probe_returning_methods(sample, functions, converter)
                found = found.overlay(returning)
                observations.extend(extra)

        missing = found.missing_roles()
        if missing:
            logger.warning(
                "Resolution of %s incomplete, missing %s",
                base_type.__qualname__,
                ", ".join(role.value for role in missing),
            )
            raise MissingCapabilityError(missing, load=found.load, save=found.save)

        capabilities = ResolvedCapabilities(
            load_operation=found.load,  # type: ignore[arg-type]
            save_operation=found.save,  # type: ignore[arg-type]
            variant=variant,
        )
        logger.info(
            "Resolved %s: load=%s save=%s",
            base_type.__qualname__,
            capabilities.load_operation,
            capabilities.save_operation,
        )

        report = ResolutionReport(
            base_type=f"{base_type.__module__}.{base_type.__qualname__}",
            variant=variant,
            host_version=host_version,
            load_operation=capabilities.load_operation.qualified_name,
            save_operation=capabilities.save_operation.qualified_name,
            observations=observations,
        )
        return capabilities, report
