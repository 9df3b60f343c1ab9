from __future__ import annotations

import pytest

from adapters.blobs import CompoundBlob
from core.domain.models import (
    HostVersion,
    MethodShape,
    PartialCapabilities,
    ProtocolVariant,
    Role,
    VersionThreshold,
)
from tests.fakes import consume, fill, procedure


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1.8", (1, 8, 0)),
        ("1.12.2", (1, 12, 2)),
        ("1.20.4", (1, 20, 4)),
        ("v1_8_R3", (1, 8, 3)),
        (" 1.9.4 ", (1, 9, 4)),
    ],
)
def test_host_version_parse(raw, expected):
    version = HostVersion.parse(raw)

    assert (version.major, version.minor, version.patch) == expected


@pytest.mark.parametrize("raw", ["", "one.eight", "1", "latest"])
def test_host_version_parse_rejects_garbage(raw):
    with pytest.raises(ValueError):
        HostVersion.parse(raw)


@pytest.mark.parametrize(
    ("major", "minor", "expected"),
    [
        (1, 8, ProtocolVariant.VOID_PROCEDURE),
        (1, 0, ProtocolVariant.VOID_PROCEDURE),
        (1, 9, ProtocolVariant.RETURNING_METHOD),
        (2, 0, ProtocolVariant.RETURNING_METHOD),
        (0, 9, ProtocolVariant.RETURNING_METHOD),
    ],
)
def test_default_threshold(major, minor, expected):
    version = HostVersion(major=major, minor=minor)

    assert VersionThreshold().select_variant(version) is expected


def test_custom_threshold():
    threshold = VersionThreshold(major=1, minor=12)

    assert threshold.select_variant(HostVersion.parse("1.12.2")) is ProtocolVariant.VOID_PROCEDURE
    assert threshold.select_variant(HostVersion.parse("1.13")) is ProtocolVariant.RETURNING_METHOD


def test_overlay_prefers_filled_slots_of_the_newer_partial():
    load, old_save, new_save = procedure("l", consume), procedure("s", fill), procedure("n", fill)

    merged = PartialCapabilities(load=load, save=old_save).overlay(PartialCapabilities(save=new_save))

    assert merged.load is load
    assert merged.save is new_save


def test_overlay_keeps_existing_slots_when_newer_is_empty():
    load, save = procedure("l", consume), procedure("s", fill)

    merged = PartialCapabilities(load=load, save=save).overlay(PartialCapabilities())

    assert merged == PartialCapabilities(load=load, save=save)


def test_missing_roles():
    assert PartialCapabilities().missing_roles() == (Role.LOAD, Role.SAVE)
    assert PartialCapabilities(load=procedure("l", consume)).missing_roles() == (Role.SAVE,)


def test_shape_describe():
    assert MethodShape.procedure(CompoundBlob).describe() == "(CompoundBlob) -> None"
    assert MethodShape.function(CompoundBlob).describe() == "(CompoundBlob) -> CompoundBlob"
