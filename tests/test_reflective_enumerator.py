from __future__ import annotations

from adapters.blobs import CompoundBlob
from adapters.reflection import ReflectiveEnumerator
from core.domain.models import MethodShape
from tests.host_types import Empty, LegacyEntity, LooseEntity, ModernEntity, OddlyAnnotated


def _names(candidates):
    return [c.name for c in candidates]


def test_finds_public_void_procedures_taking_one_blob():
    found = ReflectiveEnumerator().find_methods(LegacyEntity, MethodShape.procedure(CompoundBlob))

    assert _names(found) == ["load", "save"]
    assert all(c.owner is LegacyEntity for c in found)
    assert all(not c.static for c in found)


def test_finds_blob_returning_methods():
    found = ReflectiveEnumerator().find_methods(ModernEntity, MethodShape.function(CompoundBlob))

    assert _names(found) == ["copy_of", "save_state"]
    assert all(c.owner is ModernEntity for c in found)


def test_inherited_members_report_their_defining_class():
    found = ReflectiveEnumerator().find_methods(ModernEntity, MethodShape.procedure(CompoundBlob))

    assert [c.qualified_name for c in found] == ["LegacyEntity.load", "LegacyEntity.save"]


def test_static_and_class_methods_when_allowed():
    shape = MethodShape(returns=None, params=(CompoundBlob,), must_not_be_static=False)

    found = ReflectiveEnumerator().find_methods(LegacyEntity, shape)

    assert _names(found) == ["from_blob", "load", "migrate", "save"]
    statics = {c.name: c for c in found if c.static}
    assert set(statics) == {"from_blob", "migrate"}

    blob = CompoundBlob()
    statics["from_blob"].invoke(LegacyEntity(), blob)
    statics["migrate"].invoke(LegacyEntity(), blob)
    assert blob == {"Static": True, "Version": 1}


def test_private_members_when_allowed():
    shape = MethodShape(returns=None, params=(CompoundBlob,), must_be_public=False)

    found = ReflectiveEnumerator().find_methods(LegacyEntity, shape)

    assert _names(found) == ["_write_private", "load", "save"]


def test_base_class_annotations_accept_the_blob_type():
    enumerator = ReflectiveEnumerator()

    assert _names(enumerator.find_methods(LooseEntity, MethodShape.procedure(CompoundBlob))) == ["absorb"]
    # `-> dict` is wider than the blob type, so it does not qualify as returning one.
    assert enumerator.find_methods(LooseEntity, MethodShape.function(CompoundBlob)) == []


def test_no_match_is_an_empty_list():
    assert ReflectiveEnumerator().find_methods(Empty, MethodShape.procedure(CompoundBlob)) == []


def test_candidates_invoke_against_an_instance():
    load, save = ReflectiveEnumerator().find_methods(LegacyEntity, MethodShape.procedure(CompoundBlob))
    entity = LegacyEntity()

    load.invoke(entity, CompoundBlob(Health=5.0))
    blob = CompoundBlob()
    save.invoke(entity, blob)

    assert blob == {"Health": 5.0, "CustomName": "zombie"}


def test_instance_methods_dispatch_to_overrides():
    class Renamed(LegacyEntity):
        def save(self, blob: CompoundBlob) -> None:
            blob["Renamed"] = True

    (_, save) = ReflectiveEnumerator().find_methods(LegacyEntity, MethodShape.procedure(CompoundBlob))
    blob = CompoundBlob()

    save.invoke(Renamed(), blob)

    assert save.virtual
    assert blob == {"Renamed": True}


def test_members_with_unresolvable_annotations_are_ignored():
    found = ReflectiveEnumerator().find_methods(OddlyAnnotated, MethodShape.procedure(CompoundBlob))

    assert _names(found) == ["load", "save"]
