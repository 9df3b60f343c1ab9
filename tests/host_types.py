"""Host classes shaped like real entity types, for reflection and CLI tests."""

from __future__ import annotations

import typing

from adapters.blobs import CompoundBlob


class LegacyEntity:
    def __init__(self) -> None:
        self.health = 20.0
        self.custom_name = "zombie"

    def load(self, blob: CompoundBlob) -> None:
        self.health = blob.get("Health", self.health)
        self.custom_name = blob.get("CustomName", self.custom_name)

    def save(self, blob: CompoundBlob) -> None:
        blob["Health"] = self.health
        blob["CustomName"] = self.custom_name

    def describe(self, text: str) -> None:
        self.custom_name = text

    def tick(self) -> None:
        self.health -= 1

    def load_untyped(self, blob):  # noqa: ANN001
        pass

    def merge(self, blob: CompoundBlob, other: CompoundBlob) -> None:
        blob.update(other)

    def _write_private(self, blob: CompoundBlob) -> None:
        blob["Private"] = True

    @staticmethod
    def from_blob(blob: CompoundBlob) -> None:
        blob["Static"] = True

    @classmethod
    def migrate(cls, blob: CompoundBlob) -> None:
        blob.setdefault("Version", 1)


class ModernEntity(LegacyEntity):
    def save_state(self, blob: CompoundBlob) -> CompoundBlob:
        out = CompoundBlob(blob)
        out["Health"] = self.health
        out["CustomName"] = self.custom_name
        return out

    def copy_of(self, blob: CompoundBlob) -> CompoundBlob:
        return CompoundBlob(blob)


class LooseEntity:
    """Annotates parameters with a base class of the blob type."""

    def absorb(self, blob: dict) -> None:
        pass

    def emit(self, blob: dict) -> dict:
        return blob


class DuplicatedSavers:
    def write_a(self, blob: CompoundBlob) -> None:
        blob["A"] = 1

    def write_b(self, blob: CompoundBlob) -> None:
        blob["B"] = 1

    def write_c(self, blob: CompoundBlob) -> None:
        blob["C"] = 1


class Empty:
    pass


def make_legacy_entity() -> LegacyEntity:
    entity = LegacyEntity()
    entity.custom_name = "factory"
    return entity


class OddlyAnnotated(LegacyEntity):
    """Unrelated members whose annotations cannot be evaluated."""

    def unrelated(self, value: typing.DoesNotExist) -> None:  # type: ignore[name-defined]
        pass

    def prose(self, value: "a list of ints") -> None:  # noqa: F722
        pass
