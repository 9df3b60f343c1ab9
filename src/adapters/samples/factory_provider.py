"""Sample provider built from plain callables.

Spawns the sample with a factory (the base type itself by default) and
tears it down with an optional callback. `remove` is safe to call twice.
"""

from __future__ import annotations

from typing import Any, Callable


class FactorySampleProvider:
    def __init__(
        self,
        base_type: type,
        factory: Callable[[], Any] | None = None,
        teardown: Callable[[Any], None] | None = None,
    ) -> None:
        self._base_type = base_type
        self._factory = factory or base_type
        self._teardown = teardown
        self._sample: Any = None
        self._spawned = False

    @property
    def spawned(self) -> bool:
        return self._spawned

    def spawn(self) -> Any:
        if self._spawned:
            raise RuntimeError("Sample already spawned; call remove() first")
        sample = self._factory()
        if not isinstance(sample, self._base_type):
            raise TypeError(
                f"Factory produced {type(sample).__qualname__}, "
                f"expected an instance of {self._base_type.__qualname__}"
            )
        self._sample = sample
        self._spawned = True
        return sample

    def remove(self) -> None:
        if not self._spawned:
            return
        sample, self._sample, self._spawned = self._sample, None, False
        if self._teardown is not None:
            self._teardown(sample)

    def base_type(self) -> type:
        return self._base_type
