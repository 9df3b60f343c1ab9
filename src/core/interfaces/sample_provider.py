"""Contract for the disposable sample instance.

Why a Protocol:
- The resolver only needs to spawn one live instance, inspect its type and
  discard it; how that instance is built (plain constructor, game world,
  fixture) is the adapter's business.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SampleProvider(Protocol):
    """Produces and later discards one live instance of the opaque type.

    Rules:
    - `spawn` must return a live, invocable instance.
    - `remove` is idempotent and is called exactly once per resolution.
    """

    def spawn(self) -> Any:
        """Create the sample instance."""

        ...

    def remove(self) -> None:
        """Discard the sample instance and restore any state it touched."""

        ...

    def base_type(self) -> type:
        """Type whose members are enumerated for load/save candidates."""

        ...
