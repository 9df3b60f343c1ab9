"""Resolve `module:attribute` references (CLI targets, factories, blob types)."""

from __future__ import annotations

import importlib
from typing import Any


def load_object(spec: str) -> Any:
    """Import `pkg.module:Attr` (the attribute part may be dotted)."""

    module_name, sep, attr_path = spec.strip().partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Expected 'module:attribute', got {spec!r}")

    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ValueError(f"{module_name!r} has no attribute {attr_path!r}") from exc
    return obj
