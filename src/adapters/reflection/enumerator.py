"""Candidate enumeration via `inspect`.

Implements `core.interfaces.enumerator.CandidateEnumerator` for plain Python
classes. Matching is purely structural:
- visibility: names starting with `_` are private,
- staticness: `staticmethod` / `classmethod` seen through `inspect.getattr_static`,
- signature: positional parameters after `self`, resolved type hints.

Members whose hints cannot be resolved are ignored rather than guessed.
"""

from __future__ import annotations

import inspect
import logging
import typing
from typing import Any, Callable

from core.domain.models import CandidateOperation, MethodShape

logger = logging.getLogger(__name__)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _defining_class(owner: type, name: str) -> type:
    for klass in owner.__mro__:
        if name in vars(klass):
            return klass
    return owner


def _accepts(annotation: Any, offered: type) -> bool:
    """True if a value of type `offered` can be passed where `annotation` is expected."""

    return isinstance(annotation, type) and issubclass(offered, annotation)


def _returns(annotation: Any, expected: type | None) -> bool:
    if expected is None:
        return annotation is type(None)
    return isinstance(annotation, type) and issubclass(annotation, expected)


class ReflectiveEnumerator:
    """Finds methods of a class by return type, parameter types and modifiers."""

    def find_methods(self, owner: type, shape: MethodShape) -> list[CandidateOperation]:
        found: list[CandidateOperation] = []

        for name in dir(owner):
            if shape.must_be_public and name.startswith("_"):
                continue

            raw = inspect.getattr_static(owner, name)
            static = isinstance(raw, (staticmethod, classmethod))
            if static and shape.must_not_be_static:
                continue

            function: Callable[..., Any]
            if static:
                function = getattr(owner, name)
                target = raw.__func__
            elif inspect.isfunction(raw):
                function = raw
                target = raw
            else:
                continue

            if not self._matches(target, shape, skip_first=not isinstance(raw, staticmethod)):
                continue

            found.append(
                CandidateOperation(
                    name=name,
                    owner=_defining_class(owner, name),
                    function=function,
                    shape=shape,
                    static=static,
                    virtual=not static,
                )
            )

        logger.debug("%d candidate(s) on %s for %s", len(found), owner.__qualname__, shape.describe())
        return found

    @staticmethod
    def _matches(target: Callable[..., Any], shape: MethodShape, *, skip_first: bool) -> bool:
        try:
            signature = inspect.signature(target)
            hints = typing.get_type_hints(target)
        except (AttributeError, NameError, SyntaxError, TypeError, ValueError) as exc:
            logger.debug("Ignoring %r: unresolvable signature (%s)", target, exc)
            return False

        params = list(signature.parameters.values())
        if skip_first:
            if not params or params[0].kind not in _POSITIONAL:
                return False
            params = params[1:]

        if len(params) != len(shape.params):
            return False
        if any(p.kind not in _POSITIONAL for p in params):
            return False

        for param, offered in zip(params, shape.params):
            if not _accepts(hints.get(param.name), offered):
                return False

        if "return" not in hints:
            return False
        return _returns(hints["return"], shape.returns)
