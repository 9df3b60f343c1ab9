"""Reflection-backed collaborators (member enumeration, object loading)."""

from adapters.reflection.enumerator import ReflectiveEnumerator
from adapters.reflection.loader import load_object

__all__ = [
	"ReflectiveEnumerator",
	"load_object",
]
