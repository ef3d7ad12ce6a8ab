"""Resolve values out of items by dotted path or extractor function.

Option shapes are controlled by the caller, so resolution never raises:
a path that cannot be followed resolves to None.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Callable

from shared.models.field import FieldExtractor, FieldPath, FieldSpec

_PRIMITIVES = (str, bytes, bytearray, int, float, bool)


def to_field_spec(spec: str | Callable[[Any], Any] | FieldSpec) -> FieldSpec:
    """Coerce a plain path string or a function into a FieldSpec.

    Args:
        spec (str | Callable | FieldSpec): The raw spec given by the caller.

    Returns:
        FieldSpec: A FieldPath for strings, a FieldExtractor for callables.

    Raises:
        TypeError: If the spec is neither a string, a callable nor a FieldSpec.
    """
    if isinstance(spec, (FieldPath, FieldExtractor)):
        return spec
    if isinstance(spec, str):
        return FieldPath(path=spec)
    if callable(spec):
        return FieldExtractor(fn=spec)
    raise TypeError(f"Unsupported field spec of type '{type(spec).__name__}'. Expected a dotted path or a function.")


def resolve_field(item: Any, spec: str | Callable[[Any], Any] | FieldSpec) -> Any:
    """Resolve a value out of an item.

    Args:
        item (Any): The item (usually a dict decoded from JSON).
        spec (str | Callable | FieldSpec): Dotted path or extractor.

    Returns:
        Any: The extractor's result verbatim, or the value at the path. None if the path is missing.
    """
    spec = to_field_spec(spec)
    if isinstance(spec, FieldExtractor):
        return spec.fn(item)
    return _resolve_path(item, spec.path)


def _resolve_path(item: Any, path: str) -> Any:
    if not path:
        return None
    current = item
    for segment in path.split("."):
        current = _step(current, segment)
        if current is None:
            return None
    return current


def _step(current: Any, segment: str) -> Any:
    if current is None or isinstance(current, _PRIMITIVES):
        return None
    if isinstance(current, Mapping):
        return current.get(segment)
    if isinstance(current, Sequence):
        # "results.0.name" style index access
        if not segment.isdigit():
            return None
        index = int(segment)
        return current[index] if -len(current) <= index < len(current) else None
    return getattr(current, segment, None)
