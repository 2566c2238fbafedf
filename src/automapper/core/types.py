"""Declared-type helpers: normalization, record detection, sequence shapes.

Everything the classifier knows about a field comes from its declared
annotation. These helpers turn annotations into comparable values and answer
the structural questions the classifier asks ("is this an optional record?",
"is this a fixed-length tuple of records?").
"""

from __future__ import annotations

import types
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, is_dataclass
from enum import Enum, auto
from typing import Any, Union, get_args, get_origin

NoneType = type(None)

_VARIABLE_ORIGINS = (list, Sequence, MutableSequence)


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic.

    Args:
        cls: Class to check.

    Returns:
        True if class inherits from pydantic.BaseModel, False otherwise.
    """
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def is_record_type(tp: Any) -> bool:
    """Check if a declared type is a record class (dataclass or Pydantic model)."""
    if not isinstance(tp, type):
        return False
    return is_dataclass(tp) or _is_pydantic(tp)


def is_pydantic_type(tp: Any) -> bool:
    """Check if a declared type is a Pydantic model class."""
    return isinstance(tp, type) and _is_pydantic(tp)


def is_record(value: Any) -> bool:
    """Check if a value is a record instance (not a record class)."""
    return not isinstance(value, type) and is_record_type(type(value))


def normalize(tp: Any) -> Any:
    """Return a canonical form of an annotation suitable for equality checks.

    ``X | None`` and ``Optional[X]`` normalize to the same value, also when
    nested inside generic arguments such as ``list[X | None]``.
    """
    origin = get_origin(tp)
    if origin is None:
        return tp
    args = get_args(tp)
    if origin is Union or origin is types.UnionType:
        return Union[tuple(normalize(arg) for arg in args)]  # noqa: UP007
    if isinstance(tp, types.GenericAlias):
        return types.GenericAlias(origin, tuple(normalize(arg) for arg in args))
    return tp


def unwrap_optional(tp: Any) -> tuple[Any, bool]:
    """Split ``X | None`` into ``(X, True)``; anything else into ``(tp, False)``.

    Unions with more than one non-None member are returned unchanged.
    """
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(tp) if arg is not NoneType]
        if len(members) == 1 and len(members) != len(get_args(tp)):
            return members[0], True
    return tp, False


def record_target(tp: Any) -> type | None:
    """Return the record class behind a record or optional-record annotation."""
    inner, _ = unwrap_optional(tp)
    return inner if is_record_type(inner) else None


class SequenceKind(Enum):
    """Whether a sequence annotation has a declared length."""

    VARIABLE = auto()
    FIXED = auto()


@dataclass(slots=True, frozen=True)
class SequenceShape:
    """Structure of a homogeneous sequence annotation."""

    kind: SequenceKind
    element: Any
    """Declared element type (may be an optional reference)."""

    container: type
    """Concrete type to build for this annotation: list or tuple."""

    length: int | None = None
    """Declared length for FIXED sequences, None for VARIABLE."""

    @property
    def element_record(self) -> type | None:
        """Record class of the elements, or None if elements are not records."""
        return record_target(self.element)

    @property
    def element_optional(self) -> bool:
        """True if elements are optional references."""
        return unwrap_optional(self.element)[1]


def sequence_shape(tp: Any) -> SequenceShape | None:
    """Analyze a sequence annotation.

    Recognized forms:
        list[E], Sequence[E], MutableSequence[E]   -> VARIABLE, built as list
        tuple[E, ...]                              -> VARIABLE, built as tuple
        tuple[E, E, E]                             -> FIXED (length 3), built as tuple

    Returns:
        The shape, or None if the annotation is not a homogeneous sequence.
    """
    origin = get_origin(tp)
    args = get_args(tp)
    if origin in _VARIABLE_ORIGINS and len(args) == 1:
        return SequenceShape(kind=SequenceKind.VARIABLE, element=args[0], container=list)
    if origin is tuple and args:
        if len(args) == 2 and args[1] is Ellipsis:
            return SequenceShape(kind=SequenceKind.VARIABLE, element=args[0], container=tuple)
        if Ellipsis not in args and all(arg == args[0] for arg in args):
            return SequenceShape(
                kind=SequenceKind.FIXED, element=args[0], container=tuple, length=len(args)
            )
    return None


def type_name(tp: Any) -> str:
    """Readable name for a declared type, used in error messages."""
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__qualname__
    return repr(tp).replace("typing.", "")
