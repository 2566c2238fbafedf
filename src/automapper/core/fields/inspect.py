"""Record introspection: field descriptors, zero values, and allocation.

This is the one place that knows how dataclasses and Pydantic models expose
their fields. The rest of the mapper only sees FieldDescriptor values.

Usage:
    @dataclass
    class User:
        name: str
        email: str = field(metadata={"mapper": "mail"})

    describe_fields(User)        # (FieldDescriptor(name="name", key="name", ...), ...)
    new_record(User)             # User(name="", email="") without calling __init__
"""

from __future__ import annotations

import dataclasses
import numbers
from collections.abc import Mapping, Sized
from functools import cache
from typing import Any, get_origin, get_type_hints

from automapper.core.fields.models import FieldDescriptor
from automapper.core.types import (
    is_pydantic_type,
    is_record,
    is_record_type,
    normalize,
    record_target,
    sequence_shape,
    unwrap_optional,
)

DEFAULT_ALIAS_KEY = "mapper"


@cache
def _declared_types(cls: type) -> dict[str, Any]:
    """Resolve and normalize the annotations of every field of a record class."""
    if is_pydantic_type(cls):
        return {
            name: normalize(info.annotation)
            for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
        }
    hints = get_type_hints(cls)
    return {f.name: normalize(hints.get(f.name, Any)) for f in dataclasses.fields(cls)}


def is_frozen(cls: type) -> bool:
    """Check if instances of a record class reject attribute assignment."""
    if is_pydantic_type(cls):
        return bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]
    params = getattr(cls, "__dataclass_params__", None)
    return bool(params is not None and params.frozen)


def is_mutable_record(value: Any) -> bool:
    """Check if a value is a record instance whose fields can be assigned."""
    return is_record(value) and not is_frozen(type(value))


def _alias(extra: Any, alias_key: str) -> str | None:
    if not isinstance(extra, Mapping):
        return None
    alias = extra.get(alias_key)
    return alias if isinstance(alias, str) and alias else None


def describe_fields(cls: type, alias_key: str = DEFAULT_ALIAS_KEY) -> tuple[FieldDescriptor, ...]:
    """Return the field descriptors of a record class in declaration order.

    Fields of frozen classes are settable: the mapper writes them only into
    records it allocated itself. Underscore names and Pydantic fields declared
    `frozen=True` are never settable.

    Args:
        cls: Dataclass or Pydantic model class.
        alias_key: Metadata key holding the per-field match alias.

    Returns:
        One descriptor per field.

    Raises:
        TypeError: If cls is not a record class.
    """
    if not is_record_type(cls):
        raise TypeError(f"{cls!r} is not a dataclass or Pydantic model")

    declared = _declared_types(cls)
    descriptors = []

    if is_pydantic_type(cls):
        for index, (name, info) in enumerate(cls.model_fields.items()):  # type: ignore[attr-defined]
            alias = _alias(info.json_schema_extra, alias_key)
            descriptors.append(
                FieldDescriptor(
                    index=index,
                    name=name,
                    key=alias or name,
                    declared_type=declared[name],
                    settable=not (info.frozen or name.startswith("_")),
                )
            )
        return tuple(descriptors)

    for index, f in enumerate(dataclasses.fields(cls)):
        alias = _alias(f.metadata, alias_key)
        descriptors.append(
            FieldDescriptor(
                index=index,
                name=f.name,
                key=alias or f.name,
                declared_type=declared[f.name],
                settable=not f.name.startswith("_"),
            )
        )
    return tuple(descriptors)


def is_zero(value: Any, declared_type: Any = None) -> bool:
    """Check if a value counts as absent and must never overwrite destination data.

    Zero values: None, numbers equal to zero (False included), empty strings
    and other empty sized collections, and records whose fields are all zero.
    When the declared type is known, two rules refine this: a record held by
    an optional reference is present whatever its fields, and a fixed-length
    tuple is zero when all of its elements are.

    Args:
        value: Value read from a record field.
        declared_type: Normalized declared type of that field, if known.

    Returns:
        True if the value is absent.
    """
    if value is None:
        return True
    if declared_type is not None:
        inner, optional = unwrap_optional(declared_type)
        if optional and record_target(inner) is not None:
            return False
        shape = sequence_shape(inner)
        if shape is not None and shape.length is not None and isinstance(value, tuple):
            return all(is_zero(element, shape.element) for element in value)
    if isinstance(value, numbers.Number):
        return bool(value == 0)
    if is_record(value):
        return all(
            is_zero(getattr(value, name, None), tp)
            for name, tp in _declared_types(type(value)).items()
        )
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def set_field(record: Any, name: str, value: Any) -> None:
    """Assign a record field, bypassing frozen-class checks.

    Only for records the mapper allocated itself; frozen instances passed in
    by callers are rejected before any field is written.
    """
    if is_frozen(type(record)):
        object.__setattr__(record, name, value)
    else:
        setattr(record, name, value)


def zero_value(tp: Any) -> Any:
    """Zero value of a declared type.

    Optionals are None, records are zero-valued records, sequences and
    mappings are empty, fixed tuples hold zero elements, and any other class
    is called without arguments. Types that cannot be built that way get None.
    """
    inner, optional = unwrap_optional(tp)
    if optional:
        return None
    record_cls = record_target(inner)
    if record_cls is not None:
        return new_record(record_cls)
    shape = sequence_shape(inner)
    if shape is not None:
        if shape.length is not None:
            return tuple(zero_value(shape.element) for _ in range(shape.length))
        return shape.container()
    factory = get_origin(inner) or inner
    if isinstance(factory, type):
        try:
            return factory()
        except TypeError:
            return None
    return None


def new_record(cls: type) -> Any:
    """Allocate a zero-valued record without running __init__ or validation.

    Fields get their default, their default factory result, or the zero value
    of their declared type.
    """
    declared = _declared_types(cls)
    if is_pydantic_type(cls):
        required = {
            name: zero_value(declared[name])
            for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
            if info.is_required()
        }
        return cls.model_construct(**required)  # type: ignore[attr-defined]

    record = cls.__new__(cls)
    for f in dataclasses.fields(cls):
        if f.default is not dataclasses.MISSING:
            value = f.default
        elif f.default_factory is not dataclasses.MISSING:
            value = f.default_factory()
        else:
            value = zero_value(declared[f.name])
        # Frozen dataclasses block setattr
        object.__setattr__(record, f.name, value)
    return record
