"""Strategy routines: one function per Strategy.

Each routine receives the mapper (for recursion and the converter registry),
the plan step, the present source value, and the destination field's current
value, and returns the value to install in the destination field.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from automapper.core.errors import MapperError, MissingConverterError, SequenceLengthError
from automapper.core.fields import is_mutable_record, new_record
from automapper.core.strategy import FieldStep, Strategy
from automapper.core.types import is_record, record_target, sequence_shape, unwrap_optional

if TYPE_CHECKING:
    from automapper.mapper.mapper import Mapper

StrategyFunc = Callable[["Mapper", FieldStep, Any, Any], Any]


def copy_identical(mapper: Mapper, step: FieldStep, value: Any, current: Any) -> Any:
    """Install the source value verbatim, or a copy of it per settings.copy_mode.

    Inline records are values, not references: in "reference" mode they are
    still copied shallowly, so source and destination never share one record.
    Optional records are shared like any other reference.
    """
    mode = mapper.settings.copy_mode
    if mode == "deep":
        return copy.deepcopy(value)
    if mode == "shallow":
        return copy.copy(value)
    if is_record(value) and not unwrap_optional(step.destination_type)[1]:
        return copy.copy(value)
    return value


def _build_record(mapper: Mapper, value: Any, record_cls: type) -> Any:
    record = new_record(record_cls)
    mapper._map_records(value, record)
    return record


def copy_nested_record(mapper: Mapper, step: FieldStep, value: Any, current: Any) -> Any:
    """Map a record into the destination field.

    Optional destinations always receive a fresh record. Inline destinations
    already holding a mutable instance of the destination type are mapped into
    in place.
    """
    record_cls = record_target(step.destination_type)
    if record_cls is None:
        raise MapperError(f"field '{step.destination_name}' does not hold a record")
    _, optional = unwrap_optional(step.destination_type)
    if not optional and isinstance(current, record_cls) and is_mutable_record(current):
        mapper._map_records(value, current)
        return current
    return _build_record(mapper, value, record_cls)


def copy_sequence(mapper: Mapper, step: FieldStep, value: Any, current: Any) -> Any:
    """Map a sequence of records element by element, preserving order and length.

    Raises:
        SequenceLengthError: If the destination has a fixed length that differs
            from the number of source elements.
    """
    shape = sequence_shape(step.destination_type)
    if shape is None or shape.element_record is None:
        raise MapperError(f"field '{step.destination_name}' does not hold a sequence of records")
    elements = list(value)
    if shape.length is not None and len(elements) != shape.length:
        raise SequenceLengthError(
            f"field '{step.destination_name}' holds exactly {shape.length} elements, "
            f"source '{step.source_name}' has {len(elements)}"
        )

    items = []
    for element in elements:
        if element is None:
            items.append(None if shape.element_optional else new_record(shape.element_record))
        else:
            items.append(_build_record(mapper, element, shape.element_record))
    return shape.container(items)


def copy_with_converter(mapper: Mapper, step: FieldStep, value: Any, current: Any) -> Any:
    """Convert the source value with the registered converter."""
    entry = mapper.converters.get(step.source_type, step.destination_type)
    if entry is None:
        raise MissingConverterError(step.source_type, step.destination_type, step.destination_name)
    return entry.convert(value, step.destination_name)


def reject_unmappable(mapper: Mapper, step: FieldStep, value: Any, current: Any) -> Any:
    """Fail: no strategy can copy this pair.

    Raises:
        MissingConverterError: Always.
    """
    raise MissingConverterError(step.source_type, step.destination_type, step.destination_name)


STRATEGIES: dict[Strategy, StrategyFunc] = {
    Strategy.IDENTICAL: copy_identical,
    Strategy.NESTED_RECORD: copy_nested_record,
    Strategy.SEQUENCE: copy_sequence,
    Strategy.CONVERTER: copy_with_converter,
    Strategy.UNMAPPABLE: reject_unmappable,
}


def get_strategy(strategy: Strategy) -> StrategyFunc:
    """Get the routine implementing a strategy."""
    return STRATEGIES[strategy]
