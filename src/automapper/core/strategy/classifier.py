"""Type classifier: picks the copy strategy for a matched field pair.

Decision order, first match wins:
1. converter registered for the exact (source, destination) type pair
2. identical declared types
3. record / optional record on both sides
4. variable-length (or fixed-length) sequences of records on both sides
5. unmappable
"""

from __future__ import annotations

from typing import Any, Protocol

from automapper.core.strategy.models import Strategy
from automapper.core.types import record_target, sequence_shape


class ConverterLookup(Protocol):
    """Anything that can tell whether a converter exists for a type pair."""

    def has(self, source_type: Any, destination_type: Any) -> bool: ...


def _is_record_sequence_pair(source_type: Any, destination_type: Any) -> bool:
    source_shape = sequence_shape(source_type)
    destination_shape = sequence_shape(destination_type)
    if source_shape is None or destination_shape is None:
        return False
    return (
        source_shape.kind is destination_shape.kind
        and source_shape.element_record is not None
        and destination_shape.element_record is not None
    )


def classify(source_type: Any, destination_type: Any, converters: ConverterLookup) -> Strategy:
    """Classify a (source declared type, destination declared type) pair.

    Args:
        source_type: Normalized declared type of the source field.
        destination_type: Normalized declared type of the destination field.
        converters: Registry consulted before any structural rule.

    Returns:
        The strategy to use, Strategy.UNMAPPABLE if none applies.
    """
    if converters.has(source_type, destination_type):
        return Strategy.CONVERTER
    if source_type == destination_type:
        return Strategy.IDENTICAL
    if record_target(source_type) is not None and record_target(destination_type) is not None:
        return Strategy.NESTED_RECORD
    if _is_record_sequence_pair(source_type, destination_type):
        return Strategy.SEQUENCE
    return Strategy.UNMAPPABLE
