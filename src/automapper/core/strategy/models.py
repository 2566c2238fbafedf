"""Strategy models: the copy strategies and the plans built from them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class Strategy(Enum):
    """How a matched field pair is copied. Exactly one applies per pair."""

    CONVERTER = auto()
    """Call the converter registered for the exact type pair."""

    IDENTICAL = auto()
    """Same declared type on both sides: install the value as is."""

    NESTED_RECORD = auto()
    """Record or optional record on both sides: recurse into the mapper."""

    SEQUENCE = auto()
    """Sequences of records on both sides: map element by element."""

    UNMAPPABLE = auto()
    """Nothing applies; copying a present value is an error."""


@dataclass(slots=True, frozen=True)
class FieldStep:
    """One resolved field copy inside a plan."""

    source_index: int
    destination_index: int
    source_name: str
    destination_name: str
    source_type: Any
    destination_type: Any
    strategy: Strategy


@dataclass(slots=True, frozen=True)
class MappingPlan:
    """Resolved field-by-field strategies for one ordered pair of record shapes.

    Immutable once built and only valid for the exact (source, destination)
    class pair it was built from.
    """

    source_type: type
    destination_type: type
    steps: tuple[FieldStep, ...]

    @property
    def key(self) -> tuple[type, type]:
        """Cache key of this plan."""
        return (self.source_type, self.destination_type)
