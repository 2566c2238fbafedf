"""Field models: descriptors and matched pairs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class FieldDescriptor:
    """One field of a record shape.

    Values are not captured here; they are read from the instance when a plan
    step runs, so descriptors (and plans built from them) are shape-level.
    """

    index: int
    name: str
    key: str
    """Match key: the alias annotation if present, otherwise the name."""

    declared_type: Any
    """Normalized annotation."""

    settable: bool


@dataclass(slots=True, frozen=True)
class FieldPair:
    """A source field and the destination field it should be copied into."""

    source: FieldDescriptor
    destination: FieldDescriptor
