"""Tests for declared-type helpers."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

import pytest
from pydantic import BaseModel

from automapper.core.types import (
    SequenceKind,
    is_record,
    is_record_type,
    normalize,
    record_target,
    sequence_shape,
    type_name,
    unwrap_optional,
)


@dataclass
class Point:
    x: int = 0
    y: int = 0


class PointModel(BaseModel):
    x: int = 0


class PlainPoint:
    x: int = 0


def test_optional_spellings_normalize_equal():
    """Optional[X] and X | None must classify as the same declared type."""
    assert normalize(Optional[int]) == normalize(int | None)  # noqa: UP045
    assert normalize(list[Optional[Point]]) == normalize(list[Point | None])  # noqa: UP045


def test_normalize_leaves_plain_types_alone():
    assert normalize(int) is int
    assert normalize(Point) is Point
    assert normalize(list[int]) == list[int]


@pytest.mark.parametrize(
    "tp, expected",
    [
        (Point | None, (Point, True)),
        (Optional[int], (int, True)),  # noqa: UP045
        (int, (int, False)),
        (int | str, (int | str, False)),
        (int | str | None, (int | str | None, False)),
    ],
)
def test_unwrap_optional(tp, expected):
    assert unwrap_optional(tp) == expected


def test_record_detection():
    """Dataclasses and Pydantic models are records; plain classes are not."""
    assert is_record_type(Point)
    assert is_record_type(PointModel)
    assert not is_record_type(PlainPoint)
    assert not is_record_type(int)
    assert not is_record_type(list[Point])

    assert is_record(Point())
    assert is_record(PointModel())
    assert not is_record(Point)  # the class itself is not an instance
    assert not is_record(PlainPoint())


def test_record_target():
    assert record_target(Point) is Point
    assert record_target(Point | None) is Point
    assert record_target(int) is None
    assert record_target(Point | PointModel) is None


def test_variable_sequences():
    for tp, container in [
        (list[Point], list),
        (Sequence[Point], list),
        (tuple[Point, ...], tuple),
    ]:
        shape = sequence_shape(tp)
        assert shape is not None
        assert shape.kind is SequenceKind.VARIABLE
        assert shape.container is container
        assert shape.length is None
        assert shape.element_record is Point


def test_fixed_sequence():
    shape = sequence_shape(tuple[Point | None, Point | None, Point | None])
    assert shape is not None
    assert shape.kind is SequenceKind.FIXED
    assert shape.length == 3
    assert shape.element_record is Point
    assert shape.element_optional


def test_non_sequences():
    assert sequence_shape(tuple[Point, int]) is None  # heterogeneous
    assert sequence_shape(dict[str, Point]) is None
    assert sequence_shape(list) is None  # unparameterized
    assert sequence_shape(Point) is None


def test_sequence_of_scalars_has_no_element_record():
    shape = sequence_shape(list[int])
    assert shape is not None
    assert shape.element_record is None


def test_type_name():
    assert type_name(int) == "int"
    assert type_name(Point) == "Point"
    assert type_name(list[int]) == "list[int]"
