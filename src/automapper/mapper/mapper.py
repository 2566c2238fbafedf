"""Mapper: public entry point of the structural mapping engine.

Usage:
    @dataclass
    class UserRow:
        id: int
        name: str
        address: AddressRow | None = None

    @dataclass
    class User:
        name: str = ""
        address: Address | None = None
        user_id: str = field(default="", metadata={"mapper": "id"})

    mapper = Mapper()
    mapper.register_converter(str, source=int, target=str)

    user = User()
    mapper.map(row, user)                # in place
    user = mapper.create(row, User)      # fresh destination

    users: list[User] = []
    mapper.map(rows, users, element_type=User)

Flow: validate arguments -> plan cache lookup -> on a miss, match fields and
classify each pair into a plan -> run the plan -> install it for later calls.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, MutableSequence, Sequence
from typing import Any, TypeVar

from automapper.config import MapperSettings
from automapper.core.errors import NotAReferenceError, UnknownElementTypeError
from automapper.core.fields import (
    is_mutable_record,
    is_zero,
    match_fields,
    new_record,
    set_field,
)
from automapper.core.strategy import FieldStep, MappingPlan, classify
from automapper.core.types import is_record, is_record_type
from automapper.mapper.strategies import get_strategy
from automapper.planning import PlanCache
from automapper.registry import ConverterEntry, ConverterRegistry

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

_TEXT_TYPES = (str, bytes, bytearray)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


def _kind(value: Any) -> str:
    if isinstance(value, type):
        return f"class {value.__qualname__}"
    return type(value).__qualname__


class Mapper:
    """Copies fields between structurally similar records.

    Owns a converter registry and a plan cache for its whole lifetime. Safe
    to share between threads: both stores are lock-protected and no lock is
    held while a mapping or a converter runs.

    Args:
        settings: Mapper configuration (defaults read from AUTOMAPPER_* env vars).
    """

    def __init__(self, settings: MapperSettings | None = None) -> None:
        """Initialize mapper with empty converter registry and plan cache.

        Args:
            settings: Mapper configuration, None to load from environment.
        """
        self._settings = settings if settings is not None else MapperSettings()
        self._converters = ConverterRegistry()
        self._plans = PlanCache()

    @property
    def settings(self) -> MapperSettings:
        """Configuration in effect."""
        return self._settings

    @property
    def converters(self) -> ConverterRegistry:
        """Registered converters."""
        return self._converters

    @property
    def plans(self) -> PlanCache:
        """Cached mapping plans."""
        return self._plans

    def register_converter(
        self,
        fn: Callable[..., Any],
        *,
        source: Any = None,
        target: Any = None,
        fallible: bool | None = None,
    ) -> ConverterEntry:
        """Register a converter between two elementary types.

        Converter function must be in one of two forms:
            def convert(value: int) -> str: ...
            def convert(value: str) -> tuple[int, ValueError | None]: ...

        Plans cached before this call keep their strategies; a pair already
        planned as identical or unmappable does not start using the converter.

        Args:
            fn: One-argument callable.
            source: Source type, overrides fn's parameter annotation.
            target: Destination type, overrides fn's return annotation.
            fallible: Force or disable the ``(value, failure)`` result form.

        Returns:
            The stored converter entry.

        Raises:
            NotAFunctionError: If fn is not callable.
            InvalidConverterError: If fn's signature or types cannot be resolved.
        """
        return self._converters.register(fn, source=source, target=target, fallible=fallible)

    def map(self, source: Any, destination: Any, *, element_type: type | None = None) -> None:
        """Map two records, or two sequences of records, in place.

        Args:
            source: Record, or list/tuple of records (None elements allowed).
            destination: Mutable record, or list replaced by the mapped records.
            element_type: Record class to build for sequence mapping. Defaults
                to the type of the first destination element.

        Raises:
            NotAReferenceError: If the arguments are not records/sequences of
                records, the destination is immutable, or the kinds differ.
            UnknownElementTypeError: If a sequence mapping has no element type.
            MissingConverterError: If a matched field pair cannot be copied.
            ConverterError: If a converter reported a failure.
            ConverterResultError: If a converter's failure value is malformed.
            SequenceLengthError: If a fixed-length sequence length differs.
        """
        if is_record(source) or is_record(destination):
            self._check_records(source, destination)
            self._map_records(source, destination)
            return
        if _is_sequence(source) and _is_sequence(destination):
            self._map_sequences(source, destination, element_type)
            return
        raise NotAReferenceError(
            f"map() needs two records or two sequences of records, "
            f"got {_kind(source)} and {_kind(destination)}"
        )

    def create(self, source: Any, destination_type: type[RecordT]) -> RecordT:
        """Map a record into a fresh zero-valued instance of destination_type.

        Args:
            source: Record to read from.
            destination_type: Record class to build.

        Returns:
            The new, mapped destination record.
        """
        if not is_record(source):
            raise NotAReferenceError(f"source must be a record, got {_kind(source)}")
        if not is_record_type(destination_type):
            raise NotAReferenceError(
                f"destination_type must be a dataclass or Pydantic model, "
                f"got {destination_type!r}"
            )
        destination = new_record(destination_type)
        self._map_records(source, destination)
        return destination  # type: ignore[no-any-return]

    def plan_for(self, source_type: type, destination_type: type) -> MappingPlan | None:
        """Get the cached plan for an ordered pair of record classes, if any."""
        return self._plans.get(source_type, destination_type)

    def _check_records(self, source: Any, destination: Any) -> None:
        if not is_record(source):
            raise NotAReferenceError(f"source must be a record, got {_kind(source)}")
        if not is_record(destination):
            raise NotAReferenceError(f"destination must be a record, got {_kind(destination)}")
        if not is_mutable_record(destination):
            raise NotAReferenceError(
                f"destination {type(destination).__qualname__} is frozen and cannot be mapped into"
            )

    def _map_sequences(
        self, source: Sequence[Any], destination: Any, element_type: type | None
    ) -> None:
        if not isinstance(destination, MutableSequence):
            raise NotAReferenceError(
                f"destination sequence must be mutable, got {_kind(destination)}"
            )
        for element in source:
            if element is not None and not is_record(element):
                raise NotAReferenceError(
                    f"source sequence must hold records, got {_kind(element)}"
                )

        record_cls = element_type
        # Sources holding only None elements need no record type
        if any(element is not None for element in source):
            if record_cls is None:
                record_cls = next((type(d) for d in destination if d is not None), None)
            if record_cls is None or not is_record_type(record_cls):
                raise UnknownElementTypeError(
                    "cannot tell which record type to build; pass element_type="
                )

        items = []
        for element in source:
            if element is None:
                items.append(None)
                continue
            record = new_record(record_cls)
            self._map_records(element, record)
            items.append(record)
        destination[:] = items

    def _map_records(self, source: Any, destination: Any) -> None:
        """Map source into destination, replaying or building the shape-pair plan."""
        source_type, destination_type = type(source), type(destination)
        plan = self._plans.get(source_type, destination_type)
        if plan is not None:
            self._run_plan(plan, source, destination)
            return

        plan = self._build_plan(source_type, destination_type)
        self._run_plan(plan, source, destination)
        if self._settings.cache_plans:
            self._plans.put(plan)

    def _build_plan(self, source_type: type, destination_type: type) -> MappingPlan:
        steps = tuple(
            FieldStep(
                source_index=pair.source.index,
                destination_index=pair.destination.index,
                source_name=pair.source.name,
                destination_name=pair.destination.name,
                source_type=pair.source.declared_type,
                destination_type=pair.destination.declared_type,
                strategy=classify(
                    pair.source.declared_type, pair.destination.declared_type, self._converters
                ),
            )
            for pair in match_fields(source_type, destination_type, self._settings.alias_key)
        )
        logger.debug(
            "Discovered mapping plan %s -> %s: %s",
            source_type.__qualname__,
            destination_type.__qualname__,
            ", ".join(f"{s.destination_name}={s.strategy.name}" for s in steps) or "no fields",
        )
        return MappingPlan(source_type=source_type, destination_type=destination_type, steps=steps)

    def _run_plan(self, plan: MappingPlan, source: Any, destination: Any) -> None:
        for step in plan.steps:
            value = getattr(source, step.source_name, None)
            # Absent source data never overwrites destination data
            if is_zero(value, step.source_type):
                continue
            current = getattr(destination, step.destination_name, None)
            copy_value = get_strategy(step.strategy)
            set_field(destination, step.destination_name, copy_value(self, step, value, current))


_default_mapper: Mapper | None = None
_default_lock = threading.Lock()


def get_mapper() -> Mapper:
    """Access the process-wide default Mapper, creating it on first use.

    Returns:
        The shared Mapper instance.
    """
    global _default_mapper
    if _default_mapper is None:
        with _default_lock:
            if _default_mapper is None:
                _default_mapper = Mapper()
    return _default_mapper
