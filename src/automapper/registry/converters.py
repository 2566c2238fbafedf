"""Converter registry: user functions bridging two elementary types.

Usage:
    registry = ConverterRegistry()

    def to_text(value: int) -> str:
        return str(value)

    def parse(value: str) -> tuple[int, ValueError | None]:
        try:
            return int(value), None
        except ValueError as e:
            return 0, e

    registry.register(to_text)                      # int -> str
    registry.register(parse)                        # str -> int, fallible
    registry.register(str, source=int, target=str)  # builtins have no annotations
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, get_args, get_origin, get_type_hints

from automapper.core.errors import (
    ConverterError,
    ConverterResultError,
    InvalidConverterError,
    NotAFunctionError,
)
from automapper.core.types import normalize, type_name, unwrap_optional

logger = logging.getLogger(__name__)

_EMPTY = inspect.Parameter.empty


@dataclass(slots=True, frozen=True)
class ConverterEntry:
    """A registered converter for one ordered pair of types."""

    source_type: Any
    destination_type: Any
    func: Callable[[Any], Any]
    fallible: bool = False
    """True if func returns ``(value, failure)`` instead of a bare value."""

    def convert(self, value: Any, field_name: str) -> Any:
        """Run the converter and interpret its result.

        Args:
            value: Source field value.
            field_name: Destination field name, used in error reports.

        Returns:
            The converted value.

        Raises:
            ConverterError: If the converter raised or reported a failure.
            ConverterResultError: If a fallible converter's result has an
                unknown failure shape.
        """
        try:
            result = self.func(value)
        except Exception as e:
            raise ConverterError(field_name, e) from e

        if not self.fallible:
            return result

        if not isinstance(result, tuple) or len(result) != 2:
            raise ConverterResultError(
                f"converter {self.describe()} must return (value, failure), got {result!r}"
            )
        converted, failure = result
        if failure is None:
            return converted
        if isinstance(failure, BaseException):
            raise ConverterError(field_name, failure) from failure
        raise ConverterResultError(
            f"converter {self.describe()} second return value cannot be used as "
            f"a failure: {failure!r}"
        )

    def describe(self) -> str:
        """Readable ``source -> destination`` form of this entry."""
        return f"'{type_name(self.source_type)} -> {type_name(self.destination_type)}'"


def _is_failure_type(tp: Any) -> bool:
    inner, _ = unwrap_optional(tp)
    return isinstance(inner, type) and issubclass(inner, BaseException)


def _split_fallible(return_type: Any) -> tuple[Any, bool]:
    """Detect ``tuple[T, E]`` / ``tuple[T, E | None]`` return annotations."""
    if get_origin(return_type) is tuple:
        args = get_args(return_type)
        if len(args) == 2 and _is_failure_type(args[1]):
            return args[0], True
    return return_type, False


def _signature_types(fn: Callable[..., Any]) -> tuple[Any, Any]:
    """Read the single input annotation and the return annotation of fn.

    Raises:
        InvalidConverterError: If fn does not take exactly one required argument.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins expose no signature
        return _EMPTY, _EMPTY

    positional = [
        p
        for p in signature.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
    ]
    required = [
        p
        for p in signature.parameters.values()
        if p.default is _EMPTY and p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
    ]
    if not positional or len(required) > 1:
        raise InvalidConverterError(
            f"converter {getattr(fn, '__qualname__', fn)!r} must accept exactly one argument"
        )

    first = positional[0]
    source, target = first.annotation, signature.return_annotation

    if inspect.isfunction(fn) or inspect.ismethod(fn):
        try:
            hints = get_type_hints(fn)
        except (NameError, TypeError):
            hints = {}
        source = hints.get(first.name, source)
        target = hints.get("return", target)
    return source, target


class ConverterRegistry:
    """Thread-safe mapping from (source type, destination type) to a converter.

    At most one converter per ordered pair; registering again overwrites.
    Entries are never removed. The lock only guards the dictionary, so
    converters are always invoked outside of it.
    """

    def __init__(self) -> None:
        """Initialize empty converter registry."""
        self._lock = threading.Lock()
        self._entries: dict[tuple[Any, Any], ConverterEntry] = {}

    def register(
        self,
        fn: Callable[..., Any],
        *,
        source: Any = None,
        target: Any = None,
        fallible: bool | None = None,
    ) -> ConverterEntry:
        """Register a converter.

        Types are read from fn's annotations unless given explicitly. A return
        annotation ``tuple[T, E]`` (E an exception class, optionally ``| None``)
        marks a fallible converter producing T.

        Args:
            fn: One-argument callable.
            source: Source type, overrides the parameter annotation.
            target: Destination type, overrides the return annotation.
            fallible: Force or disable the ``(value, failure)`` result form.

        Returns:
            The stored entry.

        Raises:
            NotAFunctionError: If fn is not callable.
            InvalidConverterError: If the signature or types cannot be resolved.
        """
        if not callable(fn):
            raise NotAFunctionError(f"{fn!r} is not a function")

        hinted_source, hinted_target = _signature_types(fn)
        source_type = source if source is not None else hinted_source
        target_type = target if target is not None else hinted_target
        if source_type is _EMPTY or target_type is _EMPTY:
            raise InvalidConverterError(
                f"cannot resolve types of converter {getattr(fn, '__qualname__', fn)!r}; "
                f"annotate it or pass source= and target="
            )

        if target is None and fallible is None:
            target_type, fallible = _split_fallible(target_type)
        elif target is None and fallible:
            target_type, _ = _split_fallible(target_type)

        entry = ConverterEntry(
            source_type=normalize(source_type),
            destination_type=normalize(target_type),
            func=fn,
            fallible=bool(fallible),
        )
        key = (entry.source_type, entry.destination_type)
        with self._lock:
            replaced = key in self._entries
            self._entries[key] = entry

        if replaced:
            logger.debug("Replaced converter %s", entry.describe())
        else:
            logger.debug("Registered converter %s", entry.describe())
        return entry

    def get(self, source_type: Any, destination_type: Any) -> ConverterEntry | None:
        """Get the converter for an exact type pair, None if not registered."""
        with self._lock:
            return self._entries.get((source_type, destination_type))

    def has(self, source_type: Any, destination_type: Any) -> bool:
        """Check if a converter is registered for an exact type pair."""
        with self._lock:
            return (source_type, destination_type) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, pair: object) -> bool:
        with self._lock:
            return pair in self._entries
