"""Mapper error taxonomy.

Every error derives from MapperError and from the closest builtin exception,
so callers can catch either ``MapperError`` or e.g. ``TypeError``.
"""

from __future__ import annotations

from typing import Any

from automapper.core.types import type_name


class MapperError(Exception):
    """Base class for all mapping failures."""

    pass


class NotAReferenceError(MapperError, TypeError):
    """Raised when map() arguments are not mutable records or sequences of records."""

    pass


class NotAFunctionError(MapperError, TypeError):
    """Raised when a converter is not callable."""

    pass


class InvalidConverterError(MapperError, TypeError):
    """Raised when a converter's signature cannot be turned into a type pair."""

    pass


class MissingConverterError(MapperError, LookupError):
    """Raised when no strategy can copy a matched field pair.

    Register a converter for ``source_type -> destination_type`` to fix it.
    """

    def __init__(self, source_type: Any, destination_type: Any, field_name: str) -> None:
        self.source_type = source_type
        self.destination_type = destination_type
        self.field_name = field_name
        super().__init__(
            f"converter is missing for types "
            f"'{type_name(source_type)} -> {type_name(destination_type)}' "
            f"(field '{field_name}')"
        )


class ConverterError(MapperError):
    """Raised when a registered converter reports a failure."""

    def __init__(self, field_name: str, cause: BaseException) -> None:
        self.field_name = field_name
        self.cause = cause
        super().__init__(f"converter error for field '{field_name}': {cause}")


class ConverterResultError(MapperError, TypeError):
    """Raised when a fallible converter's failure value is not None or an exception."""

    pass


class SequenceLengthError(MapperError, ValueError):
    """Raised when a fixed-length sequence cannot hold the source elements."""

    pass


class UnknownElementTypeError(MapperError, TypeError):
    """Raised when a sequence mapping cannot tell which record type to build."""

    pass
