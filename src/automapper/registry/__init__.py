"""Converter registry."""

from automapper.registry.converters import ConverterEntry, ConverterRegistry

__all__ = [
    "ConverterEntry",
    "ConverterRegistry",
]
