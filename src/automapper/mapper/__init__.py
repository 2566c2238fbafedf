"""Mapper orchestration and strategy routines."""

from automapper.mapper.mapper import Mapper, get_mapper
from automapper.mapper.strategies import STRATEGIES, get_strategy

__all__ = [
    "Mapper",
    "get_mapper",
    "STRATEGIES",
    "get_strategy",
]
