"""Mapping plan cache."""

from automapper.planning.cache import PlanCache

__all__ = [
    "PlanCache",
]
