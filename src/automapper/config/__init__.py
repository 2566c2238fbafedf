"""Configuration module using Pydantic Settings.

Usage:
    from automapper.config import MapperSettings

    settings = MapperSettings(cache_plans=False)
"""

from automapper.config.settings import MapperSettings

__all__ = [
    "MapperSettings",
]
