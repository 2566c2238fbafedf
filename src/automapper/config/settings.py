"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the mapper.

Usage:
    from automapper.config import MapperSettings

    # Load from environment variables (AUTOMAPPER_*)
    settings = MapperSettings()

    # Or override with explicit values
    settings = MapperSettings(alias_key="map_as", copy_mode="deep")
"""

from __future__ import annotations

from typing import Literal

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for the config module. "
        "Install with: pip install automapper"
    ) from e


class MapperSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for a Mapper.

    Attributes:
        alias_key: Field metadata key holding the match alias
            (``field(metadata={"mapper": ...})`` / ``Field(json_schema_extra=...)``).
        cache_plans: Install discovered plans for replay by later calls.
        copy_mode: How values of identical declared type are installed:
            the same object, a shallow copy, or a deep copy. Inline records
            are copied at least shallowly in every mode.

    Environment Variables:
        AUTOMAPPER_ALIAS_KEY
        AUTOMAPPER_CACHE_PLANS
        AUTOMAPPER_COPY_MODE
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTOMAPPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    alias_key: str = "mapper"
    cache_plans: bool = True
    copy_mode: Literal["reference", "shallow", "deep"] = "reference"
