# -*- coding: utf-8 -*-
"""Location: ./graphseed/settings.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Seeding engine configuration.

All settings can be overridden via environment variables with the GRAPHSEED_
prefix, for example GRAPHSEED_DEFAULT_NAMESPACE=app.models or
GRAPHSEED_RESOURCE_ROOT=./fixtures.
"""

# Standard
from functools import lru_cache
import logging
from typing import Any, Literal

# Third-Party
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def _empty_string_to_none(value: Any) -> Any:
    """Treat empty optional env vars as unset (None).

    Args:
        value: The raw value from the environment variable.

    Returns:
        None if the value is an empty string, otherwise the original value.

    Examples:
        >>> _empty_string_to_none("  ") is None
        True
        >>> _empty_string_to_none("fixtures")
        'fixtures'
    """
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class SeedSettings(BaseSettings):
    """Seeding engine configuration."""

    default_namespace: str = Field(default="", description="Namespace every document starts in for unqualified type names")
    fallback_namespace: str = Field(default="builtins", description="Namespace tried last when resolving a type name")
    resource_root: str | None = Field(default=None, description="Filesystem directory document locations are resolved against")
    resource_package: str | None = Field(default=None, description="Python package document locations are loaded from")
    key_mode: Literal["legacy", "typed"] = Field(
        default="legacy",
        description="Entity cache keys: 'legacy' keys on the identifier alone, 'typed' on (type, identifier)",
    )
    match_mode: Literal["narrower", "broader", "exact"] = Field(
        default="narrower",
        description="Processor matching: 'narrower' matches processors declared for the entity type or a subtype of it",
    )
    strict_fields: bool = Field(default=False, description="Reject fields the constructed instance does not declare")
    encoding: str = Field(default="utf-8", description="Encoding used to read documents")
    log_level: str = Field(default="INFO", description="Logging level for the command line")

    @field_validator("resource_root", "resource_package", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Delegate to shared validator."""
        return _empty_string_to_none(value)

    model_config = SettingsConfigDict(env_prefix="GRAPHSEED_", env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache()
def get_settings() -> SeedSettings:
    """Get the seeding settings.

    Returns:
        SeedSettings: A cached instance of the settings.

    Examples:
        >>> get_settings() is get_settings()
        True
    """
    return SeedSettings()


class LazySettingsWrapper:
    """Lazily initialize the settings singleton on first attribute access."""

    @staticmethod
    def cache_clear() -> None:
        """Clear the cached settings instance so the next access re-reads from env."""
        get_settings.cache_clear()

    def __getattr__(self, key: str) -> Any:
        """Get the real settings object and forward to it

        Args:
            key: The key to fetch from settings

        Returns:
            Any: The value of the attribute on the settings
        """
        return getattr(get_settings(), key)


settings = LazySettingsWrapper()
