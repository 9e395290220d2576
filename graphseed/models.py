# -*- coding: utf-8 -*-
"""Location: ./graphseed/models.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Pydantic models and enums for the seeding engine.
This module implements the validated engine configuration and the
report produced by a load run.
"""

# Standard
from enum import Enum
from typing import Optional

# Third-Party
from pydantic import BaseModel, ConfigDict, Field

# First-Party
from graphseed.settings import SeedSettings


class KeyMode(str, Enum):
    """How entity identifiers map onto cache keys.

    Attributes:
       LEGACY: the identifier string alone is the key; two types sharing an
           identifier resolve to whichever was constructed first.
       TYPED: the key is the pair (qualified type name, identifier).

    Examples:
        >>> KeyMode("typed") is KeyMode.TYPED
        True
        >>> KeyMode.LEGACY.value
        'legacy'
    """

    LEGACY = "legacy"
    TYPED = "typed"


class MatchMode(str, Enum):
    """Policy deciding which processors apply to an entity.

    Attributes:
       NARROWER: the processor's declared type is the entity's type or a subtype of it.
       BROADER: the entity is an instance of the processor's declared type.
       EXACT: the processor's declared type is exactly the entity's type.

    Examples:
        >>> MatchMode("narrower") is MatchMode.NARROWER
        True
    """

    NARROWER = "narrower"
    BROADER = "broader"
    EXACT = "exact"


class EngineConfig(BaseModel):
    """Validated configuration supplied once at engine creation.

    Attributes:
        default_namespace: namespace each document starts in.
        fallback_namespace: namespace tried last during type resolution.
        resource_root: filesystem root for document locations.
        resource_package: package to load documents from.
        key_mode: entity cache key mode.
        match_mode: processor match policy.
        strict_fields: reject fields an instance does not declare.
        encoding: document encoding.

    Examples:
        >>> config = EngineConfig(default_namespace="app.models", key_mode="typed")
        >>> config.key_mode
        <KeyMode.TYPED: 'typed'>
        >>> config.match_mode
        <MatchMode.NARROWER: 'narrower'>
    """

    model_config = ConfigDict(frozen=True)

    default_namespace: str = ""
    fallback_namespace: str = "builtins"
    resource_root: Optional[str] = None
    resource_package: Optional[str] = None
    key_mode: KeyMode = KeyMode.LEGACY
    match_mode: MatchMode = MatchMode.NARROWER
    strict_fields: bool = False
    encoding: str = "utf-8"

    @classmethod
    def from_settings(cls, settings: SeedSettings, **overrides) -> "EngineConfig":
        """Build a configuration from settings, applying non-None overrides.

        Args:
            settings: the environment-backed settings.
            overrides: explicit values; None entries are ignored.

        Returns:
            The engine configuration.

        Examples:
            >>> s = SeedSettings(_env_file=None, default_namespace="app")
            >>> EngineConfig.from_settings(s, default_namespace=None).default_namespace
            'app'
            >>> EngineConfig.from_settings(s, default_namespace="other").default_namespace
            'other'
        """
        values = {name: getattr(settings, name) for name in cls.model_fields}
        values.update({name: value for name, value in overrides.items() if value is not None})
        return cls.model_validate(values)


class LoadReport(BaseModel):
    """Summary of one load run, as written by the command line."""

    locations: list[str] = Field(default_factory=list, description="Top-level document locations, in load order")
    imported: list[str] = Field(default_factory=list, description="Locations pulled in through import directives")
    entities: int = Field(default=0, description="Entities in the cache after loading")
    persisted: int = Field(default=0, description="Persist calls made by the dispatcher")
    dry_run: bool = Field(default=True, description="Whether entities were only collected in memory")
    duration_seconds: float = Field(default=0.0, description="Wall clock time of load and persist")
