# -*- coding: utf-8 -*-
"""Location: ./graphseed/engine.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Seeding engine.
The public entry point tying together type resolution, the entity cache,
document loading and persistence dispatch.

Examples:
    >>> from graphseed.persisters import CollectingPersister
    >>> from graphseed.resources import MemoryResourceLoader
    >>> docs = MemoryResourceLoader({
    ...     "a.yaml": "- !import b.yaml\\n- x: !SimpleNamespace {name: x}",
    ...     "b.yaml": "- y: !SimpleNamespace {name: y}",
    ... })
    >>> persister = CollectingPersister()
    >>> engine = SeedEngine(persister, default_namespace="types", resources=docs)
    >>> engine.load("a.yaml")
    2
    >>> [entity.name for entity in persister.persisted]
    ['y', 'x']
"""

# Standard
import logging
from typing import Any, Callable, Optional, Union

# First-Party
from graphseed.cache import EntityCache
from graphseed.dispatcher import PersistenceDispatcher
from graphseed.loader import DocumentLoader
from graphseed.models import EngineConfig, KeyMode, MatchMode
from graphseed.processors import Processor, ProcessorRegistration, ProcessorRegistry, WorkQueue
from graphseed.protocols import Persister, ResourceLoader, TypeLoader
from graphseed.resolver import ImportTypeLoader, ScopeResolver
from graphseed.resources import ChainResourceLoader, FileResourceLoader, PackageResourceLoader
from graphseed.settings import get_settings

logger = logging.getLogger(__name__)


def build_resource_loader(config: EngineConfig) -> ResourceLoader:
    """Build the resource loader described by a configuration.

    A configured package is tried before the filesystem root.

    Args:
        config: the engine configuration.

    Returns:
        The resource loader.

    Examples:
        >>> build_resource_loader(EngineConfig(resource_root="fixtures"))
        FileResourceLoader(root='fixtures')
    """
    file_loader = FileResourceLoader(config.resource_root, encoding=config.encoding)
    if config.resource_package:
        return ChainResourceLoader(PackageResourceLoader(config.resource_package, encoding=config.encoding), file_loader)
    return file_loader


class SeedEngine:
    """Build entity graphs from seed documents and persist them.

    One engine is one load session: its cache and import record accumulate
    across calls. The engine is not thread-safe; use one per thread. After a
    failed load the engine's state may be partial and should be discarded.

    Attributes:
        config: the engine configuration.
        resolver: resolves type names.
        cache: the entity cache.
        loader: loads documents into the cache.
        registry: the registered processors.
        dispatcher: drains the cache into the persister.
    """

    def __init__(
        self,
        persister: Persister,
        default_namespace: Optional[str] = None,
        *,
        type_loader: Optional[TypeLoader] = None,
        resource_root: Optional[str] = None,
        resources: Optional[ResourceLoader] = None,
        key_mode: Optional[Union[KeyMode, str]] = None,
        match_mode: Optional[Union[MatchMode, str]] = None,
        strict_fields: Optional[bool] = None,
        config: Optional[EngineConfig] = None,
    ):
        """Initialize the engine.

        Explicit arguments take precedence over ``config``, which defaults to
        the environment-backed settings.

        Args:
            persister: the sink storing finished entities.
            default_namespace: the namespace every document starts in.
            type_loader: an explicit loader consulted before the import system.
            resource_root: the filesystem root for document locations.
            resources: a resource loader replacing the configured one.
            key_mode: the entity cache key mode.
            match_mode: the processor match policy.
            strict_fields: reject fields an entity does not declare.
            config: the base configuration.
        """
        base = config if config is not None else EngineConfig.from_settings(get_settings())
        overrides = {
            "default_namespace": default_namespace,
            "resource_root": resource_root,
            "key_mode": key_mode,
            "match_mode": match_mode,
            "strict_fields": strict_fields,
        }
        values = base.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        self.config = EngineConfig.model_validate(values)

        self.persister = persister
        self.resolver = ScopeResolver(ambient=ImportTypeLoader(), override=type_loader, fallback_namespace=self.config.fallback_namespace)
        self.cache = EntityCache(self.resolver, key_mode=self.config.key_mode)
        self.loader = DocumentLoader(
            self.cache,
            resources if resources is not None else build_resource_loader(self.config),
            default_namespace=self.config.default_namespace,
            strict_fields=self.config.strict_fields,
        )
        self.registry = ProcessorRegistry(self.config.match_mode)
        self.dispatcher = PersistenceDispatcher(self.cache, self.registry, persister)

    @property
    def imported(self) -> list[str]:
        """Locations loaded through import directives.

        Returns:
            The imported locations, in import order.
        """
        return self.loader.imported

    def load(self, *locations: str) -> int:
        """Load documents and persist every cached entity.

        Args:
            locations: the document locations.

        Returns:
            The number of persist calls made.
        """
        self.load_entities(*locations)
        return self.persist_entities()

    def load_entities(self, *locations: str) -> None:
        """Load documents into the cache without persisting.

        Args:
            locations: the document locations.
        """
        self.loader.load_entities(*locations)

    def persist_entities(self) -> int:
        """Process and persist a snapshot of the cache.

        Returns:
            The number of persist calls made.
        """
        return self.dispatcher.persist_entities()

    def add_processor(self, declared_type: Optional[type], processor: Union[Processor, Callable[[Any, WorkQueue], Any]]) -> ProcessorRegistration:
        """Register a processor for entities of a declared type.

        Args:
            declared_type: the type of entity the processor is interested in, or
                None to use the processor's own declared type.
            processor: a processor, or a callable taking ``(entity, queue)``.

        Returns:
            The registration.

        Raises:
            TypeError: If no declared type is known or it disagrees with the processor's.
        """
        return self.registry.add(declared_type, processor)

    def get(self, key: str, type_name: Optional[str] = None) -> Any:
        """Look up a cached entity.

        Args:
            key: the entity identifier.
            type_name: the type name, required in typed key mode.

        Returns:
            The entity, or None if it is not cached.
        """
        return self.cache.get(key, type_name, namespace=self.config.default_namespace)

    def clear(self) -> None:
        """Discard every cached entity."""
        self.cache.clear()
