# -*- coding: utf-8 -*-
"""Location: ./graphseed/cache.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Entity cache.

Identifier-keyed memoization of constructed entities. Every reference to a
key within one engine returns the same instance; insertion order is the
order of first construction and is the default persistence order.

Examples:
    >>> from types import SimpleNamespace
    >>> cache = EntityCache(ScopeResolver())
    >>> first = cache.obtain("bob", "SimpleNamespace", namespace="types")
    >>> cache.obtain("bob", "Anything") is first
    True
    >>> list(cache)
    ['bob']
"""

# Standard
import logging
from typing import Any, Hashable, Iterator, Optional, Sequence

# First-Party
from graphseed.errors import ConstructionError
from graphseed.models import KeyMode
from graphseed.resolver import ScopeResolver
from graphseed.utils import qualified_name

logger = logging.getLogger(__name__)


class EntityCache:
    """Ordered mapping of entity keys to constructed instances.

    Attributes:
        resolver: resolves type names for entities that are not cached yet.
        key_mode: how identifiers become cache keys.
    """

    def __init__(self, resolver: ScopeResolver, key_mode: KeyMode = KeyMode.LEGACY):
        """Initialize an empty cache.

        Args:
            resolver: the type resolver.
            key_mode: the key mode.
        """
        self.resolver = resolver
        self.key_mode = KeyMode(key_mode)
        self._entities: dict[Hashable, Any] = {}

    def obtain(self, key: str, type_name: str, args: Sequence[Any] = (), namespace: str = "") -> Any:
        """Return the entity for a key, constructing it on first reference.

        A cached entity is returned as is: the type name and arguments of
        later references are not checked against the original. A new entity
        is built by calling its resolved type with no arguments; declared
        constructor arguments are discarded.

        Args:
            key: the entity identifier.
            type_name: the type name written in the document.
            args: constructor arguments written in the document.
            namespace: the namespace in effect for type resolution.

        Returns:
            The shared entity instance.

        Raises:
            TypeNotFoundError: If the type cannot be resolved.
            ConstructionError: If the type cannot be instantiated.
        """
        if self.key_mode is KeyMode.LEGACY:
            cache_key: Hashable = key
            if cache_key in self._entities:
                logger.debug("Cache hit for %s", key)
                return self._entities[cache_key]
            cls = self.resolver.resolve(type_name, namespace)
        else:
            cls = self.resolver.resolve(type_name, namespace)
            cache_key = (qualified_name(cls), key)
            if cache_key in self._entities:
                logger.debug("Cache hit for %s", key)
                return self._entities[cache_key]

        if args:
            logger.debug("Discarding %d constructor argument(s) for %s", len(args), key)
        try:
            entity = cls()
        except Exception as e:
            raise ConstructionError(f"Cannot instantiate {cls.__name__} for '{key}': {e}", key=key, type_name=type_name) from e

        self._entities[cache_key] = entity
        logger.debug("Constructed %s as %s", key, cls.__name__)
        return entity

    def get(self, key: str, type_name: Optional[str] = None, namespace: str = "") -> Any:
        """Look up a cached entity without constructing it.

        Args:
            key: the entity identifier.
            type_name: the type name; needed in typed key mode.
            namespace: the namespace used to resolve the type name.

        Returns:
            The entity, or None if the key is not cached.

        Raises:
            ValueError: If no type name is given in typed key mode.
        """
        if self.key_mode is KeyMode.LEGACY:
            return self._entities.get(key)
        if type_name is None:
            raise ValueError("A type name is required to look up entities in typed key mode")
        cls = self.resolver.resolve(type_name, namespace)
        return self._entities.get((qualified_name(cls), key))

    def values(self) -> list[Any]:
        """Snapshot the cached entities in insertion order.

        Returns:
            A new list of the entities.
        """
        return list(self._entities.values())

    def items(self) -> list[tuple[Hashable, Any]]:
        """Snapshot the cache entries in insertion order.

        Returns:
            A new list of key and entity pairs.
        """
        return list(self._entities.items())

    def clear(self) -> None:
        """Discard every cached entity."""
        self._entities.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entities

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)
