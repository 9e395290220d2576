# -*- coding: utf-8 -*-
"""Location: ./graphseed/protocols.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Protocol definitions for the engine's external collaborators.

The engine never depends on a concrete storage, resource or type lookup
mechanism; anything satisfying these structural contracts can be injected.

Examples:
    >>> from graphseed.persisters import CollectingPersister
    >>> isinstance(CollectingPersister(), Persister)
    True
"""

# Standard
from typing import Any, ContextManager, Protocol, runtime_checkable, TextIO


@runtime_checkable
class Persister(Protocol):
    """Structural contract for the sink that stores finished entities.

    ``persist`` is called once per entity, in dispatch order. Any exception
    it raises halts the dispatch.
    """

    def persist(self, entity: Any) -> None:
        """Store an entity.

        Args:
            entity: the entity to store.
        """


@runtime_checkable
class ResourceLoader(Protocol):
    """Structural contract for opening document locations.

    ``open`` raises :class:`~graphseed.errors.ResourceUnavailableError` when
    the location cannot be read.
    """

    def open(self, location: str) -> ContextManager[TextIO]:
        """Open a document location for reading.

        Args:
            location: the document location.
        """


@runtime_checkable
class TypeLoader(Protocol):
    """Structural contract for looking up a class by qualified name.

    ``load_type`` raises :class:`~graphseed.errors.TypeNotFoundError` when the
    name is unknown to the loader.
    """

    def load_type(self, name: str) -> type:
        """Look up a class.

        Args:
            name: the qualified type name.
        """
