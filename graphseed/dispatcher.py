# -*- coding: utf-8 -*-
"""Location: ./graphseed/dispatcher.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Persistence dispatcher.

Drains a snapshot of the entity cache through a FIFO work queue. Each
entity is handed to every matching processor, which may enqueue further
entities, and then to the persister. Entities enqueued during dispatch are
processed and persisted before dispatch returns. Nothing is deduplicated:
an entity enqueued twice is persisted twice.
"""

# Standard
import logging

# First-Party
from graphseed.cache import EntityCache
from graphseed.errors import PersistenceError, ProcessorError, SeedError
from graphseed.processors import ProcessorRegistry, WorkQueue
from graphseed.protocols import Persister

logger = logging.getLogger(__name__)


class PersistenceDispatcher:
    """Hand cached entities to processors and the persister.

    Attributes:
        cache: the entity cache to drain.
        registry: the registered processors.
        persister: the sink storing finished entities.
    """

    def __init__(self, cache: EntityCache, registry: ProcessorRegistry, persister: Persister):
        """Initialize the dispatcher.

        Args:
            cache: the entity cache.
            registry: the processor registry.
            persister: the persister.
        """
        self.cache = cache
        self.registry = registry
        self.persister = persister

    def persist_entities(self) -> int:
        """Process and persist every cached entity, plus any processors enqueue.

        Returns:
            The number of persist calls made.

        Raises:
            ProcessorError: If a processor fails; dispatch stops.
            PersistenceError: If the persister fails; dispatch stops.
        """
        queue = WorkQueue(self.cache.values())
        logger.info("Persisting %d entities", len(queue))
        persisted = 0
        while queue:
            entity = queue.popleft()
            for processor in self.registry.matching(entity):
                logger.debug("Running processor %r on %s", processor, type(entity).__name__)
                try:
                    processor.process(entity, queue)
                except SeedError:
                    raise
                except Exception as e:
                    raise ProcessorError(processor, entity) from e
            try:
                self.persister.persist(entity)
            except PersistenceError:
                raise
            except Exception as e:
                raise PersistenceError(entity) from e
            persisted += 1
        logger.info("Persisted %d entities", persisted)
        return persisted
