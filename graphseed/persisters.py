# -*- coding: utf-8 -*-
"""Location: ./graphseed/persisters.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Persisters.
This module implements the sinks entities are handed to at the end of
dispatch: an in-memory collector for dry runs and tests, and a persister
adding entities to an SQLAlchemy session.
"""

# Standard
import logging
from typing import Any

# Third-Party
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class CollectingPersister:
    """Collect persisted entities in memory, in persist order.

    Examples:
        >>> persister = CollectingPersister()
        >>> persister.persist("a")
        >>> persister.persist("a")
        >>> persister.persisted
        ['a', 'a']
    """

    def __init__(self):
        """Initialize an empty collector."""
        self.persisted: list[Any] = []

    def persist(self, entity: Any) -> None:
        """Record an entity.

        Args:
            entity: the entity.
        """
        self.persisted.append(entity)

    def __len__(self) -> int:
        return len(self.persisted)


class SQLAlchemyPersister:
    """Add entities to an SQLAlchemy session.

    The persister does not commit; the caller owns the transaction.

    Attributes:
        session: the session entities are added to.
        flush: flush the session after each entity.
    """

    def __init__(self, session: Session, flush: bool = False):
        """Initialize the persister.

        Args:
            session: the session.
            flush: flush after each entity so database errors surface on the entity that caused them.
        """
        self.session = session
        self.flush = flush

    def persist(self, entity: Any) -> None:
        """Add an entity to the session.

        Args:
            entity: a mapped entity.
        """
        self.session.add(entity)
        if self.flush:
            self.session.flush()
        logger.debug("Added %s to session", type(entity).__name__)
