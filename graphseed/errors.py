# -*- coding: utf-8 -*-
"""Location: ./graphseed/errors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Exceptions raised by the seeding engine.

Every failure is fail-fast: errors raised by collaborators (type loaders,
constructors, resource loaders, processors, persisters) are wrapped in one of
the classes below and chained with ``raise ... from`` so the original cause
stays available.
"""

# Standard
from typing import Any, Optional, Sequence


class SeedError(Exception):
    """Base class for all graphseed errors."""


class TypeNotFoundError(SeedError, LookupError):
    """A type name could not be resolved to a class.

    Attributes:
        name (str): the short type name that was requested.
        attempted (tuple[str, ...]): every qualified name that was tried.

    Examples:
        >>> err = TypeNotFoundError("Widget", "No module named 'Widget'", attempted=["app.Widget", "Widget"])
        >>> (err.name, err.attempted)
        ('Widget', ('app.Widget', 'Widget'))
        >>> str(err)
        "No module named 'Widget'"
        >>> isinstance(err, LookupError)
        True
    """

    def __init__(self, name: str, message: Optional[str] = None, attempted: Sequence[str] = ()):
        """Initialize a type not found error.

        Args:
            name: the short type name that was requested.
            message: the reason reported for the failure.
            attempted: the qualified names that were tried.
        """
        self.name = name
        self.attempted = tuple(attempted)
        super().__init__(message or f"Type '{name}' not found")


class ConstructionError(SeedError):
    """A resolved type could not be instantiated or populated.

    Attributes:
        key: the entity key being constructed.
        type_name (str): the type name of the entity.
    """

    def __init__(self, message: str, key: Any = None, type_name: Optional[str] = None):
        """Initialize a construction error.

        Args:
            message: the failure reason.
            key: the entity key being constructed.
            type_name: the type name of the entity.
        """
        self.key = key
        self.type_name = type_name
        super().__init__(message)


class ResourceUnavailableError(SeedError):
    """A document location could not be opened.

    Examples:
        >>> err = ResourceUnavailableError("people.yaml", "not found")
        >>> str(err)
        "Cannot open 'people.yaml': not found"
    """

    def __init__(self, location: str, reason: str = "not found"):
        """Initialize a resource error.

        Args:
            location: the document location that failed to open.
            reason: why it could not be opened.
        """
        self.location = location
        self.reason = reason
        super().__init__(f"Cannot open '{location}': {reason}")


class DocumentError(SeedError):
    """A document is malformed or uses a directive incorrectly."""

    def __init__(self, message: str, location: Optional[str] = None):
        """Initialize a document error.

        Args:
            message: the failure reason.
            location: the document location, when known.
        """
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)


class ProcessorError(SeedError):
    """A processor raised while handling an entity."""

    def __init__(self, processor: Any, entity: Any):
        """Initialize a processor error.

        Args:
            processor: the processor that failed.
            entity: the entity it was processing.
        """
        self.processor = processor
        self.entity = entity
        super().__init__(f"Processor {processor!r} failed on {type(entity).__name__} entity")


class PersistenceError(SeedError):
    """The persister raised while storing an entity.

    Examples:
        >>> str(PersistenceError(object()))
        'Failed to persist object entity'
    """

    def __init__(self, entity: Any):
        """Initialize a persistence error.

        Args:
            entity: the entity that could not be persisted.
        """
        self.entity = entity
        super().__init__(f"Failed to persist {type(entity).__name__} entity")
