# -*- coding: utf-8 -*-
"""Location: ./graphseed/processors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Processors and the processor registry.
This module implements the post-processors run against entities during
persistence, the policies deciding which processors match an entity, and
the work queue processors may extend while dispatch runs.

Examples:
    >>> class Base: pass
    >>> class Child(Base): pass
    >>> registry = ProcessorRegistry()
    >>> _ = registry.add(Child, lambda entity, queue: None)
    >>> len(registry.matching(Base()))
    1
    >>> len(registry.matching(Child()))
    1
    >>> broad = ProcessorRegistry(MatchMode.BROADER)
    >>> _ = broad.add(Base, lambda entity, queue: None)
    >>> len(broad.matching(Child()))
    1
"""

# Standard
from abc import ABC, abstractmethod
from collections import deque
import logging
from typing import Any, Callable, Iterable, Iterator, NamedTuple, Optional, Union

# First-Party
from graphseed.models import MatchMode

logger = logging.getLogger(__name__)


class WorkQueue:
    """FIFO of entities awaiting persistence.

    Processors receive the live queue and may append entities to it; those
    entities are processed and persisted before dispatch returns.

    Examples:
        >>> queue = WorkQueue(["a", "b"])
        >>> queue.append("c")
        >>> [queue.popleft() for _ in range(len(queue))]
        ['a', 'b', 'c']
        >>> bool(queue)
        False
    """

    def __init__(self, entities: Iterable[Any] = ()):
        """Initialize the queue.

        Args:
            entities: the initial entities, in order.
        """
        self._items: deque[Any] = deque(entities)

    def append(self, entity: Any) -> None:
        """Enqueue an entity at the back.

        Args:
            entity: the entity.
        """
        self._items.append(entity)

    def extend(self, entities: Iterable[Any]) -> None:
        """Enqueue entities at the back, in order.

        Args:
            entities: the entities.
        """
        self._items.extend(entities)

    def popleft(self) -> Any:
        """Dequeue the front entity.

        Returns:
            The entity.
        """
        return self._items.popleft()

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


class Processor(ABC):
    """Base class for entity post-processors.

    Attributes:
        declared_type: the type of entity the processor is interested in.
    """

    declared_type: Optional[type] = None

    def __init__(self, declared_type: Optional[type] = None):
        """Initialize the processor.

        Args:
            declared_type: the type of entity the processor is interested in.
        """
        if declared_type is not None:
            self.declared_type = declared_type

    @abstractmethod
    def process(self, entity: Any, queue: WorkQueue) -> None:
        """Process an entity before it is persisted.

        Args:
            entity: the entity.
            queue: the live work queue; append to it to persist further entities.
        """


class FunctionProcessor(Processor):
    """Adapt a plain callable taking ``(entity, queue)`` to a processor."""

    def __init__(self, func: Callable[[Any, WorkQueue], Any], declared_type: Optional[type] = None):
        """Initialize the processor.

        Args:
            func: the callable.
            declared_type: the type of entity the processor is interested in.
        """
        super().__init__(declared_type)
        self.func = func

    def process(self, entity: Any, queue: WorkQueue) -> None:
        """Call the wrapped function.

        Args:
            entity: the entity.
            queue: the live work queue.
        """
        self.func(entity, queue)

    def __repr__(self) -> str:
        return f"FunctionProcessor({getattr(self.func, '__qualname__', self.func)!r})"


def narrower_or_equal(declared_type: type, entity: Any) -> bool:
    """Match processors declared for the entity's type or one of its subtypes.

    Args:
        declared_type: the processor's declared type.
        entity: the entity.

    Returns:
        True if the declared type is the entity's type or narrower.

    Examples:
        >>> narrower_or_equal(bool, 1)
        True
        >>> narrower_or_equal(int, True)
        False
    """
    return issubclass(declared_type, type(entity))


def broader_or_equal(declared_type: type, entity: Any) -> bool:
    """Match processors declared for the entity's type or one of its supertypes.

    Args:
        declared_type: the processor's declared type.
        entity: the entity.

    Returns:
        True if the entity is an instance of the declared type.

    Examples:
        >>> broader_or_equal(int, True)
        True
    """
    return isinstance(entity, declared_type)


def exact(declared_type: type, entity: Any) -> bool:
    """Match processors declared for exactly the entity's type.

    Args:
        declared_type: the processor's declared type.
        entity: the entity.

    Returns:
        True if the types are identical.

    Examples:
        >>> exact(int, True)
        False
    """
    return type(entity) is declared_type


MATCH_POLICIES: dict[MatchMode, Callable[[type, Any], bool]] = {
    MatchMode.NARROWER: narrower_or_equal,
    MatchMode.BROADER: broader_or_equal,
    MatchMode.EXACT: exact,
}


class ProcessorRegistration(NamedTuple):
    """A processor registered for a declared type."""

    declared_type: type
    processor: Processor


class ProcessorRegistry:
    """Registry of processors keyed by declared type.

    Registrations iterate in the order they were added. Adding the same
    processor for the same type twice has no effect.
    """

    def __init__(self, match_mode: Union[MatchMode, str] = MatchMode.NARROWER):
        """Initialize an empty registry.

        Args:
            match_mode: the policy deciding which processors match an entity.
        """
        self.match_mode = MatchMode(match_mode)
        self._matches = MATCH_POLICIES[self.match_mode]
        self._registrations: list[ProcessorRegistration] = []

    def add(
        self,
        declared_type: Optional[type],
        processor: Union[Processor, Callable[[Any, WorkQueue], Any]],
    ) -> ProcessorRegistration:
        """Register a processor.

        A processor instance may carry its own ``declared_type``; passing
        None registers it for that type. A declared type given alongside a
        processor that already declares one must agree with it.

        Args:
            declared_type: the type of entity the processor is interested in, or
                None to use the processor's own declared type.
            processor: a processor, or a callable taking ``(entity, queue)``.

        Returns:
            The registration.

        Raises:
            TypeError: If no declared type is known, the declared type is not a
                class or disagrees with the processor's, or the processor is not callable.

        Examples:
            >>> class Base: pass
            >>> class Audit(Processor):
            ...     declared_type = Base
            ...     def process(self, entity, queue): pass
            >>> ProcessorRegistry().add(None, Audit()).declared_type is Base
            True
            >>> ProcessorRegistry().add(int, Audit())
            Traceback (most recent call last):
              ...
            TypeError: Processor Audit declares Base but was registered for int
        """
        if not isinstance(processor, Processor) and not callable(processor):
            raise TypeError(f"Processor must be a Processor or a callable, got {processor!r}")
        own_type = processor.declared_type if isinstance(processor, Processor) else None
        if declared_type is None:
            declared_type = own_type
            if declared_type is None:
                raise TypeError(f"No declared type given for processor {processor!r}")
        if not isinstance(declared_type, type):
            raise TypeError(f"Declared type must be a class, got {declared_type!r}")
        if own_type is not None and own_type is not declared_type:
            raise TypeError(f"Processor {type(processor).__name__} declares {own_type.__name__} but was registered for {declared_type.__name__}")
        for registration in self._registrations:
            registered = registration.processor
            if registration.declared_type is declared_type and (registered is processor or getattr(registered, "func", None) is processor):
                return registration
        if not isinstance(processor, Processor):
            processor = FunctionProcessor(processor, declared_type)
        registration = ProcessorRegistration(declared_type, processor)
        self._registrations.append(registration)
        logger.debug("Registered processor %r for %s", processor, declared_type.__name__)
        return registration

    def matching(self, entity: Any) -> list[Processor]:
        """Get the processors that apply to an entity.

        Args:
            entity: the entity.

        Returns:
            The matching processors, in registration order.
        """
        return [registration.processor for registration in self._registrations if self._matches(registration.declared_type, entity)]

    def __iter__(self) -> Iterator[ProcessorRegistration]:
        return iter(self._registrations)

    def __len__(self) -> int:
        return len(self._registrations)
