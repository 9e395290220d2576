# -*- coding: utf-8 -*-
"""Location: ./tests/unit/graphseed/test_dispatcher.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Tests for the persistence dispatcher.
"""

# Third-Party
import pytest

# First-Party
from graphseed.cache import EntityCache
from graphseed.dispatcher import PersistenceDispatcher
from graphseed.errors import PersistenceError, ProcessorError, SeedError
from graphseed.processors import ProcessorRegistry
from graphseed.resolver import ScopeResolver
from seedapp.models import Dog, Order, OrderLine, Person, Pet

NS = "seedapp.models"


class FailingPersister:
    """Persister that fails on one entity."""

    def __init__(self, fail_on, error=None):
        self.fail_on = fail_on
        self.error = error or RuntimeError("disk full")
        self.persisted = []

    def persist(self, entity):
        if entity is self.fail_on:
            raise self.error
        self.persisted.append(entity)


@pytest.fixture
def cache() -> EntityCache:
    return EntityCache(ScopeResolver())


@pytest.fixture
def registry() -> ProcessorRegistry:
    return ProcessorRegistry()


@pytest.fixture
def dispatcher(cache, registry, persister) -> PersistenceDispatcher:
    return PersistenceDispatcher(cache, registry, persister)


def test_persists_in_cache_order(cache, dispatcher, persister):
    rex = cache.obtain("rex", "Dog", namespace=NS)
    bob = cache.obtain("bob", "Person", namespace=NS)
    assert dispatcher.persist_entities() == 2
    assert persister.persisted == [rex, bob]


def test_empty_cache_persists_nothing(dispatcher, persister):
    assert dispatcher.persist_entities() == 0
    assert persister.persisted == []


def test_processors_run_before_persist(cache, registry, dispatcher, persister):
    events = []
    dog = cache.obtain("rex", "Dog", namespace=NS)
    registry.add(Dog, lambda entity, queue: events.append(("process", len(persister.persisted))))
    dispatcher.persist_entities()
    assert events == [("process", 0)]
    assert persister.persisted == [dog]


def test_enqueued_entities_are_processed_and_persisted(cache, registry, dispatcher, persister):
    order = cache.obtain("o1", "Order", namespace=NS)
    order.quantity = 2

    def expand(entity, queue):
        for position in range(entity.quantity):
            line = OrderLine(order=entity, position=position)
            entity.lines.append(line)
            queue.append(line)

    seen_lines = []
    registry.add(Order, expand)
    registry.add(OrderLine, lambda entity, queue: seen_lines.append(entity.position))
    assert dispatcher.persist_entities() == 3
    assert persister.persisted == [order, *order.lines]
    assert seen_lines == [0, 1]


def test_enqueued_entities_persist_after_the_snapshot(cache, registry, dispatcher, persister):
    order = cache.obtain("o1", "Order", namespace=NS)
    bob = cache.obtain("bob", "Person", namespace=NS)
    extra = Pet()
    registry.add(Order, lambda entity, queue: queue.append(extra))
    dispatcher.persist_entities()
    assert persister.persisted == [order, bob, extra]


def test_enqueued_entities_are_not_added_to_the_cache(cache, registry, dispatcher):
    cache.obtain("o1", "Order", namespace=NS)
    registry.add(Order, lambda entity, queue: queue.append(Pet()))
    dispatcher.persist_entities()
    assert len(cache) == 1


def test_no_deduplication(cache, registry, dispatcher, persister):
    bob = cache.obtain("bob", "Person", namespace=NS)
    registry.add(Person, lambda entity, queue: queue.append(entity) if persister.persisted == [] else None)
    assert dispatcher.persist_entities() == 2
    assert persister.persisted == [bob, bob]


def test_every_matching_processor_runs_once(cache, registry, dispatcher):
    calls = []
    cache.obtain("pet", "Pet", namespace=NS)
    registry.add(Pet, lambda entity, queue: calls.append("pet"))
    registry.add(Dog, lambda entity, queue: calls.append("dog"))
    registry.add(Person, lambda entity, queue: calls.append("person"))
    dispatcher.persist_entities()
    assert calls == ["pet", "dog"]


def test_processor_failure_is_wrapped_and_halts(cache, registry, dispatcher, persister):
    cache.obtain("rex", "Dog", namespace=NS)
    cache.obtain("bob", "Person", namespace=NS)

    def explode(entity, queue):
        raise KeyError("boom")

    registry.add(Dog, explode)
    with pytest.raises(ProcessorError) as exc_info:
        dispatcher.persist_entities()
    assert isinstance(exc_info.value.__cause__, KeyError)
    assert isinstance(exc_info.value.entity, Dog)
    assert persister.persisted == []


def test_processor_seed_errors_propagate_unwrapped(cache, registry, dispatcher):
    cache.obtain("rex", "Dog", namespace=NS)

    def refuse(entity, queue):
        raise SeedError("refused")

    registry.add(Dog, refuse)
    with pytest.raises(SeedError, match="refused") as exc_info:
        dispatcher.persist_entities()
    assert not isinstance(exc_info.value, ProcessorError)


def test_persister_failure_is_wrapped_and_halts(cache, registry):
    rex = cache.obtain("rex", "Dog", namespace=NS)
    bob = cache.obtain("bob", "Person", namespace=NS)
    cache.obtain("amy", "Person", namespace=NS)
    persister = FailingPersister(bob)
    with pytest.raises(PersistenceError) as exc_info:
        PersistenceDispatcher(cache, registry, persister).persist_entities()
    assert exc_info.value.entity is bob
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert persister.persisted == [rex]


def test_persister_persistence_error_is_not_rewrapped(cache, registry):
    bob = cache.obtain("bob", "Person", namespace=NS)
    original = PersistenceError(bob)
    with pytest.raises(PersistenceError) as exc_info:
        PersistenceDispatcher(cache, registry, FailingPersister(bob, original)).persist_entities()
    assert exc_info.value is original
