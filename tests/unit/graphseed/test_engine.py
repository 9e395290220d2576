# -*- coding: utf-8 -*-
"""Location: ./tests/unit/graphseed/test_engine.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

End-to-end tests for the seeding engine.
"""

# Third-Party
import pytest

# First-Party
from graphseed.engine import build_resource_loader, SeedEngine
from graphseed.errors import ConstructionError, TypeNotFoundError
from graphseed.models import EngineConfig, KeyMode, MatchMode
from graphseed.processors import Processor
from graphseed.resolver import RegistryTypeLoader
from graphseed.resources import ChainResourceLoader, FileResourceLoader
from graphseed.settings import settings
from seedapp import legacy, models


@pytest.fixture
def engine(persister, docs, config) -> SeedEngine:
    return SeedEngine(persister, resources=docs, config=config)


# ---------------------------------------------------------------------------
# load and persist
# ---------------------------------------------------------------------------


def test_imported_entities_persist_first(engine, docs, persister):
    docs.add("a.yaml", "- !import b.yaml\n- x: !Person {name: x}")
    docs.add("b.yaml", "- y: !Person {name: y}")
    assert engine.load("a.yaml") == 2
    assert [p.name for p in persister.persisted] == ["y", "x"]
    assert engine.imported == ["b.yaml"]


def test_load_files_from_resource_root(persister, fixtures_dir):
    engine = SeedEngine(persister, resource_root=str(fixtures_dir))
    assert engine.load("shop.yaml") == 4
    assert [type(e) for e in persister.persisted] == [models.Dog, models.Person, models.Gadget, models.Widget]
    assert engine.imported == ["people.yaml"]
    w1 = engine.get("w1")
    assert w1.name == "Sprocket"
    assert w1.gadget is engine.get("g1")
    assert w1.gadget.name == "Cog"


def test_leading_slash_locations(persister, fixtures_dir):
    engine = SeedEngine(persister, resource_root=str(fixtures_dir))
    engine.load("/people.yaml")
    assert engine.get("bob").pet is engine.get("rex")


def test_load_entities_then_persist(engine, docs, persister):
    docs.add("a.yaml", "- bob: !Person")
    docs.add("b.yaml", "- rex: !Dog")
    engine.load_entities("a.yaml")
    engine.load_entities("b.yaml")
    assert persister.persisted == []
    assert engine.persist_entities() == 2
    assert persister.persisted == [engine.get("bob"), engine.get("rex")]


def test_cache_accumulates_across_loads(engine, docs, persister):
    docs.add("a.yaml", "- bob: !Person")
    docs.add("b.yaml", "- rex: !Dog")
    engine.load("a.yaml")
    engine.load("b.yaml")
    # the second persist pass covers the whole cache again
    assert [type(e) for e in persister.persisted] == [models.Person, models.Person, models.Dog]


def test_clear_empties_the_cache(engine, docs, persister):
    docs.add("a.yaml", "- bob: !Person")
    engine.load_entities("a.yaml")
    engine.clear()
    assert engine.get("bob") is None
    assert engine.persist_entities() == 0


def test_processors_extend_the_queue(engine, docs, persister):
    docs.add("a.yaml", "- o1: !Order {number: A-1, quantity: 3}")

    def expand(order, queue):
        for position in range(order.quantity):
            queue.append(models.OrderLine(order=order, position=position))

    engine.add_processor(models.Order, expand)
    assert engine.load("a.yaml") == 4
    assert [line.position for line in persister.persisted[1:]] == [0, 1, 2]


def test_processor_uses_its_own_declared_type(engine, docs):
    class DogProcessor(Processor):
        declared_type = models.Dog

        def __init__(self):
            self.seen = []

        def process(self, entity, queue):
            self.seen.append(entity)

    docs.add("a.yaml", "- bob: !Person\n- rex: !Dog")
    processor = DogProcessor()
    assert engine.add_processor(None, processor).declared_type is models.Dog
    with pytest.raises(TypeError):
        engine.add_processor(models.Person, processor)
    engine.load("a.yaml")
    assert processor.seen == [engine.get("rex")]


def test_match_mode_from_engine(persister, docs):
    docs.add("a.yaml", "- rex: !Dog")
    seen = []
    engine = SeedEngine(persister, "seedapp.models", resources=docs, match_mode="broader")
    engine.add_processor(models.Pet, lambda entity, queue: seen.append(entity))
    engine.load("a.yaml")
    assert seen == [engine.get("rex")]
    assert engine.registry.match_mode is MatchMode.BROADER


def test_failed_load_raises(engine, docs):
    docs.add("a.yaml", "- u: !Unicorn")
    with pytest.raises(TypeNotFoundError):
        engine.load("a.yaml")


# ---------------------------------------------------------------------------
# configuration
# ---------------------------------------------------------------------------


def test_explicit_arguments_override_config(persister, docs, config):
    engine = SeedEngine(persister, "seedapp.legacy", resources=docs, key_mode="typed", strict_fields=True, config=config)
    assert engine.config.default_namespace == "seedapp.legacy"
    assert engine.config.key_mode is KeyMode.TYPED
    assert engine.config.strict_fields is True
    assert engine.cache.key_mode is KeyMode.TYPED
    assert config.default_namespace == "seedapp.models"


def test_settings_supply_defaults(monkeypatch, persister, docs):
    monkeypatch.setenv("GRAPHSEED_DEFAULT_NAMESPACE", "seedapp.legacy")
    monkeypatch.setenv("GRAPHSEED_KEY_MODE", "typed")
    settings.cache_clear()
    docs.add("a.yaml", "- w: !Widget")
    engine = SeedEngine(persister, resources=docs)
    engine.load("a.yaml")
    assert isinstance(engine.get("w", "Widget"), legacy.Widget)


def test_strict_fields_from_config(persister, docs):
    docs.add("a.yaml", "- bob: !Person {nickname: Bobby}")
    engine = SeedEngine(persister, resources=docs, config=EngineConfig(default_namespace="seedapp.models", strict_fields=True))
    with pytest.raises(ConstructionError):
        engine.load("a.yaml")


def test_type_loader_overrides_import_system(persister, docs):
    registry = RegistryTypeLoader({"seedapp.models.Widget": legacy.Widget})
    docs.add("a.yaml", "- w: !Widget\n- g: !Gadget")
    engine = SeedEngine(persister, "seedapp.models", resources=docs, type_loader=registry)
    engine.load("a.yaml")
    assert isinstance(engine.get("w"), legacy.Widget)
    assert isinstance(engine.get("g"), models.Gadget)


def test_typed_get(persister, docs):
    docs.add("a.yaml", "- x: !Person\n- x: !Widget")
    engine = SeedEngine(persister, "seedapp.models", resources=docs, key_mode=KeyMode.TYPED)
    engine.load_entities("a.yaml")
    assert isinstance(engine.get("x", "Person"), models.Person)
    assert isinstance(engine.get("x", "Widget"), models.Widget)
    with pytest.raises(ValueError):
        engine.get("x")


def test_build_resource_loader_chains_package_before_root(fixtures_dir):
    loader = build_resource_loader(EngineConfig(resource_root=str(fixtures_dir), resource_package="seedapp"))
    assert isinstance(loader, ChainResourceLoader)
    assert isinstance(loader.loaders[-1], FileResourceLoader)
    with loader.open("people.yaml") as stream:
        assert "!namespace seedapp.models" in stream.read()
