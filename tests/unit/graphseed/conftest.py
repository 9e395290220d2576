# -*- coding: utf-8 -*-
"""Location: ./tests/unit/graphseed/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Pytest fixtures for graphseed tests.
"""

# Standard
import os
from pathlib import Path

# Third-Party
import pytest

# First-Party
from graphseed.models import EngineConfig
from graphseed.persisters import CollectingPersister
from graphseed.resources import MemoryResourceLoader
from graphseed.settings import SeedSettings, settings

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_seed_settings(monkeypatch):
    """Remove GRAPHSEED_ env vars and the .env file so tests see true defaults."""
    for key in list(os.environ):
        if key.startswith("GRAPHSEED_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(SeedSettings, "model_config", {**SeedSettings.model_config, "env_file": None})
    settings.cache_clear()
    yield
    settings.cache_clear()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def docs() -> MemoryResourceLoader:
    """An empty in-memory document store; tests add documents to it."""
    return MemoryResourceLoader()


@pytest.fixture
def persister() -> CollectingPersister:
    return CollectingPersister()


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(default_namespace="seedapp.models")
