# -*- coding: utf-8 -*-
"""Location: ./tests/unit/graphseed/test_settings.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Tests for environment-backed settings and the engine configuration model.
"""

# Third-Party
from pydantic import ValidationError
import pytest

# First-Party
from graphseed.models import EngineConfig, KeyMode, LoadReport, MatchMode
from graphseed.settings import get_settings, SeedSettings, settings


def test_defaults():
    s = SeedSettings()
    assert s.default_namespace == ""
    assert s.fallback_namespace == "builtins"
    assert s.resource_root is None
    assert s.key_mode == "legacy"
    assert s.match_mode == "narrower"
    assert s.strict_fields is False
    assert s.log_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("GRAPHSEED_DEFAULT_NAMESPACE", "app.models")
    monkeypatch.setenv("GRAPHSEED_MATCH_MODE", "exact")
    monkeypatch.setenv("GRAPHSEED_STRICT_FIELDS", "true")
    s = SeedSettings()
    assert s.default_namespace == "app.models"
    assert s.match_mode == "exact"
    assert s.strict_fields is True


def test_empty_optional_env_is_none(monkeypatch):
    monkeypatch.setenv("GRAPHSEED_RESOURCE_ROOT", "")
    monkeypatch.setenv("GRAPHSEED_RESOURCE_PACKAGE", "   ")
    s = SeedSettings()
    assert s.resource_root is None
    assert s.resource_package is None


def test_invalid_key_mode_rejected(monkeypatch):
    monkeypatch.setenv("GRAPHSEED_KEY_MODE", "sideways")
    with pytest.raises(ValidationError):
        SeedSettings()


def test_env_file(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("GRAPHSEED_FALLBACK_NAMESPACE=typing\n")
    assert SeedSettings(_env_file=str(env_file)).fallback_namespace == "typing"


def test_get_settings_is_cached_until_cleared(monkeypatch):
    first = get_settings()
    assert get_settings() is first
    monkeypatch.setenv("GRAPHSEED_LOG_LEVEL", "DEBUG")
    assert settings.log_level == "INFO"
    settings.cache_clear()
    assert settings.log_level == "DEBUG"
    assert get_settings() is not first


def test_engine_config_from_settings():
    s = SeedSettings(default_namespace="app", key_mode="typed", resource_root="seeds")
    config = EngineConfig.from_settings(s, match_mode="broader", resource_root=None)
    assert config.default_namespace == "app"
    assert config.key_mode is KeyMode.TYPED
    assert config.match_mode is MatchMode.BROADER
    assert config.resource_root == "seeds"


def test_engine_config_is_frozen():
    config = EngineConfig()
    with pytest.raises(ValidationError):
        config.default_namespace = "other"


def test_load_report_defaults():
    report = LoadReport(locations=["a.yaml"])
    assert report.model_dump() == {
        "locations": ["a.yaml"],
        "imported": [],
        "entities": 0,
        "persisted": 0,
        "dry_run": True,
        "duration_seconds": 0.0,
    }
