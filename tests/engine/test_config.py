"""Tests for SDK configuration resolution."""

import pytest

from ai_engine.config import (
    AVAILABLE_MODELS,
    DEFAULT_MODEL,
    DEFAULT_MODEL_IDS,
    DEFAULT_TIMEOUT_SECONDS,
    CustomModel,
    get_model_id,
    get_model_name,
    resolve_api_key,
    resolve_base_url,
    resolve_timeout_seconds,
)


def test_default_models_are_known():
    assert DEFAULT_MODEL in AVAILABLE_MODELS
    assert all(model_id in AVAILABLE_MODELS for model_id in DEFAULT_MODEL_IDS)


def test_model_id_and_name():
    assert get_model_id("creative-02") == "creative-02"
    assert get_model_name("creative-02") == "Creative 2"
    custom = CustomModel(id="mine-1", name="Mine")
    assert get_model_id(custom) == "mine-1"
    assert get_model_name(custom) == "Mine"


def test_unknown_model_name_falls_back_to_id():
    assert get_model_name("brand-new-01") == "brand-new-01"


class TestResolveApiKey:
    def test_explicit_wins(self, monkeypatch):
        monkeypatch.setenv("AV_API_KEY", "env-key")
        assert resolve_api_key("explicit") == "explicit"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("AV_API_KEY", "  env-key  ")
        assert resolve_api_key() == "env-key"

    def test_missing_raises(self, monkeypatch):
        monkeypatch.delenv("AV_API_KEY", raising=False)
        with pytest.raises(ValueError, match="AV_API_KEY"):
            resolve_api_key()


class TestResolveBaseUrl:
    def test_default(self, monkeypatch):
        monkeypatch.delenv("AI_ENGINE_BASE_URL", raising=False)
        assert resolve_base_url() == "https://agentverse.ai"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("AI_ENGINE_BASE_URL", "http://staging.local/")
        assert resolve_base_url() == "http://staging.local"

    def test_explicit_override(self, monkeypatch):
        monkeypatch.setenv("AI_ENGINE_BASE_URL", "http://staging.local")
        assert resolve_base_url("http://other.local/") == "http://other.local"


@pytest.mark.parametrize("raw, expected", [
    ("", DEFAULT_TIMEOUT_SECONDS),
    ("abc", DEFAULT_TIMEOUT_SECONDS),
    ("-1", DEFAULT_TIMEOUT_SECONDS),
    ("0", DEFAULT_TIMEOUT_SECONDS),
    ("7", 7.0),
])
def test_resolve_timeout_seconds(monkeypatch, raw, expected):
    monkeypatch.setenv("AI_ENGINE_TIMEOUT_SECONDS", raw)
    assert resolve_timeout_seconds() == expected
