"""Tests for environment-driven configuration."""

import pytest

from livery_studio import config as config_module
from livery_studio.config import DEFAULT_GENERATION_MODEL, StudioConfig, build_client
from livery_studio.errors import ConfigurationError

_ENV_VARS = (
    "GEMINI_API_KEY",
    "LIVERY_STUDIO_GENERATION_MODEL",
    "LIVERY_STUDIO_ANALYSIS_MODEL",
    "LIVERY_STUDIO_IMAGE_SIZE",
    "LIVERY_STUDIO_TIMEOUT_S",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda: False)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_missing_key_is_a_configuration_error():
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        StudioConfig.from_env()


def test_defaults(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", " abc ")
    config = StudioConfig.from_env()
    assert config.api_key == "abc"
    assert config.generation_model == DEFAULT_GENERATION_MODEL
    assert config.image_size == "1K"
    assert config.timeout_s == 120.0


def test_overrides(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("LIVERY_STUDIO_GENERATION_MODEL", "gemini-2.5-flash-image")
    monkeypatch.setenv("LIVERY_STUDIO_IMAGE_SIZE", "2K")
    monkeypatch.setenv("LIVERY_STUDIO_TIMEOUT_S", "45")
    config = StudioConfig.from_env()
    assert config.generation_model == "gemini-2.5-flash-image"
    assert config.image_size == "2K"
    assert config.timeout_s == 45.0


def test_bad_timeout(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("LIVERY_STUDIO_TIMEOUT_S", "soon")
    with pytest.raises(ConfigurationError, match="LIVERY_STUDIO_TIMEOUT_S"):
        StudioConfig.from_env()


def test_build_client_requires_key():
    with pytest.raises(ConfigurationError):
        build_client(StudioConfig())
