"""Tests for environment configuration."""

from poseforge.constants import DEFAULT_MODEL, DEFAULT_REQUEST_TIMEOUT_S
from poseforge.core.config import AppConfig


def test_empty_environment_disables_ai():
    config = AppConfig.from_env({})
    assert config.api_key is None
    assert not config.ai_enabled
    assert config.model == DEFAULT_MODEL
    assert config.request_timeout_s == DEFAULT_REQUEST_TIMEOUT_S


def test_api_key_precedence():
    config = AppConfig.from_env({"API_KEY": "c", "GOOGLE_API_KEY": "b", "GEMINI_API_KEY": "a"})
    assert config.api_key == "a"
    config = AppConfig.from_env({"API_KEY": "c", "GEMINI_API_KEY": "  "})
    assert config.api_key == "c"
    assert config.ai_enabled


def test_model_and_timeout_from_env():
    config = AppConfig.from_env({"POSEFORGE_MODEL": "gemini-x", "POSEFORGE_REQUEST_TIMEOUT": "5"})
    assert config.model == "gemini-x"
    assert config.request_timeout_s == 5.0


def test_bad_timeout_falls_back():
    config = AppConfig.from_env({"POSEFORGE_REQUEST_TIMEOUT": "soon"})
    assert config.request_timeout_s == DEFAULT_REQUEST_TIMEOUT_S


def test_with_overrides():
    config = AppConfig.from_env({})
    assert config.with_overrides(model=None) is config
    assert config.with_overrides(model="other").model == "other"
