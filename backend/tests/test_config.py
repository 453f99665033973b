"""Tests for engine configuration."""

import pytest

from formforge.config import DEFAULT_TIMEOUT, EngineConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("FORMFORGE_STRICT", "FORMFORGE_UNIQUE_TIMEOUT", "FORMFORGE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestFromEnv:
    def test_defaults(self):
        config = EngineConfig.from_env()
        assert config == EngineConfig()
        assert config.strict is False
        assert config.unique_timeout == DEFAULT_TIMEOUT
        assert config.log_level == "WARNING"

    @pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
    def test_strict_enabled(self, monkeypatch, raw):
        monkeypatch.setenv("FORMFORGE_STRICT", raw)
        assert EngineConfig.from_env().strict is True

    @pytest.mark.parametrize("raw", ["0", "false", "", "maybe"])
    def test_strict_disabled(self, monkeypatch, raw):
        monkeypatch.setenv("FORMFORGE_STRICT", raw)
        assert EngineConfig.from_env().strict is False

    def test_timeout(self, monkeypatch):
        monkeypatch.setenv("FORMFORGE_UNIQUE_TIMEOUT", "0.5")
        assert EngineConfig.from_env().unique_timeout == 0.5

    def test_invalid_timeout_keeps_default(self, monkeypatch):
        monkeypatch.setenv("FORMFORGE_UNIQUE_TIMEOUT", "soon")
        assert EngineConfig.from_env().unique_timeout == DEFAULT_TIMEOUT

    def test_log_level_upper_cased(self, monkeypatch):
        monkeypatch.setenv("FORMFORGE_LOG_LEVEL", "debug")
        assert EngineConfig.from_env().log_level == "DEBUG"
