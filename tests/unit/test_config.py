"""Tests for environment-driven configuration."""

__test__ = True

import pytest

from edamcp.config import DEFAULT_BASE_URL, OnlineEdaConfig, load_config


class TestLoadConfig:

    def test_defaults(self):
        config = load_config()

        assert config.base_url == DEFAULT_BASE_URL
        assert config.headless is True
        assert config.username is None
        assert config.password is None
        assert config.navigation_timeout == 30.0
        assert config.eager_init is True

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ONLINEEDA_BASE_URL", " https://eda.example/ ")
        monkeypatch.setenv("ONLINEEDA_HEADLESS", "false")
        monkeypatch.setenv("ONLINEEDA_USERNAME", "alice")
        monkeypatch.setenv("ONLINEEDA_PASSWORD", "pw")
        monkeypatch.setenv("ONLINEEDA_LOGIN_TIMEOUT", "12.5")
        monkeypatch.setenv("ONLINEEDA_EAGER_INIT", "0")

        config = load_config()

        assert config.base_url == "https://eda.example"
        assert config.headless is False
        assert config.username == "alice"
        assert config.password == "pw"
        assert config.login_timeout == 12.5
        assert config.eager_init is False

    @pytest.mark.parametrize("raw", ["soon", "0", "-4"])
    def test_bad_timeouts_fall_back(self, monkeypatch, raw):
        monkeypatch.setenv("ONLINEEDA_UPLOAD_TIMEOUT", raw)
        assert load_config().upload_timeout == 30.0

    def test_empty_credentials_are_none(self, monkeypatch):
        monkeypatch.setenv("ONLINEEDA_USERNAME", "")
        assert load_config().username is None

    def test_overrides_win_and_none_is_ignored(self, monkeypatch):
        monkeypatch.setenv("ONLINEEDA_HEADLESS", "true")

        config = load_config(headless=False, base_url=None)

        assert config.headless is False
        assert config.base_url == DEFAULT_BASE_URL


class TestOnlineEdaConfig:

    def test_repr_masks_password(self):
        text = repr(OnlineEdaConfig(username="alice", password="hunter2"))

        assert "hunter2" not in text
        assert "password='***'" not in text
        assert "password=***" in text

    def test_with_overrides_without_values_returns_self(self):
        config = OnlineEdaConfig()
        assert config.with_overrides(headless=None) is config
