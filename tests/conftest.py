"""Pytest configuration for the OnlineEDA MCP test suite."""

from __future__ import annotations

import pytest
import pytest_asyncio

from edamcp.config import OnlineEdaConfig
from edamcp.domains.platform import PlatformService, PlatformUrls
from edamcp.domains.session import SessionManager
from tests.unit.helpers.fake_remote_ui import FakeRemoteUI, FakeUIFactory, RecordingPublisher

BASE_URL = "https://eda.test"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ONLINEEDA_* variables and .env files out of the tests."""
    import edamcp.config as config_module

    for name in (
        "ONLINEEDA_BASE_URL", "ONLINEEDA_HEADLESS", "ONLINEEDA_USERNAME",
        "ONLINEEDA_PASSWORD", "ONLINEEDA_NAVIGATION_TIMEOUT", "ONLINEEDA_LOGIN_TIMEOUT",
        "ONLINEEDA_UPLOAD_TIMEOUT", "ONLINEEDA_EAGER_INIT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_ENV_LOADED", True)


@pytest.fixture
def config() -> OnlineEdaConfig:
    return OnlineEdaConfig(
        base_url=BASE_URL,
        username="designer@example.com",
        password="s3cret",
        navigation_timeout=1.0,
        login_timeout=0.5,
        upload_timeout=0.5,
        eager_init=False,
    )


@pytest.fixture
def urls() -> PlatformUrls:
    return PlatformUrls(BASE_URL)


@pytest.fixture
def fake_ui() -> FakeRemoteUI:
    return FakeRemoteUI()


@pytest.fixture
def ui_factory(fake_ui: FakeRemoteUI) -> FakeUIFactory:
    return FakeUIFactory(fake_ui)


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest_asyncio.fixture
async def session(ui_factory, config, publisher):
    manager = SessionManager(ui_factory, config, event_publisher=publisher)
    yield manager
    await manager.close()


@pytest.fixture
def platform(session, urls, config) -> PlatformService:
    return PlatformService(
        session,
        urls,
        navigation_timeout=config.navigation_timeout,
        upload_timeout=config.upload_timeout,
    )
