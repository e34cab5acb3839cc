"""Configuration helpers for the OnlineEDA MCP server."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://onlineeda.arcas-da.com"
_DEFAULT_NAVIGATION_TIMEOUT = 30.0
_DEFAULT_LOGIN_TIMEOUT = 30.0
_DEFAULT_UPLOAD_TIMEOUT = 30.0
_FALSY = {"0", "false", "no", "off"}
_ENV_LOADED = False


@dataclass(frozen=True)
class OnlineEdaConfig:
    """Holds runtime settings for the server and its browser session.

    Timeouts are in seconds.
    """

    base_url: str = DEFAULT_BASE_URL
    headless: bool = True
    username: Optional[str] = None
    password: Optional[str] = None
    navigation_timeout: float = _DEFAULT_NAVIGATION_TIMEOUT
    login_timeout: float = _DEFAULT_LOGIN_TIMEOUT
    upload_timeout: float = _DEFAULT_UPLOAD_TIMEOUT
    eager_init: bool = True

    def __repr__(self) -> str:
        return (
            f"OnlineEdaConfig(base_url={self.base_url!r}, headless={self.headless}, "
            f"username={self.username!r}, password={'***' if self.password else None}, "
            f"navigation_timeout={self.navigation_timeout}, "
            f"login_timeout={self.login_timeout}, "
            f"upload_timeout={self.upload_timeout}, eager_init={self.eager_init})"
        )

    def with_overrides(self, **overrides: object) -> "OnlineEdaConfig":
        """Return a copy with the non-None overrides applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values) if values else self


def load_config(**overrides: object) -> OnlineEdaConfig:
    """Load configuration from environment variables and overrides."""

    _ensure_env_loaded()
    config = OnlineEdaConfig(
        base_url=(os.getenv("ONLINEEDA_BASE_URL") or DEFAULT_BASE_URL).strip().rstrip("/"),
        headless=_env_flag("ONLINEEDA_HEADLESS", True),
        username=os.getenv("ONLINEEDA_USERNAME") or None,
        password=os.getenv("ONLINEEDA_PASSWORD") or None,
        navigation_timeout=_env_seconds(
            "ONLINEEDA_NAVIGATION_TIMEOUT", _DEFAULT_NAVIGATION_TIMEOUT
        ),
        login_timeout=_env_seconds("ONLINEEDA_LOGIN_TIMEOUT", _DEFAULT_LOGIN_TIMEOUT),
        upload_timeout=_env_seconds("ONLINEEDA_UPLOAD_TIMEOUT", _DEFAULT_UPLOAD_TIMEOUT),
        eager_init=_env_flag("ONLINEEDA_EAGER_INIT", True),
    )
    return config.with_overrides(**overrides)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in _FALSY


def _env_seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %ss", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Non-positive %s=%r, using default %ss", name, raw, default)
        return default
    return value


def _ensure_env_loaded() -> None:
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    _ENV_LOADED = True
    dotenv_path = Path.cwd() / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path)
