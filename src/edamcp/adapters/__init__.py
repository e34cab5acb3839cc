"""Remote-UI Adapters - Anti-Corruption Layer.

The OnlineEDA domains drive the platform through the ``RemoteUI``
protocol only. ``PlaywrightRemoteUI`` is the production adapter; tests
substitute an in-memory fake implementing the same protocol.

Usage:
    from edamcp.adapters import PlaywrightRemoteUI, wait_for_selector

    ui = await PlaywrightRemoteUI.launch(headless=True)
    await ui.open("https://onlineeda.arcas-da.com/")
    handle = await wait_for_selector(ui, ".dashboard, .project-list", timeout=5)
"""

from .playwright_adapter import PlaywrightRemoteUI
from .remote_ui import (
    DEFAULT_POLL_INTERVAL,
    RemoteUI,
    RemoteUIFactory,
    wait_for_any,
    wait_for_selector,
    wait_for_url_change,
)

__all__ = [
    "RemoteUI",
    "RemoteUIFactory",
    "PlaywrightRemoteUI",
    "wait_for_any",
    "wait_for_selector",
    "wait_for_url_change",
    "DEFAULT_POLL_INTERVAL",
]
