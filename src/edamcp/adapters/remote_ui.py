"""Remote-UI Capability Protocol - Anti-Corruption Layer.

This module defines the interface the OnlineEDA domains use to drive the
platform's web UI. Domain code never imports the automation backend
directly; it talks to a ``RemoteUI`` and receives opaque element handles
back from ``find``.

The bounded waits used across the domains (element-appears, URL-changes)
are implemented here once, as cooperative polling loops over the protocol,
so that every adapter - the Playwright one and the in-memory fakes used by
the tests - gets identical timeout semantics.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Protocol, Sequence, runtime_checkable

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.25


@runtime_checkable
class RemoteUI(Protocol):
    """Capability interface over one browser page.

    Any method may raise ``NavigationTimeoutError`` or
    ``ElementNotFoundError``; callers treat both as ordinary failures.
    """

    async def open(
        self, url: str, wait_until: str = "networkidle", timeout: float = 30.0
    ) -> None:
        """Navigate to ``url`` and wait for the given load state."""
        ...

    async def find(self, selector: str) -> Optional[Any]:
        """Return a handle for the first element matching ``selector`` or None."""
        ...

    async def type(self, handle: Any, text: str) -> None: ...

    async def click(self, handle: Any) -> None: ...

    async def select_option(self, handle: Any, value: str) -> None: ...

    async def upload_file(self, handle: Any, local_path: str) -> None: ...

    async def evaluate(self, script: str) -> Any:
        """Evaluate a JavaScript expression/function in the page."""
        ...

    async def current_url(self) -> str: ...

    async def close(self) -> None:
        """Release the page and the browser behind it."""
        ...


RemoteUIFactory = Callable[[], Awaitable[RemoteUI]]
"""Zero-argument coroutine factory producing a ready RemoteUI."""


async def wait_for_selector(
    ui: RemoteUI,
    selector: str,
    timeout: float,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> Optional[Any]:
    """Poll ``find`` until the selector matches or ``timeout`` seconds pass.

    Args:
        ui: The remote UI to query.
        selector: CSS selector; comma-separated alternatives are allowed.
        timeout: Upper bound in seconds.
        poll_interval: Delay between polls in seconds.

    Returns:
        The element handle, or None when the deadline passed without a match.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + max(timeout, 0.0)
    while True:
        handle = await ui.find(selector)
        if handle is not None:
            return handle
        remaining = deadline - loop.time()
        if remaining <= 0:
            logger.debug("Selector %r did not appear within %.1fs", selector, timeout)
            return None
        await asyncio.sleep(min(poll_interval, remaining))


async def wait_for_url_change(
    ui: RemoteUI,
    previous_url: str,
    timeout: float,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> bool:
    """Poll ``current_url`` until it differs from ``previous_url``.

    Returns:
        True when the URL changed before the deadline, False otherwise.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + max(timeout, 0.0)
    while True:
        if await ui.current_url() != previous_url:
            return True
        remaining = deadline - loop.time()
        if remaining <= 0:
            logger.debug("URL stayed at %s for %.1fs", previous_url, timeout)
            return False
        await asyncio.sleep(min(poll_interval, remaining))


async def wait_for_any(
    ui: RemoteUI,
    selectors: Sequence[str],
    timeout: float,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> Optional[Any]:
    """Poll until any of ``selectors`` matches; checked in the given order.

    Returns:
        The first matching element handle, or None after the deadline.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + max(timeout, 0.0)
    while True:
        for selector in selectors:
            handle = await ui.find(selector)
            if handle is not None:
                return handle
        remaining = deadline - loop.time()
        if remaining <= 0:
            logger.debug("None of %r appeared within %.1fs", list(selectors), timeout)
            return None
        await asyncio.sleep(min(poll_interval, remaining))
