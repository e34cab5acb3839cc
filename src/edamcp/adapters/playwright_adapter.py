"""Playwright Remote-UI Adapter.

This module implements the RemoteUI protocol on top of Playwright's async
API. It is the only place in the code base that knows about Playwright:
Playwright timeouts and errors are translated into the OnlineEDA error
taxonomy before they leave the adapter.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from playwright.async_api import Browser, ElementHandle, Page, Playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from edamcp.domains.shared.errors import ElementNotFoundError, NavigationTimeoutError

logger = logging.getLogger(__name__)

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]
DEFAULT_VIEWPORT: Tuple[int, int] = (1920, 1080)
ELEMENT_ACTION_TIMEOUT_MS = 5000


class PlaywrightRemoteUI:
    """RemoteUI backed by a single Chromium page."""

    def __init__(self, playwright: Playwright, browser: Browser, page: Page):
        self._playwright = playwright
        self._browser = browser
        self._page = page

    @classmethod
    async def launch(
        cls,
        headless: bool = True,
        viewport: Tuple[int, int] = DEFAULT_VIEWPORT,
    ) -> "PlaywrightRemoteUI":
        """Start Playwright, launch Chromium and open one page."""
        logger.info("Launching browser for OnlineEDA (headless=%s)", headless)
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(
                headless=headless, args=LAUNCH_ARGS
            )
            page = await browser.new_page(
                viewport={"width": viewport[0], "height": viewport[1]}
            )
        except Exception:
            await playwright.stop()
            raise
        logger.info("Browser initialized successfully")
        return cls(playwright, browser, page)

    async def open(
        self, url: str, wait_until: str = "networkidle", timeout: float = 30.0
    ) -> None:
        try:
            await self._page.goto(url, wait_until=wait_until, timeout=timeout * 1000)
        except PlaywrightTimeoutError as exc:
            raise NavigationTimeoutError(
                f"Navigation to {url} timed out after {timeout:g}s"
            ) from exc

    async def find(self, selector: str) -> Optional[ElementHandle]:
        try:
            return await self._page.query_selector(selector)
        except PlaywrightError as exc:
            # The page may be mid-navigation; report "not there yet".
            logger.debug("query_selector(%r) failed: %s", selector, exc)
            return None

    async def type(self, handle: ElementHandle, text: str) -> None:
        await self._element_call(handle, "type", text)

    async def click(self, handle: ElementHandle) -> None:
        await self._element_call(handle, "click")

    async def select_option(self, handle: ElementHandle, value: str) -> None:
        await self._element_call(handle, "select_option", value)

    async def upload_file(self, handle: ElementHandle, local_path: str) -> None:
        await self._element_call(handle, "set_input_files", local_path)

    async def evaluate(self, script: str) -> Any:
        return await self._page.evaluate(script)

    async def current_url(self) -> str:
        return self._page.url

    async def close(self) -> None:
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()

    async def _element_call(self, handle: ElementHandle, method: str, *args: Any) -> None:
        try:
            await getattr(handle, method)(*args, timeout=ELEMENT_ACTION_TIMEOUT_MS)
        except PlaywrightTimeoutError as exc:
            raise ElementNotFoundError(
                str(handle), f"{method} timed out: {exc.message}"
            ) from exc
