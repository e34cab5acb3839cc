"""Session Domain Service.

The SessionManager owns the one remote-UI handle of the process. Every
domain operation reaches the platform through ``exclusive()``, which
makes sure the session is authenticated and then serializes the whole
navigate-act-extract sequence behind a single lock, so no call can read
UI state produced by another call's navigation.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional, Protocol

from edamcp.adapters.remote_ui import RemoteUI, RemoteUIFactory, wait_for_selector
from edamcp.config import OnlineEdaConfig
from edamcp.domains.shared.errors import (
    AuthFailedError,
    AuthRequiredError,
    HandleUnavailableError,
    OnlineEdaError,
)
from edamcp.domains.shared.kernel import describe_error

from .events import (
    LoginAttempted,
    LoginFailed,
    LoginSucceeded,
    SessionClosed,
    SessionInitialized,
)
from .value_objects import Credentials, LoginSelectors, SessionPhase

logger = logging.getLogger(__name__)

LOGIN_FORM_TIMEOUT = 5.0


class EventPublisher(Protocol):
    """Protocol for publishing domain events."""

    def publish(self, event: object) -> None: ...


class SessionManager:
    """Login state machine and exclusive owner of the remote-UI handle.

    Phases:
        UNINITIALIZED -> INITIALIZING -> READY -> LOGGING_IN -> AUTHENTICATED,
        CLOSED reachable from any phase.

    Concurrency:
        - ``initialize`` is serialized; a second caller sees the handle the
          first one opened.
        - Login is single-flight: while an attempt is in progress, further
          ``ensure_authenticated`` callers await that same attempt and observe
          its outcome instead of starting another one.
        - ``exclusive`` holds the handle lock for the caller's whole sequence.
    """

    def __init__(
        self,
        ui_factory: RemoteUIFactory,
        config: OnlineEdaConfig,
        selectors: Optional[LoginSelectors] = None,
        event_publisher: Optional[EventPublisher] = None,
    ) -> None:
        self._ui_factory = ui_factory
        self._config = config
        self._selectors = selectors or LoginSelectors()
        self._event_publisher = event_publisher

        self._phase = SessionPhase.UNINITIALIZED
        self._ui: Optional[RemoteUI] = None
        self._current_project: Optional[str] = None

        self._init_lock = asyncio.Lock()
        self._handle_lock = asyncio.Lock()
        self._login_task: Optional[asyncio.Task] = None

    # ── State ─────────────────────────────────────────────────────────

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def is_authenticated(self) -> bool:
        return self._phase is SessionPhase.AUTHENTICATED

    @property
    def current_project(self) -> Optional[str]:
        return self._current_project

    @property
    def landing_url(self) -> str:
        return f"{self._config.base_url}/"

    def set_current_project(self, project_id: Optional[str]) -> None:
        self._current_project = project_id

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view of the session for status reporting."""
        return {
            "phase": self._phase.value,
            "authenticated": self.is_authenticated,
            "browser": "connected" if self._ui is not None else "disconnected",
            "currentProject": self._current_project,
            "loginInFlight": self._login_in_flight(),
        }

    # ── Lifecycle ─────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Open the remote-UI handle and navigate to the landing page.

        Raises:
            HandleUnavailableError: The session is closed or the browser
                could not be started.
            NavigationTimeoutError: The landing page did not load in time.
        """
        async with self._init_lock:
            if self._phase is SessionPhase.CLOSED:
                raise HandleUnavailableError("Session is closed")
            if self._phase.has_handle:
                return

            self._phase = SessionPhase.INITIALIZING
            ui: Optional[RemoteUI] = None
            try:
                ui = await self._ui_factory()
                logger.info("Navigating to OnlineEDA platform at %s", self.landing_url)
                await ui.open(
                    self.landing_url,
                    wait_until="networkidle",
                    timeout=self._config.navigation_timeout,
                )
            except Exception as exc:
                if self._phase is SessionPhase.INITIALIZING:
                    self._phase = SessionPhase.UNINITIALIZED
                if ui is not None:
                    await self._release(ui)
                logger.error("Failed to initialize browser session: %s", describe_error(exc))
                if isinstance(exc, OnlineEdaError):
                    raise
                raise HandleUnavailableError(
                    f"Browser session could not be initialized: {describe_error(exc)}"
                ) from exc

            if self._phase is SessionPhase.CLOSED:
                # close() ran while the browser was starting
                await self._release(ui)
                raise HandleUnavailableError("Session was closed during initialization")

            self._ui = ui
            self._phase = SessionPhase.READY
            self._publish(SessionInitialized(landing_url=self.landing_url))
            logger.info("Browser initialized and navigated to OnlineEDA")

    async def ensure_authenticated(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> None:
        """Make sure the session is logged in, logging in if necessary.

        Credentials supplied here take precedence over the environment pair
        from the configuration. There is no retry: a failed attempt is
        reported and the caller decides what to do next.

        Raises:
            AuthRequiredError: No credentials available.
            AuthFailedError: The login attempt did not succeed.
            HandleUnavailableError: The session is closed or cannot start.
        """
        if self._phase is SessionPhase.AUTHENTICATED:
            return
        if self._phase is SessionPhase.CLOSED:
            raise HandleUnavailableError("Session is closed")
        if not self._phase.has_handle:
            await self.initialize()
        if self._phase is SessionPhase.AUTHENTICATED:
            return

        if not self._login_in_flight():
            logger.info("Not logged in, attempting to login...")
            self._login_task = asyncio.get_running_loop().create_task(
                self._login(username, password)
            )
            self._login_task.add_done_callback(_retrieve_outcome)
        else:
            logger.debug("Login already in progress, waiting for its outcome")
        await asyncio.shield(self._login_task)

    @asynccontextmanager
    async def exclusive(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> AsyncIterator[RemoteUI]:
        """Authenticate, then hold the handle for one complete sequence.

        Usage:
            async with session.exclusive() as ui:
                await ui.open(url)
                ...
        """
        await self.ensure_authenticated(username, password)
        async with self._handle_lock:
            yield self._require_handle()

    async def close(self) -> None:
        """Release the handle (best-effort) and move to CLOSED. Idempotent."""
        ui, self._ui = self._ui, None
        was_closed = self._phase is SessionPhase.CLOSED
        self._phase = SessionPhase.CLOSED
        self._current_project = None
        if ui is not None:
            await self._release(ui)
        if not was_closed:
            logger.info("OnlineEDA session closed")
            self._publish(SessionClosed(had_handle=ui is not None))

    # ── Login ─────────────────────────────────────────────────────────

    def _login_in_flight(self) -> bool:
        return self._login_task is not None and not self._login_task.done()

    async def _login(self, username: Optional[str], password: Optional[str]) -> None:
        self._phase = SessionPhase.LOGGING_IN
        try:
            async with self._handle_lock:
                already_logged_in = await self._attempt_login(
                    self._require_handle(), username, password
                )
        except Exception as exc:
            if self._phase is SessionPhase.LOGGING_IN:
                self._phase = SessionPhase.READY
            logger.error("Login failed: %s", describe_error(exc))
            self._publish(LoginFailed(reason=describe_error(exc)))
            raise

        if self._phase is SessionPhase.CLOSED:
            raise HandleUnavailableError("Session was closed during login")
        self._phase = SessionPhase.AUTHENTICATED
        self._publish(LoginSucceeded(already_logged_in=already_logged_in))
        logger.info("Logged in to OnlineEDA")

    async def _attempt_login(
        self,
        ui: RemoteUI,
        username: Optional[str],
        password: Optional[str],
    ) -> bool:
        """Run one login attempt. Returns True when a session was already active."""
        selectors = self._selectors
        if await ui.find(selectors.success_markers) is not None:
            return True

        credentials = Credentials.resolve(
            username, password, self._config.username, self._config.password
        )
        if credentials is None:
            logger.warning("No credentials provided for OnlineEDA login")
            raise AuthRequiredError(
                "Login required but no credentials are available. Provide a "
                "username and password or set ONLINEEDA_USERNAME and "
                "ONLINEEDA_PASSWORD."
            )

        self._publish(LoginAttempted(username=credentials.username))
        logger.info("Attempting to login to OnlineEDA as %s", credentials.username)

        user_input = await wait_for_selector(
            ui, selectors.username_input, LOGIN_FORM_TIMEOUT
        )
        if user_input is None:
            raise AuthFailedError(
                f"Login form not found within {LOGIN_FORM_TIMEOUT:g}s"
            )
        await ui.type(user_input, credentials.username)

        password_input = await ui.find(selectors.password_input)
        if password_input is None:
            raise AuthFailedError("Login form has no password field")
        await ui.type(password_input, credentials.password)

        submit = await ui.find(selectors.submit_button)
        if submit is None:
            raise AuthFailedError("Login form has no submit button")
        await ui.click(submit)

        marker = await wait_for_selector(
            ui, selectors.success_markers, self._config.login_timeout
        )
        if marker is None:
            raise AuthFailedError(
                "Failed to login to OnlineEDA within "
                f"{self._config.login_timeout:g}s. Please check credentials."
            )
        return False

    # ── Helpers ───────────────────────────────────────────────────────

    def _require_handle(self) -> RemoteUI:
        if self._ui is None or not self._phase.has_handle:
            raise HandleUnavailableError(
                f"Browser page not available (session {self._phase.value})"
            )
        return self._ui

    async def _release(self, ui: RemoteUI) -> None:
        try:
            await ui.close()
        except Exception as exc:
            logger.debug("Ignoring error while closing browser: %s", describe_error(exc))

    def _publish(self, event: object) -> None:
        """Publish a domain event if a publisher is configured."""
        if self._event_publisher:
            self._event_publisher.publish(event)


def _retrieve_outcome(task: asyncio.Task) -> None:
    # _login already logged and published the failure; every caller may be gone.
    if not task.cancelled():
        task.exception()
