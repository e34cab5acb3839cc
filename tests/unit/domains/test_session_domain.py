"""Tests for the Session bounded context.

Covers: phase transitions, lazy initialization, login (already logged in,
form login, missing credentials, failed login), single-flight joining,
the exclusive region, and idempotent close.
"""

__test__ = True

import asyncio
import gc

import pytest

from edamcp.config import OnlineEdaConfig
from edamcp.domains.session import (
    Credentials,
    LoginAttempted,
    LoginFailed,
    LoginSelectors,
    LoginSucceeded,
    SessionClosed,
    SessionInitialized,
    SessionManager,
    SessionPhase,
)
from edamcp.domains.shared.errors import (
    AuthFailedError,
    AuthRequiredError,
    HandleUnavailableError,
    NavigationTimeoutError,
)
from tests.unit.helpers.fake_remote_ui import (
    LOGIN_FORM,
    FakeRemoteUI,
    FakeUIFactory,
    RecordingPublisher,
)

LOGIN = LoginSelectors()


def make_session(ui=None, publisher=None, **config_overrides):
    values = dict(
        base_url="https://eda.test",
        username="designer@example.com",
        password="s3cret",
        navigation_timeout=1.0,
        login_timeout=0.5,
        eager_init=False,
    )
    values.update(config_overrides)
    factory = FakeUIFactory(ui if ui is not None else FakeRemoteUI())
    manager = SessionManager(factory, OnlineEdaConfig(**values), event_publisher=publisher)
    return manager, factory


# =============================================================================
# Value objects
# =============================================================================


class TestCredentials:

    def test_repr_masks_password(self):
        text = repr(Credentials("alice", "hunter2"))
        assert "hunter2" not in text
        assert "alice" in text

    def test_call_supplied_pair_wins(self):
        creds = Credentials.resolve("bob", "pw", "env-user", "env-pw")
        assert creds == Credentials("bob", "pw")

    def test_falls_back_to_environment_pair(self):
        assert Credentials.resolve(None, None, "env-user", "env-pw") == Credentials(
            "env-user", "env-pw"
        )

    def test_missing_field_yields_none(self):
        assert Credentials.resolve("bob", None, None, None) is None
        assert Credentials.resolve(None, None, None, None) is None


class TestSessionPhase:

    @pytest.mark.parametrize(
        "phase,expected",
        [
            (SessionPhase.UNINITIALIZED, False),
            (SessionPhase.INITIALIZING, False),
            (SessionPhase.READY, True),
            (SessionPhase.LOGGING_IN, True),
            (SessionPhase.AUTHENTICATED, True),
            (SessionPhase.CLOSED, False),
        ],
    )
    def test_handle_phases(self, phase, expected):
        assert phase.has_handle is expected


# =============================================================================
# Initialization
# =============================================================================


class TestInitialize:

    @pytest.mark.asyncio
    async def test_opens_landing_page(self):
        publisher = RecordingPublisher()
        manager, factory = make_session(publisher=publisher)

        await manager.initialize()

        assert manager.phase is SessionPhase.READY
        assert factory.ui.calls[0] == ("open", "https://eda.test/", "networkidle", 1.0)
        assert publisher.of_type(SessionInitialized)[0].landing_url == "https://eda.test/"

    @pytest.mark.asyncio
    async def test_second_initialize_is_noop(self):
        manager, factory = make_session()
        await manager.initialize()
        await manager.initialize()
        assert factory.calls == 1

    @pytest.mark.asyncio
    async def test_factory_failure_wraps_cause(self):
        manager, _ = make_session()
        manager._ui_factory = FakeUIFactory(error=RuntimeError("chromium missing"))

        with pytest.raises(HandleUnavailableError, match="chromium missing"):
            await manager.initialize()
        assert manager.phase is SessionPhase.UNINITIALIZED

    @pytest.mark.asyncio
    async def test_navigation_timeout_releases_handle(self):
        ui = FakeRemoteUI(open_error=NavigationTimeoutError("landing page timed out"))
        manager, _ = make_session(ui)

        with pytest.raises(NavigationTimeoutError):
            await manager.initialize()
        assert ui.closed is True
        assert manager.phase is SessionPhase.UNINITIALIZED

    @pytest.mark.asyncio
    async def test_initialize_after_close_fails(self):
        manager, _ = make_session()
        await manager.close()
        with pytest.raises(HandleUnavailableError):
            await manager.initialize()


# =============================================================================
# Login
# =============================================================================


class TestLogin:

    @pytest.mark.asyncio
    async def test_lazy_initialization_and_form_login(self):
        publisher = RecordingPublisher()
        ui = FakeRemoteUI().with_login_form()
        manager, _ = make_session(ui, publisher)

        await manager.ensure_authenticated()

        assert manager.phase is SessionPhase.AUTHENTICATED
        assert manager.is_authenticated
        assert ui.typed[LOGIN.username_input] == ["designer@example.com"]
        assert ui.typed[LOGIN.password_input] == ["s3cret"]
        assert ("click", LOGIN.submit_button) in ui.calls
        assert publisher.of_type(LoginSucceeded)[0].already_logged_in is False

    @pytest.mark.asyncio
    async def test_already_logged_in_skips_form(self):
        publisher = RecordingPublisher()
        ui = FakeRemoteUI().logged_in()
        manager, _ = make_session(ui, publisher)

        await manager.ensure_authenticated()

        assert manager.is_authenticated
        assert ui.count("type") == 0
        assert publisher.of_type(LoginAttempted) == []
        assert publisher.of_type(LoginSucceeded)[0].already_logged_in is True

    @pytest.mark.asyncio
    async def test_call_supplied_credentials_take_precedence(self):
        ui = FakeRemoteUI().with_login_form()
        manager, _ = make_session(ui)

        await manager.ensure_authenticated("other@example.com", "pw2")

        assert ui.typed[LOGIN.username_input] == ["other@example.com"]
        assert ui.typed[LOGIN.password_input] == ["pw2"]

    @pytest.mark.asyncio
    async def test_missing_credentials_touch_no_form(self):
        publisher = RecordingPublisher()
        ui = FakeRemoteUI().with_login_form()
        manager, _ = make_session(ui, publisher, username=None, password=None)

        with pytest.raises(AuthRequiredError):
            await manager.ensure_authenticated()

        assert ui.count("type") == 0
        assert ui.count("click") == 0
        assert manager.phase is SessionPhase.READY
        assert len(publisher.of_type(LoginFailed)) == 1

    @pytest.mark.asyncio
    async def test_no_success_marker_is_auth_failure(self):
        ui = FakeRemoteUI().show(*LOGIN_FORM)
        manager, _ = make_session(ui, login_timeout=0.3)

        with pytest.raises(AuthFailedError, match="Please check credentials"):
            await manager.ensure_authenticated()
        assert manager.phase is SessionPhase.READY

    @pytest.mark.asyncio
    async def test_missing_login_form_is_auth_failure(self, monkeypatch):
        import edamcp.domains.session.services as session_services

        monkeypatch.setattr(session_services, "LOGIN_FORM_TIMEOUT", 0.2)
        manager, _ = make_session(FakeRemoteUI())

        with pytest.raises(AuthFailedError, match="Login form not found"):
            await manager.ensure_authenticated()

    @pytest.mark.asyncio
    async def test_failed_attempt_is_not_retried_but_next_call_tries_again(self):
        ui = FakeRemoteUI().with_login_form()
        manager, _ = make_session(ui, username=None, password=None)

        with pytest.raises(AuthRequiredError):
            await manager.ensure_authenticated()
        await manager.ensure_authenticated("late@example.com", "pw")

        assert manager.is_authenticated
        assert ui.typed[LOGIN.username_input] == ["late@example.com"]

    @pytest.mark.asyncio
    async def test_authenticated_session_does_not_log_in_again(self):
        publisher = RecordingPublisher()
        manager, _ = make_session(FakeRemoteUI().with_login_form(), publisher)

        await manager.ensure_authenticated()
        await manager.ensure_authenticated()

        assert len(publisher.of_type(LoginAttempted)) == 1


# =============================================================================
# Single-flight login
# =============================================================================


class TestSingleFlight:

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_attempt(self):
        publisher = RecordingPublisher()
        ui = FakeRemoteUI().with_login_form()
        manager, factory = make_session(ui, publisher)

        await asyncio.gather(*(manager.ensure_authenticated() for _ in range(3)))

        assert manager.is_authenticated
        assert factory.calls == 1
        assert len(publisher.of_type(LoginAttempted)) == 1
        assert ui.count("click") == 1

    @pytest.mark.asyncio
    async def test_joined_callers_observe_the_same_failure(self):
        publisher = RecordingPublisher()
        ui = FakeRemoteUI().with_login_form()
        manager, _ = make_session(ui, publisher, username=None, password=None)

        results = await asyncio.gather(
            *(manager.ensure_authenticated() for _ in range(3)),
            return_exceptions=True,
        )

        assert all(isinstance(result, AuthRequiredError) for result in results)
        assert len(publisher.of_type(LoginFailed)) == 1

    @pytest.mark.asyncio
    async def test_cancelled_joiner_does_not_cancel_attempt(self):
        publisher = RecordingPublisher()
        ui = FakeRemoteUI().show(*LOGIN_FORM)
        manager, _ = make_session(ui, publisher, login_timeout=2.0)
        await manager.initialize()

        first = asyncio.ensure_future(manager.ensure_authenticated())
        await asyncio.sleep(0.05)
        joiner = asyncio.ensure_future(manager.ensure_authenticated())
        await asyncio.sleep(0.05)
        joiner.cancel()
        asyncio.get_running_loop().call_later(0.1, ui.show, LOGIN.success_markers)

        await first
        with pytest.raises(asyncio.CancelledError):
            await joiner
        assert manager.is_authenticated
        assert len(publisher.of_type(LoginAttempted)) == 1

    @pytest.mark.asyncio
    async def test_abandoned_failed_attempt_is_not_reported_as_unretrieved(self):
        publisher = RecordingPublisher()
        manager, _ = make_session(FakeRemoteUI().show(*LOGIN_FORM), publisher, login_timeout=0.2)
        await manager.initialize()
        loop = asyncio.get_running_loop()
        reported = []
        previous_handler = loop.get_exception_handler()
        loop.set_exception_handler(lambda _loop, context: reported.append(context))

        try:
            caller = asyncio.ensure_future(manager.ensure_authenticated())
            await asyncio.sleep(0.05)
            caller.cancel()
            with pytest.raises(asyncio.CancelledError):
                await caller

            task = manager._login_task
            await asyncio.wait([task])
            failures = publisher.of_type(LoginFailed)
            assert len(failures) == 1
            assert "Please check credentials" in failures[0].reason

            manager._login_task = None
            del task, caller
            gc.collect()
        finally:
            loop.set_exception_handler(previous_handler)

        assert reported == []


# =============================================================================
# Exclusive region
# =============================================================================


class TestExclusive:

    @pytest.mark.asyncio
    async def test_yields_handle_after_authentication(self):
        ui = FakeRemoteUI().logged_in()
        manager, _ = make_session(ui)

        async with manager.exclusive() as handle:
            assert handle is ui
            assert manager.is_authenticated

    @pytest.mark.asyncio
    async def test_sequences_do_not_interleave(self):
        manager, _ = make_session(FakeRemoteUI().logged_in())
        trace = []

        async def sequence(name):
            async with manager.exclusive():
                trace.append(f"{name}-start")
                await asyncio.sleep(0.02)
                trace.append(f"{name}-end")

        await asyncio.gather(sequence("a"), sequence("b"))

        assert trace in (
            ["a-start", "a-end", "b-start", "b-end"],
            ["b-start", "b-end", "a-start", "a-end"],
        )

    @pytest.mark.asyncio
    async def test_authentication_errors_propagate(self):
        manager, _ = make_session(FakeRemoteUI(), username=None, password=None)
        with pytest.raises(AuthRequiredError):
            async with manager.exclusive():
                pass


# =============================================================================
# Close
# =============================================================================


class TestClose:

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        publisher = RecordingPublisher()
        ui = FakeRemoteUI().logged_in()
        manager, _ = make_session(ui, publisher)
        await manager.ensure_authenticated()
        manager.set_current_project("p1")

        await manager.close()
        await manager.close()

        assert ui.closed is True
        assert ui.count("close") == 1
        assert manager.phase is SessionPhase.CLOSED
        assert manager.is_authenticated is False
        assert manager.current_project is None
        assert len(publisher.of_type(SessionClosed)) == 1
        assert publisher.of_type(SessionClosed)[0].had_handle is True

    @pytest.mark.asyncio
    async def test_close_without_handle(self):
        publisher = RecordingPublisher()
        manager, _ = make_session(publisher=publisher)
        await manager.close()
        assert publisher.of_type(SessionClosed)[0].had_handle is False

    @pytest.mark.asyncio
    async def test_close_swallows_release_errors(self):
        ui = FakeRemoteUI(close_error=RuntimeError("browser already gone")).logged_in()
        manager, _ = make_session(ui)
        await manager.initialize()

        await manager.close()

        assert manager.phase is SessionPhase.CLOSED

    @pytest.mark.asyncio
    async def test_operations_after_close_fail(self):
        manager, _ = make_session(FakeRemoteUI().logged_in())
        await manager.ensure_authenticated()
        await manager.close()

        with pytest.raises(HandleUnavailableError):
            await manager.ensure_authenticated()


# =============================================================================
# Snapshot
# =============================================================================


class TestSnapshot:

    @pytest.mark.asyncio
    async def test_snapshot_reflects_state(self):
        manager, _ = make_session(FakeRemoteUI().logged_in())
        assert manager.snapshot() == {
            "phase": "uninitialized",
            "authenticated": False,
            "browser": "disconnected",
            "currentProject": None,
            "loginInFlight": False,
        }

        await manager.ensure_authenticated()
        manager.set_current_project("p7")

        snapshot = manager.snapshot()
        assert snapshot["phase"] == "authenticated"
        assert snapshot["authenticated"] is True
        assert snapshot["browser"] == "connected"
        assert snapshot["currentProject"] == "p7"
