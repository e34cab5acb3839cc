"""Session Domain Value Objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SessionPhase(str, Enum):
    """Lifecycle phases of the single platform session.

    UNINITIALIZED -> INITIALIZING -> READY -> LOGGING_IN -> AUTHENTICATED,
    with CLOSED reachable from every phase.
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    LOGGING_IN = "logging_in"
    AUTHENTICATED = "authenticated"
    CLOSED = "closed"

    @property
    def has_handle(self) -> bool:
        """True for the phases in which the remote-UI handle exists."""
        return self.value in _HANDLE_PHASES


_HANDLE_PHASES = frozenset(
    {
        SessionPhase.READY.value,
        SessionPhase.LOGGING_IN.value,
        SessionPhase.AUTHENTICATED.value,
    }
)


@dataclass(frozen=True)
class Credentials:
    """Username/password pair used for the login form.

    The password never appears in ``repr`` so credentials can be logged.
    """

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"

    @classmethod
    def resolve(
        cls,
        username: Optional[str],
        password: Optional[str],
        fallback_username: Optional[str],
        fallback_password: Optional[str],
    ) -> Optional["Credentials"]:
        """Pick call-supplied credentials first, then the environment pair.

        Each field falls back independently, matching how the login form
        treats a partially supplied pair.

        Returns:
            Credentials, or None when either field is missing after fallback.
        """
        user = username or fallback_username
        secret = password or fallback_password
        if not user or not secret:
            return None
        return cls(username=user, password=secret)


@dataclass(frozen=True)
class LoginSelectors:
    """CSS selectors used by the login flow."""

    username_input: str = 'input[type="text"], input[type="email"]'
    password_input: str = 'input[type="password"]'
    submit_button: str = 'button[type="submit"]'
    success_markers: str = ".dashboard, .project-list, .user-menu"
