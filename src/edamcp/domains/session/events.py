"""Session Domain Events.

Events emitted by the SessionManager for observability and tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SessionInitialized:
    """Emitted when the remote-UI handle is open on the landing page."""

    landing_url: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class LoginAttempted:
    """Emitted once per real login attempt (joined callers emit nothing)."""

    username: Optional[str]
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class LoginSucceeded:
    """Emitted when a success marker is observed after login."""

    already_logged_in: bool
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class LoginFailed:
    """Emitted when a login attempt ends without reaching the logged-in state."""

    reason: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class SessionClosed:
    """Emitted when the session is closed and the handle released."""

    had_handle: bool
    timestamp: datetime = field(default_factory=datetime.now)
