"""Session Bounded Context.

Owns the single authenticated remote-UI session of the process: the login
state machine, single-flight login, and the exclusive region every domain
operation uses to drive the platform UI.
"""
from .value_objects import Credentials, LoginSelectors, SessionPhase
from .services import EventPublisher, SessionManager
from .events import (
    LoginAttempted, LoginFailed, LoginSucceeded,
    SessionClosed, SessionInitialized,
)

__all__ = [
    "Credentials", "LoginSelectors", "SessionPhase",
    "EventPublisher", "SessionManager",
    "SessionInitialized", "LoginAttempted", "LoginSucceeded",
    "LoginFailed", "SessionClosed",
]
