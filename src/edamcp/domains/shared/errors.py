"""Error taxonomy shared across the OnlineEDA domains.

Domain operations raise these internally and fold them into a failed
OperationResult at their own boundary. Only UnknownOperationError and
UnknownResourceError are meant to reach the transport, which reports them
through its protocol error channel.
"""

from __future__ import annotations

from typing import List, Sequence


class OnlineEdaError(Exception):
    """Base class for every error raised by the OnlineEDA domains."""


class ArgumentValidationError(OnlineEdaError):
    """Tool arguments do not satisfy the declared schema."""

    def __init__(self, field_errors: Sequence[str]):
        self.field_errors: List[str] = list(field_errors)
        super().__init__(
            "Invalid parameters: " + ", ".join(self.field_errors)
        )


class AuthRequiredError(OnlineEdaError):
    """No credentials were supplied by the caller or the environment."""


class AuthFailedError(OnlineEdaError):
    """A login attempt was made and did not reach the logged-in state."""


class HandleUnavailableError(OnlineEdaError):
    """The remote-UI handle is missing (never initialized or closed)."""


class NavigationTimeoutError(OnlineEdaError):
    """A page navigation did not complete within its timeout."""


class ElementNotFoundError(OnlineEdaError):
    """A required UI element was absent or did not appear in time."""

    def __init__(self, selector: str, detail: str = ""):
        self.selector = selector
        message = f"Element not found: {selector}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UploadSourceMissingError(OnlineEdaError):
    """The local file to upload does not exist or is not readable."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Upload source not found or not readable: {path}")


class VerificationStartTimeoutError(OnlineEdaError):
    """The verification run never reported that it was running."""


class VerificationTimeoutError(OnlineEdaError):
    """The verification run did not complete within the requested timeout."""


class UnknownOperationError(OnlineEdaError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tool {name} not found")


class UnknownResourceError(OnlineEdaError):
    """No resource is published under the requested URI."""

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"Unknown resource: {uri}")
