"""Shared Kernel - result contract and error taxonomy used by every domain."""

from .errors import (
    ArgumentValidationError,
    AuthFailedError,
    AuthRequiredError,
    ElementNotFoundError,
    HandleUnavailableError,
    NavigationTimeoutError,
    OnlineEdaError,
    UnknownOperationError,
    UnknownResourceError,
    UploadSourceMissingError,
    VerificationStartTimeoutError,
    VerificationTimeoutError,
)
from .kernel import OperationResult, describe_error

__all__ = [
    "OperationResult",
    "describe_error",
    "OnlineEdaError",
    "ArgumentValidationError",
    "AuthRequiredError",
    "AuthFailedError",
    "HandleUnavailableError",
    "NavigationTimeoutError",
    "ElementNotFoundError",
    "UploadSourceMissingError",
    "VerificationStartTimeoutError",
    "VerificationTimeoutError",
    "UnknownOperationError",
    "UnknownResourceError",
]
