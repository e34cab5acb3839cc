"""Shared Kernel - the uniform operation result contract.

Every tool invocation produces exactly one OperationResult. The result is
created fresh per call and never cached or reused.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one operation.

    Invariants:
        - success=True  => data is not None and error is None
        - success=False => error is a non-empty string and data is None

    Use the ``ok`` / ``fail`` constructors instead of building the
    dataclass directly.
    """

    success: bool
    data: Any = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.success:
            if self.data is None:
                raise ValueError("Successful OperationResult requires data")
            if self.error is not None:
                raise ValueError("Successful OperationResult must not carry an error")
        else:
            if not self.error:
                raise ValueError("Failed OperationResult requires a non-empty error")
            if self.data is not None:
                raise ValueError("Failed OperationResult must not carry data")

    @classmethod
    def ok(cls, data: Any, **metadata: Any) -> "OperationResult":
        return cls(success=True, data=data, metadata=dict(metadata))

    @classmethod
    def fail(cls, error: str, **metadata: Any) -> "OperationResult":
        return cls(
            success=False,
            error=error or "Unknown error occurred",
            metadata=dict(metadata),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain dict, omitting the absent side."""
        payload: Dict[str, Any] = {"success": self.success}
        if self.success:
            payload["data"] = self.data
        else:
            payload["error"] = self.error
        if self.metadata:
            payload["metadata"] = dict(self.metadata)
        return payload


def describe_error(exc: BaseException) -> str:
    """Human-readable message for an exception, never empty."""
    message = str(exc).strip()
    return message or type(exc).__name__
