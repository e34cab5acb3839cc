"""Verification Domain Value Objects.

Immutable descriptions of a verification request and of the results read
back from the platform. All serialization uses the camelCase wire names.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

DEFAULT_VERIFICATION_TIMEOUT = 300.0


class Severity(str, Enum):
    """Severity of a reported violation."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def parse(cls, raw: Any) -> "Severity":
        """Map free-form page text onto a severity, defaulting to ERROR."""
        text = str(raw).strip().lower() if raw is not None else ""
        if text.startswith("warn"):
            return cls.WARNING
        if text.startswith("info") or text == "note":
            return cls.INFO
        return cls.ERROR


@dataclass(frozen=True)
class VerificationOptions:
    """Optional knobs of a verification run.

    Attributes:
        timeout: Seconds to wait for completion; None means the default of 300.
        depth: Bound for formal methods.
        properties: Property identifiers to check.
    """

    timeout: Optional[float] = None
    depth: Optional[int] = None
    properties: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.timeout is not None and (not math.isfinite(self.timeout) or self.timeout <= 0):
            raise ValueError(f"timeout must be a positive finite number, got {self.timeout}")
        if self.depth is not None and self.depth < 0:
            raise ValueError(f"depth must be non-negative, got {self.depth}")
        object.__setattr__(self, "properties", tuple(self.properties))

    @property
    def effective_timeout(self) -> float:
        return self.timeout if self.timeout is not None else DEFAULT_VERIFICATION_TIMEOUT


@dataclass(frozen=True)
class Violation:
    type: str = "unknown"
    message: str = ""
    location: Optional[str] = None
    severity: Severity = Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type,
            "message": self.message,
            "severity": self.severity.value,
        }
        if self.location is not None:
            payload["location"] = self.location
        return payload


@dataclass(frozen=True)
class Statistics:
    """Check counters; every counter is a non-negative integer."""

    total_checks: int = 0
    passed: int = 0
    failed: int = 0
    warnings: int = 0

    def __post_init__(self) -> None:
        for name in ("total_checks", "passed", "failed", "warnings"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalChecks": self.total_checks,
            "passed": self.passed,
            "failed": self.failed,
            "warnings": self.warnings,
        }


@dataclass(frozen=True)
class VerificationResult:
    """Structured outcome of one completed verification run."""

    passed: bool = False
    violations: Tuple[Violation, ...] = ()
    statistics: Statistics = field(default_factory=Statistics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "violations": [violation.to_dict() for violation in self.violations],
            "statistics": self.statistics.to_dict(),
        }


@dataclass(frozen=True)
class VerificationSelectors:
    """CSS selectors of the project verification page."""

    type_select: str = 'select[name="verificationType"], #verificationType'
    timeout_input: str = 'input[name="timeout"], #timeout'
    depth_input: str = 'input[name="depth"], #depth'
    properties_input: str = 'input[name="properties"], #properties'
    run_button: str = 'button.run-verification, button[type="submit"]'
    running_indicator: str = ".verification-running, .progress-indicator"
    complete_indicator: str = ".verification-complete, .results-ready"
