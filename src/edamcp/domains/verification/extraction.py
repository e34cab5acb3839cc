"""Result extraction for completed verification runs.

The page is read with a single script that returns raw strings only. All
interpretation (integer parsing, clamping, severity normalization and
defaults) happens here in Python, so malformed markup can never fail a run
that already completed.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Mapping

from edamcp.adapters.remote_ui import RemoteUI
from edamcp.domains.shared.kernel import describe_error

from .value_objects import Severity, Statistics, VerificationResult, Violation

logger = logging.getLogger(__name__)

EXTRACT_SCRIPT = """() => {
    const text = (root, sel) => {
        const node = root.querySelector(sel);
        return node && node.textContent != null ? node.textContent.trim() : null;
    };
    return {
        passed: document.querySelector('.verification-passed, .status-passed') !== null,
        violations: Array.from(document.querySelectorAll('.violation-item, .error-item')).map(el => ({
            type: text(el, '.violation-type'),
            message: text(el, '.violation-message'),
            location: text(el, '.violation-location'),
            severity: text(el, '.violation-severity'),
        })),
        statistics: {
            totalChecks: text(document, '.total-checks'),
            passed: text(document, '.checks-passed'),
            failed: text(document, '.checks-failed'),
            warnings: text(document, '.warnings-count'),
        },
    };
}"""

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_count(raw: Any) -> int:
    """Leading integer of ``raw``, clamped to zero; 0 when absent.

    Examples:
        >>> parse_count("42 checks")
        42
        >>> parse_count(None)
        0
        >>> parse_count("-3")
        0
    """
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return max(raw, 0)
    if isinstance(raw, float):
        return max(int(raw), 0)
    if not isinstance(raw, str):
        return 0
    match = _LEADING_INT.match(raw)
    if not match:
        return 0
    return max(int(match.group(1)), 0)


def _text(raw: Any) -> str:
    return raw.strip() if isinstance(raw, str) else ""


def parse_violation(raw: Any) -> Violation:
    if not isinstance(raw, Mapping):
        return Violation()
    location = _text(raw.get("location")) or None
    return Violation(
        type=_text(raw.get("type")) or "unknown",
        message=_text(raw.get("message")),
        location=location,
        severity=Severity.parse(raw.get("severity")),
    )


def parse_results(raw: Any) -> VerificationResult:
    """Build a VerificationResult from the raw page reading.

    Never raises; anything unrecognizable falls back to defaults.
    """
    if not isinstance(raw, Mapping):
        return VerificationResult()

    raw_violations = raw.get("violations")
    violations: List[Violation] = []
    if isinstance(raw_violations, list):
        violations = [parse_violation(item) for item in raw_violations]

    raw_stats = raw.get("statistics")
    if not isinstance(raw_stats, Mapping):
        raw_stats = {}
    statistics = Statistics(
        total_checks=parse_count(raw_stats.get("totalChecks")),
        passed=parse_count(raw_stats.get("passed")),
        failed=parse_count(raw_stats.get("failed")),
        warnings=parse_count(raw_stats.get("warnings")),
    )

    return VerificationResult(
        passed=raw.get("passed") is True,
        violations=tuple(violations),
        statistics=statistics,
    )


async def extract_results(ui: RemoteUI) -> VerificationResult:
    """Read the results page; a failing evaluation yields default results."""
    try:
        raw = await ui.evaluate(EXTRACT_SCRIPT)
    except Exception as exc:
        logger.warning("Could not read verification results: %s", describe_error(exc))
        return VerificationResult()
    return parse_results(raw)
