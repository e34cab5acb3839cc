"""Verification Bounded Context.

Runs a verification on a project and returns structured results:
pass/fail, violations and check statistics.
"""
from .value_objects import (
    DEFAULT_VERIFICATION_TIMEOUT, Severity, Statistics,
    VerificationOptions, VerificationResult, VerificationSelectors, Violation,
)
from .extraction import EXTRACT_SCRIPT, extract_results, parse_count, parse_results
from .services import VERIFICATION_START_TIMEOUT, VerificationOrchestrator

__all__ = [
    "DEFAULT_VERIFICATION_TIMEOUT", "Severity", "Statistics",
    "VerificationOptions", "VerificationResult", "VerificationSelectors", "Violation",
    "EXTRACT_SCRIPT", "extract_results", "parse_count", "parse_results",
    "VERIFICATION_START_TIMEOUT", "VerificationOrchestrator",
]
