"""Dispatch Domain Service.

One generic dispatch function applies schema validation, audit logging
and uniform error folding to every registered tool.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from edamcp.domains.shared.errors import ArgumentValidationError
from edamcp.domains.shared.kernel import OperationResult, describe_error

from .aggregates import ToolRegistry

logger = logging.getLogger(__name__)

_SENSITIVE_KEYS = ("password", "secret", "token")


def format_validation_errors(exc: ValidationError) -> List[str]:
    """Turn a pydantic ValidationError into one message per field."""
    messages: List[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return messages


def redact_arguments(arguments: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of ``arguments`` with password-like values masked for logging."""
    redacted: Dict[str, Any] = {}
    for key, value in arguments.items():
        if any(marker in key.lower() for marker in _SENSITIVE_KEYS):
            redacted[key] = "***"
        elif isinstance(value, Mapping):
            redacted[key] = redact_arguments(value)
        else:
            redacted[key] = value
    return redacted


@dataclass
class Dispatcher:
    """Validates arguments, invokes handlers, and folds failures.

    Usage:
        dispatcher = Dispatcher(registry)
        result = await dispatcher.invoke("arcas_onlineeda_navigate", {"action": "home"})
    """

    registry: ToolRegistry

    async def invoke(
        self, name: str, raw_args: Optional[Mapping[str, Any]] = None
    ) -> OperationResult:
        """Run one tool and return its OperationResult.

        Raises:
            UnknownOperationError: If ``name`` is not registered. This is the
                only exception that leaves the dispatcher.
        """
        tool = self.registry.get(name)

        try:
            params = tool.descriptor.schema.model_validate(
                raw_args if raw_args is not None else {}
            )
        except ValidationError as exc:
            error = ArgumentValidationError(format_validation_errors(exc))
            logger.error("Validation error in %s: %s", name, error)
            return OperationResult.fail(str(error))

        logger.info(
            "Executing tool: %s params=%s",
            name,
            redact_arguments(params.model_dump(by_alias=True, exclude_none=True)),
        )
        try:
            result = await tool.handler(params)
        except Exception as exc:
            logger.error("Error executing %s: %s", name, describe_error(exc), exc_info=True)
            result = OperationResult.fail(describe_error(exc))

        if not isinstance(result, OperationResult):
            logger.error("Tool %s returned %r instead of an OperationResult", name, result)
            result = OperationResult.fail(f"Tool {name} returned an invalid result")

        logger.info("Tool %s completed (success=%s)", name, result.success)
        return result
