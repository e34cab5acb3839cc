"""Dispatch Domain Entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Type

from pydantic import BaseModel

from edamcp.domains.shared.kernel import OperationResult

ToolHandler = Callable[[Any], Awaitable[OperationResult]]
"""Plain async function receiving the validated arguments model."""


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and parameter schema of one operation.

    Attributes:
        name: Unique tool name exposed to callers.
        description: Human-readable summary.
        schema: Pydantic model validating and narrowing raw arguments.

    Immutable after registration.
    """

    name: str
    description: str
    schema: Type[BaseModel]

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("ToolDescriptor.name must not be empty")

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the parameters, using the wire (camelCase) names."""
        return self.schema.model_json_schema(by_alias=True)


@dataclass(frozen=True)
class RegisteredTool:
    """A descriptor paired with the handler that implements it."""

    descriptor: ToolDescriptor
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.descriptor.name
