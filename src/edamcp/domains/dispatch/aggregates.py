"""Dispatch Domain Aggregate Root.

The ToolRegistry owns every registered operation and keeps them in
registration order, which is also the order tools are listed to clients.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from edamcp.domains.shared.errors import UnknownOperationError

from .entities import RegisteredTool, ToolDescriptor, ToolHandler


@dataclass
class ToolRegistry:
    """Registry mapping tool name to (descriptor, handler).

    Invariants:
        - Each name is registered at most once
        - Registrations are never removed or replaced
    """

    _tools: Dict[str, RegisteredTool] = field(default_factory=dict)

    def register(self, descriptor: ToolDescriptor, handler: ToolHandler) -> None:
        """Register a tool.

        Raises:
            ValueError: If a tool with the same name already exists.
        """
        if descriptor.name in self._tools:
            raise ValueError(f"Tool '{descriptor.name}' is already registered")
        self._tools[descriptor.name] = RegisteredTool(descriptor, handler)

    def get(self, name: str) -> RegisteredTool:
        """Look up a tool by name.

        Raises:
            UnknownOperationError: If no tool has that name.
        """
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownOperationError(name) from None

    def has(self, name: str) -> bool:
        return name in self._tools

    def names(self) -> List[str]:
        return list(self._tools)

    def descriptors(self) -> List[ToolDescriptor]:
        return [tool.descriptor for tool in self._tools.values()]

    def __len__(self) -> int:
        return len(self._tools)
