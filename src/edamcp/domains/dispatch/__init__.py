"""Tool Dispatch Bounded Context.

A registry of name -> (schema, handler) plus one generic dispatch function
that validates, logs and folds every failure into an OperationResult.
"""
from .entities import RegisteredTool, ToolDescriptor, ToolHandler
from .aggregates import ToolRegistry
from .services import Dispatcher, format_validation_errors, redact_arguments

__all__ = [
    "ToolDescriptor", "RegisteredTool", "ToolHandler",
    "ToolRegistry",
    "Dispatcher", "format_validation_errors", "redact_arguments",
]
