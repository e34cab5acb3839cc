"""Pydantic argument models for the OnlineEDA tools."""

from .tool_models import (
    IntentContextArgs,
    NaturalLanguageArgs,
    NavigateArgs,
    ProjectArgs,
    RunVerificationArgs,
    ToolArgs,
    UploadFileArgs,
    VerificationOptionsArgs,
)

__all__ = [
    "ToolArgs",
    "NavigateArgs",
    "ProjectArgs",
    "UploadFileArgs",
    "VerificationOptionsArgs",
    "RunVerificationArgs",
    "IntentContextArgs",
    "NaturalLanguageArgs",
]
