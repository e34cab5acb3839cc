"""Argument models of the OnlineEDA tools.

Wire names are camelCase; Python attribute names are snake_case and are
accepted as well. Enumerated arguments are Literal aliases with a
BeforeValidator so that ``"Formal "`` and ``"formal"`` are equivalent
while the JSON schema still shows a flat ``enum``.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from edamcp.domains.verification.value_objects import VerificationOptions


def _normalize_str(v: Any) -> Any:
    """Normalize string input: strip whitespace, lowercase."""
    return v.strip().lower() if isinstance(v, str) else v


NavigateAction = Annotated[
    Literal["home", "projects", "new-project", "documentation", "settings"],
    BeforeValidator(_normalize_str),
]

ProjectAction = Annotated[
    Literal["create", "open", "list", "delete"],
    BeforeValidator(_normalize_str),
]

ProjectKind = Annotated[
    Literal["formal", "equivalence", "power", "security", "fpga"],
    BeforeValidator(_normalize_str),
]

FileKind = Annotated[
    Literal["verilog", "systemverilog", "vhdl", "constraints", "other"],
    BeforeValidator(_normalize_str),
]


class ToolArgs(BaseModel):
    """Base for every tool argument model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class NavigateArgs(ToolArgs):
    action: NavigateAction = Field(description="Navigation action to perform")
    project_id: Optional[str] = Field(
        default=None,
        alias="projectId",
        description="Project ID to open (used with the projects action)",
    )


class ProjectArgs(ToolArgs):
    action: ProjectAction = Field(description="Project action to perform")
    project_name: Optional[str] = Field(
        default=None, alias="projectName", description="Name for new project"
    )
    project_type: Optional[ProjectKind] = Field(
        default=None, alias="projectType", description="Type of verification project"
    )
    project_id: Optional[str] = Field(
        default=None, alias="projectId", description="Project ID for open/delete actions"
    )


class UploadFileArgs(ToolArgs):
    project_id: str = Field(
        alias="projectId", min_length=1, description="Project ID to upload files to"
    )
    file_path: str = Field(
        alias="filePath", min_length=1, description="Local file path to upload"
    )
    file_type: Optional[FileKind] = Field(
        default=None,
        alias="fileType",
        description="Type of design file (inferred from the extension when omitted)",
    )


class VerificationOptionsArgs(ToolArgs):
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        allow_inf_nan=False,
        description="Verification timeout in seconds",
    )
    depth: Optional[int] = Field(
        default=None, ge=0, description="Verification depth for formal methods"
    )
    properties: Optional[List[str]] = Field(
        default=None, description="Specific properties to verify"
    )

    def to_options(self) -> VerificationOptions:
        return VerificationOptions(
            timeout=self.timeout,
            depth=self.depth,
            properties=tuple(self.properties or ()),
        )


class RunVerificationArgs(ToolArgs):
    project_id: str = Field(
        alias="projectId", min_length=1, description="Project ID to run verification on"
    )
    verification_type: ProjectKind = Field(
        alias="verificationType", description="Type of verification to run"
    )
    options: Optional[VerificationOptionsArgs] = None


class IntentContextArgs(ToolArgs):
    current_project: Optional[str] = Field(
        default=None, alias="currentProject", description="Current project ID"
    )
    previous_results: Optional[Any] = Field(
        default=None, alias="previousResults", description="Previous operation results"
    )

    def to_context(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class NaturalLanguageArgs(ToolArgs):
    query: str = Field(description="Natural language query about EDA verification")
    context: Optional[IntentContextArgs] = Field(
        default=None, description="Additional context for the query"
    )

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be empty")
        return value
