"""Tool table of the OnlineEDA server.

Each tool is a descriptor (name, description, argument model) plus a plain
async handler closing over the service it drives. The registration order
here is the order tools are listed to clients.
"""

from __future__ import annotations

from edamcp.domains.dispatch import ToolDescriptor, ToolRegistry
from edamcp.domains.intent import IntentResolver
from edamcp.domains.platform import NavigationAction, PlatformService
from edamcp.domains.shared.kernel import OperationResult
from edamcp.domains.verification import VerificationOrchestrator
from edamcp.models import (
    NaturalLanguageArgs,
    NavigateArgs,
    ProjectArgs,
    RunVerificationArgs,
    UploadFileArgs,
)

NAVIGATE = "arcas_onlineeda_navigate"
PROJECT = "arcas_onlineeda_project"
UPLOAD_FILE = "arcas_onlineeda_upload_file"
RUN_VERIFICATION = "arcas_onlineeda_run_verification"
NATURAL_LANGUAGE = "arcas_onlineeda_natural_language"

TOOL_NAMES = (NAVIGATE, PROJECT, UPLOAD_FILE, RUN_VERIFICATION, NATURAL_LANGUAGE)


def build_registry(
    platform: PlatformService,
    orchestrator: VerificationOrchestrator,
    resolver: IntentResolver,
) -> ToolRegistry:
    """Register the five OnlineEDA tools against their services."""
    registry = ToolRegistry()

    async def navigate(params: NavigateArgs) -> OperationResult:
        return await platform.navigate(NavigationAction(params.action), params.project_id)

    async def project(params: ProjectArgs) -> OperationResult:
        return await platform.manage_project(
            params.action,
            project_name=params.project_name,
            project_type=params.project_type,
            project_id=params.project_id,
        )

    async def upload_file(params: UploadFileArgs) -> OperationResult:
        return await platform.upload_file(params.project_id, params.file_path, params.file_type)

    async def run_verification(params: RunVerificationArgs) -> OperationResult:
        options = params.options.to_options() if params.options else None
        return await orchestrator.run(params.project_id, params.verification_type, options)

    async def natural_language(params: NaturalLanguageArgs) -> OperationResult:
        context = params.context.to_context() if params.context else None
        return resolver.resolve(params.query, context)

    registry.register(
        ToolDescriptor(NAVIGATE, "Navigate to different sections of the OnlineEDA platform", NavigateArgs),
        navigate,
    )
    registry.register(
        ToolDescriptor(PROJECT, "Manage projects in OnlineEDA platform", ProjectArgs),
        project,
    )
    registry.register(
        ToolDescriptor(UPLOAD_FILE, "Upload design files to OnlineEDA project", UploadFileArgs),
        upload_file,
    )
    registry.register(
        ToolDescriptor(
            RUN_VERIFICATION,
            "Run various verification types on OnlineEDA project",
            RunVerificationArgs,
        ),
        run_verification,
    )
    registry.register(
        ToolDescriptor(
            NATURAL_LANGUAGE,
            "Process natural language queries for Arcas OnlineEDA operations with extensive examples",
            NaturalLanguageArgs,
        ),
        natural_language,
    )
    return registry
