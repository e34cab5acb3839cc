"""FastMCP server exposing the Arcas OnlineEDA platform.

Every tool goes through ``Dispatcher.invoke``; the FastMCP layer only
renders the OperationResult: data as indented JSON text on success, a
``ToolError`` (reported to the client with ``isError``) on failure.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import signal
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError, ToolError

from edamcp import __version__
from edamcp.config import load_config
from edamcp.container import ServiceContainer
from edamcp.domains.session import SessionPhase
from edamcp.domains.shared.errors import UnknownResourceError
from edamcp.domains.shared.kernel import OperationResult, describe_error
from edamcp.tools import NATURAL_LANGUAGE, NAVIGATE, PROJECT, RUN_VERIFICATION, UPLOAD_FILE

logger = logging.getLogger(__name__)

SERVER_NAME = "arcas-onlineeda-mcp"

SERVER_INSTRUCTIONS = (
    "Drive the Arcas OnlineEDA platform: navigate sections, manage projects, "
    "upload design files and run formal, equivalence, power, security or FPGA "
    "verification. When unsure which tool to call, ask "
    f"{NATURAL_LANGUAGE} with a plain-language description of the goal."
)

DOCUMENTATION = """# Arcas OnlineEDA Platform Documentation

## Overview
Arcas OnlineEDA is a web-based EDA platform for formal verification and chip design.

## Features
- Formal Verification
- Equivalence Checking
- Power Analysis
- Security Verification
- FPGA Design Support

## Quick Start
1. Create a project
2. Upload your design files
3. Configure verification settings
4. Run verification
5. Review results

For detailed usage, use the natural language tool with your questions."""


def render(result: OperationResult) -> str:
    """Indented JSON of a successful result; ToolError for a failed one."""
    if not result.success:
        raise ToolError(f"Error: {result.error}")
    return json.dumps(result.data, indent=2)


# ============================================================
# Resources
# ============================================================

async def _projects_resource(container: ServiceContainer) -> str:
    result = await container.dispatcher.invoke(PROJECT, {"action": "list"})
    if not result.success:
        raise ResourceError(f"Failed to read resource: {result.error}")
    return json.dumps(result.data, indent=2)


async def _verification_results_resource(container: ServiceContainer) -> str:
    return json.dumps(
        {
            "message": f"Use {RUN_VERIFICATION} to get results for specific projects",
            "tip": "Results are available after running verification on a project",
            "currentProject": container.session.current_project,
        },
        indent=2,
    )


async def _platform_status_resource(container: ServiceContainer) -> str:
    status: Dict[str, Any] = {"status": "online", "baseUrl": container.config.base_url}
    status.update(container.session.snapshot())
    status["timestamp"] = datetime.now(timezone.utc).isoformat()
    return json.dumps(status, indent=2)


async def _documentation_resource(container: ServiceContainer) -> str:
    return DOCUMENTATION


ResourceReader = Callable[[ServiceContainer], Awaitable[str]]

RESOURCES: Dict[str, Dict[str, Any]] = {
    "arcas://projects": {
        "name": "Arcas OnlineEDA Projects",
        "description": "List of all projects in your Arcas OnlineEDA workspace",
        "mime_type": "application/json",
        "reader": _projects_resource,
    },
    "arcas://verification-results": {
        "name": "Verification Results",
        "description": "Latest verification results from all projects",
        "mime_type": "application/json",
        "reader": _verification_results_resource,
    },
    "arcas://platform-status": {
        "name": "Platform Status",
        "description": "Current status of Arcas OnlineEDA platform and services",
        "mime_type": "application/json",
        "reader": _platform_status_resource,
    },
    "arcas://documentation": {
        "name": "Arcas OnlineEDA Documentation",
        "description": "Platform documentation and user guides",
        "mime_type": "text/markdown",
        "reader": _documentation_resource,
    },
}


async def read_resource(container: ServiceContainer, uri: str) -> str:
    """Read one published resource.

    Raises:
        UnknownResourceError: If ``uri`` is not published.
        ResourceError: If the resource could not be produced.
    """
    entry = RESOURCES.get(uri)
    if entry is None:
        raise UnknownResourceError(uri)
    reader: ResourceReader = entry["reader"]
    return await reader(container)


# ============================================================
# Server
# ============================================================

def create_server(container: ServiceContainer) -> FastMCP:
    """Build a FastMCP server bound to ``container``.

    The lifespan opens the browser at startup when ``eager_init`` is set
    (a failure is logged and the first tool call retries lazily) and always
    closes the session on exit.
    """

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[Dict[str, Any]]:
        if container.config.eager_init:
            try:
                await container.session.initialize()
            except Exception as exc:
                logger.warning(
                    "Browser initialization failed, will retry on first use: %s",
                    describe_error(exc),
                )
        try:
            yield {}
        finally:
            await container.shutdown()

    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS, lifespan=lifespan)
    dispatcher = container.dispatcher
    descriptions = {d.name: d.description for d in container.registry.descriptors()}

    @mcp.tool(name=NAVIGATE, description=descriptions[NAVIGATE])
    async def arcas_onlineeda_navigate(action: str, projectId: Optional[str] = None) -> str:
        return render(
            await dispatcher.invoke(NAVIGATE, _compact(action=action, projectId=projectId))
        )

    @mcp.tool(name=PROJECT, description=descriptions[PROJECT])
    async def arcas_onlineeda_project(
        action: str,
        projectName: Optional[str] = None,
        projectType: Optional[str] = None,
        projectId: Optional[str] = None,
    ) -> str:
        return render(
            await dispatcher.invoke(
                PROJECT,
                _compact(
                    action=action,
                    projectName=projectName,
                    projectType=projectType,
                    projectId=projectId,
                ),
            )
        )

    @mcp.tool(name=UPLOAD_FILE, description=descriptions[UPLOAD_FILE])
    async def arcas_onlineeda_upload_file(
        projectId: str, filePath: str, fileType: Optional[str] = None
    ) -> str:
        return render(
            await dispatcher.invoke(
                UPLOAD_FILE,
                _compact(projectId=projectId, filePath=filePath, fileType=fileType),
            )
        )

    @mcp.tool(name=RUN_VERIFICATION, description=descriptions[RUN_VERIFICATION])
    async def arcas_onlineeda_run_verification(
        projectId: str,
        verificationType: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> str:
        return render(
            await dispatcher.invoke(
                RUN_VERIFICATION,
                _compact(
                    projectId=projectId,
                    verificationType=verificationType,
                    options=options,
                ),
            )
        )

    @mcp.tool(name=NATURAL_LANGUAGE, description=descriptions[NATURAL_LANGUAGE])
    async def arcas_onlineeda_natural_language(
        query: str, context: Optional[Dict[str, Any]] = None
    ) -> str:
        return render(
            await dispatcher.invoke(NATURAL_LANGUAGE, _compact(query=query, context=context))
        )

    for uri, entry in RESOURCES.items():
        _register_resource(mcp, container, uri, entry)

    return mcp


def _register_resource(
    mcp: FastMCP, container: ServiceContainer, uri: str, entry: Dict[str, Any]
) -> None:
    @mcp.resource(
        uri,
        name=entry["name"],
        description=entry["description"],
        mime_type=entry["mime_type"],
    )
    async def _read() -> str:
        return await read_resource(container, uri)


def _compact(**arguments: Any) -> Dict[str, Any]:
    return {key: value for key, value in arguments.items() if value is not None}


# ============================================================
# CLI
# ============================================================

def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="onlineeda-mcp",
        description="MCP server for the Arcas OnlineEDA verification platform.",
    )
    parser.add_argument(
        "--transport",
        dest="transport",
        choices=["stdio", "http", "sse"],
        help="Transport to use for the MCP server (default: stdio).",
    )
    parser.add_argument(
        "--host",
        dest="host",
        help="Host/interface for HTTP transport (default 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        dest="port",
        type=int,
        help="Port for HTTP transport (default 8000).",
    )
    parser.add_argument(
        "--path",
        dest="path",
        help="Path for HTTP/streamable endpoints (default '/').",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Log level for the MCP server (e.g., INFO, DEBUG).",
    )
    parser.add_argument(
        "--headless",
        dest="headless",
        action="store_const",
        const=True,
        help="Run the browser headless (overrides ONLINEEDA_HEADLESS).",
    )
    parser.add_argument(
        "--headed",
        dest="headless",
        action="store_const",
        const=False,
        help="Show the browser window (overrides ONLINEEDA_HEADLESS).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _handle_sigterm(signum: int, frame: Any) -> None:
    raise SystemExit(0)


def main(argv: Optional[List[str]] = None) -> None:
    """Start the OnlineEDA MCP server."""

    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    log_level = (args.log_level or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(headless=args.headless)
    logger.info("Starting Arcas OnlineEDA MCP server for %s", config.base_url)
    container = ServiceContainer.build(config)
    mcp = create_server(container)

    signal.signal(signal.SIGTERM, _handle_sigterm)

    run_kwargs: Dict[str, Any] = {"transport": args.transport or "stdio"}
    if args.transport and args.transport != "stdio":
        if args.host:
            run_kwargs["host"] = args.host
        if args.port:
            run_kwargs["port"] = args.port
        if args.path:
            run_kwargs["path"] = args.path
        if args.log_level:
            run_kwargs["log_level"] = args.log_level

    try:
        mcp.run(**run_kwargs)
    except KeyboardInterrupt:
        logger.info("OnlineEDA MCP server interrupted by user")
    finally:
        if container.session.phase is not SessionPhase.CLOSED:
            asyncio.run(container.shutdown())
        logger.info("OnlineEDA MCP server stopped")


if __name__ == "__main__":
    main()
