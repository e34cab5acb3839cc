"""End-to-end tests of the FastMCP surface over an in-memory client.

Covers:
- Tool listing and names
- Success rendering (indented JSON text) and failure rendering (isError)
- The four published resources and unknown resource URIs
- CLI argument parsing
"""

from __future__ import annotations

import json

import pytest
import pytest_asyncio

from fastmcp import Client

from edamcp.container import ServiceContainer
from edamcp.domains.session import SessionPhase
from edamcp.domains.shared import UnknownResourceError
from edamcp.server import RESOURCES, _build_arg_parser, create_server, read_resource
from edamcp.tools import TOOL_NAMES


@pytest.fixture
def container(config, ui_factory):
    return ServiceContainer.build(config, ui_factory)


@pytest_asyncio.fixture
async def mcp_client(container):
    async with Client(create_server(container)) as client:
        yield client


def _text(result) -> str:
    return result.content[0].text


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_lists_the_five_tools(mcp_client):
    tools = await mcp_client.list_tools()
    assert sorted(tool.name for tool in tools) == sorted(TOOL_NAMES)


@pytest.mark.asyncio
async def test_natural_language_renders_json(mcp_client):
    res = await mcp_client.call_tool(
        "arcas_onlineeda_natural_language",
        {"query": "Go to the documentation"},
        raise_on_error=False,
    )

    assert res.is_error is False
    data = json.loads(_text(res))
    assert data["suggestedTool"] == "arcas_onlineeda_navigate"
    assert data["confidence"] == "high"
    assert _text(res).startswith("{\n  ")


@pytest.mark.asyncio
async def test_invalid_enum_is_reported_as_error(mcp_client, ui_factory):
    res = await mcp_client.call_tool(
        "arcas_onlineeda_navigate", {"action": "nowhere"}, raise_on_error=False
    )

    assert res.is_error is True
    assert "Error: Invalid parameters" in _text(res)
    assert ui_factory.calls == 0


@pytest.mark.asyncio
async def test_blank_query_is_reported_as_error(mcp_client):
    res = await mcp_client.call_tool(
        "arcas_onlineeda_natural_language", {"query": "  "}, raise_on_error=False
    )

    assert res.is_error is True
    assert "query must not be empty" in _text(res)


@pytest.mark.asyncio
async def test_navigate_drives_the_browser(mcp_client, fake_ui):
    fake_ui.logged_in()

    res = await mcp_client.call_tool(
        "arcas_onlineeda_navigate", {"action": "projects", "projectId": "p1"},
        raise_on_error=False,
    )

    assert res.is_error is False
    assert json.loads(_text(res)) == {
        "action": "projects",
        "currentUrl": "https://eda.test/projects/p1",
    }


@pytest.mark.asyncio
async def test_domain_failure_is_reported_as_error(mcp_client, tmp_path):
    res = await mcp_client.call_tool(
        "arcas_onlineeda_upload_file",
        {"projectId": "p1", "filePath": str(tmp_path / "absent.v")},
        raise_on_error=False,
    )

    assert res.is_error is True
    assert "Error: File upload failed" in _text(res)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_lists_resources(mcp_client):
    resources = await mcp_client.list_resources()
    assert {str(resource.uri) for resource in resources} == set(RESOURCES)


@pytest.mark.asyncio
async def test_documentation_resource(mcp_client):
    contents = await mcp_client.read_resource("arcas://documentation")
    assert contents[0].text.startswith("# Arcas OnlineEDA Platform Documentation")


@pytest.mark.asyncio
async def test_platform_status_does_not_start_browser(mcp_client, ui_factory):
    contents = await mcp_client.read_resource("arcas://platform-status")

    status = json.loads(contents[0].text)
    assert status["status"] == "online"
    assert status["baseUrl"] == "https://eda.test"
    assert status["authenticated"] is False
    assert "timestamp" in status
    assert ui_factory.calls == 0


@pytest.mark.asyncio
async def test_projects_resource_lists_projects(mcp_client, fake_ui):
    fake_ui.logged_in()
    fake_ui.evaluate_result = [{"id": "p1", "name": "cpu", "type": "formal", "status": "ready"}]

    contents = await mcp_client.read_resource("arcas://projects")

    assert json.loads(contents[0].text)["count"] == 1


@pytest.mark.asyncio
async def test_unknown_resource_uri(mcp_client):
    with pytest.raises(Exception):
        await mcp_client.read_resource("arcas://nothing-here")


@pytest.mark.asyncio
async def test_read_resource_rejects_unknown_uri(container):
    with pytest.raises(UnknownResourceError):
        await read_resource(container, "arcas://nothing-here")


@pytest.mark.asyncio
async def test_verification_results_resource(container):
    container.session.set_current_project("p8")

    payload = json.loads(await read_resource(container, "arcas://verification-results"))

    assert payload["currentProject"] == "p8"


@pytest.mark.asyncio
async def test_client_exit_closes_session(container):
    async with Client(create_server(container)) as client:
        await client.list_tools()

    assert container.session.phase is SessionPhase.CLOSED


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def test_cli_defaults():
    args = _build_arg_parser().parse_args([])
    assert args.transport is None
    assert args.headless is None


def test_cli_headed_and_http():
    args = _build_arg_parser().parse_args(["--headed", "--transport", "http", "--port", "9000"])
    assert args.headless is False
    assert args.transport == "http"
    assert args.port == 9000
