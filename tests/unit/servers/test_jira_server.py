"""Tests for the Jira tools exposed through FastMCP."""

import httpx
import pytest
from fastmcp import Client
from fastmcp.client import FastMCPTransport
from fastmcp.exceptions import ToolError

from mcp_jira_cloud.jira.operations import OPERATIONS
from mcp_jira_cloud.servers import create_main_mcp

DOMAIN = "test.atlassian.net"
BASE = f"https://{DOMAIN}/rest/api/3"

pytestmark = pytest.mark.anyio


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("READ_ONLY_MODE", raising=False)
    monkeypatch.delenv("ENABLED_TOOLS", raising=False)


@pytest.fixture
def test_jira_mcp(credentials, fake_jira):
    return create_main_mcp(credentials, transport=fake_jira.transport)


@pytest.fixture
async def mcp_client(test_jira_mcp):
    async with Client(transport=FastMCPTransport(test_jira_mcp)) as client_instance:
        yield client_instance


async def test_all_tools_registered(mcp_client):
    tools = await mcp_client.list_tools()
    assert {tool.name for tool in tools} == set(OPERATIONS)


async def test_tool_annotations(mcp_client):
    tools = {tool.name: tool for tool in await mcp_client.list_tools()}
    assert tools["getIssue"].annotations.readOnlyHint is True
    assert tools["createIssue"].annotations.readOnlyHint is False
    assert tools["deleteIssue"].annotations.destructiveHint is True


async def test_tool_schema_uses_argument_names(mcp_client):
    tools = {tool.name: tool for tool in await mcp_client.list_tools()}
    schema = tools["getUsersBulk"].inputSchema
    assert set(schema["properties"]) == {"domain", "accountIds", "startAt", "maxResults"}
    assert set(schema["required"]) == {"domain", "accountIds"}


async def test_get_user_tool(mcp_client, fake_jira):
    fake_jira.respond(200, json_body=[{"accountId": "1"}])
    response = await mcp_client.call_tool("getUser", {"domain": DOMAIN, "accountId": "1"})
    text_content = response.content[0]
    assert text_content.type == "text"
    assert text_content.text == '[\n  {\n    "accountId": "1"\n  }\n]'
    assert str(fake_jira.last_request.url) == f"{BASE}/user?accountId=1"


async def test_assign_issue_tool_unassigns_with_null(mcp_client, fake_jira):
    fake_jira.respond(204)
    response = await mcp_client.call_tool(
        "assignIssue", {"domain": DOMAIN, "issueIdOrKey": "PROJ-1", "accountId": None}
    )
    assert response.content[0].text == (
        f"Issue PROJ-1 in domain {DOMAIN} was successfully unassigned."
    )
    assert fake_jira.last_json_body() == {"accountId": None}


async def test_assign_issue_requires_account_id(mcp_client, fake_jira):
    with pytest.raises(ToolError):
        await mcp_client.call_tool("assignIssue", {"domain": DOMAIN, "issueIdOrKey": "PROJ-1"})
    assert fake_jira.requests == []


async def test_wrong_argument_type_is_rejected(mcp_client, fake_jira):
    with pytest.raises(ToolError):
        await mcp_client.call_tool(
            "getUsersBulk", {"domain": DOMAIN, "accountIds": "not-a-list-of-ids"}
        )
    assert fake_jira.requests == []


async def test_edit_issue_tool(mcp_client, fake_jira):
    fake_jira.respond(204)
    response = await mcp_client.call_tool(
        "editIssue",
        {
            "domain": DOMAIN,
            "issueIdOrKey": "PROJ-1",
            "fieldsToUpdate": {"summary": "Updated"},
        },
    )
    assert response.content[0].text == (
        f"Issue PROJ-1 in domain {DOMAIN} was successfully updated."
    )
    assert fake_jira.last_json_body() == {"fields": {"summary": "Updated"}}


async def test_delete_issue_tool_defaults_subtasks_off(mcp_client, fake_jira):
    fake_jira.respond(204)
    await mcp_client.call_tool("deleteIssue", {"domain": DOMAIN, "issueIdOrKey": "PROJ-1"})
    assert str(fake_jira.last_request.url) == f"{BASE}/issue/PROJ-1"


async def test_pagination_defaults(mcp_client, fake_jira):
    fake_jira.respond(200, json_body=[])
    await mcp_client.call_tool("getAllUsers", {"domain": DOMAIN})
    assert str(fake_jira.last_request.url) == f"{BASE}/users/search?startAt=0&maxResults=50"


async def test_remote_failure_is_text_not_tool_error(mcp_client, fake_jira):
    fake_jira.respond(404, text="missing")
    response = await mcp_client.call_tool("getIssue", {"domain": DOMAIN, "issueKey": "X-1"})
    assert response.content[0].text == (
        "Error retrieving issue X-1: Not Found. Status: 404. Details: missing"
    )


async def test_invalid_adf_is_text_result(mcp_client, fake_jira):
    response = await mcp_client.call_tool(
        "createIssue",
        {
            "domain": DOMAIN,
            "projectKey": "PROJ",
            "summary": "s",
            "issueType": "Task",
            "description": "{oops",
        },
    )
    assert response.content[0].text.startswith("Invalid ADF JSON provided for description: ")
    assert fake_jira.requests == []


async def test_read_only_mode_hides_write_tools(credentials, fake_jira, monkeypatch):
    monkeypatch.setenv("READ_ONLY_MODE", "true")
    mcp = create_main_mcp(credentials, transport=fake_jira.transport)
    async with Client(transport=FastMCPTransport(mcp)) as client:
        names = {tool.name for tool in await client.list_tools()}
    assert names == {name for name, op in OPERATIONS.items() if op.read_only}


async def test_enabled_tools_filter(credentials, fake_jira):
    mcp = create_main_mcp(
        credentials,
        transport=fake_jira.transport,
        enabled_tools=["getIssue", "add_comment"],
    )
    async with Client(transport=FastMCPTransport(mcp)) as client:
        names = {tool.name for tool in await client.list_tools()}
    assert names == {"getIssue", "add_comment"}


async def test_healthz_route(test_jira_mcp):
    app = test_jira_mcp.http_app()
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    ) as http:
        response = await http.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
