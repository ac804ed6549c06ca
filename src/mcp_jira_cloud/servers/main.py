"""Main FastMCP server setup for the Jira integration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_jira_cloud.jira.client import JiraRestClient
from mcp_jira_cloud.jira.config import JiraCredentials
from mcp_jira_cloud.utils.io import is_read_only_mode
from mcp_jira_cloud.utils.logging import log_config_param
from mcp_jira_cloud.utils.tools import get_enabled_tools

from .jira import register_jira_tools

logger = logging.getLogger("mcp-jira-cloud.server.main")

SERVER_NAME = "Jira"
SERVER_INSTRUCTIONS = (
    "Provides tools for working with Jira Cloud issues, comments, transitions, "
    "assignees, users and groups. Every tool takes the site domain "
    "(e.g. 'your-domain.atlassian.net') and returns a text result."
)


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def create_main_mcp(
    credentials: JiraCredentials,
    transport: httpx.AsyncBaseTransport | None = None,
    read_only: bool | None = None,
    enabled_tools: list[str] | None = None,
) -> FastMCP:
    """Build the Jira MCP server with every tool registered.

    Args:
        credentials: Credentials shared by all tool invocations
        transport: Optional httpx transport for outbound calls
        read_only: Omit write tools; defaults to READ_ONLY_MODE
        enabled_tools: Only register these tools; defaults to ENABLED_TOOLS

    Returns:
        The configured FastMCP server
    """
    if read_only is None:
        read_only = is_read_only_mode()
    if enabled_tools is None:
        enabled_tools = get_enabled_tools()

    @asynccontextmanager
    async def main_lifespan(app: FastMCP) -> AsyncIterator[dict]:
        logger.info("Jira MCP server lifespan starting...")
        log_config_param(logger, "Jira", "Email", credentials.email)
        log_config_param(
            logger, "Jira", "API Token", credentials.api_token, sensitive=True
        )
        logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
        logger.info(f"Enabled tools filter: {enabled_tools or 'All tools enabled'}")
        try:
            yield {}
        finally:
            logger.info("Jira MCP server lifespan shutdown complete.")

    mcp = FastMCP(
        name=SERVER_NAME, instructions=SERVER_INSTRUCTIONS, lifespan=main_lifespan
    )
    register_jira_tools(
        mcp,
        JiraRestClient(credentials, transport=transport),
        read_only=read_only,
        enabled_tools=enabled_tools,
    )
    mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)(
        health_check
    )
    return mcp
