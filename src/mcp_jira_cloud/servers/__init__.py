"""FastMCP server assembly for the Jira tools."""

from .jira import register_jira_tools
from .main import create_main_mcp

__all__ = ["create_main_mcp", "register_jira_tools"]
