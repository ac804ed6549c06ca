"""Tool filtering controlled by the ENABLED_TOOLS environment variable."""

import logging
import os

logger = logging.getLogger("mcp-jira-cloud.utils.tools")


def get_enabled_tools() -> list[str] | None:
    """Parse ENABLED_TOOLS into a list of tool names.

    Returns:
        The comma-separated names from ENABLED_TOOLS, or None when the
        variable is unset or blank (all tools enabled).
    """
    enabled_tools_str = os.getenv("ENABLED_TOOLS")
    if not enabled_tools_str or not enabled_tools_str.strip():
        logger.debug("ENABLED_TOOLS not set - all tools enabled")
        return None
    tools = [tool.strip() for tool in enabled_tools_str.split(",") if tool.strip()]
    logger.debug(f"Enabled tools from ENABLED_TOOLS: {tools}")
    return tools


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    """Check whether a tool passes the enabled-tools filter.

    Args:
        tool_name: Registered tool name
        enabled_tools: Allowed names, or None to include every tool
    """
    if enabled_tools is None:
        return True
    return tool_name in enabled_tools
