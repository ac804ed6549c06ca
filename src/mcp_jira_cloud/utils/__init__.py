"""
Utility functions for the MCP Jira integration.
"""

from .env import getenv, is_env_truthy
from .io import is_read_only_mode
from .logging import log_config_param, mask_sensitive
from .tools import get_enabled_tools, should_include_tool

__all__ = [
    "get_enabled_tools",
    "getenv",
    "is_env_truthy",
    "is_read_only_mode",
    "log_config_param",
    "mask_sensitive",
    "should_include_tool",
]
