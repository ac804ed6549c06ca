class MCPJiraError(Exception):
    """Base exception for MCP-Jira errors."""

    pass


class MCPJiraConfigurationError(MCPJiraError):
    """Raised when required configuration (credentials) is missing at startup."""

    pass


class MCPJiraInvalidInputError(MCPJiraError):
    """Raised when tool arguments fail local validation before any network call."""

    pass
