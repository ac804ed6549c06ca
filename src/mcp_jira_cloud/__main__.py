"""Entry point for running the MCP Jira server."""

from mcp_jira_cloud import main

if __name__ == "__main__":
    main()
