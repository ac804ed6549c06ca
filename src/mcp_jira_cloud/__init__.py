import asyncio
import logging
import os
import sys
from typing import Any

import click
from dotenv import load_dotenv

from .exceptions import MCPJiraConfigurationError
from .jira.config import JiraCredentials
from .jira.constants import ENV_JIRA_API_TOKEN, ENV_JIRA_EMAIL
from .logging_config import log_operation, setup_logger
from .utils.env import is_env_truthy

__version__ = "1.0.0"

logger = logging.getLogger("mcp-jira-cloud")


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default=lambda: os.getenv("TRANSPORT", "stdio"),
    help="Transport type (stdio, sse or streamable-http)",
)
@click.option(
    "--host",
    default=lambda: os.getenv("HOST", "0.0.0.0"),
    help="Host to bind for the sse and streamable-http transports",
)
@click.option(
    "--port",
    type=int,
    default=lambda: int(os.getenv("PORT", "8000")),
    help="Port to listen on for the sse and streamable-http transports",
)
@click.option(
    "--log-dir",
    help="Directory to store log files",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    default=lambda: is_env_truthy("LOG_TO_FILE"),
    help="Enable/disable file logging",
)
@click.option("--jira-email", help="Jira account email (overrides JIRA_EMAIL)")
@click.option("--jira-token", help="Jira API token (overrides JIRA_API_TOKEN)")
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    host: str,
    port: int,
    log_dir: str | None,
    log_to_file: bool,
    jira_email: str | None,
    jira_token: str | None,
) -> None:
    """MCP Jira Server - Jira Cloud REST operations as MCP tools."""
    logging_level = None
    if verbose == 1:
        logging_level = "INFO"
    elif verbose >= 2:
        logging_level = "DEBUG"

    setup_logger(level=logging_level, log_to_file=log_to_file, log_dir=log_dir)

    with log_operation(logger, "application_startup", app_version=__version__):
        if env_file:
            logger.info(f"Loading environment from file: {env_file}")
            load_dotenv(env_file)
        else:
            logger.debug("Attempting to load environment from default .env file")
            load_dotenv()

        overrides = {}
        if jira_email:
            overrides[ENV_JIRA_EMAIL] = jira_email
        if jira_token:
            overrides[ENV_JIRA_API_TOKEN] = jira_token

        try:
            credentials = JiraCredentials.from_env(overrides)
        except MCPJiraConfigurationError as e:
            logger.error(str(e))
            click.echo(str(e), err=True)
            sys.exit(1)

        from .servers import create_main_mcp

        mcp = create_main_mcp(credentials)

    run_kwargs: dict[str, Any] = {"transport": transport}
    if transport != "stdio":
        run_kwargs.update(host=host, port=port)

    logger.info(f"Starting MCP Jira v{__version__} with {transport} transport")
    asyncio.run(mcp.run_async(**run_kwargs))


__all__ = ["main", "__version__"]

if __name__ == "__main__":
    main()
