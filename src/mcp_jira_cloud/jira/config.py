"""Configuration module for Jira API interactions."""

import base64
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from ..exceptions import MCPJiraConfigurationError
from ..utils.env import getenv
from .constants import ENV_JIRA_API_TOKEN, ENV_JIRA_EMAIL


@dataclass(frozen=True)
class JiraCredentials:
    """Jira Cloud basic-auth credentials.

    Loaded once at startup and shared read-only by every request.
    """

    email: str
    api_token: str = field(repr=False)

    @property
    def authorization_header(self) -> str:
        """Value for the Authorization header (Basic base64(email:token))."""
        raw = f"{self.email}:{self.api_token}".encode()
        return f"Basic {base64.b64encode(raw).decode('ascii')}"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "JiraCredentials":
        """Create credentials from environment variables.

        Args:
            env: Optional mapping checked before the process environment.

        Returns:
            JiraCredentials built from JIRA_EMAIL and JIRA_API_TOKEN.

        Raises:
            MCPJiraConfigurationError: If either variable is missing or empty
        """
        env = env if env is not None else os.environ
        email = getenv(env, ENV_JIRA_EMAIL) or ""
        api_token = getenv(env, ENV_JIRA_API_TOKEN) or ""

        missing = [
            name
            for name, value in ((ENV_JIRA_EMAIL, email), (ENV_JIRA_API_TOKEN, api_token))
            if not value
        ]
        if missing:
            msg = (
                f"Missing required environment variable(s): {', '.join(missing)}. "
                f"Please set the {ENV_JIRA_EMAIL} and {ENV_JIRA_API_TOKEN} "
                "environment variables."
            )
            raise MCPJiraConfigurationError(msg)

        return cls(email=email, api_token=api_token)
