"""Constants for the Jira Cloud REST API."""

from typing import Final

# Environment variable names
ENV_JIRA_EMAIL: Final[str] = "JIRA_EMAIL"
ENV_JIRA_API_TOKEN: Final[str] = "JIRA_API_TOKEN"

# Every operation targets the v3 platform REST API
API_BASE_PATH: Final[str] = "/rest/api/3"

JSON_MEDIA_TYPE: Final[str] = "application/json"

# Methods that send a JSON body
WRITE_METHODS: Final[frozenset[str]] = frozenset({"POST", "PUT"})

# Body text Jira returns when deleting a parent issue without deleteSubtasks
SUBTASK_CONFLICT_MARKER: Final[str] = (
    "Cannot delete an issue that has subtasks without specifying deleteSubtasks=true"
)

# Sentinel accountId that assigns an issue to the project's default assignee
DEFAULT_ASSIGNEE_ACCOUNT_ID: Final[str] = "-1"

DEFAULT_START_AT: Final[int] = 0
DEFAULT_MAX_RESULTS: Final[int] = 50
