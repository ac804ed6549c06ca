"""Jira tool definitions registered on a FastMCP server."""

import logging
from collections.abc import Awaitable, Callable
from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field

from mcp_jira_cloud.jira import operations
from mcp_jira_cloud.jira.client import JiraRestClient
from mcp_jira_cloud.jira.constants import DEFAULT_MAX_RESULTS, DEFAULT_START_AT
from mcp_jira_cloud.jira.operation import OperationDescriptor
from mcp_jira_cloud.utils.tools import should_include_tool

logger = logging.getLogger("mcp-jira-cloud.server.jira")

ToolFunc = Callable[..., Awaitable[str]]

Domain = Annotated[
    str,
    Field(description="The domain of the Jira instance (e.g., 'your-domain.atlassian.net')"),
]
IssueKey = Annotated[str, Field(description="The issue key (e.g., 'PROJ-123')")]
IssueIdOrKey = Annotated[
    str, Field(description="The ID or key of the issue (e.g., 'PROJ-123' or '10001')")
]
AccountId = Annotated[str, Field(description="The account ID of the user")]
AccountIds = Annotated[
    list[str], Field(description="List of user account IDs, in the order to send them")
]
StartAt = Annotated[
    int, Field(description="Index of the first item to return (0-based)")
]
MaxResults = Annotated[int, Field(description="Maximum number of items to return")]


def register_jira_tools(
    mcp: FastMCP,
    client: JiraRestClient,
    read_only: bool = False,
    enabled_tools: list[str] | None = None,
) -> list[str]:
    """Register every Jira tool on the given server.

    Each tool is a thin handler over one catalog operation; argument schemas
    come from the pydantic annotations, and FastMCP rejects invocations that
    do not match them.

    Args:
        mcp: The FastMCP server to register tools on
        client: Client used by every tool handler
        read_only: Skip tools that modify Jira
        enabled_tools: If given, only register tools with these names

    Returns:
        Names of the registered tools, in registration order
    """
    registered: list[str] = []

    def jira_tool(
        descriptor: OperationDescriptor, title: str
    ) -> Callable[[ToolFunc], ToolFunc]:
        def decorator(func: ToolFunc) -> ToolFunc:
            if not should_include_tool(descriptor.name, enabled_tools):
                logger.debug(f"Skipping tool '{descriptor.name}' (not enabled)")
                return func
            if read_only and not descriptor.read_only:
                logger.debug(f"Skipping tool '{descriptor.name}' in read-only mode")
                return func

            annotations: dict[str, Any] = {
                "title": title,
                "readOnlyHint": descriptor.read_only,
            }
            if descriptor.method == "DELETE":
                annotations["destructiveHint"] = True
            mcp.tool(
                name=descriptor.name,
                tags={"jira", "read" if descriptor.read_only else "write"},
                annotations=annotations,
            )(func)
            registered.append(descriptor.name)
            return func

        return decorator

    @jira_tool(operations.CREATE_ISSUE, "Create Issue")
    async def create_issue(
        domain: Domain,
        projectKey: Annotated[str, Field(description="The key of the project")],
        summary: Annotated[str, Field(description="The summary/title of the issue")],
        issueType: Annotated[
            str, Field(description="The name of the issue type (e.g., 'Bug', 'Task')")
        ],
        description: Annotated[
            str | None,
            Field(
                description=(
                    "(Optional) The detailed description of the issue, as a JSON "
                    "string in Atlassian Document Format (ADF)"
                )
            ),
        ] = None,
    ) -> str:
        """Creates a new issue in Jira."""
        return await client.invoke(
            operations.CREATE_ISSUE,
            domain=domain,
            projectKey=projectKey,
            summary=summary,
            description=description,
            issueType=issueType,
        )

    @jira_tool(operations.EDIT_ISSUE, "Edit Issue")
    async def edit_issue(
        domain: Domain,
        issueIdOrKey: IssueIdOrKey,
        fieldsToUpdate: Annotated[
            dict[str, Any],
            Field(
                description=(
                    "A JSON object containing the fields to update. For example: "
                    '{"summary": "New summary", "description": {"type": "doc", '
                    '"version": 1, "content": [{"type": "paragraph", "content": '
                    '[{"type": "text", "text": "New description."}]}]}}'
                )
            ),
        ],
    ) -> str:
        """Edits an existing issue in Jira.

        For the 'description' field, use Atlassian Document Format (ADF).
        """
        return await client.invoke(
            operations.EDIT_ISSUE,
            domain=domain,
            issueIdOrKey=issueIdOrKey,
            fieldsToUpdate=fieldsToUpdate,
        )

    @jira_tool(operations.DELETE_ISSUE, "Delete Issue")
    async def delete_issue(
        domain: Domain,
        issueIdOrKey: IssueIdOrKey,
        deleteSubtasks: Annotated[
            bool,
            Field(
                description="If true, subtasks of the issue will also be deleted. Defaults to false."
            ),
        ] = False,
    ) -> str:
        """Deletes an issue from Jira. Optionally, subtasks can also be deleted."""
        return await client.invoke(
            operations.DELETE_ISSUE,
            domain=domain,
            issueIdOrKey=issueIdOrKey,
            deleteSubtasks=deleteSubtasks,
        )

    @jira_tool(operations.ASSIGN_ISSUE, "Assign Issue")
    async def assign_issue(
        domain: Domain,
        issueIdOrKey: IssueIdOrKey,
        accountId: Annotated[
            str | None,
            Field(
                description=(
                    "The account ID of the user to assign the issue to. Use null to "
                    "unassign the issue. Use '-1' to assign to the default user."
                )
            ),
        ],
    ) -> str:
        """Assigns or unassigns an issue to a user in Jira. Use null for accountId to unassign."""
        return await client.invoke(
            operations.ASSIGN_ISSUE,
            domain=domain,
            issueIdOrKey=issueIdOrKey,
            accountId=accountId,
        )

    @jira_tool(operations.GET_ISSUE, "Get Issue")
    async def get_issue(domain: Domain, issueKey: IssueKey) -> str:
        """Returns the details for an issue."""
        return await client.invoke(
            operations.GET_ISSUE, domain=domain, issueKey=issueKey
        )

    @jira_tool(operations.GET_TRANSITIONS, "Get Transitions")
    async def get_transitions(
        domain: Domain,
        issue: Annotated[str, Field(description="The issue key")],
    ) -> str:
        """Returns either all transitions or a transition that can be performed by the user on an issue, based on the issue's status."""
        return await client.invoke(
            operations.GET_TRANSITIONS, domain=domain, issue=issue
        )

    @jira_tool(operations.POST_TRANSITION_ISSUE, "Transition Issue")
    async def post_transition_issue(
        domain: Domain,
        issueKey: IssueKey,
        transitionId: Annotated[str, Field(description="The transition ID")],
    ) -> str:
        """Performs an issue transition and, if the transition has a screen, updates the fields from the transition screen."""
        return await client.invoke(
            operations.POST_TRANSITION_ISSUE,
            domain=domain,
            issueKey=issueKey,
            transitionId=transitionId,
        )

    @jira_tool(operations.ADD_COMMENT, "Add Comment")
    async def add_comment(
        domain: Domain,
        issueKey: IssueKey,
        comment: Annotated[str, Field(description="The comment to add")],
    ) -> str:
        """Adds a comment to an issue."""
        return await client.invoke(
            operations.ADD_COMMENT, domain=domain, issueKey=issueKey, comment=comment
        )

    @jira_tool(operations.GET_COMMENTS, "Get Comments")
    async def get_comments(domain: Domain, issueKey: IssueKey) -> str:
        """Returns all comments for an issue."""
        return await client.invoke(
            operations.GET_COMMENTS, domain=domain, issueKey=issueKey
        )

    @jira_tool(operations.DELETE_COMMENT, "Delete Comment")
    async def delete_comment(
        domain: Domain,
        issueKey: IssueKey,
        commentId: Annotated[str, Field(description="The ID of the comment to delete")],
    ) -> str:
        """Deletes a comment from an issue."""
        return await client.invoke(
            operations.DELETE_COMMENT,
            domain=domain,
            issueKey=issueKey,
            commentId=commentId,
        )

    @jira_tool(operations.GET_USER, "Get User")
    async def get_user(
        domain: Domain,
        accountId: AccountId,
        expand: Annotated[
            str | None,
            Field(
                description="(Optional) Comma-separated list of properties to expand (e.g., 'groups,applicationRoles')"
            ),
        ] = None,
    ) -> str:
        """Returns a user's details."""
        return await client.invoke(
            operations.GET_USER, domain=domain, accountId=accountId, expand=expand
        )

    @jira_tool(operations.FIND_USERS, "Find Users")
    async def find_users(
        domain: Domain,
        query: Annotated[
            str,
            Field(
                description="A query string matched against user attributes such as displayName and emailAddress"
            ),
        ],
    ) -> str:
        """Returns a list of users that match the search string."""
        return await client.invoke(operations.FIND_USERS, domain=domain, query=query)

    @jira_tool(operations.GET_USER_GROUPS, "Get User Groups")
    async def get_user_groups(domain: Domain, accountId: AccountId) -> str:
        """Returns the groups to which a user belongs."""
        return await client.invoke(
            operations.GET_USER_GROUPS, domain=domain, accountId=accountId
        )

    @jira_tool(operations.GET_ALL_USERS, "Get All Users")
    async def get_all_users(
        domain: Domain,
        startAt: StartAt = DEFAULT_START_AT,
        maxResults: MaxResults = DEFAULT_MAX_RESULTS,
    ) -> str:
        """Returns a list of all users, including active users, inactive users and previously deleted users."""
        return await client.invoke(
            operations.GET_ALL_USERS,
            domain=domain,
            startAt=startAt,
            maxResults=maxResults,
        )

    @jira_tool(operations.GET_USERS_BULK, "Get Users In Bulk")
    async def get_users_bulk(
        domain: Domain,
        accountIds: AccountIds,
        startAt: StartAt = DEFAULT_START_AT,
        maxResults: MaxResults = DEFAULT_MAX_RESULTS,
    ) -> str:
        """Returns a paginated list of the users specified by one or more account IDs."""
        return await client.invoke(
            operations.GET_USERS_BULK,
            domain=domain,
            accountIds=accountIds,
            startAt=startAt,
            maxResults=maxResults,
        )

    @jira_tool(operations.GET_USER_EMAIL, "Get User Email")
    async def get_user_email(domain: Domain, accountId: AccountId) -> str:
        """Returns a user's email address, if the caller is permitted to see it."""
        return await client.invoke(
            operations.GET_USER_EMAIL, domain=domain, accountId=accountId
        )

    @jira_tool(operations.GET_USER_EMAIL_BULK, "Get User Emails In Bulk")
    async def get_user_email_bulk(domain: Domain, accountIds: AccountIds) -> str:
        """Returns the email addresses of several users, if the caller is permitted to see them."""
        return await client.invoke(
            operations.GET_USER_EMAIL_BULK, domain=domain, accountIds=accountIds
        )

    @jira_tool(operations.GET_ACCOUNT_IDS_FOR_USERS, "Get Account IDs For Users")
    async def get_account_ids_for_users(
        domain: Domain,
        usernames: Annotated[
            list[str] | None,
            Field(description="(Optional) Usernames of the users to look up"),
        ] = None,
        keys: Annotated[
            list[str] | None,
            Field(description="(Optional) Keys of the users to look up"),
        ] = None,
        startAt: StartAt = DEFAULT_START_AT,
        maxResults: MaxResults = DEFAULT_MAX_RESULTS,
    ) -> str:
        """Returns the account IDs for the users specified by username or key.

        At least one of usernames or keys must be provided and non-empty.
        """
        return await client.invoke(
            operations.GET_ACCOUNT_IDS_FOR_USERS,
            domain=domain,
            usernames=usernames,
            keys=keys,
            startAt=startAt,
            maxResults=maxResults,
        )

    @jira_tool(operations.GET_DASHBOARD, "Get Dashboards")
    async def get_dashboard(domain: Domain) -> str:
        """Returns a list of dashboards owned by or shared with the user."""
        return await client.invoke(operations.GET_DASHBOARD, domain=domain)

    logger.info(f"Registered {len(registered)} Jira tools: {registered}")
    return registered
