"""Catalog of the Jira Cloud REST operations exposed as tools."""

from collections.abc import Mapping
from typing import Any

from ..exceptions import MCPJiraInvalidInputError
from .adf import parse_adf_json, text_to_adf
from .constants import DEFAULT_ASSIGNEE_ACCOUNT_ID, SUBTASK_CONFLICT_MARKER
from .operation import ErrorHint, OperationDescriptor, QueryParam, SuccessRenderer
from .response import pretty_json

PAGINATION = (
    QueryParam("startAt", "startAt"),
    QueryParam("maxResults", "maxResults"),
)

EMAIL_PERMISSION_NOTE = (
    "Note: this may be due to permission restrictions. The email APIs are only "
    "available to apps with the required access, and users can hide their "
    "email address through their profile visibility settings."
)


# Body shapers


def _create_issue_body(params: Mapping[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "project": {"key": params["projectKey"]},
        "summary": params["summary"],
        "issuetype": {"name": params["issueType"]},
    }
    description = params.get("description")
    if description:
        fields["description"] = parse_adf_json(description)
    return {"fields": fields}


def _edit_issue_body(params: Mapping[str, Any]) -> dict[str, Any]:
    return {"fields": params["fieldsToUpdate"]}


def _assign_issue_body(params: Mapping[str, Any]) -> dict[str, Any]:
    return {"accountId": params["accountId"]}


def _transition_body(params: Mapping[str, Any]) -> dict[str, Any]:
    return {"transition": {"id": params["transitionId"]}}


def _comment_body(params: Mapping[str, Any]) -> dict[str, Any]:
    return {"body": text_to_adf(params["comment"])}


# Validators


def _require_usernames_or_keys(params: Mapping[str, Any]) -> None:
    if not params.get("usernames") and not params.get("keys"):
        raise MCPJiraInvalidInputError(
            "Invalid input: at least one of 'usernames' or 'keys' must be provided "
            "and non-empty."
        )


# Success renderers


def _created_issue(params: Mapping[str, Any], data: Any) -> str:
    if not isinstance(data, dict):
        return f"Successfully created issue. Response: {pretty_json(data)}"
    return f"Successfully created issue {data.get('key')}. URL: {data.get('self')}"


def _issue_updated(params: Mapping[str, Any], data: Any) -> str:
    return (
        f"Issue {params['issueIdOrKey']} in domain {params['domain']} "
        "was successfully updated."
    )


def _subtasks_suffix(params: Mapping[str, Any]) -> str:
    return " Subtasks were also deleted." if params.get("deleteSubtasks") else ""


def _issue_deleted(params: Mapping[str, Any], data: Any) -> str:
    return (
        f"Issue {params['issueIdOrKey']} in domain {params['domain']} "
        f"was successfully deleted.{_subtasks_suffix(params)}"
    )


def _issue_assigned(params: Mapping[str, Any], data: Any) -> str:
    prefix = f"Issue {params['issueIdOrKey']} in domain {params['domain']} was successfully"
    account_id = params.get("accountId")
    if account_id is None:
        return f"{prefix} unassigned."
    if account_id == DEFAULT_ASSIGNEE_ACCOUNT_ID:
        return f"{prefix} assigned to the default user."
    return f"{prefix} assigned to user {account_id}."


def _issue_transitioned(params: Mapping[str, Any], data: Any) -> str:
    return (
        f"Transitioned issue {params['issueKey']} to transition ID "
        f"{params['transitionId']} in workspace {params['domain']}"
    )


def _comment_added(params: Mapping[str, Any], data: Any) -> str:
    return f"Added comment to issue {params['issueKey']} in domain {params['domain']}"


def _comment_deleted(params: Mapping[str, Any], data: Any) -> str:
    return (
        f"Comment {params['commentId']} was successfully deleted from issue "
        f"{params['issueKey']} in domain {params['domain']}."
    )


def _prefixed(template: str) -> SuccessRenderer:
    """Renderer embedding the pretty-printed payload after a sentence."""

    def render(params: Mapping[str, Any], data: Any) -> str:
        return f"{template.format(**params)}: {pretty_json(data)}"

    return render


# Unexpected 2xx renderers


def _with_response(message: str, body: str) -> str:
    return f"{message} Response: {body}" if body else message


def _issue_updated_unexpected(params: Mapping[str, Any], status: int, body: str) -> str:
    return _with_response(
        f"Issue {params['issueIdOrKey']} in domain {params['domain']} updated. "
        f"Status: {status}.",
        body,
    )


def _issue_deleted_unexpected(params: Mapping[str, Any], status: int, body: str) -> str:
    return _with_response(
        f"Issue {params['issueIdOrKey']} in domain {params['domain']} deleted. "
        f"Status: {status}.{_subtasks_suffix(params)}",
        body,
    )


def _assignment_unexpected(params: Mapping[str, Any], status: int, body: str) -> str:
    return _with_response(
        f"Issue {params['issueIdOrKey']} assignment updated in domain "
        f"{params['domain']}. Status: {status}.",
        body,
    )


# Issues

CREATE_ISSUE = OperationDescriptor(
    name="createIssue",
    method="POST",
    path="issue",
    action="creating issue",
    subject="created issue",
    body=_create_issue_body,
    expected_status=201,
    render_success=_created_issue,
)

EDIT_ISSUE = OperationDescriptor(
    name="editIssue",
    method="PUT",
    path="issue/{issueIdOrKey}",
    action="editing issue {issueIdOrKey}",
    subject="issue {issueIdOrKey}",
    body=_edit_issue_body,
    expected_status=204,
    json_response=False,
    render_success=_issue_updated,
    render_unexpected=_issue_updated_unexpected,
)

DELETE_ISSUE = OperationDescriptor(
    name="deleteIssue",
    method="DELETE",
    path="issue/{issueIdOrKey}",
    action="deleting issue {issueIdOrKey}",
    subject="issue {issueIdOrKey}",
    query=(QueryParam("deleteSubtasks", "deleteSubtasks"),),
    expected_status=204,
    json_response=False,
    render_success=_issue_deleted,
    render_unexpected=_issue_deleted_unexpected,
    error_hints=(
        ErrorHint(
            status_code=400,
            body_marker=SUBTASK_CONFLICT_MARKER,
            message=(
                "Error deleting issue {issueIdOrKey}: This issue has subtasks. "
                "To delete it, set the 'deleteSubtasks' parameter to true."
            ),
            replace=True,
            unless_arg="deleteSubtasks",
        ),
    ),
)

ASSIGN_ISSUE = OperationDescriptor(
    name="assignIssue",
    method="PUT",
    path="issue/{issueIdOrKey}/assignee",
    action="assigning issue {issueIdOrKey}",
    subject="assignment of issue {issueIdOrKey}",
    body=_assign_issue_body,
    expected_status=204,
    json_response=False,
    render_success=_issue_assigned,
    render_unexpected=_assignment_unexpected,
)

GET_ISSUE = OperationDescriptor(
    name="getIssue",
    method="GET",
    path="issue/{issueKey}",
    action="retrieving issue {issueKey}",
    subject="issue {issueKey}",
    render_success=_prefixed("The details for an issue from domain {domain}"),
)

# Transitions

GET_TRANSITIONS = OperationDescriptor(
    name="getTransitions",
    method="GET",
    path="issue/{issue}/transitions",
    action="retrieving transitions for issue {issue}",
    subject="transitions of issue {issue}",
    render_success=_prefixed("Issues for the workspace {domain}"),
)

POST_TRANSITION_ISSUE = OperationDescriptor(
    name="postTransitionIssue",
    method="POST",
    path="issue/{issueKey}/transitions",
    action="transitioning issue {issueKey}",
    subject="transition of issue {issueKey}",
    body=_transition_body,
    expected_status=204,
    json_response=False,
    render_success=_issue_transitioned,
)

# Comments

ADD_COMMENT = OperationDescriptor(
    name="add_comment",
    method="POST",
    path="issue/{issueKey}/comment",
    action="adding comment to issue {issueKey}",
    subject="new comment on issue {issueKey}",
    body=_comment_body,
    expected_status=201,
    json_response=False,
    render_success=_comment_added,
)

GET_COMMENTS = OperationDescriptor(
    name="get_comments",
    method="GET",
    path="issue/{issueKey}/comment",
    action="retrieving comments for issue {issueKey}",
    subject="comments of issue {issueKey}",
    render_success=_prefixed("All comments for an issue {domain}"),
)

DELETE_COMMENT = OperationDescriptor(
    name="delete_comment",
    method="DELETE",
    path="issue/{issueKey}/comment/{commentId}",
    action="deleting comment {commentId} from issue {issueKey}",
    subject="comment {commentId} of issue {issueKey}",
    expected_status=204,
    json_response=False,
    render_success=_comment_deleted,
)

# Users and groups

GET_USER = OperationDescriptor(
    name="getUser",
    method="GET",
    path="user",
    action="retrieving user {accountId}",
    subject="user {accountId}",
    query=(QueryParam("accountId", "accountId"), QueryParam("expand", "expand")),
)

FIND_USERS = OperationDescriptor(
    name="findUsers",
    method="GET",
    path="user/search",
    action="finding users",
    subject="user search",
    query=(QueryParam("query", "query"),),
)

GET_USER_GROUPS = OperationDescriptor(
    name="getUserGroups",
    method="GET",
    path="user/groups",
    action="retrieving groups for user {accountId}",
    subject="user groups",
    query=(QueryParam("accountId", "accountId"),),
)

GET_ALL_USERS = OperationDescriptor(
    name="getAllUsers",
    method="GET",
    path="users/search",
    action="retrieving all users",
    subject="all users",
    query=PAGINATION,
)

GET_USERS_BULK = OperationDescriptor(
    name="getUsersBulk",
    method="GET",
    path="user/bulk",
    action="retrieving users in bulk",
    subject="bulk user retrieval",
    query=(QueryParam("accountId", "accountIds", multi=True), *PAGINATION),
)

GET_USER_EMAIL = OperationDescriptor(
    name="getUserEmail",
    method="GET",
    path="user/email",
    action="retrieving email for user {accountId}",
    subject="user email",
    query=(QueryParam("accountId", "accountId"),),
    error_hints=(ErrorHint(status_code=403, message=EMAIL_PERMISSION_NOTE),),
)

GET_USER_EMAIL_BULK = OperationDescriptor(
    name="getUserEmailBulk",
    method="GET",
    path="user/email/bulk",
    action="retrieving emails in bulk",
    subject="bulk user emails",
    query=(QueryParam("accountId", "accountIds", multi=True),),
    error_hints=(ErrorHint(status_code=403, message=EMAIL_PERMISSION_NOTE),),
)

GET_ACCOUNT_IDS_FOR_USERS = OperationDescriptor(
    name="getAccountIdsForUsers",
    method="GET",
    path="user/bulk/migration",
    action="retrieving account IDs for users",
    subject="account IDs",
    query=(
        QueryParam("username", "usernames", multi=True),
        QueryParam("key", "keys", multi=True),
        *PAGINATION,
    ),
    validate=_require_usernames_or_keys,
)

# Dashboards

GET_DASHBOARD = OperationDescriptor(
    name="get_dashboard",
    method="GET",
    path="dashboard",
    action="retrieving dashboards",
    subject="dashboards",
)

OPERATIONS: dict[str, OperationDescriptor] = {
    descriptor.name: descriptor
    for descriptor in (
        CREATE_ISSUE,
        EDIT_ISSUE,
        DELETE_ISSUE,
        ASSIGN_ISSUE,
        GET_ISSUE,
        GET_TRANSITIONS,
        POST_TRANSITION_ISSUE,
        ADD_COMMENT,
        GET_COMMENTS,
        DELETE_COMMENT,
        GET_USER,
        FIND_USERS,
        GET_USER_GROUPS,
        GET_ALL_USERS,
        GET_USERS_BULK,
        GET_USER_EMAIL,
        GET_USER_EMAIL_BULK,
        GET_ACCOUNT_IDS_FOR_USERS,
        GET_DASHBOARD,
    )
}
