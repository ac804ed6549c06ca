"""Static description of a single Jira REST operation."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

Params = Mapping[str, Any]
BodyShaper = Callable[[Params], Any]
Validator = Callable[[Params], None]
# (params, decoded JSON or None for no-content responses) -> text
SuccessRenderer = Callable[[Params, Any], str]
# (params, status code, raw body text) -> text
UnexpectedStatusRenderer = Callable[[Params, int, str], str]


@dataclass(frozen=True)
class QueryParam:
    """Maps a tool argument onto a query-string key.

    Multivalued parameters are sent as repeated keys in input order.
    """

    key: str
    arg: str
    multi: bool = False


@dataclass(frozen=True)
class ErrorHint:
    """Operation-specific wording for a particular failed response.

    The hint applies when the status matches and, if `body_marker` is set,
    the error body contains it. A replacing hint substitutes the whole
    message; otherwise the hint is appended to the generic error text.
    The hint is skipped when the argument named by `unless_arg` is truthy.
    """

    status_code: int
    message: str
    body_marker: str | None = None
    replace: bool = False
    unless_arg: str | None = None

    def matches(self, status_code: int, body: str, params: Params) -> bool:
        if status_code != self.status_code:
            return False
        if self.body_marker is not None and self.body_marker not in body:
            return False
        return not (self.unless_arg and params.get(self.unless_arg))


@dataclass(frozen=True)
class OperationDescriptor:
    """Everything needed to call one endpoint and describe its outcome.

    `path`, `action`, `subject` and hint messages are str.format templates
    filled from the tool arguments. `action` reads as a gerund phrase
    ("retrieving user {accountId}") and `subject` as a noun phrase
    ("user {accountId}").
    """

    name: str
    method: HttpMethod
    path: str
    action: str
    subject: str
    query: tuple[QueryParam, ...] = ()
    body: BodyShaper | None = None
    validate: Validator | None = None
    expected_status: int = 200
    json_response: bool = True
    render_success: SuccessRenderer | None = None
    render_unexpected: UnexpectedStatusRenderer | None = None
    error_hints: tuple[ErrorHint, ...] = ()

    @property
    def read_only(self) -> bool:
        return self.method == "GET"

    def describe_action(self, params: Params) -> str:
        return self.action.format(**params)

    def describe_subject(self, params: Params) -> str:
        return self.subject.format(**params)

    def resource_path(self, params: Params) -> str:
        return self.path.format(**params)
