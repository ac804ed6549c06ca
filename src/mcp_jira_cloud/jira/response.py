"""Normalization of Jira HTTP responses into text results.

A response is first classified into an `Outcome` variant and only then
rendered to text, so callers and tests can inspect the structured result.
"""

import json
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from .operation import OperationDescriptor


class RemoteResponse:
    """An HTTP response whose body is read at most once.

    The raw bytes are captured on first access; the text and JSON views are
    both derived from that capture.
    """

    def __init__(
        self,
        status_code: int,
        status_text: str,
        read_body: Callable[[], Awaitable[bytes]],
        encoding: str = "utf-8",
    ) -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.encoding = encoding
        self._read_body: Callable[[], Awaitable[bytes]] | None = read_body
        self._body: bytes | None = None

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "RemoteResponse":
        return cls(
            status_code=response.status_code,
            status_text=response.reason_phrase,
            read_body=response.aread,
            encoding=response.charset_encoding or "utf-8",
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    async def body(self) -> bytes:
        if self._read_body is not None:
            read_body, self._read_body = self._read_body, None
            self._body = await read_body()
        return self._body or b""

    async def text(self) -> str:
        """Body as text; never raises on undecodable content."""
        raw = await self.body()
        try:
            return raw.decode(self.encoding, errors="replace")
        except LookupError:
            return raw.decode("utf-8", errors="replace")

    async def json(self) -> Any:
        """Body as JSON.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON
        """
        return json.loads(await self.text())


@dataclass(frozen=True)
class JsonPayload:
    """Expected success status with a decoded JSON body."""

    status_code: int
    data: Any


@dataclass(frozen=True)
class NoContent:
    """Expected success status for an operation that returns no body."""

    status_code: int


@dataclass(frozen=True)
class UnexpectedStatus:
    """A 2xx status other than the one the operation expects."""

    status_code: int
    body: str


@dataclass(frozen=True)
class HttpFailure:
    """Non-2xx response."""

    status_code: int
    status_text: str
    body: str

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500


@dataclass(frozen=True)
class DecodeFailure:
    """Expected success status, but the body was not valid JSON."""

    status_code: int
    error: str
    raw: str


@dataclass(frozen=True)
class InvalidInput:
    """Arguments rejected locally; no request was sent."""

    message: str


@dataclass(frozen=True)
class TransportFailure:
    """The request never produced an HTTP response."""

    error: str


Outcome = (
    JsonPayload
    | NoContent
    | UnexpectedStatus
    | HttpFailure
    | DecodeFailure
    | InvalidInput
    | TransportFailure
)


def pretty_json(data: Any) -> str:
    """Serialize with two-space indentation, leaving non-ASCII text as is."""
    return json.dumps(data, indent=2, ensure_ascii=False)


async def normalize_response(
    descriptor: OperationDescriptor, response: RemoteResponse
) -> Outcome:
    """Classify a response for the given operation.

    Args:
        descriptor: The operation that produced the response
        response: The captured response

    Returns:
        The Outcome variant for this response
    """
    if not response.ok:
        return HttpFailure(
            status_code=response.status_code,
            status_text=response.status_text,
            body=await response.text(),
        )

    if response.status_code != descriptor.expected_status:
        return UnexpectedStatus(
            status_code=response.status_code, body=await response.text()
        )

    if not descriptor.json_response:
        return NoContent(status_code=response.status_code)

    try:
        data = await response.json()
    except ValueError as e:
        return DecodeFailure(
            status_code=response.status_code,
            error=str(e),
            raw=await response.text(),
        )
    return JsonPayload(status_code=response.status_code, data=data)


def _render_http_failure(
    descriptor: OperationDescriptor,
    params: Mapping[str, Any],
    outcome: HttpFailure,
) -> str:
    hints = [
        hint
        for hint in descriptor.error_hints
        if hint.matches(outcome.status_code, outcome.body, params)
    ]
    for hint in hints:
        if hint.replace:
            return hint.message.format(**params)

    message = (
        f"Error {descriptor.describe_action(params)}: {outcome.status_text}. "
        f"Status: {outcome.status_code}."
    )
    if outcome.body:
        message += f" Details: {outcome.body}"
    for hint in hints:
        message += f" {hint.message.format(**params)}"
    return message


def render_outcome(
    descriptor: OperationDescriptor,
    params: Mapping[str, Any],
    outcome: Outcome,
) -> str:
    """Render an Outcome as the text returned to the MCP client."""
    match outcome:
        case InvalidInput(message=message):
            return message
        case TransportFailure(error=error):
            return f"Error {descriptor.describe_action(params)}: {error}"
        case HttpFailure():
            return _render_http_failure(descriptor, params, outcome)
        case DecodeFailure(error=error, raw=raw):
            return (
                f"Error parsing JSON response for {descriptor.describe_subject(params)}. "
                f"Details: {error}. Raw response: {raw}"
            )
        case UnexpectedStatus(status_code=status_code, body=body):
            if descriptor.render_unexpected is not None:
                return descriptor.render_unexpected(params, status_code, body)
            message = (
                f"Request for {descriptor.describe_subject(params)} completed "
                f"with status {status_code}."
            )
            if body:
                message += f" Response: {body}"
            return message
        case NoContent():
            if descriptor.render_success is None:
                return f"Request for {descriptor.describe_subject(params)} succeeded."
            return descriptor.render_success(params, None)
        case JsonPayload(data=data):
            if descriptor.render_success is None:
                return pretty_json(data)
            return descriptor.render_success(params, data)
    raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")
