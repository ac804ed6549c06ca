"""Request construction for Jira REST operations."""

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from .config import JiraCredentials
from .constants import API_BASE_PATH, JSON_MEDIA_TYPE, WRITE_METHODS
from .operation import OperationDescriptor, QueryParam


@dataclass(frozen=True)
class PreparedRequest:
    """A fully built outbound request."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    json_body: Any = None

    @property
    def content(self) -> bytes | None:
        """Serialized JSON body for write methods, None otherwise."""
        if self.method not in WRITE_METHODS:
            return None
        return json.dumps(self.json_body).encode("utf-8")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(
    query: Iterable[QueryParam], params: Mapping[str, Any]
) -> list[tuple[str, str]]:
    """Resolve the query spec against the tool arguments.

    None values are dropped and boolean flags are only sent when set.

    Args:
        query: Ordered query parameter spec
        params: Tool arguments

    Returns:
        (key, value) pairs in declaration order, repeated keys for multivalued
        parameters
    """
    pairs: list[tuple[str, str]] = []
    for param in query:
        value = params.get(param.arg)
        if value is None or value is False:
            continue
        if param.multi:
            pairs.extend((param.key, _query_value(item)) for item in value)
        else:
            pairs.append((param.key, _query_value(value)))
    return pairs


def build_url(domain: str, path: str, query: list[tuple[str, str]] | None = None) -> str:
    """Build https://{domain}/rest/api/3/{path}[?query].

    Path segments are used verbatim.
    """
    url = f"https://{domain}{API_BASE_PATH}/{path}"
    if query:
        url = f"{url}?{urlencode(query)}"
    return url


def build_headers(credentials: JiraCredentials, method: str) -> dict[str, str]:
    """Authorization and Accept on every call, Content-Type for POST/PUT."""
    headers = {
        "Authorization": credentials.authorization_header,
        "Accept": JSON_MEDIA_TYPE,
    }
    if method in WRITE_METHODS:
        headers["Content-Type"] = JSON_MEDIA_TYPE
    return headers


def build_request(
    descriptor: OperationDescriptor,
    params: Mapping[str, Any],
    credentials: JiraCredentials,
) -> PreparedRequest:
    """Build the outbound request for one operation.

    Args:
        descriptor: The operation being invoked
        params: Tool arguments (must include `domain`)
        credentials: Credentials used for the Authorization header

    Returns:
        PreparedRequest ready to be sent

    Raises:
        MCPJiraInvalidInputError: If local validation or body shaping rejects
            the arguments
    """
    if descriptor.validate is not None:
        descriptor.validate(params)

    json_body = descriptor.body(params) if descriptor.body is not None else None
    url = build_url(
        params["domain"],
        descriptor.resource_path(params),
        encode_query(descriptor.query, params),
    )
    return PreparedRequest(
        method=descriptor.method,
        url=url,
        headers=build_headers(credentials, descriptor.method),
        json_body=json_body,
    )
