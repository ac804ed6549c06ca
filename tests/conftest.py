"""Shared fixtures for the MCP Jira test suite."""

import json
from typing import Any

import httpx
import pytest

from mcp_jira_cloud.jira.client import JiraRestClient
from mcp_jira_cloud.jira.config import JiraCredentials

TEST_DOMAIN = "test.atlassian.net"


class FakeJira:
    """Records outbound requests and answers them with queued responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response | Exception] = []
        self.transport = httpx.MockTransport(self._handle)

    def respond(
        self,
        status_code: int,
        *,
        json_body: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        if json_body is not None:
            response = httpx.Response(status_code, json=json_body, headers=headers)
        elif text is not None:
            response = httpx.Response(status_code, text=text, headers=headers)
        else:
            response = httpx.Response(status_code, headers=headers)
        self._responses.append(response)

    def fail(self, error: Exception) -> None:
        self._responses.append(error)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json_body(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def credentials() -> JiraCredentials:
    return JiraCredentials(email="test@example.com", api_token="test_token")


@pytest.fixture
def fake_jira() -> FakeJira:
    return FakeJira()


@pytest.fixture
def jira_client(credentials, fake_jira) -> JiraRestClient:
    return JiraRestClient(credentials, transport=fake_jira.transport)
