"""Jira Cloud REST client: one request per operation, normalized to text."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..exceptions import MCPJiraInvalidInputError
from ..logging_config import log_operation
from .config import JiraCredentials
from .operation import OperationDescriptor
from .request import PreparedRequest, build_request
from .response import (
    HttpFailure,
    InvalidInput,
    Outcome,
    RemoteResponse,
    TransportFailure,
    normalize_response,
    render_outcome,
)

logger = logging.getLogger("mcp-jira-cloud.jira.client")


class JiraRestClient:
    """Runs catalog operations against a Jira Cloud site.

    The client holds only the read-only credentials. Each call opens its own
    HTTP client, sends one request (following redirects) and closes it again.
    """

    def __init__(
        self,
        credentials: JiraCredentials,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            credentials: Credentials for the Authorization header
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.credentials = credentials
        self._transport = transport

    async def _send(
        self, descriptor: OperationDescriptor, request: PreparedRequest
    ) -> Outcome:
        async with httpx.AsyncClient(
            transport=self._transport, follow_redirects=True
        ) as http:
            http_request = http.build_request(
                request.method,
                request.url,
                headers=dict(request.headers),
                content=request.content,
            )
            response = await http.send(http_request, stream=True)
            try:
                return await normalize_response(
                    descriptor, RemoteResponse.from_httpx(response)
                )
            finally:
                await response.aclose()

    async def execute(
        self, descriptor: OperationDescriptor, params: Mapping[str, Any]
    ) -> Outcome:
        """Build, send and classify one operation.

        Args:
            descriptor: The operation to run
            params: Tool arguments

        Returns:
            The structured Outcome of the call
        """
        try:
            request = build_request(descriptor, params, self.credentials)
        except MCPJiraInvalidInputError as e:
            logger.warning(f"{descriptor.name}: invalid input, request not sent: {e}")
            return InvalidInput(message=str(e))

        logger.debug(f"Sending {request.method} request to {request.url}")
        try:
            outcome = await self._send(descriptor, request)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Request error for {request.url}: {e!r}")
            return TransportFailure(error=str(e) or type(e).__name__)

        if isinstance(outcome, HttpFailure):
            log = logger.error if outcome.is_server_error else logger.warning
            log(
                f"Error {descriptor.describe_action(params)}: "
                f"{outcome.status_code} {outcome.status_text} {outcome.body}"
            )
        return outcome

    async def invoke(self, descriptor: OperationDescriptor, **params: Any) -> str:
        """Run an operation and render its outcome as the tool's text result."""
        with log_operation(logger, descriptor.name, domain=params.get("domain")):
            outcome = await self.execute(descriptor, params)
            return render_outcome(descriptor, params, outcome)
