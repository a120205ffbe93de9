"""HTTP client for Entur Journey Planner GraphQL requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from entur_departures.adapters.api_request_logger import log_api_request
from entur_departures.adapters.entur_api.constants import ENTUR_GRAPHQL_URL
from entur_departures.domain.exceptions import FetchError

if TYPE_CHECKING:
    from aiohttp import ClientSession

logger = logging.getLogger(__name__)


class EnturGraphQLClient:
    """Posts GraphQL queries to the Entur Journey Planner."""

    def __init__(
        self,
        session: ClientSession,
        client_name: str,
        timeout_seconds: float = 10.0,
        url: str = ENTUR_GRAPHQL_URL,
    ) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session.
            client_name: Value of the ET-Client-Name header Entur requires.
            timeout_seconds: Total timeout of one request.
            url: GraphQL endpoint.
        """
        self._session = session
        self._url = url
        self._headers = {
            "ET-Client-Name": client_name,
            "accept": "application/json",
        }
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    async def execute(self, query: str, variables: dict[str, Any], subject: str) -> dict[str, Any]:
        """Execute a query and return its ``data`` object.

        Args:
            query: GraphQL query document.
            variables: Query variables.
            subject: Identifier used in errors (usually the stop id).

        Raises:
            FetchError: On transport errors, non-200 responses, malformed
                bodies or GraphQL errors.
        """
        payload = {"query": query, "variables": variables}
        log_api_request("POST", self._url, headers=self._headers, payload=payload)

        try:
            async with self._session.post(
                self._url, json=payload, headers=self._headers, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    response_text = await response.text()
                    logger.warning(
                        f"Entur API returned status {response.status} for {subject}: "
                        f"{response_text[:200]}"
                    )
                    raise FetchError(subject, "Non-success response", status_code=response.status)
                body = await response.json()
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            raise FetchError(subject, f"{type(e).__name__}: {e}") from e

        if not isinstance(body, dict):
            raise FetchError(subject, "Response body is not a JSON object")
        errors = body.get("errors")
        if errors:
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            )
            raise FetchError(subject, f"GraphQL error: {messages}")
        data = body.get("data")
        if not isinstance(data, dict):
            raise FetchError(subject, "Response has no data")
        return data
