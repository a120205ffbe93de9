"""Opt-in logging of outgoing Entur requests (ENTUR_LOG_REQUESTS=true)."""

import json
import logging
import os
import re
from typing import Any
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

OPERATION_PATTERN = re.compile(r"^\s*(query|mutation)\s+(\w+)")


def should_log_requests() -> bool:
    """Check if request logging is enabled via ENTUR_LOG_REQUESTS environment variable."""
    return os.getenv("ENTUR_LOG_REQUESTS", "").lower() == "true"


def graphql_operation_name(query: str) -> str:
    """Name of the operation in a GraphQL document, e.g. 'StopSnapshot'."""
    match = OPERATION_PATTERN.match(query)
    return match.group(2) if match else "anonymous"


def describe_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    payload: dict[str, Any] | None = None,
) -> str:
    """One-line summary of a request.

    GraphQL payloads are reduced to the operation name and its variables;
    the query document itself is the same for every call.
    """
    target = f"{url}?{urlencode(sorted(params.items()))}" if params else url
    line = f"{method} {target}"
    if payload and "query" in payload:
        operation = graphql_operation_name(str(payload["query"]))
        variables = json.dumps(payload.get("variables") or {}, sort_keys=True, default=str)
        line += f" {operation} {variables}"
    elif payload:
        line += f" {json.dumps(payload, sort_keys=True, default=str)}"
    return line


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    payload: dict[str, Any] | None = None,
) -> None:
    """Log a request if ENTUR_LOG_REQUESTS is enabled.

    Only the ``ET-Client-Name`` header is logged; Entur identifies callers by it.
    """
    if not should_log_requests():
        return

    message = describe_request(method, url, params, payload)
    client_name = (headers or {}).get("ET-Client-Name")
    if client_name:
        message += f" (client: {client_name})"
    logger.info(f"API request: {message}")
