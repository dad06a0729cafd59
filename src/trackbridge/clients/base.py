"""Shared HTTP helpers for catalog clients."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from trackbridge.exceptions import ExternalApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def request_json(
    http: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    service: str,
    allow_not_found: bool = False,
    **kwargs: Any,
) -> Any:
    """Send a request and decode the JSON body.

    Args:
        http: Client used to send the request.
        method: HTTP method.
        url: Absolute request URL.
        service: Display name used in log and error messages.
        allow_not_found: Return None for a 404 response instead of raising.
        **kwargs: Passed through to ``httpx.AsyncClient.request``.

    Returns:
        The decoded JSON payload, or None for an allowed 404.

    Raises:
        ExternalApiError: On network errors, error statuses, or a body that
            is not valid JSON.
    """
    try:
        response = await http.request(method, url, **kwargs)
        if allow_not_found and response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("%s returned 404 for %s", service, url)
            return None
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning("%s request failed with HTTP %d: %s", service, status, url)
        raise ExternalApiError(
            f"{service} request failed with HTTP {status}", status=status
        ) from e
    except httpx.RequestError as e:
        logger.warning("%s request error for %s: %s", service, url, e)
        raise ExternalApiError(f"{service} request failed: {e}") from e
    except ValueError as e:
        logger.warning("%s returned malformed JSON for %s", service, url)
        raise ExternalApiError(f"{service} returned malformed JSON") from e


def parse_payload(
    parse: Callable[[dict[str, Any]], T], data: Any, service: str
) -> T:
    """Map one API object with ``parse``, treating bad shapes as API errors.

    Raises:
        ExternalApiError: If the object lacks required fields or fails
            validation.
    """
    try:
        return parse(data)
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        logger.warning("%s returned an unexpected payload: %s", service, e)
        raise ExternalApiError(f"{service} returned an unexpected payload") from e
