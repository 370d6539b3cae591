"""HTTP client utilities and helpers."""

from typing import Any

import httpx

from src.helpers.constants import (
    MAX_CONNECTIONS,
    MAX_KEEPALIVE_CONNECTIONS,
    RELAY_TIMEOUT,
)
from src.helpers.logging import get_logger


logger = get_logger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}
"""Headers sent with every JSON-RPC POST"""


def create_http_client(
    timeout: float = RELAY_TIMEOUT, **kwargs: Any
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient.

    Args:
        timeout: Default timeout in seconds (default: RELAY_TIMEOUT)
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance

    Example:
        ```python
        from src.helpers.http import create_http_client

        async with create_http_client() as client:
            response = await client.post("https://relay.flashbots.net", content=b"{}")
        ```
    """
    kwargs.setdefault(
        "limits",
        httpx.Limits(
            max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
            max_connections=MAX_CONNECTIONS,
        ),
    )
    return httpx.AsyncClient(timeout=timeout, **kwargs)


async def read_body_best_effort(response: httpx.Response) -> bytes | None:
    """Read a streamed response body, returning None if the read fails.

    Used on error paths where the status code alone is still worth
    reporting when the body cannot be read.

    Args:
        response: Streamed response whose body has not been read yet

    Returns:
        Body bytes, or None on a read error
    """
    try:
        return await response.aread()
    except httpx.HTTPError as e:
        logger.debug("Could not read body of %s response: %s", response.status_code, e)
        return None


__all__ = [
    "JSON_HEADERS",
    "create_http_client",
    "read_body_best_effort",
]
