"""HTTP transport to the bundle relay and relay URL resolution."""

import asyncio

import httpx

from src.flashbots.constants import RELAY_URLS, SIGNATURE_HEADER
from src.flashbots.errors import ConfigError, TransportError
from src.helpers.constants import RELAY_TIMEOUT
from src.helpers.http import JSON_HEADERS, create_http_client, read_body_best_effort
from src.helpers.logging import get_logger


logger = get_logger(__name__)


def relay_url_default(network_id: int) -> str:
    """Return the default relay endpoint for a chain id.

    Raises:
        ConfigError: If no relay is known for the network
    """
    try:
        return RELAY_URLS[network_id]
    except KeyError:
        msg = f"network id not supported id:{network_id}"
        raise ConfigError(msg) from None


def resolve_relay_url(network_id: int, relay_url: str | None = None) -> str:
    """Pick the explicit relay URL if given, otherwise the network default.

    Raises:
        ConfigError: If no override is given and the network is unknown
    """
    if relay_url:
        return relay_url
    return relay_url_default(network_id)


class RelayTransport:
    """Posts signed JSON-RPC bodies to a relay, one attempt per call."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = RELAY_TIMEOUT,
    ) -> None:
        """Initialize transport.

        Args:
            client: Optional shared HTTP client; one is created and owned otherwise
            timeout: Deadline in seconds for the whole exchange, body included
        """
        self._owns_client = client is None
        self.client = client if client is not None else create_http_client(timeout)
        self.timeout = timeout

    async def send(self, body: bytes, signature: str, url: str) -> bytes:
        """POST ``body`` to ``url`` and return the raw response body.

        Args:
            body: Serialized JSON-RPC request
            signature: X-Flashbots-Signature header value computed over ``body``
            url: Relay endpoint

        Returns:
            Response body bytes of a 2xx answer

        Raises:
            TransportError: On a non-2xx status, connection failure, timeout
                or body read failure. Never retried here.
        """
        headers = {**JSON_HEADERS, SIGNATURE_HEADER: signature}
        request = self.client.build_request("POST", url, content=body, headers=headers)
        # Set once a non-2xx status line has arrived, so a deadline hit while
        # reading the error body still reports the status
        error_status: int | None = None

        try:
            async with asyncio.timeout(self.timeout):
                response = await self.client.send(request, stream=True)
                try:
                    if not response.is_success:
                        error_status = response.status_code
                        logger.debug(
                            "Relay %s answered with status %d", url, error_status
                        )
                        error_body = await read_body_best_effort(response)
                        msg = f"bad response status {error_status}"
                        raise TransportError(msg, status=error_status, body=error_body)
                    return await response.aread()
                finally:
                    await response.aclose()
        except TimeoutError as e:
            if error_status is not None:
                msg = f"bad response status {error_status}"
                raise TransportError(msg, status=error_status, cause=e) from e
            msg = f"relay request to {url} timed out after {self.timeout}s"
            logger.debug(msg)
            raise TransportError(msg, cause=e) from e
        except httpx.HTTPError as e:
            msg = f"relay request to {url} failed: {e}"
            raise TransportError(msg, cause=e) from e

    async def aclose(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self.client.aclose()


__all__ = [
    "RelayTransport",
    "relay_url_default",
    "resolve_relay_url",
]
