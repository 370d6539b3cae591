"""Flashbots bundle relay client."""

from types import TracebackType
from typing import Self

from src.flashbots.classify import classify_bundle_response, classify_stats_response
from src.flashbots.codec import (
    decode_bundle_response,
    decode_stats_response,
    encode_request,
)
from src.flashbots.errors import FlashbotsError
from src.flashbots.models import BundleRequest, BundleResult, BundleStats
from src.flashbots.signing import RequestSigner
from src.flashbots.transport import RelayTransport, resolve_relay_url
from src.helpers.config import RelaySettings, load_relay_settings
from src.helpers.constants import RELAY_TIMEOUT
from src.helpers.logging import get_logger


logger = get_logger(__name__)


class FlashbotsClient:
    """Submit, simulate and inspect bundles on a Flashbots-style relay.

    The signing key and relay URL are fixed at construction, so a single
    instance can be shared by concurrent tasks.

    Example:
        ```python
        async with FlashbotsClient(1, private_key) as fb:
            simulated = await fb.simulate_bundle([signed_tx_hex])
            sent = await fb.submit_bundle([signed_tx_hex], block_number + 1)
            stats = await fb.get_bundle_stats(sent.bundle_hash, block_number + 1)
        ```
    """

    def __init__(
        self,
        network_id: int,
        private_key: str | bytes | None,
        relay_url: str | None = None,
        *,
        transport: RelayTransport | None = None,
        timeout: float = RELAY_TIMEOUT,
    ) -> None:
        """Initialize client.

        Args:
            network_id: Chain id used to pick the default relay
            private_key: Key that signs every request; there is no unsigned mode
            relay_url: Relay endpoint overriding the network default
            transport: Optional transport, mainly for tests
            timeout: Per request deadline in seconds when no transport is given

        Raises:
            ConfigError: If the key is missing or the network has no known relay
        """
        self.network_id = network_id
        self.relay_url = resolve_relay_url(network_id, relay_url)
        self.signer = RequestSigner(private_key)
        self.transport = transport if transport is not None else RelayTransport(
            timeout=timeout
        )

    @classmethod
    def from_settings(
        cls, settings: RelaySettings, *, transport: RelayTransport | None = None
    ) -> Self:
        """Build a client from loaded settings."""
        return cls(
            settings.network_id,
            settings.private_key,
            settings.relay_url,
            transport=transport,
        )

    @classmethod
    def from_env(cls, *, transport: RelayTransport | None = None) -> Self:
        """Build a client from FLASHBOTS_* environment variables (and .env)."""
        return cls.from_settings(load_relay_settings(), transport=transport)

    @property
    def address(self) -> str:
        """Address the relay attributes this client's requests to."""
        return self.signer.address

    async def _call(self, request: BundleRequest) -> bytes:
        body = encode_request(request)
        signature = self.signer.sign(body)
        logger.debug("%s -> %s", request.method, self.relay_url)
        return await self.transport.send(body, signature, self.relay_url)

    async def submit_bundle(self, txs: list[str], block_number: int) -> BundleResult:
        """Send a bundle for inclusion in ``block_number``.

        Args:
            txs: Signed raw transactions as 0x hex strings, in bundle order
            block_number: Target block

        Returns:
            BundleResult; ``bundle_hash`` identifies the bundle for stats

        Raises:
            FlashbotsError: Any classified failure of the call
        """
        request = BundleRequest.submit(txs, block_number)
        raw = await self._call(request)
        try:
            return classify_bundle_response(decode_bundle_response(raw), block_number)
        except FlashbotsError as e:
            logger.debug("eth_sendBundle for block %d failed: %s", block_number, e)
            raise

    async def simulate_bundle(self, txs: list[str]) -> BundleResult:
        """Simulate a bundle on top of the latest state.

        Args:
            txs: Signed raw transactions as 0x hex strings, in bundle order

        Returns:
            BundleResult with per transaction outcomes

        Raises:
            FlashbotsError: Any classified failure of the call
        """
        request = BundleRequest.simulate(txs)
        raw = await self._call(request)
        try:
            return classify_bundle_response(
                decode_bundle_response(raw), request.block_number
            )
        except FlashbotsError as e:
            logger.debug("eth_callBundle failed: %s", e)
            raise

    async def get_bundle_stats(self, bundle_hash: str, block_number: int) -> BundleStats:
        """Fetch relay statistics for a previously submitted bundle.

        Args:
            bundle_hash: Hash returned by submit_bundle
            block_number: Block the bundle was submitted for

        Returns:
            BundleStats

        Raises:
            FlashbotsError: Any classified failure of the call
        """
        request = BundleRequest.stats(bundle_hash, block_number)
        raw = await self._call(request)
        return classify_stats_response(decode_stats_response(raw))

    async def aclose(self) -> None:
        """Release the transport's HTTP client."""
        await self.transport.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"FlashbotsClient(network_id={self.network_id}, "
            f"relay_url={self.relay_url!r}, address={self.address})"
        )


__all__ = ["FlashbotsClient"]
