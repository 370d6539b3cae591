"""Tests for the Flashbots bundle client."""

import json
import os

from unittest.mock import AsyncMock, MagicMock

import pytest

from eth_account import Account
from eth_account.messages import encode_defunct
from pytest_httpx import HTTPXMock

from src.flashbots.client import FlashbotsClient
from src.flashbots.errors import (
    BundleExecutionError,
    ConfigError,
    EncodingError,
    InvalidRequestError,
    RelayError,
    TransportError,
)
from src.flashbots.signing import payload_digest_text
from src.flashbots.transport import RelayTransport


RELAY = "https://relay.example"


def spy_transport(response: bytes = b"{}") -> MagicMock:
    """Transport double that records calls instead of doing I/O."""
    transport = MagicMock(spec=RelayTransport)
    transport.send = AsyncMock(return_value=response)
    transport.aclose = AsyncMock()
    return transport


class TestFlashbotsClientInit:
    """Tests for client construction."""

    def test_resolves_default_relay(self, private_key: str, signer_address: str) -> None:
        """Test the network default URL and signer address are resolved."""
        client = FlashbotsClient(5, private_key, transport=spy_transport())

        assert client.relay_url == "https://relay-goerli.flashbots.net"
        assert client.address == signer_address

    def test_relay_override(self, private_key: str) -> None:
        """Test an explicit relay URL is used as is."""
        client = FlashbotsClient(1, private_key, RELAY, transport=spy_transport())

        assert client.relay_url == RELAY

    def test_unsupported_network_does_no_io(self, private_key: str) -> None:
        """Test an unknown network fails before any transport call."""
        transport = spy_transport()

        with pytest.raises(ConfigError, match="network id not supported"):
            FlashbotsClient(9999, private_key, transport=transport)

        transport.send.assert_not_called()

    def test_missing_key_does_no_io(self) -> None:
        """Test there is no unsigned mode."""
        transport = spy_transport()

        with pytest.raises(ConfigError, match="private key is not set"):
            FlashbotsClient(1, None, transport=transport)

        transport.send.assert_not_called()

    @pytest.mark.usefixtures("clean_env")
    def test_from_env(self, private_key: str, signer_address: str) -> None:
        """Test construction from FLASHBOTS_* variables."""
        os.environ["FLASHBOTS_NETWORK_ID"] = "5"
        os.environ["FLASHBOTS_PRIVATE_KEY"] = private_key

        client = FlashbotsClient.from_env(transport=spy_transport())

        assert client.network_id == 5
        assert client.relay_url == "https://relay-goerli.flashbots.net"
        assert client.address == signer_address

    def test_repr_hides_key(self, private_key: str) -> None:
        """Test repr shows the address, not the key."""
        client = FlashbotsClient(1, private_key, transport=spy_transport())

        assert private_key[2:] not in repr(client)


class TestSubmitBundle:
    """Tests for submit_bundle."""

    @pytest.mark.asyncio
    async def test_end_to_end_success(
        self, httpx_mock: HTTPXMock, private_key: str, signed_txs: list[str]
    ) -> None:
        """Test a two-transaction bundle at block 100."""
        httpx_mock.add_response(
            url=RELAY,
            method="POST",
            json={"result": {"bundleHash": "0xabc", "results": [{}, {}]}},
        )

        async with FlashbotsClient(1, private_key, RELAY) as client:
            result = await client.submit_bundle(signed_txs, 100)

        assert result.bundle_hash == "0xabc"
        assert len(result.results) == 2

        request = httpx_mock.get_requests()[0]
        assert json.loads(request.content) == {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "eth_sendBundle",
            "params": [{"txs": signed_txs, "blockNumber": "0x64"}],
        }

    @pytest.mark.asyncio
    async def test_signature_covers_sent_body(
        self,
        httpx_mock: HTTPXMock,
        private_key: str,
        signer_address: str,
        signed_txs: list[str],
    ) -> None:
        """Test the header signs exactly the bytes that were POSTed."""
        httpx_mock.add_response(url=RELAY, json={"result": {}})

        async with FlashbotsClient(1, private_key, RELAY) as client:
            await client.submit_bundle(signed_txs, 100)

        request = httpx_mock.get_requests()[0]
        address, signature = request.headers["X-Flashbots-Signature"].split(":")
        message = encode_defunct(text=payload_digest_text(request.content))
        assert address == signer_address
        assert Account.recover_message(message, signature=signature) == signer_address

    @pytest.mark.asyncio
    async def test_http_500_not_retried(
        self, httpx_mock: HTTPXMock, private_key: str, signed_txs: list[str]
    ) -> None:
        """Test an HTTP 500 surfaces as TransportError after a single attempt."""
        httpx_mock.add_response(url=RELAY, status_code=500, content=b"relay overloaded")

        async with FlashbotsClient(1, private_key, RELAY) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.submit_bundle(signed_txs, 100)

        assert exc_info.value.status == 500
        assert exc_info.value.body_text == "relay overloaded"
        assert len(httpx_mock.get_requests()) == 1

    @pytest.mark.asyncio
    async def test_relay_error(self, private_key: str, signed_txs: list[str]) -> None:
        """Test a non-zero relay code raises RelayError."""
        transport = spy_transport(
            b'{"error":{"code":-32000,"message":"invalid bundle"}}'
        )
        client = FlashbotsClient(1, private_key, transport=transport)

        with pytest.raises(RelayError, match="invalid bundle"):
            await client.submit_bundle(signed_txs, 100)

    @pytest.mark.asyncio
    async def test_execution_error_carries_block(
        self, private_key: str, signed_txs: list[str]
    ) -> None:
        """Test a failing first transaction raises with the target block."""
        transport = spy_transport(
            b'{"result":{"results":[{"error":"insufficient funds","gasUsed":21000},{}]}}'
        )
        client = FlashbotsClient(1, private_key, transport=transport)

        with pytest.raises(BundleExecutionError) as exc_info:
            await client.submit_bundle(signed_txs, 100)

        assert exc_info.value.tx_error == "insufficient funds"
        assert exc_info.value.gas_used == 21000
        assert exc_info.value.block_number == 100

    @pytest.mark.asyncio
    async def test_malformed_response(self, private_key: str, signed_txs: list[str]) -> None:
        """Test an undecodable body raises EncodingError."""
        client = FlashbotsClient(1, private_key, transport=spy_transport(b"<html>"))

        with pytest.raises(EncodingError):
            await client.submit_bundle(signed_txs, 100)

    @pytest.mark.asyncio
    async def test_empty_bundle_does_no_io(self, private_key: str) -> None:
        """Test bad arguments raise a FlashbotsError before signing or sending."""
        transport = spy_transport()
        client = FlashbotsClient(1, private_key, transport=transport)

        with pytest.raises(InvalidRequestError):
            await client.submit_bundle([], 100)

        transport.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_uses_resolved_url(self, private_key: str, signed_txs: list[str]) -> None:
        """Test the transport receives body, header and the resolved URL."""
        transport = spy_transport(b'{"result":{}}')
        client = FlashbotsClient(1, private_key, transport=transport)

        await client.submit_bundle(signed_txs, 100)

        body, signature, url = transport.send.await_args.args
        assert json.loads(body)["method"] == "eth_sendBundle"
        assert signature.startswith(client.address + ":")
        assert url == "https://relay.flashbots.net"


class TestSimulateBundle:
    """Tests for simulate_bundle."""

    @pytest.mark.asyncio
    async def test_simulate_request_shape(
        self, private_key: str, signed_txs: list[str]
    ) -> None:
        """Test simulation targets the placeholder block on latest state."""
        transport = spy_transport(
            b'{"result":{"bundleHash":"0xsim","results":[{"gasUsed":21000}]}}'
        )
        client = FlashbotsClient(1, private_key, transport=transport)

        result = await client.simulate_bundle(signed_txs)

        assert result.bundle_hash == "0xsim"
        assert result.results[0].gas_used == 21000
        body = json.loads(transport.send.await_args.args[0])
        assert body["method"] == "eth_callBundle"
        assert body["params"] == [
            {
                "txs": signed_txs,
                "blockNumber": "0x5af3107a4000",
                "stateBlockNumber": "latest",
            }
        ]

    @pytest.mark.asyncio
    async def test_simulate_revert(self, private_key: str, signed_txs: list[str]) -> None:
        """Test a reverting simulation reports the placeholder block."""
        transport = spy_transport(
            b'{"result":{"results":[{"error":"execution reverted","revert":"too late"}]}}'
        )
        client = FlashbotsClient(1, private_key, transport=transport)

        with pytest.raises(BundleExecutionError) as exc_info:
            await client.simulate_bundle(signed_txs)

        assert exc_info.value.revert == "too late"
        assert exc_info.value.block_number == 100_000_000_000_000


class TestGetBundleStats:
    """Tests for get_bundle_stats."""

    @pytest.mark.asyncio
    async def test_stats(self, private_key: str) -> None:
        """Test stats are fetched for a bundle hash."""
        transport = spy_transport(
            b'{"result":{"isSimulated":true,"isHighPriority":false,'
            b'"submittedAt":"2021-08-06T21:36:06.250Z"}}'
        )
        client = FlashbotsClient(1, private_key, transport=transport)

        stats = await client.get_bundle_stats("0xabc", 100)

        assert stats.is_simulated
        assert not stats.is_high_priority
        assert stats.submitted_at is not None
        body = json.loads(transport.send.await_args.args[0])
        assert body["method"] == "flashbots_getBundleStats"
        assert body["params"] == [{"bundleHash": "0xabc", "blockNumber": "0x64"}]

    @pytest.mark.asyncio
    async def test_stats_relay_error(self, private_key: str) -> None:
        """Test a relay error fails the stats call."""
        transport = spy_transport(b'{"error":{"code":-32602,"message":"unknown bundle"}}')
        client = FlashbotsClient(1, private_key, transport=transport)

        with pytest.raises(RelayError) as exc_info:
            await client.get_bundle_stats("0xabc", 100)

        assert exc_info.value.code == -32602


class TestClientLifecycle:
    """Tests for resource handling."""

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, private_key: str) -> None:
        """Test leaving the context closes the transport."""
        transport = spy_transport()

        async with FlashbotsClient(1, private_key, transport=transport):
            pass

        transport.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_calls_are_independent(
        self, private_key: str, signed_txs: list[str]
    ) -> None:
        """Test consecutive calls build fresh requests."""
        transport = spy_transport(b'{"result":{}}')
        client = FlashbotsClient(1, private_key, transport=transport)

        await client.submit_bundle(signed_txs, 100)
        await client.submit_bundle(signed_txs[:1], 101)

        first, second = (json.loads(c.args[0]) for c in transport.send.await_args_list)
        assert first["params"][0] == {"txs": signed_txs, "blockNumber": "0x64"}
        assert second["params"][0] == {"txs": signed_txs[:1], "blockNumber": "0x65"}
