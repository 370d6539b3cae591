"""Constants for the Flashbots relay protocol."""

from src.helpers.constants import GOERLI_NETWORK_ID, MAINNET_NETWORK_ID

METHOD_SEND_BUNDLE = "eth_sendBundle"
METHOD_CALL_BUNDLE = "eth_callBundle"
METHOD_GET_BUNDLE_STATS = "flashbots_getBundleStats"

REQUEST_ID = 1
"""Every relay call is a single request, so the id never varies"""

SIGNATURE_HEADER = "X-Flashbots-Signature"

RELAY_URLS = {
    MAINNET_NETWORK_ID: "https://relay.flashbots.net",
    GOERLI_NETWORK_ID: "https://relay-goerli.flashbots.net",
}
"""Default relay endpoint per chain id"""

SIMULATION_BLOCK_NUMBER = 100_000_000_000_000
"""Placeholder block for eth_callBundle; the relay simulates on top of the state block"""

STATE_BLOCK_LATEST = "latest"


__all__ = [
    "METHOD_CALL_BUNDLE",
    "METHOD_GET_BUNDLE_STATS",
    "METHOD_SEND_BUNDLE",
    "RELAY_URLS",
    "REQUEST_ID",
    "SIGNATURE_HEADER",
    "SIMULATION_BLOCK_NUMBER",
    "STATE_BLOCK_LATEST",
]
