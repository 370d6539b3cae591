"""Pytest configuration and shared fixtures for relay client tests."""

import os

from collections.abc import Generator

import pytest


# Hardhat / anvil default account #0
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

FLASHBOTS_ENV_KEYS = (
    "FLASHBOTS_NETWORK_ID",
    "FLASHBOTS_PRIVATE_KEY",
    "FLASHBOTS_RELAY_URL",
    "FLASHBOTS_LOG_LEVEL",
)


@pytest.fixture
def private_key() -> str:
    """Provide a well-known throwaway signing key.

    Returns:
        str: Hex private key
    """
    return TEST_PRIVATE_KEY


@pytest.fixture
def signer_address() -> str:
    """Provide the checksummed address of the test key."""
    return TEST_ADDRESS


@pytest.fixture
def signed_txs() -> list[str]:
    """Provide two opaque signed transaction hex strings.

    The relay client never decodes these, so any hex will do.
    """
    return ["0x02f86b0180843b9aca00", "0x02f86b0101843b9aca00"]


@pytest.fixture
def clean_env() -> Generator[None]:
    """Clear FLASHBOTS_* variables for the test and restore them afterwards."""
    saved_env = {key: os.environ.get(key) for key in FLASHBOTS_ENV_KEYS}

    for key in saved_env:
        if key in os.environ:
            del os.environ[key]

    yield

    for key, value in saved_env.items():
        if value is not None:
            os.environ[key] = value
        elif key in os.environ:
            del os.environ[key]
