"""Configuration management and environment variable utilities."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from src.helpers.constants import DEFAULT_NETWORK_ID


# Load environment variables from .env file
load_dotenv()


class RelaySettings(BaseModel):
    """Settings needed to talk to a bundle relay."""

    network_id: int = Field(default=DEFAULT_NETWORK_ID, description="Chain id")
    private_key: str | None = Field(
        default=None, description="Hex private key used to sign relay requests"
    )
    relay_url: str | None = Field(
        default=None, description="Relay endpoint overriding the network default"
    )

    def __repr__(self) -> str:
        """Keep the private key out of logs and tracebacks."""
        key = "***" if self.private_key else None
        return (
            f"RelaySettings(network_id={self.network_id}, "
            f"private_key={key}, relay_url={self.relay_url!r})"
        )

    __str__ = __repr__


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from src.helpers.config import get_required_env

        private_key = get_required_env("FLASHBOTS_PRIVATE_KEY")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_network_id(network_id: int | None = None) -> int:
    """Get the chain id from parameter or environment.

    Args:
        network_id: Optional chain id to use directly

    Returns:
        Chain id, FLASHBOTS_NETWORK_ID or mainnet

    Raises:
        ValueError: If FLASHBOTS_NETWORK_ID is not an integer
    """
    if network_id is not None:
        return network_id

    raw = os.getenv("FLASHBOTS_NETWORK_ID")
    if not raw:
        return DEFAULT_NETWORK_ID

    try:
        return int(raw, 0)
    except ValueError as e:
        msg = f"FLASHBOTS_NETWORK_ID must be an integer, got {raw!r}"
        raise ValueError(msg) from e


def get_signing_key(private_key: str | None = None) -> str | None:
    """Get the relay signing key from parameter or environment.

    The key is optional here; callers that need to sign decide what a
    missing key means.
    """
    if private_key:
        return private_key
    return os.getenv("FLASHBOTS_PRIVATE_KEY") or None


def get_relay_url(relay_url: str | None = None) -> str | None:
    """Get the relay URL override from parameter or environment.

    Example:
        ```python
        from src.helpers.config import get_relay_url

        # None unless FLASHBOTS_RELAY_URL is set
        relay_url = get_relay_url()
        ```
    """
    if relay_url:
        return relay_url
    return os.getenv("FLASHBOTS_RELAY_URL") or None


def load_relay_settings(
    network_id: int | None = None,
    private_key: str | None = None,
    relay_url: str | None = None,
) -> RelaySettings:
    """Build relay settings, letting explicit arguments win over environment.

    Args:
        network_id: Optional chain id
        private_key: Optional hex private key
        relay_url: Optional relay URL override

    Returns:
        RelaySettings populated from arguments and environment
    """
    return RelaySettings(
        network_id=get_network_id(network_id),
        private_key=get_signing_key(private_key),
        relay_url=get_relay_url(relay_url),
    )


__all__ = [
    "RelaySettings",
    "get_network_id",
    "get_optional_env",
    "get_relay_url",
    "get_required_env",
    "get_signing_key",
    "load_relay_settings",
]
