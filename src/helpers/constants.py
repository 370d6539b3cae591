"""Common configuration constants used across the application."""

# HTTP and Network Constants
RELAY_TIMEOUT = 3.0
"""Hard deadline for a single relay request in seconds"""

MAX_KEEPALIVE_CONNECTIONS = 5
"""Maximum number of keepalive connections in pool"""

MAX_CONNECTIONS = 10
"""Maximum total number of connections"""

# Network identifiers
MAINNET_NETWORK_ID = 1
"""Ethereum mainnet chain id"""

GOERLI_NETWORK_ID = 5
"""Goerli test network chain id"""

DEFAULT_NETWORK_ID = MAINNET_NETWORK_ID
"""Network used when FLASHBOTS_NETWORK_ID is not set"""

# Logging
DEFAULT_LOG_LEVEL = "INFO"
"""Log level used when FLASHBOTS_LOG_LEVEL is not set"""


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_NETWORK_ID",
    "GOERLI_NETWORK_ID",
    "MAINNET_NETWORK_ID",
    "MAX_CONNECTIONS",
    "MAX_KEEPALIVE_CONNECTIONS",
    "RELAY_TIMEOUT",
]
