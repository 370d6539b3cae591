"""Relay request authentication via the X-Flashbots-Signature header.

The relay identifies a searcher by the address recovered from a personal
message signature over the request body:

1. ``keccak256`` the exact body bytes that will be POSTed.
2. Hex encode the digest (``0x``-prefixed) and treat that string as text.
3. Sign the text as an EIP-191 personal message, which prefixes it with
   ``"\\x19Ethereum Signed Message:\\n<len>"`` and hashes it again with
   ``keccak256``. The prefix keeps the signature from being replayed as a
   signature over a raw transaction hash.

The header value is ``<checksum address>:<0x signature>``.
"""

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from eth_utils import keccak, to_hex

from src.flashbots.errors import ConfigError


def _load_account(private_key: str | bytes | None) -> LocalAccount:
    if not private_key:
        msg = "private key is not set"
        raise ConfigError(msg)
    try:
        return Account.from_key(private_key)
    except Exception as e:  # eth-keys raises its own ValidationError
        msg = f"invalid private key: {type(e).__name__}"
        raise ConfigError(msg) from e


def derive_address(private_key: str | bytes | None) -> str:
    """Return the checksummed address controlled by ``private_key``.

    Raises:
        ConfigError: If the key is missing or malformed
    """
    return _load_account(private_key).address


def payload_digest_text(payload: bytes) -> str:
    """Hex text of the body hash; this string is what actually gets signed."""
    return to_hex(keccak(payload))


class RequestSigner:
    """Signs relay request bodies with a fixed key."""

    def __init__(self, private_key: str | bytes | None) -> None:
        """Initialize signer.

        Args:
            private_key: Hex string or raw 32 bytes of a secp256k1 key

        Raises:
            ConfigError: If the key is missing or malformed
        """
        self._account = _load_account(private_key)

    @property
    def address(self) -> str:
        """Checksummed address the relay will attribute requests to."""
        return self._account.address

    def sign(self, payload: bytes) -> str:
        """Compute the X-Flashbots-Signature header value for ``payload``."""
        message = encode_defunct(text=payload_digest_text(payload))
        signed = self._account.sign_message(message)
        return f"{self.address}:{to_hex(signed.signature)}"

    def __repr__(self) -> str:
        return f"RequestSigner(address={self.address})"


def sign_payload(payload: bytes, private_key: str | bytes | None) -> str:
    """Compute the X-Flashbots-Signature header value with a one-off key.

    Raises:
        ConfigError: If the key is missing or malformed
    """
    return RequestSigner(private_key).sign(payload)


__all__ = [
    "RequestSigner",
    "derive_address",
    "payload_digest_text",
    "sign_payload",
]
