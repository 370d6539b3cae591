"""Exceptions raised by the Flashbots relay client."""


class FlashbotsError(Exception):
    """Base class for every relay client failure."""


class ConfigError(FlashbotsError, ValueError):
    """Missing key or unsupported network; raised before any network I/O."""


class InvalidRequestError(FlashbotsError, ValueError):
    """Bundle arguments were rejected while building a request, before signing."""


class EncodingError(FlashbotsError):
    """A request could not be serialized or a response could not be parsed."""


ProtocolError = EncodingError


class TransportError(FlashbotsError):
    """The HTTP exchange with the relay failed.

    Either ``status`` is set (the relay answered outside 2xx, ``body`` holds
    whatever could be read) or ``cause`` is set (connection, timeout or read
    failure).
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        body: bytes | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body
        self.cause = cause

    @property
    def body_text(self) -> str:
        """Response body decoded as text, empty if nothing was read."""
        if not self.body:
            return ""
        return self.body.decode("utf-8", errors="replace")


class RelayError(FlashbotsError):
    """The relay answered with a non-zero JSON-RPC error code."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"relay returned error {code}: {message}")
        self.code = code
        self.message = message


class BundleExecutionError(FlashbotsError):
    """The call succeeded but the first transaction of the bundle failed."""

    def __init__(
        self,
        tx_error: str,
        *,
        revert: str = "",
        gas_used: int = 0,
        relay_code: int = 0,
        relay_message: str = "",
        block_number: int | None = None,
    ) -> None:
        text = f"bundle execution failed at block {block_number}: {tx_error}"
        if revert:
            text += f" (revert: {revert})"
        text += f" gas used: {gas_used}"
        super().__init__(text)
        self.tx_error = tx_error
        self.revert = revert
        self.gas_used = gas_used
        self.relay_code = relay_code
        self.relay_message = relay_message
        self.block_number = block_number


__all__ = [
    "BundleExecutionError",
    "ConfigError",
    "EncodingError",
    "FlashbotsError",
    "InvalidRequestError",
    "ProtocolError",
    "RelayError",
    "TransportError",
]
