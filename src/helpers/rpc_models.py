"""Pydantic models for JSON-RPC requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


JSONRPC_VERSION = "2.0"
"""Protocol version sent in every request"""


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    jsonrpc: str = Field(default=JSONRPC_VERSION, description="JSON-RPC version")
    id: int | str = Field(default=1, description="Request ID")
    method: str = Field(..., description="Method name to call")
    params: list[Any] = Field(default_factory=list, description="Method parameters")

    model_config = ConfigDict(frozen=True)


class JsonRpcError(BaseModel):
    """Error object of a JSON-RPC 2.0 response.

    Relays send ``code == 0`` when there is nothing to report, so a present
    error object is only a failure when its code is non-zero.
    """

    code: int = 0
    message: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("message", mode="before")
    @classmethod
    def _null_message(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_error(self) -> bool:
        """Whether this object reports an actual failure."""
        return self.code != 0


__all__ = [
    "JSONRPC_VERSION",
    "JsonRpcError",
    "JsonRpcRequest",
]
