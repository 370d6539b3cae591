"""Pydantic models for Flashbots bundle requests and relay responses."""

from datetime import datetime

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)

from src.flashbots.constants import (
    METHOD_CALL_BUNDLE,
    METHOD_GET_BUNDLE_STATS,
    METHOD_SEND_BUNDLE,
    REQUEST_ID,
    SIMULATION_BLOCK_NUMBER,
    STATE_BLOCK_LATEST,
)
from src.flashbots.errors import InvalidRequestError
from src.helpers.parsers import encode_hex_quantity, parse_int_or_hex
from src.helpers.rpc_models import JsonRpcError, JsonRpcRequest


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


def _none_to_dict(value: Any) -> Any:
    return {} if value is None else value


# Relays send null for strings they have nothing to say about
WireStr = Annotated[str, BeforeValidator(_none_to_empty)]


class BundleParams(BaseModel):
    """Base for the per-method params object; empty fields never reach the wire."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {k: v for k, v in data.items() if v is not None and v not in ("", [])}


class SubmitParams(BundleParams):
    """Params for eth_sendBundle."""

    txs: list[str] = Field(..., min_length=1, description="Signed raw tx hex strings")
    block_number: str = Field(
        ..., alias="blockNumber", description="Target block as hex quantity"
    )


class SimulateParams(BundleParams):
    """Params for eth_callBundle."""

    txs: list[str] = Field(..., min_length=1, description="Signed raw tx hex strings")
    block_number: str = Field(
        default=encode_hex_quantity(SIMULATION_BLOCK_NUMBER),
        alias="blockNumber",
        description="Simulation anchor as hex quantity",
    )
    state_block_number: str = Field(
        default=STATE_BLOCK_LATEST,
        alias="stateBlockNumber",
        description="Block whose state the simulation runs on",
    )


class StatsParams(BundleParams):
    """Params for flashbots_getBundleStats."""

    bundle_hash: str = Field(..., min_length=1, alias="bundleHash")
    block_number: str = Field(..., alias="blockNumber")


PARAMS_BY_METHOD: dict[str, type[BundleParams]] = {
    METHOD_SEND_BUNDLE: SubmitParams,
    METHOD_CALL_BUNDLE: SimulateParams,
    METHOD_GET_BUNDLE_STATS: StatsParams,
}


class BundleRequest(JsonRpcRequest):
    """JSON-RPC envelope carrying exactly one params object.

    Always build requests through ``submit``, ``simulate`` or ``stats`` so
    every call gets its own instance.
    """

    id: int | str = Field(default=REQUEST_ID, description="Request ID")
    params: list[SubmitParams | SimulateParams | StatsParams] = Field(
        ..., min_length=1, max_length=1
    )

    @field_validator("method")
    @classmethod
    def _known_method(cls, value: str) -> str:
        if value not in PARAMS_BY_METHOD:
            msg = f"Unsupported bundle method: {value}"
            raise ValueError(msg)
        return value

    @classmethod
    def _build(
        cls,
        method: str,
        params_model: type[BundleParams],
        block_number: int,
        **fields: Any,
    ) -> "BundleRequest":
        try:
            params = params_model(
                block_number=encode_hex_quantity(block_number), **fields
            )
            return cls(method=method, params=[params])
        except (TypeError, ValueError) as e:
            msg = f"invalid {method} arguments: {e}"
            raise InvalidRequestError(msg) from e

    @classmethod
    def submit(cls, txs: list[str], block_number: int) -> "BundleRequest":
        """Build an eth_sendBundle request targeting ``block_number``.

        Raises:
            InvalidRequestError: If ``txs`` is empty or ``block_number`` is negative
        """
        return cls._build(METHOD_SEND_BUNDLE, SubmitParams, block_number, txs=list(txs))

    @classmethod
    def simulate(
        cls,
        txs: list[str],
        block_number: int = SIMULATION_BLOCK_NUMBER,
        state_block_number: str = STATE_BLOCK_LATEST,
    ) -> "BundleRequest":
        """Build an eth_callBundle request simulating on top of ``state_block_number``.

        Raises:
            InvalidRequestError: If ``txs`` is empty or ``block_number`` is negative
        """
        return cls._build(
            METHOD_CALL_BUNDLE,
            SimulateParams,
            block_number,
            txs=list(txs),
            state_block_number=state_block_number,
        )

    @classmethod
    def stats(cls, bundle_hash: str, block_number: int) -> "BundleRequest":
        """Build a flashbots_getBundleStats request.

        Raises:
            InvalidRequestError: If ``bundle_hash`` is empty or ``block_number``
                is negative
        """
        return cls._build(
            METHOD_GET_BUNDLE_STATS, StatsParams, block_number, bundle_hash=bundle_hash
        )

    @property
    def block_number(self) -> int:
        """Block number carried by the params, decoded from hex."""
        return parse_int_or_hex(self.params[0].block_number)


class ResponseModel(BaseModel):
    """Base for relay response models: tolerant of unknown and absent fields."""

    model_config = ConfigDict(
        extra="ignore", populate_by_name=True, coerce_numbers_to_str=True
    )


class BundleMetadata(ResponseModel):
    """Value transfer figures the relay reports per bundle and per transaction."""

    coinbase_diff: WireStr = Field(default="", alias="coinbaseDiff")
    eth_sent_to_coinbase: WireStr = Field(default="", alias="ethSentToCoinbase")
    gas_fees: WireStr = Field(default="", alias="gasFees")


class TxResult(BundleMetadata):
    """Simulation outcome of one transaction in a bundle."""

    from_address: WireStr = Field(default="", alias="fromAddress")
    to_address: WireStr = Field(default="", alias="toAddress")
    gas_price: WireStr = Field(default="", alias="gasPrice")
    tx_hash: WireStr = Field(default="", alias="txHash")
    value: WireStr = ""
    error: WireStr = ""
    revert: WireStr = ""
    gas_used: int = Field(default=0, ge=0, alias="gasUsed")

    @field_validator("gas_used", mode="before")
    @classmethod
    def _parse_gas_used(cls, value: Any) -> int:
        return parse_int_or_hex(value)


class BundleResult(BundleMetadata):
    """Aggregate relay result for a submitted or simulated bundle."""

    bundle_gas_price: WireStr = Field(default="", alias="bundleGasPrice")
    bundle_hash: WireStr = Field(default="", alias="bundleHash")
    total_gas_used: int = Field(default=0, ge=0, alias="totalGasUsed")
    # null entries decode as empty transactions
    results: Annotated[
        list[Annotated[TxResult, BeforeValidator(_none_to_dict)]],
        BeforeValidator(_none_to_list),
    ] = Field(default_factory=list)

    @field_validator("total_gas_used", mode="before")
    @classmethod
    def _parse_total_gas_used(cls, value: Any) -> int:
        return parse_int_or_hex(value)


class BundleStats(ResponseModel):
    """How and when the relay processed a previously submitted bundle."""

    is_simulated: bool = Field(default=False, alias="isSimulated")
    is_sent_to_miners: bool = Field(default=False, alias="isSentToMiners")
    is_high_priority: bool = Field(default=False, alias="isHighPriority")
    simulated_at: datetime | None = Field(default=None, alias="simulatedAt")
    submitted_at: datetime | None = Field(default=None, alias="submittedAt")
    sent_to_miners_at: datetime | None = Field(default=None, alias="sentToMinersAt")


class BundleResponse(ResponseModel):
    """Response to eth_sendBundle and eth_callBundle."""

    error: JsonRpcError | None = None
    result: BundleResult | None = None


class BundleStatsResponse(ResponseModel):
    """Response to flashbots_getBundleStats."""

    error: JsonRpcError | None = None
    result: BundleStats | None = None


__all__ = [
    "PARAMS_BY_METHOD",
    "BundleMetadata",
    "BundleParams",
    "BundleRequest",
    "BundleResponse",
    "BundleResult",
    "BundleStats",
    "BundleStatsResponse",
    "SimulateParams",
    "StatsParams",
    "SubmitParams",
    "TxResult",
]
