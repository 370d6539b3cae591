"""Turn decoded relay responses into results or classified errors."""

from src.flashbots.errors import BundleExecutionError, RelayError
from src.flashbots.models import (
    BundleResponse,
    BundleResult,
    BundleStats,
    BundleStatsResponse,
)
from src.helpers.rpc_models import JsonRpcError


def _raise_for_relay_error(error: JsonRpcError | None) -> None:
    if error is not None and error.is_error:
        raise RelayError(error.code, error.message)


def classify_bundle_response(
    response: BundleResponse, block_number: int | None = None
) -> BundleResult:
    """Return the bundle result or raise the failure it reports.

    A relay error code wins over everything else. Otherwise the relay reports
    a failed bundle through the first transaction result only, so later
    entries are not inspected.

    Args:
        response: Decoded eth_sendBundle / eth_callBundle response
        block_number: Block the caller targeted, attached to execution errors

    Returns:
        BundleResult, empty if the relay sent no result

    Raises:
        RelayError: If the top-level error code is non-zero
        BundleExecutionError: If the first transaction reports an error
    """
    _raise_for_relay_error(response.error)

    result = response.result or BundleResult()
    if result.results and result.results[0].error:
        first = result.results[0]
        error = response.error or JsonRpcError()
        raise BundleExecutionError(
            first.error,
            revert=first.revert,
            gas_used=first.gas_used,
            relay_code=error.code,
            relay_message=error.message,
            block_number=block_number,
        )

    return result


def classify_stats_response(response: BundleStatsResponse) -> BundleStats:
    """Return the bundle stats or raise the relay error.

    Raises:
        RelayError: If the top-level error code is non-zero
    """
    _raise_for_relay_error(response.error)
    return response.result or BundleStats()


__all__ = ["classify_bundle_response", "classify_stats_response"]
