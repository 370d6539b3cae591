"""Serialization of bundle requests and parsing of relay responses."""

import json
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from src.flashbots.errors import EncodingError
from src.flashbots.models import (
    PARAMS_BY_METHOD,
    BundleRequest,
    BundleResponse,
    BundleStatsResponse,
)


def encode_request(request: BundleRequest) -> bytes:
    """Serialize a request to the compact JSON body sent to the relay.

    Empty optional params fields are left out entirely; the relay dispatches
    on which fields are present.

    Raises:
        EncodingError: If the request cannot be serialized
    """
    try:
        return request.model_dump_json(by_alias=True).encode()
    except (ValueError, TypeError) as e:
        msg = f"could not encode {request.method} request: {e}"
        raise EncodingError(msg) from e


def decode_request(raw: bytes | str) -> BundleRequest:
    """Parse a serialized request back into a BundleRequest.

    The params object is validated against the shape its method expects.

    Raises:
        EncodingError: If the body is not a valid bundle request
    """
    try:
        data = json.loads(raw)
        params_model = PARAMS_BY_METHOD[data["method"]]
        params = [params_model.model_validate(p) for p in data["params"]]
        return BundleRequest.model_validate({**data, "params": params})
    except (ValueError, KeyError, TypeError, ValidationError) as e:
        msg = f"malformed bundle request: {e}"
        raise EncodingError(msg) from e


M = TypeVar("M", bound=BaseModel)


def _decode(raw: bytes | str, model: type[M]) -> M:
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        msg = f"malformed relay response: {e}"
        raise EncodingError(msg) from e


def decode_bundle_response(raw: bytes | str) -> BundleResponse:
    """Parse an eth_sendBundle / eth_callBundle response body.

    Unknown fields are ignored and absent ones keep their zero value.

    Raises:
        EncodingError: If the body is not a JSON object of the expected shape
    """
    return _decode(raw, BundleResponse)


def decode_stats_response(raw: bytes | str) -> BundleStatsResponse:
    """Parse a flashbots_getBundleStats response body.

    Raises:
        EncodingError: If the body is not a JSON object of the expected shape
    """
    return _decode(raw, BundleStatsResponse)


__all__ = [
    "decode_bundle_response",
    "decode_request",
    "decode_stats_response",
    "encode_request",
]
