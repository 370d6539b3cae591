"""Parsing utilities for hex quantities used on the JSON-RPC wire."""


def encode_hex_quantity(value: int) -> str:
    """Encode a non-negative integer as a JSON-RPC hex quantity.

    Args:
        value: Integer to encode

    Returns:
        str: 0x-prefixed hex string without leading zeros

    Raises:
        ValueError: If value is negative

    Example:
        >>> encode_hex_quantity(100)
        '0x64'
        >>> encode_hex_quantity(0)
        '0x0'
    """
    if value < 0:
        msg = f"Hex quantity cannot be negative: {value}"
        raise ValueError(msg)
    return hex(value)


def parse_hex_int(hex_value: str | None, default: int = 0) -> int:
    """Parse hex string to integer.

    Args:
        hex_value: Hex-encoded string or None
        default: Default value if hex_value is None or empty

    Returns:
        int: Parsed integer value

    Example:
        >>> parse_hex_int("0xff")
        255
        >>> parse_hex_int(None, 0)
        0
    """
    if not hex_value:
        return default
    return int(hex_value, 16)


def parse_int_or_hex(value: int | float | str | None, default: int = 0) -> int:
    """Parse a quantity that relays send either as a number or a hex string.

    Raises:
        ValueError: If the value is not an integral number or numeric string

    Example:
        >>> parse_int_or_hex(21000)
        21000
        >>> parse_int_or_hex("0x5208")
        21000
        >>> parse_int_or_hex("21000")
        21000
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        msg = f"Expected a quantity, got {value!r}"
        raise ValueError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            msg = f"Expected an integral quantity, got {value!r}"
            raise ValueError(msg)
        return int(value)
    if not isinstance(value, str):
        msg = f"Expected a quantity, got {type(value).__name__}"
        raise ValueError(msg)
    if value.lower().startswith("0x"):
        return parse_hex_int(value, default)
    return int(value)


__all__ = ["encode_hex_quantity", "parse_hex_int", "parse_int_or_hex"]
