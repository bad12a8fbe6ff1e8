"""Helpers for the 32-byte credit identifiers used by the Credits contract.

Identifiers travel as ``bytes32`` on-chain and as 64-character hex strings
over HTTP. Callers may hand in fewer significant bytes; every value is
left-padded with zero bytes to exactly 32 bytes on the way in and on the
way out.
"""
from __future__ import annotations

from typing import Union

from hexbytes import HexBytes

from ..clients.errors import InvalidParameterError

IDENTIFIER_SIZE = 32

IdentifierLike = Union[bytes, bytearray, memoryview, str]


def to_identifier(value: IdentifierLike) -> bytes:
    """Normalize an identifier to exactly 32 bytes.

    Args:
        value: Raw bytes, or a hex string with or without ``0x`` prefix.

    Returns:
        The identifier left-padded with zero bytes to 32 bytes.

    Raises:
        InvalidParameterError: If the value is not hex, has the wrong type,
            or holds more than 32 bytes.
    """
    if isinstance(value, str):
        hex_str = value[2:] if value[:2].lower() == "0x" else value
        if len(hex_str) % 2:
            hex_str = "0" + hex_str
        try:
            raw = bytes.fromhex(hex_str)
        except ValueError as e:
            raise InvalidParameterError(f"Identifier is not valid hex: {value!r}") from e
    elif isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
    else:
        raise InvalidParameterError(f"Unsupported identifier type: {type(value).__name__}")

    if len(raw) > IDENTIFIER_SIZE:
        raise InvalidParameterError(
            f"Identifier must be at most {IDENTIFIER_SIZE} bytes, got {len(raw)}"
        )
    return raw.rjust(IDENTIFIER_SIZE, b"\x00")


def identifier_to_hex(value: IdentifierLike) -> str:
    """Encode an identifier as 64 lowercase hex characters, no prefix."""
    return to_identifier(value).hex()


def identifier_to_bytes32(value: IdentifierLike) -> HexBytes:
    """Encode an identifier for a ``bytes32`` contract argument."""
    return HexBytes(to_identifier(value))
