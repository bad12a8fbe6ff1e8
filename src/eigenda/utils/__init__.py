"""Initializes the EigenDA utilities sub-package.

Available Utilities:
  - identifiers: normalization of 32-byte credit identifiers between the
    caller, the HTTP service and the Credits contract.
"""
from .identifiers import (
    IDENTIFIER_SIZE,
    to_identifier,
    identifier_to_hex,
    identifier_to_bytes32,
)


__all__ = [
    "IDENTIFIER_SIZE",
    "to_identifier",
    "identifier_to_hex",
    "identifier_to_bytes32",
]
