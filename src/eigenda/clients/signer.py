"""Signing capability shared by the HTTP and ledger clients.

A credential is supplied either as a raw secp256k1 private key or as an
already-bound signing object (for example an ``eth_account`` LocalAccount
kept by a wallet). Both are resolved once into a :class:`Signer`; the rest
of the SDK only ever talks to that capability.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union

from eth_account import Account
from eth_account.datastructures import SignedTransaction
from eth_account.messages import encode_defunct
from web3 import Web3

from .errors import ConfigurationError

_PRIVATE_KEY_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


def is_valid_private_key(key: str) -> bool:
    """True if ``key`` is 32 bytes of hex, with or without ``0x`` prefix."""
    return bool(_PRIVATE_KEY_RE.match(key or ""))


@dataclass(frozen=True)
class RawKey:
    """A 32-byte private key."""
    key: bytes

    @classmethod
    def from_hex(cls, value: str) -> "RawKey":
        if not is_valid_private_key(value):
            raise ConfigurationError("Invalid private key format")
        return cls(bytes.fromhex(value[2:] if value.startswith("0x") else value))


@dataclass(frozen=True)
class BoundSigner:
    """An object that already holds a key and can sign on its own.

    The handle must expose ``address``, ``sign_message(signable)`` and
    ``sign_transaction(tx)`` the way ``eth_account`` accounts do.
    """
    handle: Any


Credential = Union[RawKey, BoundSigner]


class Signer:
    """Signs upload requests and ledger transactions for one address."""

    def __init__(self, account: Any) -> None:
        self._account = account

    @property
    def address(self) -> str:
        """Checksummed address of the signing account."""
        return Web3.to_checksum_address(self._account.address)

    def sign_message(self, message: str) -> str:
        """
        Produce an EIP-191 personal-message signature over ``message``.

        Args:
            message: UTF-8 text to sign.

        Returns:
            The 65-byte signature as 0x-prefixed hex.
        """
        signed = self._account.sign_message(encode_defunct(text=message))
        return Web3.to_hex(signed.signature)

    def sign_transaction(self, tx: dict) -> SignedTransaction:
        return self._account.sign_transaction(tx)


def resolve_signer(credential: Credential) -> Signer:
    """
    Turn a credential into the canonical :class:`Signer`.

    Raises:
        ConfigurationError: If the key cannot be loaded or the credential
            type is unknown.
    """
    if isinstance(credential, BoundSigner):
        return Signer(credential.handle)
    if isinstance(credential, RawKey):
        try:
            return Signer(Account.from_key(credential.key))
        except Exception as e:
            raise ConfigurationError(f"Invalid private key: {e}") from e
    raise ConfigurationError(f"Unsupported credential type: {type(credential).__name__}")
