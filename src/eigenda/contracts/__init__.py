"""
EigenDA Contracts Subpackage.

This package provides Python stubs for Web3.py integration with the
on-chain Credits contract that records identifier ownership and balances.
"""

from web3 import AsyncWeb3
from web3.contract import AsyncContract
from web3.types import Address, ChecksumAddress, ENS
from typing import Union

from . import credits_contract
from .credits_contract import get_contract as get_credits_contract

__all__ = [
    "credits_contract",
    "get_credits_contract",
    "load_credits",
]


def load_credits(
    w3: AsyncWeb3,
    address: Union[Address, ChecksumAddress, ENS],
) -> AsyncContract:
    """
    Convenience loader for the Credits contract.

    Args:
        w3: Initialized AsyncWeb3 instance.
        address: On-chain address of the deployed contract.

    Returns:
        A Web3.py AsyncContract instance.
    """
    return get_credits_contract(w3, address)
