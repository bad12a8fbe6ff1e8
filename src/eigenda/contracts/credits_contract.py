from web3 import AsyncWeb3
from web3.types import Address, ChecksumAddress, ENS
from web3.contract import AsyncContract
from typing import Union

ABI = [{'inputs': [{'internalType': 'bytes32', 'name': 'identifier', 'type': 'bytes32'}],
        'name': 'getBalance',
        'outputs': [{'internalType': 'uint256', 'name': '', 'type': 'uint256'}],
        'stateMutability': 'view',
        'type': 'function'},
       {'inputs': [{'internalType': 'bytes32', 'name': 'identifier', 'type': 'bytes32'}],
        'name': 'topup',
        'outputs': [],
        'stateMutability': 'payable',
        'type': 'function'},
       {'inputs': [],
        'name': 'createIdentifier',
        'outputs': [{'internalType': 'bytes32', 'name': '', 'type': 'bytes32'}],
        'stateMutability': 'nonpayable',
        'type': 'function'},
       {'inputs': [{'internalType': 'address', 'name': 'user', 'type': 'address'}],
        'name': 'getUserIdentifierCount',
        'outputs': [{'internalType': 'uint256', 'name': '', 'type': 'uint256'}],
        'stateMutability': 'view',
        'type': 'function'},
       {'inputs': [{'internalType': 'address', 'name': 'user', 'type': 'address'},
                   {'internalType': 'uint256', 'name': 'index', 'type': 'uint256'}],
        'name': 'getUserIdentifierAt',
        'outputs': [{'internalType': 'bytes32', 'name': '', 'type': 'bytes32'}],
        'stateMutability': 'view',
        'type': 'function'},
       {'inputs': [{'internalType': 'bytes32', 'name': 'identifier', 'type': 'bytes32'}],
        'name': 'getIdentifierOwner',
        'outputs': [{'internalType': 'address', 'name': '', 'type': 'address'}],
        'stateMutability': 'view',
        'type': 'function'},
       {'anonymous': False,
        'inputs': [{'indexed': True,
                    'internalType': 'bytes32',
                    'name': 'identifier',
                    'type': 'bytes32'},
                   {'indexed': True,
                    'internalType': 'address',
                    'name': 'owner',
                    'type': 'address'}],
        'name': 'IdentifierCreated',
        'type': 'event'},
       {'anonymous': False,
        'inputs': [{'indexed': True,
                    'internalType': 'bytes32',
                    'name': 'identifier',
                    'type': 'bytes32'},
                   {'indexed': False,
                    'internalType': 'uint256',
                    'name': 'amount',
                    'type': 'uint256'}],
        'name': 'CreditsToppedUp',
        'type': 'event'}]

def get_contract(
    w3: AsyncWeb3,
    address: Union[Address, ChecksumAddress, ENS],
) -> AsyncContract:
    """
    Returns a Web3.py AsyncContract instance for `Credits`.
    """
    return w3.eth.contract(address=address, abi=ABI)
