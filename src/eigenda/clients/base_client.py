import logging
from typing import Optional, Callable, Any

from web3 import AsyncWeb3, AsyncHTTPProvider, Web3
from web3.contract import AsyncContract
from web3.exceptions import TimeExhausted
from web3.types import TxParams, Nonce, Wei, TxReceipt, ChecksumAddress

from .config import is_valid_address, DEFAULT_GAS
from .errors import ConfigurationError, TransactionError, InvalidParameterError
from .signer import Signer

logger = logging.getLogger(__name__)


class BaseClient:
    """Common functionality for ledger-backed clients: AsyncWeb3, signer and tx sending."""

    def __init__(
        self,
        *,
        rpc_url: str,
        signer: Signer,
        default_gas: int = DEFAULT_GAS,
        w3: Optional[AsyncWeb3] = None,
    ) -> None:
        """
        Initialize the BaseClient.

        Args:
            rpc_url: JSON-RPC URL of the chain hosting the contracts.
            signer: Signer used for every transaction this client sends.
            default_gas: Default gas limit for transactions.
            w3: Pre-built AsyncWeb3 instance; one is created from rpc_url if None.

        Raises:
            ConfigurationError: If rpc_url is empty.
        """
        if not rpc_url:
            raise ConfigurationError("rpc_url must be provided")

        self._w3 = w3 or AsyncWeb3(AsyncHTTPProvider(rpc_url))
        self._signer = signer
        self._gas = default_gas

    @property
    def address(self) -> str:
        """Address that signs this client's transactions."""
        return self._signer.address

    async def _send_tx(self, fn: Callable[..., Any], *args: Any, value: int = 0) -> TxReceipt:
        """
        Build, sign, send a transaction and wait for its receipt.

        The receipt is returned whatever its status; callers decide how a
        reverted transaction is reported.

        Args:
            fn: A `contract.functions.<method>` reference.
            *args: Arguments for the call.
            value: Wei to send alongside (default 0).

        Returns:
            The mined transaction receipt.

        Raises:
            TransactionError: timed out waiting for the receipt, or the
                transaction could not be built or sent.
        """
        address = self._signer.address
        tx_params: TxParams = {
            "from": address,
            "nonce": Nonce(await self._w3.eth.get_transaction_count(address)),
            "gas": self._gas,
            "value": Wei(value),
            "chainId": await self._w3.eth.chain_id,
        }

        tx_hash = None
        try:
            tx = await fn(*args).build_transaction(tx_params)
            signed = self._signer.sign_transaction(tx)
            tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
            logger.debug(f"Sent transaction {Web3.to_hex(tx_hash)}")
            receipt: TxReceipt = await self._w3.eth.wait_for_transaction_receipt(tx_hash, timeout=120)
        except TimeExhausted as e:
            raise TransactionError("Transaction receipt wait timed out", Web3.to_hex(tx_hash)) from e
        except Exception as e:
            raise TransactionError(
                f"Transaction failed: {e}", Web3.to_hex(tx_hash) if tx_hash else None
            ) from e

        logger.info(
            f"Transaction {Web3.to_hex(receipt['transactionHash'])} mined "
            f"with status {receipt['status']}"
        )
        return receipt

    def _load_contract(self, getter: Callable[[AsyncWeb3, Any], AsyncContract], address: str) -> AsyncContract:
        """
        Validate and checksum an address, then load a Web3.py contract via the provided stub.

        Args:
            getter: A function `get_contract(w3, address)` that returns a contract.
            address: Hex string of the contract address.

        Returns:
            A Web3.py AsyncContract instance.

        Raises:
            InvalidParameterError: If the address is not a valid Ethereum address.
        """
        if not is_valid_address(address):
            raise InvalidParameterError(f"Invalid contract address: {address}")
        checksum_addr: ChecksumAddress = Web3.to_checksum_address(address)
        return getter(self._w3, checksum_addr)
