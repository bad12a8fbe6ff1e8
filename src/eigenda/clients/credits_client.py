import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union

from web3 import AsyncWeb3, Web3
from web3.logs import DISCARD

from .base_client import BaseClient
from .config import DEFAULT_CREDITS_CONTRACT_ADDRESS, DEFAULT_GAS
from .errors import InvalidParameterError, LedgerError
from .signer import Signer
from ..contracts import load_credits
from ..types import TopupResult
from ..utils.identifiers import IdentifierLike, identifier_to_bytes32, to_identifier

logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, float, str]


class CreditsClient(BaseClient):
    """Client for the Credits contract: balances, top-ups and identifier lifecycle."""

    def __init__(
        self,
        *,
        rpc_url: str,
        signer: Signer,
        contract_address: str = DEFAULT_CREDITS_CONTRACT_ADDRESS,
        default_gas: int = DEFAULT_GAS,
        w3: Optional[AsyncWeb3] = None,
    ) -> None:
        """
        Initialize a CreditsClient.

        Args:
            rpc_url: URL of the JSON-RPC endpoint.
            signer: Signer owning the identifiers this client manages.
            contract_address: Address of the Credits contract.
            default_gas: Default gas limit for transactions.
            w3: Optional pre-built AsyncWeb3 instance.

        Raises:
            InvalidParameterError: If the contract address is not a valid address.
        """
        super().__init__(rpc_url=rpc_url, signer=signer, default_gas=default_gas, w3=w3)
        self._credits = self._load_contract(load_credits, contract_address)

    async def get_balance(self, identifier: IdentifierLike) -> Decimal:
        """
        Read the credit balance of an identifier.

        Args:
            identifier: Identifier bytes or hex, padded to 32 bytes.

        Returns:
            The balance in ether, converted from wei.

        Raises:
            InvalidParameterError: If the identifier is longer than 32 bytes.
            LedgerError: If the contract call fails.
        """
        formatted = identifier_to_bytes32(identifier)
        try:
            balance = await self._credits.functions.getBalance(formatted).call()
        except Exception as e:
            raise LedgerError(f"Failed to get balance: {e}") from e
        return Decimal(Web3.from_wei(balance, "ether"))

    async def topup_credits(self, identifier: IdentifierLike, amount: Amount) -> TopupResult:
        """
        Send ether to the Credits contract on behalf of an identifier.

        Args:
            identifier: Identifier to credit.
            amount: Amount in ether.

        Returns:
            TopupResult with the transaction hash, and status "success" only
            when the receipt status is 1.

        Raises:
            InvalidParameterError: If the amount is negative or not numeric.
            LedgerError: If the transaction cannot be sent or mined.
        """
        formatted = identifier_to_bytes32(identifier)
        try:
            ether = Decimal(str(amount))
        except InvalidOperation as e:
            raise InvalidParameterError(f"Invalid top-up amount: {amount!r}") from e
        if not ether.is_finite() or ether < 0:
            raise InvalidParameterError(f"Invalid top-up amount: {amount!r}")

        try:
            receipt = await self._send_tx(
                self._credits.functions.topup,
                formatted,
                value=Web3.to_wei(ether, "ether"),
            )
        except LedgerError:
            raise
        except Exception as e:
            raise LedgerError(f"Failed to top up credits: {e}") from e

        return TopupResult(
            transaction_hash=Web3.to_hex(receipt["transactionHash"]),
            status="success" if receipt["status"] == 1 else "failed",
        )

    async def create_identifier(self) -> bytes:
        """
        Create a new identifier owned by this client's address.

        The identifier is read back from the IdentifierCreated event of the
        mined transaction.

        Returns:
            The new identifier as 32 bytes.

        Raises:
            LedgerError: If the transaction fails or emits no IdentifierCreated event.
        """
        try:
            receipt = await self._send_tx(self._credits.functions.createIdentifier)
        except LedgerError:
            raise
        except Exception as e:
            raise LedgerError(f"Failed to create identifier: {e}") from e

        events = self._credits.events.IdentifierCreated().process_receipt(receipt, errors=DISCARD)
        if not events:
            raise LedgerError("Failed to create identifier: no IdentifierCreated event in transaction logs")

        identifier = to_identifier(events[0]["args"]["identifier"])
        logger.info(f"Created identifier 0x{identifier.hex()}")
        return identifier

    async def get_identifiers(self) -> List[bytes]:
        """
        List the identifiers owned by this client's address.

        Reads the owner's identifier count, then every entry by index. The
        per-index reads run concurrently; the result keeps ledger order.

        Returns:
            Identifiers as 32-byte values, in insertion order.

        Raises:
            LedgerError: If any contract call fails.
        """
        owner = self.address
        try:
            count = await self._credits.functions.getUserIdentifierCount(owner).call()
            identifiers = await asyncio.gather(
                *(self._credits.functions.getUserIdentifierAt(owner, i).call() for i in range(int(count)))
            )
        except Exception as e:
            raise LedgerError(f"Failed to get identifiers: {e}") from e
        return [to_identifier(identifier) for identifier in identifiers]

    async def get_identifier_owner(self, identifier: IdentifierLike) -> str:
        """
        Look up the address that created an identifier.

        Raises:
            LedgerError: If the contract call fails.
        """
        formatted = identifier_to_bytes32(identifier)
        try:
            return await self._credits.functions.getIdentifierOwner(formatted).call()
        except Exception as e:
            raise LedgerError(f"Failed to get identifier owner: {e}") from e
