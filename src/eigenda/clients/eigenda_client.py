import logging
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Union

import httpx
from web3 import AsyncWeb3

from .config import ClientConfig
from .credits_client import Amount, CreditsClient
from .retrieval import RetrievalResolver
from .signer import resolve_signer
from .status_poller import StatusPoller
from .transfer_client import TransferClient
from ..types import JobStatus, RetrieveOptions, StatusResponse, TopupResult, UploadResponse
from ..utils.identifiers import IdentifierLike

logger = logging.getLogger(__name__)


class EigenDAClient:
    """EigenDA SDK client: uploads, job status, retrieval and credits management."""

    def __init__(
        self,
        *,
        api_url: Optional[str] = None,
        rpc_url: Optional[str] = None,
        private_key: Optional[str] = None,
        signer: Any = None,
        credits_contract_address: Optional[str] = None,
        max_status_checks: Optional[int] = None,
        status_check_interval: Optional[float] = None,
        initial_retrieval_delay: Optional[float] = None,
        default_gas: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        w3: Optional[AsyncWeb3] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Initialize an EigenDAClient.

        Settings left as None are read from the environment, then from the
        built-in defaults. See :class:`ClientConfig`.

        Args:
            api_url: Base URL of the data service.
            rpc_url: JSON-RPC endpoint of the chain hosting the Credits contract.
            private_key: Hex string of the signing key.
            signer: Pre-bound signing object (e.g. an eth_account LocalAccount);
                    used instead of private_key when given.
            credits_contract_address: Address of the Credits contract.
            max_status_checks: Default number of status checks per wait.
            status_check_interval: Default seconds between status checks.
            initial_retrieval_delay: Default seconds before the first check.
            default_gas: Gas limit for credits transactions.
            http_client: Shared httpx.AsyncClient; one is owned otherwise.
            w3: Pre-built AsyncWeb3 instance for the ledger.
            env: Environment mapping to read instead of os.environ.

        Raises:
            ConfigurationError: If any setting is malformed or no credential is available.
        """
        self._config = ClientConfig.resolve(
            api_url=api_url,
            rpc_url=rpc_url,
            private_key=private_key,
            signer=signer,
            credits_contract_address=credits_contract_address,
            max_status_checks=max_status_checks,
            status_check_interval=status_check_interval,
            initial_retrieval_delay=initial_retrieval_delay,
            default_gas=default_gas,
            env=env,
        )
        self._signer = resolve_signer(self._config.credential)

        self._transfer = TransferClient(self._config.api_url, self._signer, client=http_client)
        self._poller = StatusPoller(
            self._transfer.get_status,
            max_checks=self._config.max_status_checks,
            check_interval=self._config.status_check_interval,
            initial_delay=self._config.initial_retrieval_delay,
        )
        self._resolver = RetrievalResolver(self._poller, self._transfer)
        self._credits = CreditsClient(
            rpc_url=self._config.rpc_url,
            signer=self._signer,
            contract_address=self._config.credits_contract_address,
            default_gas=self._config.default_gas,
            w3=w3,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def address(self) -> str:
        """Address used as account_id for uploads and as owner of identifiers."""
        return self._signer.address

    async def __aenter__(self) -> "EigenDAClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transfer.aclose()

    # ---------------------------------------------------------------- data

    async def upload(self, content: str, identifier: Optional[IdentifierLike] = None) -> UploadResponse:
        """Upload content, optionally charging it to a credit identifier."""
        return await self._transfer.upload(content, identifier)

    async def get_status(self, job_id: str) -> StatusResponse:
        """Fetch the current status of a job once."""
        return await self._transfer.get_status(job_id)

    async def wait_for_status(
        self,
        job_id: str,
        target_status: Union[JobStatus, str] = JobStatus.CONFIRMED,
        max_checks: Optional[int] = None,
        check_interval: Optional[float] = None,
        initial_delay: Optional[float] = None,
    ) -> StatusResponse:
        """Poll a job until it reaches target_status. See :class:`StatusPoller`."""
        return await self._poller.wait_for_status(
            job_id,
            target_status,
            max_checks=max_checks,
            check_interval=check_interval,
            initial_delay=initial_delay,
        )

    async def retrieve(self, options: Optional[RetrieveOptions] = None, **fields: Any) -> Any:
        """
        Retrieve content by job id, request id, or batch header hash and blob index.

        Args:
            options: Addressing options; alternatively pass its fields as
                     keyword arguments (job_id=..., wait_for_completion=True).
            **fields: Field values, by name or camelCase alias. Given together
                     with options they override it and are validated the same way.

        Returns:
            A decoded JSON value, or the raw bytes when the payload is not JSON.

        Raises:
            RetrieveError: On a transport failure, no usable addressing, or a
                           completed job without request id.
            StatusError: If waiting for completion fails or times out.
        """
        if options is None:
            options = RetrieveOptions(**fields)
        elif fields:
            options = RetrieveOptions.model_validate({**options.model_dump(), **fields})
        return await self._resolver.retrieve(options)

    # ------------------------------------------------------------- credits

    async def get_balance(self, identifier: IdentifierLike) -> Decimal:
        return await self._credits.get_balance(identifier)

    async def topup_credits(self, identifier: IdentifierLike, amount: Amount) -> TopupResult:
        return await self._credits.topup_credits(identifier, amount)

    async def create_identifier(self) -> bytes:
        return await self._credits.create_identifier()

    async def get_identifiers(self) -> List[bytes]:
        return await self._credits.get_identifiers()

    async def get_identifier_owner(self, identifier: IdentifierLike) -> str:
        return await self._credits.get_identifier_owner(identifier)
