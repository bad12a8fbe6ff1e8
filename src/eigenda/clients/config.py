"""Client configuration for the EigenDA SDK.

Every setting is resolved once, when a client is built, in this order:
explicit keyword argument, then environment variable, then the built-in
default. The resolved :class:`ClientConfig` is immutable, so a client
behaves the same for its whole lifetime even if the environment changes.
"""
from __future__ import annotations

import os
import re
from typing import Any, List, Mapping, Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, SkipValidation, TypeAdapter, ValidationError

from .errors import ConfigurationError
from .signer import BoundSigner, Credential, RawKey, is_valid_private_key

DEFAULT_API_URL = "https://test-agent-proxy-api.eigenda.xyz"
DEFAULT_RPC_URL = "https://mainnet.base.org"
DEFAULT_CREDITS_CONTRACT_ADDRESS = "0x0CC001F1bDe9cd129092d4d24D935DB985Ce42A9"

MAX_STATUS_CHECKS = 60  # 10 minutes with a 10 second interval
STATUS_CHECK_INTERVAL = 10  # seconds between status checks
INITIAL_RETRIEVAL_DELAY = 300  # seconds before the first status check
DEFAULT_GAS = 2_000_000

ENV_API_URL = "API_URL"
ENV_RPC_URL = "BASE_RPC_URL"
ENV_PRIVATE_KEY = "EIGENDA_PRIVATE_KEY"
ENV_CREDITS_CONTRACT_ADDRESS = "CREDITS_CONTRACT_ADDRESS"

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_URL_ADAPTER = TypeAdapter(AnyUrl)


def is_valid_url(url: str) -> bool:
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError:
        return False
    return True


def is_valid_address(address: str) -> bool:
    """True for a 0x-prefixed 20-byte hex address, in any letter case."""
    return bool(_ADDRESS_RE.match(address or ""))


def validate_config(
    *,
    api_url: Optional[str] = None,
    rpc_url: Optional[str] = None,
    private_key: Optional[str] = None,
    credits_contract_address: Optional[str] = None,
    max_status_checks: Optional[int] = None,
    status_check_interval: Optional[float] = None,
    initial_retrieval_delay: Optional[float] = None,
) -> List[str]:
    """
    Check configuration values without raising.

    Unset values are skipped.

    Returns:
        A list of human-readable messages, empty when everything is valid.
    """
    errors: List[str] = []

    if api_url and not is_valid_url(api_url):
        errors.append("Invalid API URL format")
    if rpc_url and not is_valid_url(rpc_url):
        errors.append("Invalid RPC URL format")
    if private_key and not is_valid_private_key(private_key):
        errors.append("Invalid private key format")
    if credits_contract_address and not is_valid_address(credits_contract_address):
        errors.append("Invalid credits contract address format")
    if max_status_checks is not None and max_status_checks < 1:
        errors.append("max_status_checks must be at least 1")
    if status_check_interval is not None and status_check_interval < 0:
        errors.append("status_check_interval must not be negative")
    if initial_retrieval_delay is not None and initial_retrieval_delay < 0:
        errors.append("initial_retrieval_delay must not be negative")

    return errors


class ClientConfig(BaseModel):
    """Resolved, validated settings of one client instance.

    Attributes:
        api_url: Base URL of the data service, without trailing slash.
        rpc_url: JSON-RPC endpoint of the chain hosting the Credits contract.
        credential: Signing credential, a raw key or a bound signer.
        credits_contract_address: Address of the Credits contract.
        max_status_checks: Default number of status checks per wait.
        status_check_interval: Default seconds between status checks.
        initial_retrieval_delay: Default seconds before the first check.
        default_gas: Gas limit for ledger transactions.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    api_url: str = DEFAULT_API_URL
    rpc_url: str = DEFAULT_RPC_URL
    credential: SkipValidation[Credential]
    credits_contract_address: str = DEFAULT_CREDITS_CONTRACT_ADDRESS
    max_status_checks: int = MAX_STATUS_CHECKS
    status_check_interval: float = STATUS_CHECK_INTERVAL
    initial_retrieval_delay: float = INITIAL_RETRIEVAL_DELAY
    default_gas: int = DEFAULT_GAS

    @classmethod
    def resolve(
        cls,
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
        env: Optional[Mapping[str, str]] = None,
    ) -> "ClientConfig":
        """
        Build a config from explicit values, the environment and defaults.

        Args:
            api_url: Data service base URL; falls back to ``API_URL``.
            rpc_url: Chain RPC URL; falls back to ``BASE_RPC_URL``.
            private_key: Hex private key; falls back to ``EIGENDA_PRIVATE_KEY``.
            signer: Pre-bound signing object; wins over any private key.
            credits_contract_address: Falls back to ``CREDITS_CONTRACT_ADDRESS``.
            max_status_checks: Default polling bound.
            status_check_interval: Default seconds between checks.
            initial_retrieval_delay: Default seconds before the first check.
            default_gas: Gas limit for ledger transactions.
            env: Environment mapping to read; defaults to ``os.environ``.

        Returns:
            The resolved ClientConfig.

        Raises:
            ConfigurationError: With every validation message at once,
                including a missing credential.
        """
        env = os.environ if env is None else env

        api_url = api_url or env.get(ENV_API_URL) or DEFAULT_API_URL
        rpc_url = rpc_url or env.get(ENV_RPC_URL) or DEFAULT_RPC_URL
        credits_contract_address = (
            credits_contract_address
            or env.get(ENV_CREDITS_CONTRACT_ADDRESS)
            or DEFAULT_CREDITS_CONTRACT_ADDRESS
        )
        if signer is None:
            private_key = private_key or env.get(ENV_PRIVATE_KEY)

        errors = validate_config(
            api_url=api_url,
            rpc_url=rpc_url,
            private_key=private_key if signer is None else None,
            credits_contract_address=credits_contract_address,
            max_status_checks=max_status_checks,
            status_check_interval=status_check_interval,
            initial_retrieval_delay=initial_retrieval_delay,
        )
        if signer is None and not private_key:
            errors.append(f"Private key not provided and {ENV_PRIVATE_KEY} not set in environment")
        if errors:
            raise ConfigurationError(f"Invalid configuration: {', '.join(errors)}")

        if signer is not None:
            credential: Credential = BoundSigner(signer)
        else:
            credential = RawKey.from_hex(private_key)

        overrides = {
            "max_status_checks": max_status_checks,
            "status_check_interval": status_check_interval,
            "initial_retrieval_delay": initial_retrieval_delay,
            "default_gas": default_gas,
        }
        return cls(
            api_url=api_url.rstrip("/"),
            rpc_url=rpc_url,
            credential=credential,
            credits_contract_address=credits_contract_address,
            **{k: v for k, v in overrides.items() if v is not None},
        )
