"""
EigenDA Client Subpackage.

This package provides the client classes for the EigenDA data service and
the on-chain Credits contract: signed uploads, job status polling,
retrieval, and credit identifier management.
"""

from .errors import (
    EigenDAError,
    ConfigurationError,
    InvalidParameterError,
    UploadError,
    StatusError,
    RetrieveError,
    LedgerError,
    TransactionError,
)
from .signer import Signer, RawKey, BoundSigner, Credential, resolve_signer
from .config import ClientConfig, validate_config
from .base_client import BaseClient
from .transfer_client import TransferClient
from .status_poller import StatusPoller
from .retrieval import RetrievalResolver, build_retrieve_request, decode_payload
from .credits_client import CreditsClient
from .eigenda_client import EigenDAClient

__all__ = [
    "BaseClient",
    "EigenDAClient",
    "CreditsClient",
    "TransferClient",
    "StatusPoller",
    "RetrievalResolver",
    "build_retrieve_request",
    "decode_payload",
    "ClientConfig",
    "validate_config",
    "Signer",
    "RawKey",
    "BoundSigner",
    "Credential",
    "resolve_signer",
    "EigenDAError",
    "ConfigurationError",
    "InvalidParameterError",
    "UploadError",
    "StatusError",
    "RetrieveError",
    "LedgerError",
    "TransactionError",
]
