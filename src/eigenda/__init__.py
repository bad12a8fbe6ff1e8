"""EigenDA SDK.

Store content on the EigenDA data service, follow the upload job until it
is confirmed, retrieve it back, and manage the prepaid credits recorded in
the on-chain Credits contract.
"""
from .clients import (
    EigenDAClient,
    CreditsClient,
    ClientConfig,
    EigenDAError,
    ConfigurationError,
    InvalidParameterError,
    UploadError,
    StatusError,
    RetrieveError,
    LedgerError,
    TransactionError,
)
from .types import JobStatus, BlobInfo, UploadResponse, StatusResponse, RetrieveOptions, TopupResult

__version__ = "0.1.0"

__all__ = [
    "EigenDAClient",
    "CreditsClient",
    "ClientConfig",
    "JobStatus",
    "BlobInfo",
    "UploadResponse",
    "StatusResponse",
    "RetrieveOptions",
    "TopupResult",
    "EigenDAError",
    "ConfigurationError",
    "InvalidParameterError",
    "UploadError",
    "StatusError",
    "RetrieveError",
    "LedgerError",
    "TransactionError",
]
