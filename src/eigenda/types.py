"""Defines the core data structures and Pydantic models for the EigenDA SDK.

This module contains the request and response contracts of the remote data
service (uploads, job status, retrieval addressing) and the result of a
credits top-up. Wire payloads use camelCase keys; the models expose
snake_case attributes and accept either spelling on input.
"""
from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class JobStatus(str, Enum):
    """Lifecycle states of an upload job on the data service.

    PENDING and PROCESSING are transient. CONFIRMED and FINALIZED are
    successful terminal states. FAILED is terminal and never retried.
    """
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    CONFIRMED = "CONFIRMED"
    FINALIZED = "FINALIZED"
    FAILED = "FAILED"


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BlobInfo(_WireModel):
    """Coordinates of a blob inside a dispersed batch.

    Attributes:
        batch_header_hash: Hash of the batch header the blob belongs to.
        blob_index: Position of the blob within that batch.
    """
    batch_header_hash: str
    blob_index: int


class UploadResponse(_WireModel):
    """Handles returned by a successful upload.

    Attributes:
        job_id: Durable handle used for status polling.
        request_id: Handle preferred for retrieval; the service may leave it
            unset until the job is confirmed.
    """
    job_id: str
    request_id: Optional[str] = None


class StatusResponse(_WireModel):
    """Snapshot of a job as reported by the status endpoint.

    ``request_id`` and ``blob_info`` are only populated once the job has
    reached CONFIRMED; ``error`` is only set for FAILED jobs.
    """
    status: JobStatus
    request_id: Optional[str] = None
    blob_info: Optional[BlobInfo] = None
    error: Optional[str] = None


class RetrieveOptions(_WireModel):
    """Addressing options for a retrieval.

    Exactly one addressing mode ends up in the outbound request, chosen in
    this order: request id, job id, then batch header hash plus blob index.
    Setting ``wait_for_completion`` together with ``job_id`` polls the job
    until CONFIRMED and retrieves by the request id it reports.
    """
    job_id: Optional[str] = None
    request_id: Optional[str] = None
    batch_header_hash: Optional[str] = None
    blob_index: Optional[int] = None
    wait_for_completion: bool = False


class TopupResult(_WireModel):
    """Outcome of a credits top-up transaction.

    Attributes:
        transaction_hash: 0x-prefixed hash of the mined transaction.
        status: "success" when the receipt status is 1, otherwise "failed".
    """
    transaction_hash: str
    status: Literal["success", "failed"]

    @property
    def succeeded(self) -> bool:
        return self.status == "success"
