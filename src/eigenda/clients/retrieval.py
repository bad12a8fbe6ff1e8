import json
import logging
from typing import Any, Dict, Optional

from .errors import RetrieveError
from .status_poller import StatusPoller
from .transfer_client import TransferClient
from ..types import RetrieveOptions

logger = logging.getLogger(__name__)


def build_retrieve_request(options: RetrieveOptions, request_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Pick the single addressing mode sent to the retrieve endpoint.

    Precedence: request id (resolved or explicit), then job id, then batch
    header hash with blob index.

    Args:
        options: Caller-supplied addressing options.
        request_id: Request id obtained by polling; overrides options.request_id.

    Returns:
        The JSON body for ``POST /retrieve``.

    Raises:
        RetrieveError: If no addressing mode is usable.
    """
    request_id = request_id or options.request_id
    if request_id:
        return {"request_id": request_id}
    if options.job_id:
        return {"job_id": options.job_id}
    if options.batch_header_hash and options.blob_index is not None:
        return {"batch_header_hash": options.batch_header_hash, "blob_index": options.blob_index}
    raise RetrieveError(
        "Must provide either job_id, request_id, or both batch_header_hash and blob_index"
    )


def decode_payload(raw: bytes) -> Any:
    """Best-effort decode: JSON value when the bytes are UTF-8 JSON, else the bytes unchanged."""
    try:
        return json.loads(raw.decode("utf-8"))
    except ValueError:
        return raw


class RetrievalResolver:
    """Turns RetrieveOptions into one retrieval call, polling first when asked to."""

    def __init__(self, poller: StatusPoller, transfer: TransferClient) -> None:
        self._poller = poller
        self._transfer = transfer

    async def resolve(self, options: RetrieveOptions) -> Dict[str, Any]:
        """
        Build the retrieval request, waiting for the job when required.

        With ``job_id`` and ``wait_for_completion`` the job is polled until
        CONFIRMED using the poller's default timing, and the request id it
        reports is used.

        Raises:
            StatusError: If polling fails or times out.
            RetrieveError: If the confirmed status has no request id, or no
                addressing mode is usable.
        """
        request_id = None
        if options.job_id and options.wait_for_completion:
            status = await self._poller.wait_for_status(options.job_id)
            if not status.request_id:
                raise RetrieveError("No request_id in completed status")
            request_id = status.request_id
        return build_retrieve_request(options, request_id)

    async def retrieve(self, options: RetrieveOptions) -> Any:
        """
        Fetch content addressed by ``options``.

        Returns:
            The decoded JSON value when the payload is UTF-8 JSON, otherwise
            the raw bytes. Callers must handle both.
        """
        request = await self.resolve(options)
        logger.debug(f"Retrieving by {', '.join(sorted(request))}")
        raw = await self._transfer.retrieve(request)
        return decode_payload(raw)
