"""HTTP transport for the EigenDA data service.

Owns the request and response envelopes of the three endpoints the SDK
uses, and the signing of upload payloads:

  - ``POST {base}/upload``    signed content submission
  - ``GET  {base}/status/ID`` single job status snapshot
  - ``POST {base}/retrieve``  raw payload download

Nothing here retries. Every failure is translated into the matching SDK
error on first occurrence, keeping the service's own ``error`` text.
"""
from __future__ import annotations

import json
import logging
import secrets
from typing import Any, Dict, Optional

import httpx

from .errors import RetrieveError, StatusError, UploadError
from .signer import Signer
from ..types import StatusResponse, UploadResponse
from ..utils.identifiers import IdentifierLike, identifier_to_hex

logger = logging.getLogger(__name__)

_UPLOAD_ENDPOINT = "/upload"
_STATUS_ENDPOINT = "/status"
_RETRIEVE_ENDPOINT = "/retrieve"

SALT_SIZE = 32


def _error_detail(exc: Exception) -> str:
    """Prefer the service's ``error`` field over the transport message."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
    return str(exc) or type(exc).__name__


def signing_message(content: str, salt: str) -> str:
    """Compact JSON of the signed fields, keys sorted by name."""
    return json.dumps(
        {"content": content, "salt": salt},
        separators=(",", ":"),
        sort_keys=True,
        ensure_ascii=False,
    )


class TransferClient:
    """Performs signed uploads, status reads and raw retrievals over HTTP."""

    def __init__(
        self,
        base_url: str,
        signer: Signer,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initializes the transfer client.

        Args:
            base_url: Service base URL; a trailing slash is ignored.
            signer: Signs upload payloads and provides the account id.
            client: Shared httpx.AsyncClient. If None, one is created and
                closed by :meth:`aclose`.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self._signer = signer
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()
        self.timeout = timeout

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def upload(self, content: str, identifier: Optional[IdentifierLike] = None) -> UploadResponse:
        """
        Submit content to the service.

        A fresh 32-byte salt is drawn for every call and signed together
        with the content, so identical uploads never share a signature.

        Args:
            content: Content to store.
            identifier: Optional credit identifier, sent as 64 hex chars.

        Returns:
            The job and request ids assigned by the service.

        Raises:
            InvalidParameterError: If the identifier is longer than 32 bytes.
            UploadError: If the request fails or the response is malformed.
        """
        identifier_hex = identifier_to_hex(identifier) if identifier is not None else None
        salt = secrets.token_hex(SALT_SIZE)
        signature = self._signer.sign_message(signing_message(content, salt))

        payload: Dict[str, Any] = {
            "content": content,
            "account_id": self._signer.address,
            "salt": salt,
            "signature": signature,
        }
        if identifier_hex is not None:
            payload["identifier"] = identifier_hex

        try:
            response = await self._client.post(
                self.base_url + _UPLOAD_ENDPOINT, json=payload, timeout=self.timeout
            )
            response.raise_for_status()
            result = UploadResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            raise UploadError(f"Upload failed: {_error_detail(e)}") from e

        logger.info(f"Upload accepted as job {result.job_id}")
        return result

    async def get_status(self, job_id: str) -> StatusResponse:
        """
        Fetch one status snapshot of a job.

        Raises:
            StatusError: If the request fails or the response is malformed.
        """
        try:
            response = await self._client.get(
                f"{self.base_url}{_STATUS_ENDPOINT}/{job_id}", timeout=self.timeout
            )
            response.raise_for_status()
            return StatusResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            raise StatusError(f"Status check failed: {_error_detail(e)}") from e

    async def retrieve(self, request: Dict[str, Any]) -> bytes:
        """
        Post a retrieval request and return the body untouched.

        Args:
            request: One of ``{request_id}``, ``{job_id}`` or
                ``{batch_header_hash, blob_index}``.

        Raises:
            RetrieveError: If the request fails.
        """
        try:
            response = await self._client.post(
                self.base_url + _RETRIEVE_ENDPOINT, json=request, timeout=self.timeout
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RetrieveError(f"Retrieval failed: {_error_detail(e)}") from e
        return response.content
