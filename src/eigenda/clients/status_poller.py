"""Bounded polling of job status until a target state is reached.

A wait sleeps ``initial_delay`` seconds, then checks the job up to
``max_checks`` times with ``check_interval`` seconds between checks:

  - the target status ends the wait with that response;
  - FAILED ends it at once with a StatusError carrying the server error;
  - any other status, including a terminal one that is not the target,
    leads to another check;
  - running out of checks raises a timeout StatusError.

Worst-case latency is ``initial_delay + (max_checks - 1) * check_interval``
plus request time. Each wait is independent and read-only, so concurrent
waits on the same job are safe.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Union

from tenacity import AsyncRetrying, RetryCallState, retry_if_result, stop_after_attempt, wait_fixed

from .config import INITIAL_RETRIEVAL_DELAY, MAX_STATUS_CHECKS, STATUS_CHECK_INTERVAL
from .errors import InvalidParameterError, StatusError
from ..types import JobStatus, StatusResponse

logger = logging.getLogger(__name__)

StatusFetcher = Callable[[str], Awaitable[StatusResponse]]
Sleeper = Callable[[float], Awaitable[None]]

TARGET_STATUSES = (JobStatus.CONFIRMED, JobStatus.FINALIZED)


def _log_before_check(retry_state: RetryCallState) -> None:
    """Log the last observed status and the wait before the next check."""
    status = retry_state.outcome.result().status
    logger.info(
        f"Job {retry_state.args[0]} is {status.value}; checking again in "
        f"{retry_state.next_action.sleep:.2f}s (check {retry_state.attempt_number})..."
    )


class StatusPoller:
    """Waits for jobs to reach a status, using a status fetcher such as
    :meth:`TransferClient.get_status`."""

    def __init__(
        self,
        fetch_status: StatusFetcher,
        *,
        max_checks: int = MAX_STATUS_CHECKS,
        check_interval: float = STATUS_CHECK_INTERVAL,
        initial_delay: float = INITIAL_RETRIEVAL_DELAY,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        """
        Args:
            fetch_status: Coroutine function returning one status snapshot.
            max_checks: Default number of checks per wait.
            check_interval: Default seconds between checks.
            initial_delay: Default seconds before the first check.
            sleep: Awaitable used for every suspension.
        """
        self._fetch_status = fetch_status
        self.max_checks = max_checks
        self.check_interval = check_interval
        self.initial_delay = initial_delay
        self._sleep = sleep

    async def _check(self, job_id: str) -> StatusResponse:
        response = await self._fetch_status(job_id)
        logger.debug(f"Job {job_id} status: {response.status.value}")
        if response.status == JobStatus.FAILED:
            raise StatusError(f"Job failed: {response.error or 'Unknown error'}")
        return response

    async def wait_for_status(
        self,
        job_id: str,
        target_status: Union[JobStatus, str] = JobStatus.CONFIRMED,
        max_checks: Optional[int] = None,
        check_interval: Optional[float] = None,
        initial_delay: Optional[float] = None,
    ) -> StatusResponse:
        """
        Poll a job until it reports ``target_status``.

        Only an exact match satisfies the target: a FINALIZED job does not
        end a wait for CONFIRMED.

        Args:
            job_id: Job to poll.
            target_status: CONFIRMED (default) or FINALIZED.
            max_checks: Overrides the default number of checks.
            check_interval: Overrides the default seconds between checks.
            initial_delay: Overrides the default seconds before the first check.

        Returns:
            The first status response matching the target.

        Raises:
            InvalidParameterError: On an unusable target or bounds.
            StatusError: If a check fails, the job FAILED, or checks ran out.
        """
        try:
            target = JobStatus(target_status)
        except ValueError as e:
            raise InvalidParameterError(f"Unknown target status: {target_status!r}") from e
        if target not in TARGET_STATUSES:
            raise InvalidParameterError(f"Target status must be CONFIRMED or FINALIZED, got {target.value}")

        max_checks = self.max_checks if max_checks is None else max_checks
        check_interval = self.check_interval if check_interval is None else check_interval
        initial_delay = self.initial_delay if initial_delay is None else initial_delay
        if max_checks < 1:
            raise InvalidParameterError("max_checks must be at least 1")
        if check_interval < 0 or initial_delay < 0:
            raise InvalidParameterError("check_interval and initial_delay must not be negative")

        def _timed_out(retry_state: RetryCallState) -> StatusResponse:
            raise StatusError(
                f"Timeout waiting for status {target.value} after {retry_state.attempt_number} checks"
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_checks),
            wait=wait_fixed(check_interval),
            retry=retry_if_result(lambda response: response.status != target),
            before_sleep=_log_before_check,
            retry_error_callback=_timed_out,
            sleep=self._sleep,
        )

        await self._sleep(initial_delay)
        response = await retrying(self._check, job_id)
        logger.info(f"Job {job_id} reached {target.value}")
        return response
