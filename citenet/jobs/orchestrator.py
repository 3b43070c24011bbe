# citenet/jobs/orchestrator.py

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from citenet.clients.base import JobBody, JobClient, JobState
from citenet.config.settings import settings
from citenet.errors import Cancelled, JobFailed, JobSubmissionFailed, JobTimeout
from citenet.models.paper import Paper
from citenet.search.filters import JobType, SearchFilters

logger = logging.getLogger("citenet.jobs")


class JobOrchestrator:
    """
    Turn the provider's "create job -> poll status" protocol into one awaitable call.

    One job per call, submitted once and never retried. Polling is the only
    suspension point; each call polls independently of any other.

    Parameters
    ----------
    client:
        Anything implementing JobClient (live Veritus client or the mock).
    poll_interval:
        Seconds between status checks. Defaults to settings.poll_interval_seconds.
    max_attempts:
        Maximum number of status checks. Defaults to settings.max_poll_attempts.
    """

    def __init__(
        self,
        client: JobClient,
        poll_interval: Optional[float] = None,
        max_attempts: Optional[int] = None,
    ) -> None:
        self.client = client
        self.poll_interval = (
            settings.poll_interval_seconds if poll_interval is None else poll_interval
        )
        self.max_attempts = settings.max_poll_attempts if max_attempts is None else max_attempts

        if self.poll_interval < 0:
            raise ValueError("poll_interval must be >= 0")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    async def submit(
        self,
        job_type: JobType,
        filters: SearchFilters,
        phrases: Optional[Sequence[str]],
        query: Optional[str],
        limit: int,
    ) -> str:
        body = JobBody(
            phrases=list(phrases) if phrases is not None else None,
            query=query,
        )
        try:
            job_id = await self.client.create_job(job_type, filters, body, limit)
        except JobSubmissionFailed:
            raise
        except Exception as exc:
            raise JobSubmissionFailed(f"Could not submit {job_type.value} job: {exc}") from exc

        logger.info("Submitted %s job %s (limit=%d)", job_type.value, job_id, limit)
        return job_id

    async def await_results(
        self,
        job_id: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[Paper]:
        """
        Poll until the job reaches a terminal state or the attempt cap.

        Raises JobFailed, JobTimeout or Cancelled.
        """
        for attempt in range(1, self.max_attempts + 1):
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Polling for job %s cancelled before attempt %d", job_id, attempt)
                raise Cancelled(job_id)

            status = await self.client.get_job_status(job_id)
            logger.debug(
                "Job %s attempt %d/%d: %s",
                job_id,
                attempt,
                self.max_attempts,
                status.state.value,
            )

            if status.state is JobState.SUCCESS:
                logger.info("Job %s succeeded with %d results", job_id, len(status.results))
                return list(status.results)
            if status.state is JobState.ERROR:
                message = status.error or "Veritus job failed"
                logger.warning("Job %s failed: %s", job_id, message)
                raise JobFailed(job_id, message)

            if attempt < self.max_attempts:
                await self._sleep(job_id, cancel_event)

        waited = self.poll_interval * (self.max_attempts - 1)
        logger.warning("Job %s timed out after %d attempts", job_id, self.max_attempts)
        raise JobTimeout(job_id, attempts=self.max_attempts, waited_seconds=waited)

    async def submit_and_await(
        self,
        job_type: JobType,
        filters: SearchFilters,
        phrases: Optional[Sequence[str]],
        query: Optional[str],
        limit: int,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[Paper]:
        """
        Submit a search job and wait for its results, in provider order.
        """
        if cancel_event is not None and cancel_event.is_set():
            raise Cancelled()

        job_id = await self.submit(job_type, filters, phrases, query, limit)
        return await self.await_results(job_id, cancel_event=cancel_event)

    async def _sleep(self, job_id: str, cancel_event: Optional[asyncio.Event]) -> None:
        if cancel_event is None:
            await asyncio.sleep(self.poll_interval)
            return

        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=self.poll_interval)
        except asyncio.TimeoutError:
            return
        logger.info("Polling for job %s cancelled while waiting", job_id)
        raise Cancelled(job_id)
