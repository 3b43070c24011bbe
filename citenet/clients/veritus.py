# citenet/clients/veritus.py

"""Async client for the Veritus paper-search API."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx

from citenet.clients.base import JobBody, JobStatus
from citenet.config.settings import settings
from citenet.errors import JobSubmissionFailed, PaperNotFound, ProviderError
from citenet.models.paper import Paper, PaperRef
from citenet.search.filters import JobType, SearchFilters

logger = logging.getLogger("citenet.clients.veritus")


def extract_error_message(payload: Any, status_code: int) -> str:
    """
    Pull a human-readable message out of the provider's error payloads.

    Handles a bare string, a list of strings / {message} / {error} objects,
    {"error": str | list | object} and {"message": str}.
    """

    def _from_item(item: Any) -> Optional[str]:
        if isinstance(item, str):
            return item
        if isinstance(item, Mapping):
            if item.get("message"):
                return str(item["message"])
            if item.get("error"):
                return str(item["error"])
        return None

    if not payload:
        return f"HTTP {status_code}"
    if isinstance(payload, str):
        return payload
    if isinstance(payload, list):
        messages = [m for m in (_from_item(e) for e in payload) if m]
        return ". ".join(messages) if messages else "Validation error occurred"
    if isinstance(payload, Mapping):
        error = payload.get("error")
        if isinstance(error, list):
            messages = [m for m in (_from_item(e) for e in error) if m]
            return ". ".join(messages) if messages else "Validation error occurred"
        if isinstance(error, str):
            return error
        if error is not None:
            return str(error)
        if payload.get("message"):
            return str(payload["message"])
    return f"HTTP {status_code}"


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class VeritusClient:
    """
    Async client for the Veritus API.

    Implements both JobClient and PaperLookup. Uses httpx for async HTTP;
    polling lives in JobOrchestrator, not here.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if api_key is None and settings.VERITUS_API_KEY is not None:
            api_key = settings.VERITUS_API_KEY.get_secret_value()
        if not api_key:
            logger.warning("No Veritus API key configured; live API calls will fail.")

        self.base_url = (base_url or settings.VERITUS_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self._api_key = api_key or ""
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client (lazy init)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Authorization": f"Bearer {self._api_key}"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "VeritusClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    async def _request(
        self,
        method: str,
        path: str,
        event: str,
        **kwargs: Any,
    ) -> httpx.Response:
        client = self._get_client()
        start = time.monotonic()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s.error path=%s error=%s", event, path, exc)
            raise ProviderError(
                f"Error contacting Veritus at {self.base_url}{path}: {exc}",
                url=f"{self.base_url}{path}",
            ) from exc

        duration_ms = (time.monotonic() - start) * 1000
        log = logger.info if response.is_success else logger.warning
        log(
            "%s.%s path=%s status=%s duration_ms=%.1f",
            event,
            "success" if response.is_success else "error",
            path,
            response.status_code,
            duration_ms,
        )
        return response

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        raise ProviderError(
            extract_error_message(_json_or_none(response), response.status_code),
            status_code=response.status_code,
            url=str(response.request.url),
        )

    # ------------------------------------------------------------------
    # Papers
    # ------------------------------------------------------------------
    async def get_paper(self, corpus_id: str) -> Paper:
        response = await self._request("GET", f"/v1/papers/{corpus_id}", "getPaper")
        if response.status_code == 404:
            raise PaperNotFound(corpus_id)
        self._raise_for_status(response)
        return Paper.from_api(response.json())

    async def search_by_title(self, title: str) -> List[Paper]:
        response = await self._request(
            "GET", "/v1/papers/search", "searchPapers", params={"title": title}
        )
        self._raise_for_status(response)
        return [Paper.from_api(item) for item in response.json() or [] if item.get("id")]

    async def resolve_paper(self, ref: Union[str, PaperRef]) -> Paper:
        if isinstance(ref, str):
            ref = PaperRef(corpus_id=ref)

        if ref.corpus_id:
            return await self.get_paper(ref.corpus_id)
        if not ref.title:
            raise PaperNotFound(str(ref))

        results = await self.search_by_title(ref.title)
        if not results:
            raise PaperNotFound(ref.title)
        return results[0]

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------
    async def create_job(
        self,
        job_type: JobType,
        filters: SearchFilters,
        body: JobBody,
        limit: int,
    ) -> str:
        params: Dict[str, str] = {"limit": str(limit), **filters.to_query_params()}
        try:
            response = await self._request(
                "POST",
                f"/v1/job/{job_type.value}",
                "createJob",
                params=params,
                json=body.to_json(),
            )
        except ProviderError as exc:
            raise JobSubmissionFailed(str(exc)) from exc

        payload = _json_or_none(response)
        if not response.is_success:
            raise JobSubmissionFailed(
                extract_error_message(payload, response.status_code)
            )

        job_id = payload.get("jobId") if isinstance(payload, Mapping) else None
        if not job_id:
            raise JobSubmissionFailed("Veritus did not return a jobId")
        return str(job_id)

    async def get_job_status(self, job_id: str) -> JobStatus:
        response = await self._request("GET", f"/v1/job/{job_id}", "getJobStatus")
        self._raise_for_status(response)
        return JobStatus.from_api(response.json())

    async def get_credits(self) -> Dict[str, Any]:
        response = await self._request("GET", "/v1/user/getCredits", "getCredits")
        self._raise_for_status(response)
        return response.json()
