# citenet/clients/base.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union, runtime_checkable

from citenet.errors import ProviderError
from citenet.models.paper import Paper, PaperRef
from citenet.search.filters import JobType, SearchFilters


class JobState(str, Enum):
    CREATED = "created"
    QUEUED = "queued"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (JobState.SUCCESS, JobState.ERROR)


@dataclass(frozen=True)
class JobStatus:
    state: JobState
    results: List[Paper] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "JobStatus":
        raw_state = str(payload.get("status") or "").lower()
        try:
            state = JobState(raw_state)
        except ValueError as exc:
            raise ProviderError(f"Unknown job status {raw_state!r}") from exc

        results = [
            Paper.from_api(item)
            for item in payload.get("results") or []
            if isinstance(item, Mapping) and item.get("id")
        ]
        return cls(state=state, results=results, error=payload.get("error"))


@dataclass(frozen=True)
class JobBody:
    phrases: Optional[List[str]] = None
    query: Optional[str] = None
    enrich: bool = False
    callback_url: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"enrich": self.enrich}
        if self.phrases is not None:
            body["phrases"] = list(self.phrases)
        if self.query is not None:
            body["query"] = self.query
        if self.callback_url:
            body["callbackUrl"] = self.callback_url
        return body


@runtime_checkable
class JobClient(Protocol):
    async def create_job(
        self,
        job_type: JobType,
        filters: SearchFilters,
        body: JobBody,
        limit: int,
    ) -> str:
        ...

    async def get_job_status(self, job_id: str) -> JobStatus:
        ...


@runtime_checkable
class PaperLookup(Protocol):
    async def resolve_paper(self, ref: Union[str, PaperRef]) -> Paper:
        """
        Look a paper up by corpus id (or by title when given a PaperRef
        without an id). Raises PaperNotFound.
        """
        ...


class SearchBackend(JobClient, PaperLookup, Protocol):
    """
    Everything the network builder needs from the outside world.
    """
