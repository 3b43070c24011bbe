# citenet/errors.py

from __future__ import annotations

from typing import Optional


class CitenetError(Exception):
    """
    Base class for every error raised by citenet itself.
    """


class ValidationError(CitenetError, ValueError):
    """
    Malformed input: bad cardinality, unknown enum value, invalid edge, ...

    Raised before any external call is made.
    """


class PaperNotFound(CitenetError, LookupError):
    def __init__(self, ref: str) -> None:
        super().__init__(f"Paper not found: {ref}")
        self.ref = ref


class InsufficientPhrases(CitenetError):
    """
    Not enough distinct phrases could be collected, even after padding
    from the paper's metadata.
    """

    def __init__(self, supplied: int, required: int) -> None:
        super().__init__(
            f"At least {required} search phrases are required, "
            f"only {supplied} could be collected."
        )
        self.supplied = supplied
        self.required = required


class ProviderError(CitenetError):
    """
    Transport or HTTP failure talking to the search provider.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


# ---------------------------------------------------------------------------
# Job errors
# ---------------------------------------------------------------------------


class JobError(CitenetError):
    def __init__(self, message: str, *, job_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.job_id = job_id


class JobSubmissionFailed(JobError):
    """
    The provider rejected (or never received) the job. Nothing was polled.
    """


class JobFailed(JobError):
    """
    The provider reported the job as failed; `message` is its error text.
    """

    def __init__(self, job_id: str, message: str) -> None:
        super().__init__(f"Job {job_id} failed: {message}", job_id=job_id)
        self.provider_message = message


class JobTimeout(JobError):
    def __init__(self, job_id: str, attempts: int, waited_seconds: float) -> None:
        super().__init__(
            f"Job {job_id} did not finish after {attempts} status checks "
            f"(~{waited_seconds:.0f}s)",
            job_id=job_id,
        )
        self.attempts = attempts
        self.waited_seconds = waited_seconds


class Cancelled(JobError):
    def __init__(self, job_id: Optional[str] = None) -> None:
        super().__init__(f"Polling for job {job_id} was cancelled", job_id=job_id)
