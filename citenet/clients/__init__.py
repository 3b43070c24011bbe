# citenet/clients/__init__.py

"""
Job Client / Paper Lookup implementations: the live Veritus API and an
in-memory mock with canned fixtures.
"""

from typing import Optional

from citenet.config.settings import settings

from .base import JobBody, JobClient, JobState, JobStatus, PaperLookup, SearchBackend
from .mock import MockSearchBackend
from .veritus import VeritusClient


def get_backend(mock: Optional[bool] = None) -> SearchBackend:
    """
    Pick the search backend. An explicit flag wins over settings.mock_mode.
    """
    use_mock = settings.mock_mode if mock is None else mock
    if use_mock:
        return MockSearchBackend()
    return VeritusClient()


__all__ = [
    "JobBody",
    "JobClient",
    "JobState",
    "JobStatus",
    "MockSearchBackend",
    "PaperLookup",
    "SearchBackend",
    "VeritusClient",
    "get_backend",
]
