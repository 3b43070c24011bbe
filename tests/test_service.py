# tests/test_service.py

import asyncio

import pytest

from citenet.clients import MockSearchBackend, VeritusClient, get_backend
from citenet.clients.mock import MOCK_ROOT
from citenet.config.settings import settings
from citenet.errors import InsufficientPhrases, JobTimeout, PaperNotFound, ValidationError
from citenet.graph.sorting import SortAlgorithm
from citenet.jobs.orchestrator import JobOrchestrator
from citenet.models.inputs import UserInputs
from citenet.models.network import NodeRole
from citenet.models.paper import Paper, PaperRef
from citenet.search.filters import JobType
from citenet import service
from citenet.service import BuildOptions, build_citation_network_for


def build(root_ref="mock-root", user_inputs=None, options=None, backend=None, **orch):
    backend = backend or MockSearchBackend()
    orchestrator = JobOrchestrator(
        backend,
        poll_interval=orch.get("poll_interval", 0),
        max_attempts=orch.get("max_attempts", 30),
    )
    return asyncio.run(
        build_citation_network_for(
            root_ref,
            user_inputs,
            options,
            backend=backend,
            orchestrator=orchestrator,
        )
    )


def test_build_with_mock_backend():
    result = build(
        user_inputs=UserInputs.create(keywords=["attention"]),
        options=BuildOptions(limit=3),
    )

    assert result.paper == MOCK_ROOT
    assert result.phrases == ("attention", MOCK_ROOT.title, "Computer Science")
    assert result.job_type is JobType.COMBINED_SEARCH
    assert result.query.startswith("Research related to Attention Is All You Need")

    assert result.stats.total_nodes == 4
    assert result.stats.total_edges == 3
    assert result.stats is result.network.stats
    assert result.network.nodes[0].id == "mock-root"

    assert [lvl.level for lvl in result.tree.levels] == [0, 1]
    assert len(result.tree.levels[1].papers) == 3


def test_referenced_papers_are_resolved_and_missing_ones_skipped():
    result = build(
        user_inputs=UserInputs.create(references=["mock-seq2seq", "not-a-paper"]),
        options=BuildOptions(limit=3),
    )

    assert result.network.node("mock-seq2seq").role is NodeRole.REFERENCED
    assert result.network.node("not-a-paper") is None
    assert result.stats.citing_count == 3
    assert result.stats.referenced_count == 1
    # References still count as search phrases
    assert "not-a-paper" in result.phrases


def test_sort_option_is_applied():
    result = build(options=BuildOptions(sort_algorithm="citations", limit=6))

    counts = [n.citations for n in result.network.nodes[1:]]
    assert counts == sorted(counts, reverse=True)


def test_root_can_be_resolved_by_title():
    result = build(PaperRef(title="attention is all"), options=BuildOptions(limit=1))
    assert result.paper.id == "mock-root"


def test_unknown_root_raises_not_found():
    with pytest.raises(PaperNotFound):
        build("does-not-exist")


def test_insufficient_phrases_is_raised_before_any_job():
    backend = MockSearchBackend(root=Paper(id="bare", title=""))

    with pytest.raises(InsufficientPhrases):
        build("bare", backend=backend)

    assert backend.created_jobs == []


def test_job_errors_propagate():
    backend = MockSearchBackend(polls_before_success=100)

    with pytest.raises(JobTimeout):
        build(backend=backend, max_attempts=3)

    assert backend.status_calls == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"limit": 0},
        {"limit": 1001},
        {"limit": True},
        {"sort_algorithm": "alphabetical"},
        {"weighting_mode": "random"},
    ],
)
def test_invalid_options_raise_validation_error(kwargs):
    with pytest.raises(ValidationError):
        BuildOptions(**kwargs)


def test_default_limit_comes_from_settings():
    options = BuildOptions()

    assert options.limit == settings.default_search_limit
    assert options.sort_algorithm is SortAlgorithm.RELEVANCE


def test_get_backend_respects_explicit_flag(monkeypatch):
    monkeypatch.setattr(settings, "mock_mode", False)

    assert isinstance(get_backend(mock=True), MockSearchBackend)
    assert isinstance(get_backend(), VeritusClient)

    monkeypatch.setattr(settings, "mock_mode", True)
    assert isinstance(get_backend(), MockSearchBackend)


class ClosingBackend(MockSearchBackend):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.closed = False

    async def close(self):
        self.closed = True


def test_default_backend_is_closed_after_build(monkeypatch):
    backend = ClosingBackend()
    monkeypatch.setattr(service, "get_backend", lambda: backend)
    monkeypatch.setattr(settings, "poll_interval_seconds", 0.0)

    result = asyncio.run(build_citation_network_for("mock-root", options=BuildOptions(limit=2)))

    assert result.paper.id == "mock-root"
    assert backend.closed is True


def test_default_backend_is_closed_when_build_fails(monkeypatch):
    backend = ClosingBackend()
    monkeypatch.setattr(service, "get_backend", lambda: backend)

    with pytest.raises(PaperNotFound):
        asyncio.run(build_citation_network_for("does-not-exist"))

    assert backend.closed is True


def test_passed_in_backend_is_left_open():
    backend = ClosingBackend()

    build(backend=backend, options=BuildOptions(limit=1))

    assert backend.closed is False
