# citenet/service.py

"""
The composite "build a citation network for this paper" operation.

Resolves the root paper, turns user hints into a search request, runs the
search job, and assembles the network and its tree. The search backend is
passed in explicitly, so live and mock runs go through the same code.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from citenet.clients import SearchBackend, get_backend
from citenet.config.settings import settings
from citenet.errors import PaperNotFound, ProviderError, ValidationError
from citenet.graph.builder import build_citation_network
from citenet.graph.sorting import SortAlgorithm
from citenet.graph.tree import build_tree
from citenet.graph.weighting import WeightingMode
from citenet.jobs.orchestrator import JobOrchestrator
from citenet.models.inputs import UserInputs
from citenet.models.network import Network, NetworkStats
from citenet.models.paper import Paper, PaperRef
from citenet.models.tree import Tree
from citenet.search.filters import JobType, SearchFilters
from citenet.search.phrases import build_phrases

logger = logging.getLogger("citenet.service")

MAX_LIMIT = 1000


@dataclass(frozen=True)
class BuildOptions:
    """
    Knobs for a network build. Invalid values raise ValidationError before
    any external call is made.
    """

    sort_algorithm: SortAlgorithm = SortAlgorithm.RELEVANCE
    weighting_mode: WeightingMode = WeightingMode.BALANCED
    limit: int = field(default_factory=lambda: settings.default_search_limit)
    filters: SearchFilters = field(default_factory=SearchFilters)

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "sort_algorithm", SortAlgorithm(self.sort_algorithm))
        except ValueError as exc:
            allowed = ", ".join(s.value for s in SortAlgorithm)
            raise ValidationError(
                f"Invalid sort algorithm {self.sort_algorithm!r}; expected one of: {allowed}"
            ) from exc
        try:
            object.__setattr__(self, "weighting_mode", WeightingMode(self.weighting_mode))
        except ValueError as exc:
            allowed = ", ".join(m.value for m in WeightingMode)
            raise ValidationError(
                f"Invalid weighting mode {self.weighting_mode!r}; expected one of: {allowed}"
            ) from exc

        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise ValidationError(f"limit must be an integer, got {self.limit!r}")
        if not 1 <= self.limit <= MAX_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_LIMIT}, got {self.limit}")


@dataclass(frozen=True)
class CitationNetworkResult:
    paper: Paper
    network: Network
    tree: Optional[Tree]
    stats: NetworkStats
    phrases: Tuple[str, ...]
    query: Optional[str]
    job_type: JobType


async def resolve_referenced_papers(
    backend: SearchBackend,
    references: Tuple[str, ...],
) -> List[Paper]:
    """
    Look up user-supplied references by corpus id. References that do not
    resolve are logged and skipped; they still serve as search phrases.
    """
    papers: List[Paper] = []
    for ref in references:
        try:
            papers.append(await backend.resolve_paper(PaperRef(corpus_id=ref)))
        except PaperNotFound:
            logger.info("Reference %r did not resolve to a paper; skipping", ref)
        except ProviderError as exc:
            logger.warning("Lookup of reference %r failed: %s; skipping", ref, exc)
    return papers


async def build_citation_network_for(
    root_ref: Union[str, PaperRef],
    user_inputs: Optional[UserInputs] = None,
    options: Optional[BuildOptions] = None,
    backend: Optional[SearchBackend] = None,
    orchestrator: Optional[JobOrchestrator] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> CitationNetworkResult:
    """
    Build the citation network and tree around `root_ref`.

    Steps, each with its own failure mode:

    1. resolve the root paper              -> PaperNotFound
    2. build phrases and query             -> InsufficientPhrases
    3. submit and await the search job     -> JobSubmissionFailed, JobFailed,
                                              JobTimeout, Cancelled
    4. resolve referenced papers (best effort)
    5. build the network, then the tree

    `backend` defaults to `get_backend()` (mock or live per settings). A
    backend created here is closed before returning; a passed-in one is left
    open for the caller.
    """
    user_inputs = user_inputs or UserInputs()
    options = options or BuildOptions()

    if backend is not None:
        return await _build(root_ref, user_inputs, options, backend, orchestrator, cancel_event)

    backend = get_backend()
    try:
        return await _build(root_ref, user_inputs, options, backend, orchestrator, cancel_event)
    finally:
        await close_backend(backend)


async def close_backend(backend: SearchBackend) -> None:
    """Close `backend` if it holds resources (the live client's connection pool)."""
    close = getattr(backend, "close", None)
    if close is not None:
        await close()


async def _build(
    root_ref: Union[str, PaperRef],
    user_inputs: UserInputs,
    options: BuildOptions,
    backend: SearchBackend,
    orchestrator: Optional[JobOrchestrator],
    cancel_event: Optional[asyncio.Event],
) -> CitationNetworkResult:
    orchestrator = orchestrator or JobOrchestrator(backend)

    if isinstance(root_ref, str):
        root_ref = PaperRef(corpus_id=root_ref)

    paper = await backend.resolve_paper(root_ref)
    logger.info("Building citation network for %s (%s)", paper.id, paper.title)

    request = build_phrases(
        paper,
        keywords=user_inputs.keywords,
        authors=user_inputs.authors,
        references=user_inputs.references,
    )

    search_results = await orchestrator.submit_and_await(
        request.job_type,
        options.filters,
        request.phrases,
        request.query,
        options.limit,
        cancel_event=cancel_event,
    )

    referenced = await resolve_referenced_papers(backend, user_inputs.references)

    network = build_citation_network(
        paper,
        search_results,
        referenced_papers=referenced,
        sort_algorithm=options.sort_algorithm,
        weighting_mode=options.weighting_mode,
        user_inputs=user_inputs,
    )
    tree = build_tree(paper, network.papers(), network.edges)

    logger.info(
        "Citation network for %s: %d nodes, %d edges",
        paper.id,
        network.stats.total_nodes,
        network.stats.total_edges,
    )
    return CitationNetworkResult(
        paper=paper,
        network=network,
        tree=tree,
        stats=network.stats,
        phrases=request.phrases,
        query=request.query,
        job_type=request.job_type,
    )


__all__ = [
    "BuildOptions",
    "CitationNetworkResult",
    "build_citation_network_for",
    "close_backend",
    "get_backend",
    "resolve_referenced_papers",
]
