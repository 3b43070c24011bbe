# citenet/web/app.py

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple, Type

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from citenet.analytics.clustering import CitationRange, cluster_nodes
from citenet.analytics.paths import connected_component, find_all_paths, find_shortest_path
from citenet.api.models import (
    BuildNetworkRequest,
    CitationNetworkResponse,
    ClusterRequest,
    ClusterResponse,
    ClusterSummary,
    FilterNetworkRequest,
    PathRequest,
    PathResponse,
)
from citenet.clients import SearchBackend, get_backend
from citenet.config.settings import settings
from citenet.errors import (
    Cancelled,
    CitenetError,
    InsufficientPhrases,
    JobFailed,
    JobSubmissionFailed,
    JobTimeout,
    PaperNotFound,
    ProviderError,
    ValidationError,
)
from citenet.graph.filtering import NetworkFilters, filter_network
from citenet.graph.io import network_from_dict, network_to_dict
from citenet.models.inputs import UserInputs
from citenet.models.paper import PaperRef
from citenet.search.filters import SearchFilters
from citenet.search.keywords import extract_keywords
from citenet.service import BuildOptions, build_citation_network_for, close_backend
from citenet.web.security import api_key_auth, rate_limiter

logger = logging.getLogger("citenet.web")
logging.basicConfig(level=settings.LOG_LEVEL)


# -------------------------------------------------------------------
# Lifespan
# -------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup/shutdown handler. Nothing is cached between requests; every
    network is built from scratch, so startup only reports the mode.
    """
    if settings.mock_mode:
        logger.info("Starting in mock mode; Veritus will not be called")
    elif settings.VERITUS_API_KEY is None:
        logger.warning("CITENET_VERITUS_API_KEY is not set; live searches will fail")

    yield


app = FastAPI(
    title="Citation Network API",
    description="Build, filter and analyse citation networks around a paper.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------------------------------------------
# Middleware
# -------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log method, path, response status and duration.
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")
    start = time.time()

    response = await call_next(request)

    duration_ms = (time.time() - start) * 1000
    logger.info(
        f"Completed {request.method} {request.url.path} "
        f"with status {response.status_code} in {duration_ms:.2f}ms"
    )

    return response


# -------------------------------------------------------------------
# Error mapping
# -------------------------------------------------------------------

# Most specific first
_STATUS_BY_ERROR: List[Tuple[Type[CitenetError], int]] = [
    (InsufficientPhrases, 400),
    (ValidationError, 400),
    (PaperNotFound, 404),
    (JobTimeout, 504),
    (Cancelled, 499),
    (JobFailed, 502),
    (JobSubmissionFailed, 502),
    (ProviderError, 502),
]


def status_for(exc: CitenetError) -> int:
    for error_cls, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return status_code
    return 500


@app.exception_handler(CitenetError)
async def handle_citenet_error(request: Request, exc: CitenetError) -> JSONResponse:
    status_code = status_for(exc)
    body: Dict[str, Any] = {"error": type(exc).__name__, "detail": str(exc)}

    if isinstance(exc, InsufficientPhrases):
        body["supplied"] = exc.supplied
        body["required"] = exc.required
    elif isinstance(exc, JobTimeout):
        body["detail"] = f"{exc} Try again later."
        body["job_id"] = exc.job_id
    elif isinstance(exc, JobFailed):
        body["detail"] = exc.provider_message
        body["job_id"] = exc.job_id

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc}")

    return JSONResponse(status_code=status_code, content=body)


# -------------------------------------------------------------------
# Dependencies
# -------------------------------------------------------------------


async def get_search_backend(
    mock: Optional[bool] = Query(None, description="Force mock (true) or live (false) data."),
) -> AsyncIterator[SearchBackend]:
    """
    One backend per request, closed afterwards when it holds a connection pool.
    """
    backend = get_backend(mock)
    try:
        yield backend
    finally:
        await close_backend(backend)


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------


@app.get("/health", summary="Health check")
async def health() -> dict:
    return {"status": "ok", "mock_mode": settings.mock_mode}


@app.get(
    "/papers/{corpus_id}",
    response_model=Dict[str, Any],
    summary="Look up a single paper by corpus id",
    dependencies=[Depends(api_key_auth), Depends(rate_limiter)],
)
async def get_paper(
    corpus_id: str,
    backend: SearchBackend = Depends(get_search_backend),
) -> Dict[str, Any]:
    """
    The paper in the provider's shape plus keyword suggestions for seeding
    a network build.
    """
    paper = await backend.resolve_paper(PaperRef(corpus_id=corpus_id))
    return {"paper": paper.to_api(), "suggested_keywords": extract_keywords(paper)}


@app.post(
    "/citation-network",
    response_model=CitationNetworkResponse,
    summary="Build a citation network around a paper",
    dependencies=[Depends(api_key_auth), Depends(rate_limiter)],
)
async def build_network(
    payload: BuildNetworkRequest,
    backend: SearchBackend = Depends(get_search_backend),
) -> CitationNetworkResponse:
    """
    Resolve the root paper, search for related papers and return the
    network, its nested tree and the search request that was used.
    """
    if not payload.corpus_id and not payload.title:
        raise ValidationError("Either corpus_id or title is required")

    options = BuildOptions(
        sort_algorithm=payload.sort_by,
        weighting_mode=payload.weighting,
        limit=payload.limit if payload.limit is not None else settings.default_search_limit,
        filters=SearchFilters.from_raw(payload.filters),
    )
    user_inputs = UserInputs.create(
        keywords=payload.keywords,
        authors=payload.authors,
        references=payload.references,
    )

    result = await build_citation_network_for(
        PaperRef(corpus_id=payload.corpus_id, title=payload.title),
        user_inputs,
        options,
        backend=backend,
    )

    roles = {n.id: n.role.value for n in result.network.nodes}
    network_payload = network_to_dict(result.network)
    return CitationNetworkResponse(
        paper=result.paper.to_api(),
        citation_network=network_payload,
        tree=result.tree.to_nested(roles) if result.tree is not None else None,
        stats=network_payload["stats"],
        phrases=list(result.phrases),
        query=result.query,
        job_type=result.job_type.value,
    )


@app.post(
    "/citation-network/filter",
    response_model=Dict[str, Any],
    summary="Filter, re-sort and trim an existing citation network",
    dependencies=[Depends(api_key_auth), Depends(rate_limiter)],
)
async def filter_citation_network(payload: FilterNetworkRequest) -> Dict[str, Any]:
    network = network_from_dict(payload.citation_network)
    requested = payload.filters
    filters = NetworkFilters(
        min_citations=requested.min_citations,
        max_citations=requested.max_citations,
        min_year=requested.min_year,
        max_year=requested.max_year,
        roles=tuple(requested.types),
        authors=tuple(requested.authors),
        fields_of_study=tuple(requested.fields_of_study),
    )

    filtered = filter_network(network, filters, payload.sort_by, payload.limit)
    return {
        "citation_network": network_to_dict(filtered),
        "original_count": len(network),
        "filtered_count": len(filtered),
    }


@app.post(
    "/citation-network/clusters",
    response_model=ClusterResponse,
    summary="Group a network's nodes by year, citation range or role",
    dependencies=[Depends(api_key_auth), Depends(rate_limiter)],
)
async def cluster_citation_network(payload: ClusterRequest) -> ClusterResponse:
    network = network_from_dict(payload.citation_network)

    opts: Dict[str, Any] = {"year_range": payload.year_range}
    if payload.ranges:
        opts["ranges"] = [CitationRange(r.min, r.max, r.label) for r in payload.ranges]

    clusters = cluster_nodes(network.nodes, payload.by, **opts)
    return ClusterResponse(
        by=payload.by,
        clusters=[
            ClusterSummary(id=c.id, label=c.label, node_ids=c.node_ids, size=len(c.nodes))
            for c in clusters
        ],
    )


@app.post(
    "/citation-network/paths",
    response_model=PathResponse,
    summary="Shortest path, all bounded paths and the connected component",
    dependencies=[Depends(api_key_auth), Depends(rate_limiter)],
)
async def citation_network_paths(payload: PathRequest) -> PathResponse:
    network = network_from_dict(payload.citation_network)

    for node_id in (payload.start, payload.end):
        if node_id not in network:
            raise PaperNotFound(node_id)

    return PathResponse(
        start=payload.start,
        end=payload.end,
        shortest_path=find_shortest_path(network, payload.start, payload.end),
        all_paths=find_all_paths(network, payload.start, payload.end, payload.max_depth),
        connected_component=sorted(connected_component(network, payload.start)),
    )
