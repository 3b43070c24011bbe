# citenet/api/models.py

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from citenet.analytics.clustering import ClusterKind
from citenet.graph.sorting import SortAlgorithm
from citenet.graph.weighting import WeightingMode
from citenet.models.network import NodeRole


# ----------------------------------------------------------------------
# Requests
# ----------------------------------------------------------------------


class BuildNetworkRequest(BaseModel):
    """
    Build a citation network around a root paper given by corpus id or title.
    """
    corpus_id: Optional[str] = Field(None, description="Corpus id of the root paper.")
    title: Optional[str] = Field(
        None,
        description="Title to search for when no corpus id is given.",
    )
    keywords: List[str] = Field(default_factory=list, description="User keywords, most important first.")
    authors: List[str] = Field(default_factory=list, description="Author names to search for.")
    references: List[str] = Field(
        default_factory=list,
        description="Corpus ids (or titles) of papers the root cites.",
    )
    sort_by: str = Field(SortAlgorithm.RELEVANCE.value, description="relevance, citations or year.")
    weighting: str = Field(
        WeightingMode.BALANCED.value,
        description="balanced, citations, recency or keywords.",
    )
    limit: Optional[int] = Field(None, description="Number of related papers to request (1-1000).")
    filters: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider search filters (fieldsOfStudy, minCitationCount, year, ...).",
    )


class NetworkFilterParams(BaseModel):
    min_citations: Optional[int] = None
    max_citations: Optional[int] = None
    min_year: Optional[int] = None
    max_year: Optional[int] = None
    types: List[NodeRole] = Field(default_factory=list, description="Node roles to keep.")
    authors: List[str] = Field(default_factory=list)
    fields_of_study: List[str] = Field(default_factory=list)


class FilterNetworkRequest(BaseModel):
    citation_network: Dict[str, Any] = Field(..., description="A network as returned by /citation-network.")
    filters: NetworkFilterParams = Field(default_factory=NetworkFilterParams)
    sort_by: SortAlgorithm = SortAlgorithm.RELEVANCE
    limit: Optional[int] = Field(None, ge=0, description="Maximum number of non-root nodes kept.")


class CitationRangeParams(BaseModel):
    min: int = Field(..., ge=0)
    max: Optional[int] = Field(None, description="Inclusive upper bound; open-ended if omitted.")
    label: str


class ClusterRequest(BaseModel):
    citation_network: Dict[str, Any]
    by: ClusterKind = ClusterKind.YEAR
    year_range: int = Field(5, ge=1)
    ranges: Optional[List[CitationRangeParams]] = None


class PathRequest(BaseModel):
    citation_network: Dict[str, Any]
    start: str
    end: str
    max_depth: int = Field(5, ge=1, le=10)


# ----------------------------------------------------------------------
# Responses
# ----------------------------------------------------------------------


class CitationNetworkResponse(BaseModel):
    paper: Dict[str, Any] = Field(..., description="The resolved root paper.")
    citation_network: Dict[str, Any]
    tree: Optional[Dict[str, Any]] = Field(
        None,
        description="Nested tree view rooted at the paper.",
    )
    stats: Dict[str, int]
    phrases: List[str]
    query: Optional[str] = None
    job_type: str


class ClusterSummary(BaseModel):
    id: str
    label: str
    node_ids: List[str]
    size: int


class ClusterResponse(BaseModel):
    by: ClusterKind
    clusters: List[ClusterSummary] = Field(default_factory=list)


class PathResponse(BaseModel):
    start: str
    end: str
    shortest_path: Optional[List[str]] = Field(
        None,
        description="First-found minimal path, or null when not connected.",
    )
    all_paths: List[List[str]] = Field(default_factory=list)
    connected_component: List[str] = Field(
        default_factory=list,
        description="Ids reachable from `start`, sorted.",
    )
