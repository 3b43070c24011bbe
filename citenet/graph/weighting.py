# citenet/graph/weighting.py

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Sequence

import numpy as np

from citenet.models.network import EdgeMetadata
from citenet.models.paper import Paper


class WeightingMode(str, Enum):
    BALANCED = "balanced"
    CITATIONS = "citations"
    RECENCY = "recency"
    KEYWORDS = "keywords"


def normalize(values: Sequence[Optional[float]], missing: Optional[float] = 0.0) -> List[float]:
    """
    Min-max normalize into [0, 1].

    Missing values are replaced by `missing`, or by the smallest observed
    value when `missing` is None. If every value is equal the result is 0.5
    everywhere, which avoids dividing by zero and keeps the sort unbiased.
    """
    if not values:
        return []

    present = [float(v) for v in values if v is not None]
    if not present:
        return [0.5] * len(values)

    fill = min(present) if missing is None else float(missing)
    arr = np.asarray([fill if v is None else float(v) for v in values], dtype=float)

    lo, hi = float(arr.min()), float(arr.max())
    if hi == lo:
        return [0.5] * len(values)
    return [float(x) for x in (arr - lo) / (hi - lo)]


def keyword_coverage(paper: Paper, keywords: Sequence[str]) -> float:
    """
    Fraction of keywords found (case-insensitive substring) in the paper's
    fields of study or title.
    """
    wanted = [k.strip().lower() for k in keywords if k and k.strip()]
    if not wanted:
        return 0.0

    haystacks = [f.lower() for f in paper.fields_of_study] + [paper.title.lower()]
    hits = sum(1 for kw in wanted if any(kw in h for h in haystacks))
    return hits / len(wanted)


def compute_weights(
    papers: Sequence[Paper],
    mode: WeightingMode = WeightingMode.BALANCED,
    keywords: Sequence[str] = (),
) -> Dict[str, float]:
    """
    Relevance weight in [0, 1] for each paper, keyed by paper id.

    balanced  = 0.4 * n(citations) + 0.4 * n(score) + 0.2 * n(year)
    citations = n(citations)
    recency   = n(year)
    keywords  = keyword_coverage(paper, keywords)

    where n() is min-max normalization over the given papers.
    """
    mode = WeightingMode(mode)

    if mode is WeightingMode.KEYWORDS:
        return {p.id: keyword_coverage(p, keywords) for p in papers}

    citations = normalize([p.citation_count for p in papers])
    years = normalize([p.year for p in papers], missing=None)

    if mode is WeightingMode.CITATIONS:
        weights = citations
    elif mode is WeightingMode.RECENCY:
        weights = years
    else:
        scores = normalize([p.score for p in papers])
        weights = [
            0.4 * c + 0.4 * s + 0.2 * y for c, s, y in zip(citations, scores, years)
        ]

    # Guard against float drift just outside [0, 1]
    return {p.id: min(1.0, max(0.0, w)) for p, w in zip(papers, weights)}


def _jaccard(a: Sequence[str], b: Sequence[str]) -> float:
    set_a = {x.lower() for x in a}
    set_b = {x.lower() for x in b}
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def edge_metadata(paper: Paper, root: Paper) -> EdgeMetadata:
    """
    Provenance for an edge between `paper` and the root: shared fields of
    study, shared authors and a similarity score in [0, 1].
    """
    root_fields = {f.lower() for f in root.fields_of_study}
    shared_fields: Dict[str, None] = {}
    for f in paper.fields_of_study:
        if f.lower() in root_fields:
            shared_fields.setdefault(f, None)

    root_authors = {a.lower() for a in root.author_list()}
    shared_authors: Dict[str, None] = {}
    for a in paper.author_list():
        if a.lower() in root_authors:
            shared_authors.setdefault(a, None)

    similarity = (
        _jaccard(paper.fields_of_study, root.fields_of_study)
        + _jaccard(paper.author_list(), root.author_list())
    ) / 2

    return EdgeMetadata(
        shared_keywords=tuple(shared_fields),
        shared_authors=tuple(shared_authors),
        similarity_score=similarity,
    )
