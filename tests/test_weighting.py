# tests/test_weighting.py

import pytest

from citenet.graph.weighting import (
    WeightingMode,
    compute_weights,
    edge_metadata,
    keyword_coverage,
    normalize,
)
from citenet.models.paper import Paper


def test_normalize_min_max():
    assert normalize([1, 2, 3]) == [0.0, 0.5, 1.0]
    assert normalize([]) == []


def test_normalize_all_equal_is_half():
    assert normalize([7, 7, 7]) == [0.5, 0.5, 0.5]


def test_normalize_missing_values():
    # Missing citation counts count as zero
    assert normalize([None, 10]) == [0.0, 1.0]
    # Missing years take the observed minimum
    assert normalize([2010, None, 2020], missing=None) == [0.0, 0.0, 1.0]


def test_balanced_weights_combine_signals():
    papers = [
        Paper(id="old", title="Old", year=2000, citation_count=0, score=0.0),
        Paper(id="new", title="New", year=2020, citation_count=100, score=1.0),
    ]

    weights = compute_weights(papers, WeightingMode.BALANCED)

    assert weights["old"] == pytest.approx(0.0)
    assert weights["new"] == pytest.approx(1.0)


def test_citation_and_recency_modes():
    papers = [
        Paper(id="a", title="A", year=2010, citation_count=500),
        Paper(id="b", title="B", year=2020, citation_count=100),
    ]

    citations = compute_weights(papers, WeightingMode.CITATIONS)
    recency = compute_weights(papers, WeightingMode.RECENCY)

    assert citations == {"a": 1.0, "b": 0.0}
    assert recency == {"a": 0.0, "b": 1.0}


def test_keyword_weights():
    paper = Paper(id="p", title="Diffusion Models for Images", fields_of_study=("Computer Science",))

    assert keyword_coverage(paper, ["diffusion", "computer", "audio", "music"]) == 0.5
    assert keyword_coverage(paper, []) == 0.0
    assert compute_weights([paper], WeightingMode.KEYWORDS, ["images"]) == {"p": 1.0}


def test_weights_stay_in_unit_interval():
    papers = [
        Paper(id=str(i), title=str(i), year=1990 + i, citation_count=i * 37, score=i / 10)
        for i in range(10)
    ]
    for mode in WeightingMode:
        for w in compute_weights(papers, mode, ["1"]).values():
            assert 0.0 <= w <= 1.0


def test_edge_metadata_shared_fields_and_authors():
    root = Paper(
        id="r",
        title="Root",
        authors="Ada Lovelace, Alan Turing",
        fields_of_study=("Computer Science", "Mathematics"),
    )
    paper = Paper(
        id="p",
        title="Other",
        authors="alan turing; Grace Hopper",
        fields_of_study=("Computer Science",),
    )

    meta = edge_metadata(paper, root)

    assert meta.shared_keywords == ("Computer Science",)
    assert meta.shared_authors == ("alan turing",)
    # fields: 1/2, authors: 1/3
    assert meta.similarity_score == pytest.approx((0.5 + 1 / 3) / 2)
