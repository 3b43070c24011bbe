# tests/test_graph_builder.py

import logging

from citenet.graph.builder import build_citation_network
from citenet.graph.sorting import SortAlgorithm
from citenet.graph.tree import build_tree
from citenet.graph.weighting import WeightingMode
from citenet.models.inputs import UserInputs
from citenet.models.network import EdgeType, NodeRole
from citenet.models.paper import Paper


ROOT = Paper(
    id="root",
    title="Root Paper",
    authors="Ada Lovelace",
    year=2015,
    fields_of_study=("Computer Science",),
    citation_count=100,
    score=1.0,
)


def make_paper(pid: str, citations: int = 0, year=None, **kwargs) -> Paper:
    return Paper(id=pid, title=f"Paper {pid}", year=year, citation_count=citations, **kwargs)


def _assert_referential_integrity(network):
    ids = {n.id for n in network.nodes}
    for edge in network.edges:
        assert edge.source in ids
        assert edge.target in ids
        assert edge.source != edge.target


def test_root_only_network():
    network = build_citation_network(ROOT, [])
    tree = build_tree(ROOT, network.papers(), network.edges)

    assert len(network.nodes) == 1
    assert network.edges == ()
    assert network.root.role is NodeRole.ROOT
    assert network.stats.total_nodes == 1
    assert network.stats.total_edges == 0

    assert tree is not None
    assert len(tree.levels) == 1
    assert [p.id for p in tree.levels[0].papers] == ["root"]


def test_citation_sort_orders_strictly_by_count_then_id():
    results = [
        make_paper("p1", 10),
        make_paper("p2", 50),
        make_paper("p3", 50),
        make_paper("p4", 0),
        make_paper("p5", 30),
    ]

    network = build_citation_network(
        ROOT,
        results,
        sort_algorithm=SortAlgorithm.CITATIONS,
        weighting_mode=WeightingMode.CITATIONS,
    )

    assert [n.id for n in network.nodes] == ["root", "p2", "p3", "p5", "p1", "p4"]
    # Edges follow node order
    assert [e.source for e in network.edges] == ["p2", "p3", "p5", "p1", "p4"]


def test_search_results_cite_root_and_references_are_cited_by_root():
    network = build_citation_network(
        ROOT,
        [make_paper("a", 5)],
        referenced_papers=[make_paper("b", 7)],
    )

    by_pair = {(e.source, e.target): e for e in network.edges}

    assert by_pair[("a", "root")].type is EdgeType.CITES
    assert by_pair[("root", "b")].type is EdgeType.REFERENCES
    assert network.node("a").role is NodeRole.CITING
    assert network.node("b").role is NodeRole.REFERENCED
    _assert_referential_integrity(network)


def test_paper_in_both_lists_gets_role_both_and_two_edges():
    shared = make_paper("s", 12)

    network = build_citation_network(ROOT, [shared], referenced_papers=[shared])

    assert network.node("s").role is NodeRole.BOTH
    assert len(network.edges) == 2
    assert {e.type for e in network.edges} == {EdgeType.CITES, EdgeType.REFERENCES}
    assert network.stats.citing_count == 1
    assert network.stats.referenced_count == 1


def test_duplicates_are_merged_first_payload_wins():
    first = make_paper("d", 1)
    second = Paper(id="d", title="Different title", citation_count=999)

    network = build_citation_network(ROOT, [first, second, make_paper("e", 2)])

    assert len(network.nodes) == 3
    assert network.node("d").paper.title == "Paper d"
    assert network.node("d").citations == 1
    assert len([e for e in network.edges if e.source == "d"]) == 1


def test_root_duplicate_is_dropped_and_logged(caplog):
    impostor = Paper(id="root", title="Something Else", citation_count=1)

    with caplog.at_level(logging.WARNING, logger="citenet.graph"):
        network = build_citation_network(ROOT, [impostor, make_paper("a")])

    assert network.root.paper is ROOT
    assert [n.id for n in network.nodes].count("root") == 1
    assert all(e.source != e.target for e in network.edges)
    assert "root" in caplog.text


def test_weights_are_normalized_and_copied_to_edges():
    results = [make_paper(str(i), citations=i * 10, year=2000 + i, score=i / 10) for i in range(8)]

    network = build_citation_network(ROOT, results, referenced_papers=[make_paper("ref", 3)])

    for node in network.nodes:
        assert node.weight is not None
        assert 0.0 <= node.weight <= 1.0

    for edge in network.edges:
        other = edge.source if edge.target == "root" else edge.target
        assert edge.weight == network.node(other).weight
        assert edge.metadata is not None
        assert 0.0 <= edge.metadata.similarity_score <= 1.0

    _assert_referential_integrity(network)


def test_keyword_weighting_uses_user_inputs():
    results = [
        Paper(id="hit", title="Transformers for vision"),
        Paper(id="miss", title="Protein folding"),
    ]

    network = build_citation_network(
        ROOT,
        results,
        weighting_mode=WeightingMode.KEYWORDS,
        user_inputs=UserInputs.create(keywords=["vision"]),
    )

    assert network.node("hit").weight == 1.0
    assert network.node("miss").weight == 0.0
    assert [n.id for n in network.nodes] == ["root", "hit", "miss"]


def test_no_edges_between_non_root_papers():
    network = build_citation_network(
        ROOT,
        [make_paper("a"), make_paper("b")],
        referenced_papers=[make_paper("c"), make_paper("d")],
    )

    for edge in network.edges:
        assert "root" in (edge.source, edge.target)
