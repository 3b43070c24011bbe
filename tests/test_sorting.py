# tests/test_sorting.py

from citenet.graph.sorting import SortAlgorithm, sort_nodes
from citenet.models.network import Node, NodeRole
from citenet.models.paper import Paper


def _node(pid, citations=0, year=None, weight=None):
    return Node(
        paper=Paper(id=pid, title=pid, year=year, citation_count=citations),
        role=NodeRole.CITING,
        citations=citations,
        weight=weight,
    )


def test_citations_descending_ties_by_id():
    nodes = [_node("c", 10), _node("a", 50), _node("b", 50), _node("d", 0)]

    ordered = sort_nodes(nodes, SortAlgorithm.CITATIONS)

    assert [n.id for n in ordered] == ["a", "b", "c", "d"]


def test_year_sort_puts_missing_years_last():
    nodes = [_node("x"), _node("b", year=2018), _node("a", year=2021), _node("c", year=2018)]

    ordered = sort_nodes(nodes, SortAlgorithm.YEAR)

    assert [n.id for n in ordered] == ["a", "b", "c", "x"]


def test_relevance_uses_weight():
    nodes = [_node("a", weight=0.1), _node("b", weight=0.9), _node("c", weight=None)]

    ordered = sort_nodes(nodes, "relevance")

    assert [n.id for n in ordered] == ["b", "a", "c"]


def test_sorting_is_idempotent():
    nodes = [_node(str(i), citations=i % 3, year=2000 + i % 4, weight=(i % 5) / 5) for i in range(20)]

    for algorithm in SortAlgorithm:
        once = sort_nodes(nodes, algorithm)
        assert sort_nodes(once, algorithm) == once
