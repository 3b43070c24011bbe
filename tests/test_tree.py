# tests/test_tree.py

from citenet.graph.builder import build_citation_network
from citenet.graph.tree import build_tree
from citenet.models.network import Edge, EdgeType
from citenet.models.paper import Paper


def _paper(pid: str) -> Paper:
    return Paper(id=pid, title=f"Paper {pid}")


def _cites(source: str, target: str) -> Edge:
    return Edge(source=source, target=target, type=EdgeType.CITES)


def test_star_network_has_two_levels():
    root = _paper("r")
    network = build_citation_network(root, [_paper("a"), _paper("b")], [_paper("c")])

    tree = build_tree(root, network.papers(), network.edges)

    assert [lvl.level for lvl in tree.levels] == [0, 1]
    assert [lvl.description for lvl in tree.levels] == ["Root paper", "Direct connections"]
    assert {p.id for p in tree.levels[1].papers} == {"a", "b", "c"}
    # Children follow the order edges were discovered in
    assert tree.relationships["r"].children == [p.id for p in tree.levels[1].papers]
    assert tree.relationships["a"].parent == "r"


def test_deeper_levels_and_first_parent_wins():
    papers = [_paper(x) for x in ("r", "a", "b", "c", "d")]
    edges = [
        _cites("a", "r"),
        _cites("b", "r"),
        _cites("c", "a"),
        _cites("c", "b"),
        _cites("d", "c"),
    ]

    tree = build_tree(papers[0], papers, edges)

    assert [[p.id for p in lvl.papers] for lvl in tree.levels] == [["r"], ["a", "b"], ["c"], ["d"]]
    assert tree.levels[2].description == "Depth 2 connections"
    assert tree.relationships["c"].parent == "a"
    assert tree.relationships["b"].children == []
    assert tree.level_of("d") == 3


def test_unreachable_papers_are_left_out():
    papers = [_paper("r"), _paper("a"), _paper("island")]

    tree = build_tree(papers[0], papers, [_cites("a", "r")])

    assert tree.paper_ids() == ["r", "a"]
    assert tree.level_of("island") is None


def test_edges_to_unknown_papers_are_ignored():
    papers = [_paper("r"), _paper("a")]

    tree = build_tree(papers[0], papers, [_cites("a", "r"), _cites("ghost", "r")])

    assert tree.paper_ids() == ["r", "a"]


def test_missing_root_returns_none():
    assert build_tree(_paper("r"), [_paper("a")], []) is None


def test_edgeless_input_yields_single_level():
    root = _paper("r")

    tree = build_tree(root, [root, _paper("a")], [])

    assert len(tree.levels) == 1
    assert tree.relationships["r"].children == []
