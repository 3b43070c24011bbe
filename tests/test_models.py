# tests/test_models.py

import pytest

from citenet.errors import ValidationError
from citenet.models import (
    Edge,
    EdgeType,
    Network,
    Node,
    NodeRole,
    Paper,
    Tree,
    TreeLevel,
    TreeRelationship,
    UserInputs,
)


def _node(pid: str, role: NodeRole = NodeRole.CITING, citations: int = 0) -> Node:
    return Node(paper=Paper(id=pid, title=f"Paper {pid}"), role=role, citations=citations)


# ---------------------------------------------------------------------------
# Paper
# ---------------------------------------------------------------------------

def test_paper_from_api_camel_case():
    paper = Paper.from_api(
        {
            "id": 42,
            "title": "Graph Attention Networks",
            "authors": "Petar Velickovic; Guillem Cucurull & Yoshua Bengio",
            "year": "2018",
            "fieldsOfStudy": ["Computer Science", "Mathematics"],
            "impactFactor": {
                "citationCount": 9000,
                "referenceCount": 35,
                "influentialCitationCount": 1200,
            },
            "score": 0.7,
            "publicationType": "conference",
        }
    )

    assert paper.id == "42"
    assert paper.year == 2018
    assert paper.fields_of_study == ("Computer Science", "Mathematics")
    assert paper.citation_count == 9000
    assert paper.reference_count == 35
    assert paper.influential_citation_count == 1200
    assert paper.publication_type == "conference"
    assert paper.author_list() == ["Petar Velickovic", "Guillem Cucurull", "Yoshua Bengio"]


def test_paper_from_api_tolerates_missing_fields():
    paper = Paper.from_api({"id": "x", "citation_count": "12"})

    assert paper.title == ""
    assert paper.year is None
    assert paper.citation_count == 12
    assert paper.author_list() == []


def test_paper_to_api_round_trips():
    paper = Paper(id="p", title="T", year=2020, fields_of_study=("Physics",), citation_count=3)
    assert Paper.from_api(paper.to_api()) == paper


def test_user_inputs_create_drops_blanks():
    inputs = UserInputs.create(keywords=["  graphs ", "", None], authors=None)

    assert inputs.keywords == ("graphs",)
    assert inputs.authors == ()
    assert inputs.references == ()


# ---------------------------------------------------------------------------
# Edge / Network invariants
# ---------------------------------------------------------------------------

def test_self_edge_is_rejected():
    with pytest.raises(ValidationError):
        Edge(source="a", target="a", type=EdgeType.CITES)


@pytest.mark.parametrize("weight", [-0.1, 1.5])
def test_edge_weight_must_be_in_unit_interval(weight):
    with pytest.raises(ValidationError):
        Edge(source="a", target="b", type=EdgeType.CITES, weight=weight)


def test_network_rejects_duplicate_ids():
    with pytest.raises(ValidationError):
        Network.create("r", [_node("r", NodeRole.ROOT), _node("a"), _node("a")], [])


def test_network_rejects_missing_root():
    with pytest.raises(ValidationError):
        Network.create("r", [_node("a")], [])


def test_network_rejects_second_root():
    with pytest.raises(ValidationError):
        Network.create("r", [_node("r", NodeRole.ROOT), _node("a", NodeRole.ROOT)], [])


def test_network_rejects_dangling_edge():
    with pytest.raises(ValidationError):
        Network.create(
            "r",
            [_node("r", NodeRole.ROOT)],
            [Edge(source="ghost", target="r", type=EdgeType.CITES)],
        )


def test_stats_count_both_in_citing_and_referenced():
    nodes = [
        _node("r", NodeRole.ROOT),
        _node("a", NodeRole.CITING),
        _node("b", NodeRole.REFERENCED),
        _node("c", NodeRole.BOTH),
    ]
    edges = [
        Edge(source="a", target="r", type=EdgeType.CITES),
        Edge(source="r", target="b", type=EdgeType.REFERENCES),
        Edge(source="c", target="r", type=EdgeType.CITES),
        Edge(source="r", target="c", type=EdgeType.REFERENCES),
    ]

    network = Network.create("r", nodes, edges)

    assert network.stats.total_nodes == 4
    assert network.stats.total_edges == 4
    assert network.stats.citing_count == 2
    assert network.stats.referenced_count == 2
    assert network.root.id == "r"
    assert "c" in network
    assert network.node("missing") is None


def test_to_networkx_keeps_parallel_edges():
    nodes = [_node("r", NodeRole.ROOT), _node("c", NodeRole.BOTH, citations=7)]
    edges = [
        Edge(source="c", target="r", type=EdgeType.CITES, weight=0.3),
        Edge(source="r", target="c", type=EdgeType.REFERENCES, weight=0.3),
    ]

    G = Network.create("r", nodes, edges).to_networkx()

    assert G.number_of_nodes() == 2
    assert G.number_of_edges() == 2
    assert G.nodes["c"]["role"] == "both"
    assert G.nodes["c"]["citations"] == 7


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------

def test_tree_nested_view():
    root = Paper(id="r", title="Root", year=2020, citation_count=10)
    child = Paper(id="a", title="Child", year=2021)
    tree = Tree(
        root=root,
        levels=(
            TreeLevel(level=0, papers=(root,), description="Root paper"),
            TreeLevel(level=1, papers=(child,), description="Direct connections"),
        ),
        relationships={
            "r": TreeRelationship(children=["a"]),
            "a": TreeRelationship(parent="r"),
        },
    )

    assert tree.level_of("a") == 1
    assert tree.level_of("zzz") is None
    assert tree.paper_ids() == ["r", "a"]

    nested = tree.to_nested({"r": "root", "a": "citing"})
    assert nested["id"] == "r"
    assert nested["role"] == "root"
    assert nested["citations"] == 10
    assert [c["id"] for c in nested["children"]] == ["a"]
    assert nested["children"][0]["children"] == []
