# tests/test_filtering.py

import pytest

from citenet.clients.mock import MOCK_RELATED, MOCK_ROOT
from citenet.errors import ValidationError
from citenet.graph.builder import build_citation_network
from citenet.graph.filtering import NetworkFilters, filter_network
from citenet.graph.sorting import SortAlgorithm
from citenet.models.network import NodeRole


def make_network():
    return build_citation_network(
        MOCK_ROOT,
        MOCK_RELATED[:4],
        referenced_papers=MOCK_RELATED[4:],
    )


def test_no_filters_keeps_everything():
    network = make_network()

    filtered = filter_network(network)

    assert {n.id for n in filtered.nodes} == {n.id for n in network.nodes}
    assert len(filtered.edges) == len(network.edges)
    assert filtered.stats == network.stats


def test_citation_bounds_keep_root_and_prune_edges():
    network = make_network()

    filtered = filter_network(network, NetworkFilters(min_citations=25000))

    assert [n.id for n in filtered.nodes][0] == MOCK_ROOT.id
    assert all(n.citations >= 25000 for n in filtered.nodes)
    kept = {n.id for n in filtered.nodes}
    assert all(e.source in kept and e.target in kept for e in filtered.edges)
    assert filtered.stats.total_nodes == len(filtered.nodes)
    assert filtered.stats.total_edges == len(filtered.edges)


def test_root_survives_filters_it_would_fail():
    filtered = filter_network(make_network(), NetworkFilters(max_citations=10))

    assert [n.id for n in filtered.nodes] == [MOCK_ROOT.id]
    assert filtered.edges == ()


def test_role_author_and_field_filters():
    network = make_network()

    referenced = filter_network(network, NetworkFilters(roles=("referenced",)))
    assert {n.role for n in referenced.non_root_nodes()} == {NodeRole.REFERENCED}
    assert referenced.stats.citing_count == 0

    by_author = filter_network(network, NetworkFilters(authors=("devlin",)))
    assert [n.id for n in by_author.non_root_nodes()] == ["mock-bert"]

    by_field = filter_network(network, NetworkFilters(fields_of_study=("Biology",)))
    assert [n.id for n in by_field.non_root_nodes()] == ["mock-alphafold"]


def test_year_bounds_exclude_missing_years():
    network = make_network()

    filtered = filter_network(network, NetworkFilters(min_year=2020, max_year=2021))

    assert sorted(n.id for n in filtered.non_root_nodes()) == [
        "mock-alphafold",
        "mock-gpt3",
        "mock-vit",
    ]


def test_sort_and_limit():
    filtered = filter_network(make_network(), sort_algorithm=SortAlgorithm.YEAR, limit=2)

    years = [n.year for n in filtered.non_root_nodes()]
    assert len(years) == 2
    assert years == sorted(years, reverse=True)


def test_negative_limit_is_rejected():
    with pytest.raises(ValidationError):
        filter_network(make_network(), limit=-1)
