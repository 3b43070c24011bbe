# citenet/graph/sorting.py

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterable, List, Tuple

from citenet.models.network import Node


class SortAlgorithm(str, Enum):
    RELEVANCE = "relevance"
    CITATIONS = "citations"
    YEAR = "year"


SortKey = Tuple[float, float, str]


def _relevance_key(node: Node) -> SortKey:
    return (0, -(node.weight or 0.0), node.id)


def _citations_key(node: Node) -> SortKey:
    return (0, -node.citations, node.id)


def _year_key(node: Node) -> SortKey:
    # Papers without a year go last
    if node.year is None:
        return (1, 0, node.id)
    return (0, -node.year, node.id)


_SORT_KEYS: Dict[SortAlgorithm, Callable[[Node], SortKey]] = {
    SortAlgorithm.RELEVANCE: _relevance_key,
    SortAlgorithm.CITATIONS: _citations_key,
    SortAlgorithm.YEAR: _year_key,
}


def sort_nodes(nodes: Iterable[Node], algorithm: SortAlgorithm = SortAlgorithm.RELEVANCE) -> List[Node]:
    """
    Descending by the chosen measure, ties broken by ascending paper id.

    A total order, so sorting an already sorted list is a no-op.
    """
    return sorted(nodes, key=_SORT_KEYS[SortAlgorithm(algorithm)])
