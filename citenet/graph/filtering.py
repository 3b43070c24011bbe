# citenet/graph/filtering.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from citenet.errors import ValidationError
from citenet.graph.sorting import SortAlgorithm, sort_nodes
from citenet.models.network import Network, Node, NodeRole

logger = logging.getLogger("citenet.graph")


@dataclass(frozen=True)
class NetworkFilters:
    """
    Post-build narrowing of a network. Every criterion is optional; an
    unset criterion keeps everything. Nodes without a year never pass a
    year bound.
    """

    min_citations: Optional[int] = None
    max_citations: Optional[int] = None
    min_year: Optional[int] = None
    max_year: Optional[int] = None
    roles: Tuple[NodeRole, ...] = field(default_factory=tuple)
    authors: Tuple[str, ...] = field(default_factory=tuple)
    fields_of_study: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "roles", tuple(NodeRole(r) for r in self.roles))
        object.__setattr__(self, "authors", tuple(a for a in self.authors if a and a.strip()))
        object.__setattr__(
            self, "fields_of_study", tuple(f for f in self.fields_of_study if f and f.strip())
        )

    def matches(self, node: Node) -> bool:
        if self.min_citations is not None and node.citations < self.min_citations:
            return False
        if self.max_citations is not None and node.citations > self.max_citations:
            return False
        if self.min_year is not None and (node.year is None or node.year < self.min_year):
            return False
        if self.max_year is not None and (node.year is None or node.year > self.max_year):
            return False
        if self.roles and node.role not in self.roles:
            return False
        if self.authors:
            haystack = (node.paper.authors or "").lower()
            if not any(a.lower() in haystack for a in self.authors):
                return False
        if self.fields_of_study:
            if not any(f in node.paper.fields_of_study for f in self.fields_of_study):
                return False
        return True


def filter_network(
    network: Network,
    filters: Optional[NetworkFilters] = None,
    sort_algorithm: SortAlgorithm = SortAlgorithm.RELEVANCE,
    limit: Optional[int] = None,
) -> Network:
    """
    Return a new network holding the nodes that pass `filters`.

    The root is always kept and always first. The remaining nodes are
    re-sorted by `sort_algorithm` and cut to `limit` non-root nodes; edges
    survive only when both endpoints do, and stats are recomputed.
    """
    filters = filters or NetworkFilters()
    sort_algorithm = SortAlgorithm(sort_algorithm)
    if limit is not None and limit < 0:
        raise ValidationError(f"limit must be non-negative, got {limit}")

    kept: Iterable[Node] = (n for n in network.non_root_nodes() if filters.matches(n))
    others: List[Node] = sort_nodes(kept, sort_algorithm)
    if limit is not None:
        others = others[:limit]

    nodes = [network.root, *others]
    keep_ids = {n.id for n in nodes}
    order = {n.id: i for i, n in enumerate(nodes)}

    edges = [e for e in network.edges if e.source in keep_ids and e.target in keep_ids]
    # Edges follow node order, keyed on the non-root endpoint
    edges.sort(
        key=lambda e: order[e.target] if e.source == network.root_id else order[e.source]
    )

    filtered = Network.create(network.root_id, nodes, edges)
    logger.debug(
        "Filtered network %s from %d to %d nodes",
        network.root_id,
        len(network),
        len(filtered),
    )
    return filtered
