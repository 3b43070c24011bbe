# citenet/graph/builder.py

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from citenet.graph.sorting import SortAlgorithm, sort_nodes
from citenet.graph.weighting import WeightingMode, compute_weights, edge_metadata
from citenet.models.inputs import UserInputs
from citenet.models.network import Edge, EdgeType, Network, Node, NodeRole
from citenet.models.paper import Paper

logger = logging.getLogger("citenet.graph")


def _merge_role(current: Optional[NodeRole], incoming: NodeRole) -> NodeRole:
    if current is None or current is incoming:
        return incoming
    return NodeRole.BOTH


def _collect(
    root: Paper,
    search_results: Sequence[Paper],
    referenced_papers: Sequence[Paper],
) -> Dict[str, Tuple[Paper, NodeRole]]:
    """
    Deduplicate papers by id and work out each one's role.

    Returns id -> (paper, role) for every non-root paper, in first-seen order.
    The first payload seen for an id wins; the root's own payload always wins
    over a duplicate of the root id.
    """
    collected: Dict[str, Tuple[Paper, NodeRole]] = {}

    for papers, role in (
        (search_results, NodeRole.CITING),
        (referenced_papers, NodeRole.REFERENCED),
    ):
        for paper in papers:
            if paper.id == root.id:
                if paper.title != root.title:
                    logger.warning(
                        "Paper %s collides with the root id but has a different title "
                        "(%r vs %r); keeping the root's own data",
                        paper.id,
                        paper.title,
                        root.title,
                    )
                continue

            existing = collected.get(paper.id)
            if existing is None:
                collected[paper.id] = (paper, role)
            else:
                collected[paper.id] = (existing[0], _merge_role(existing[1], role))

    return collected


def build_citation_network(
    root: Paper,
    search_results: Sequence[Paper] = (),
    referenced_papers: Sequence[Paper] = (),
    sort_algorithm: SortAlgorithm = SortAlgorithm.RELEVANCE,
    weighting_mode: WeightingMode = WeightingMode.BALANCED,
    user_inputs: Optional[UserInputs] = None,
) -> Network:
    """
    Merge the root, related search results and referenced papers into a
    scored citation network.

    Parameters
    ----------
    root:
        The paper everything is anchored on.
    search_results:
        Related papers from the search provider, modelled as citing the root
        (edge `paper -> root`, type `cites`).
    referenced_papers:
        Papers the root cites (edge `root -> paper`, type `references`).
    sort_algorithm:
        Order of the non-root nodes; the root always comes first.
    weighting_mode:
        How node weights (and therefore edge weights) are computed.
    user_inputs:
        Keywords used by the `keywords` weighting mode.

    Returns
    -------
    Network
        Never raises for empty inputs: a root-only network is valid.
        No edges are created between two non-root papers.
    """
    sort_algorithm = SortAlgorithm(sort_algorithm)
    weighting_mode = WeightingMode(weighting_mode)
    user_inputs = user_inputs or UserInputs()

    collected = _collect(root, search_results, referenced_papers)

    all_papers: List[Paper] = [root] + [paper for paper, _ in collected.values()]
    weights = compute_weights(all_papers, weighting_mode, user_inputs.keywords)

    root_node = Node(
        paper=root,
        role=NodeRole.ROOT,
        citations=root.citation_count,
        weight=weights[root.id],
    )
    others = sort_nodes(
        (
            Node(
                paper=paper,
                role=role,
                citations=paper.citation_count,
                weight=weights[paper.id],
            )
            for paper, role in collected.values()
        ),
        sort_algorithm,
    )

    edges: List[Edge] = []
    for node in others:
        metadata = edge_metadata(node.paper, root)
        weight = node.weight if node.weight is not None else 0.5
        if node.role in (NodeRole.CITING, NodeRole.BOTH):
            edges.append(
                Edge(
                    source=node.id,
                    target=root.id,
                    type=EdgeType.CITES,
                    weight=weight,
                    metadata=metadata,
                )
            )
        if node.role in (NodeRole.REFERENCED, NodeRole.BOTH):
            edges.append(
                Edge(
                    source=root.id,
                    target=node.id,
                    type=EdgeType.REFERENCES,
                    weight=weight,
                    metadata=metadata,
                )
            )

    network = Network.create(root.id, [root_node, *others], edges)
    logger.debug(
        "Built network for %s: %d nodes, %d edges (sort=%s, weighting=%s)",
        root.id,
        network.stats.total_nodes,
        network.stats.total_edges,
        sort_algorithm.value,
        weighting_mode.value,
    )
    return network
