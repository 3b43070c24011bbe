# citenet/graph/tree.py

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import networkx as nx

from citenet.models.network import Edge
from citenet.models.paper import Paper
from citenet.models.tree import Tree, TreeLevel, TreeRelationship


def _level_description(level: int) -> str:
    if level == 0:
        return "Root paper"
    if level == 1:
        return "Direct connections"
    return f"Depth {level} connections"


def build_tree(
    root: Paper,
    all_papers: Sequence[Paper],
    edges: Sequence[Edge],
) -> Optional[Tree]:
    """
    Derive a leveled tree from the network's edges, anchored at the root.

    Breadth-first layering over an undirected view of the edges: level k+1
    holds the papers adjacent to a level-k paper that were not assigned to a
    lower level. A paper's parent is the level-k paper that discovered it
    first; each parent's children are listed in discovery order. Edges
    touching papers outside `all_papers` are ignored.

    Returns None only when the root is not among `all_papers`.
    """
    by_id: Dict[str, Paper] = {}
    for paper in all_papers:
        by_id.setdefault(paper.id, paper)

    if root.id not in by_id:
        return None

    G = nx.Graph()
    G.add_nodes_from(by_id)
    for edge in edges:
        if edge.source in by_id and edge.target in by_id:
            G.add_edge(edge.source, edge.target)

    level_of: Dict[str, int] = {root.id: 0}
    relationships: Dict[str, TreeRelationship] = {root.id: TreeRelationship()}
    layers: List[List[str]] = [[root.id]]

    for parent, child in nx.bfs_edges(G, root.id):
        depth = level_of[parent] + 1
        level_of[child] = depth
        relationships[child] = TreeRelationship(parent=parent)
        relationships[parent].children.append(child)
        if depth == len(layers):
            layers.append([])
        layers[depth].append(child)

    levels = tuple(
        TreeLevel(
            level=depth,
            papers=tuple(by_id[pid] for pid in ids),
            description=_level_description(depth),
        )
        for depth, ids in enumerate(layers)
    )
    return Tree(root=by_id[root.id], levels=levels, relationships=relationships)
