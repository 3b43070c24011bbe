# citenet/analytics/paths.py

"""
Path-finding over a citation network.

Edge direction is ignored: the network is viewed as an undirected simple
graph, which answers "how are these two papers connected" for the
visualization rather than "which paper depends on which".
"""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Set, Union

import networkx as nx

from citenet.models.network import Edge, Network

GraphSource = Union[Network, Iterable[Edge]]


def undirected_view(source: GraphSource) -> nx.Graph:
    """
    Undirected simple graph over a Network (all of its nodes) or a bare
    edge list (only the endpoints that appear).
    """
    G = nx.Graph()
    if isinstance(source, Network):
        G.add_nodes_from(n.id for n in source.nodes)
        edges: Iterable[Edge] = source.edges
    else:
        edges = source
    for edge in edges:
        G.add_edge(edge.source, edge.target)
    return G


def find_shortest_path(source: GraphSource, start: str, end: str) -> Optional[List[str]]:
    """
    Breadth-first search; returns the first minimal-length path found as a
    list of node ids, or None when the two are not connected.
    """
    if start == end:
        return [start]

    G = undirected_view(source)
    if start not in G or end not in G:
        return None

    parents: Dict[str, Optional[str]] = {start: None}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in G.adj[current]:
            if neighbor in parents:
                continue
            parents[neighbor] = current
            if neighbor == end:
                path = [end]
                while parents[path[-1]] is not None:
                    path.append(parents[path[-1]])
                return path[::-1]
            queue.append(neighbor)

    return None


def find_all_paths(
    source: GraphSource,
    start: str,
    end: str,
    max_depth: int = 5,
) -> List[List[str]]:
    """
    Every simple path from `start` to `end` with at most `max_depth` edges,
    in depth-first discovery order (not sorted by length).
    """
    if start == end:
        return [[start]]

    G = undirected_view(source)
    if start not in G or end not in G or max_depth < 1:
        return []

    return [list(p) for p in nx.all_simple_paths(G, start, end, cutoff=max_depth)]


def connected_component(source: GraphSource, node_id: str) -> Set[str]:
    """
    All node ids reachable from `node_id`, itself included. An unknown or
    isolated id yields just {node_id}.
    """
    G = undirected_view(source)
    if node_id not in G:
        return {node_id}
    return set(nx.node_connected_component(G, node_id))
