# citenet/models/network.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

import networkx as nx

from citenet.errors import ValidationError
from citenet.models.paper import Paper


class NodeRole(str, Enum):
    ROOT = "root"
    # Paper that cites (or is related to) the root
    CITING = "citing"
    # Paper the root cites
    REFERENCED = "referenced"
    BOTH = "both"


class EdgeType(str, Enum):
    CITES = "cites"
    REFERENCES = "references"


@dataclass(frozen=True)
class Node:
    paper: Paper
    role: NodeRole
    citations: int = 0
    weight: Optional[float] = None

    @property
    def id(self) -> str:
        return self.paper.id

    @property
    def year(self) -> Optional[int]:
        return self.paper.year

    @property
    def label(self) -> str:
        return self.paper.title

    @property
    def is_root(self) -> bool:
        return self.role is NodeRole.ROOT


@dataclass(frozen=True)
class EdgeMetadata:
    shared_keywords: Tuple[str, ...] = ()
    shared_authors: Tuple[str, ...] = ()
    similarity_score: float = 0.0


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    type: EdgeType
    weight: float = 0.5
    metadata: Optional[EdgeMetadata] = None

    def __post_init__(self) -> None:
        if self.source == self.target:
            raise ValidationError(f"Self-edge on {self.source!r} is not allowed")
        if not 0.0 <= self.weight <= 1.0:
            raise ValidationError(
                f"Edge weight must be in [0, 1], got {self.weight!r} "
                f"for {self.source!r} -> {self.target!r}"
            )


@dataclass(frozen=True)
class NetworkStats:
    total_nodes: int = 0
    total_edges: int = 0
    citing_count: int = 0
    referenced_count: int = 0

    @classmethod
    def compute(cls, nodes: Iterable[Node], edges: Iterable[Edge]) -> "NetworkStats":
        """
        Single pass over the finished node/edge collections.
        """
        total_nodes = citing = referenced = 0
        for node in nodes:
            total_nodes += 1
            if node.role in (NodeRole.CITING, NodeRole.BOTH):
                citing += 1
            if node.role in (NodeRole.REFERENCED, NodeRole.BOTH):
                referenced += 1

        return cls(
            total_nodes=total_nodes,
            total_edges=sum(1 for _ in edges),
            citing_count=citing,
            referenced_count=referenced,
        )


@dataclass(frozen=True)
class Network:
    """
    A citation network around a single root paper.

    Construction enforces the structural invariants: the root is present
    exactly once, node ids are unique and every edge endpoint is a node.
    The graph may be disconnected.
    """

    root_id: str
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    stats: NetworkStats = field(default_factory=NetworkStats)
    _index: Dict[str, Node] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[str, Node] = {}
        for node in self.nodes:
            if node.id in index:
                raise ValidationError(f"Duplicate node id {node.id!r} in network")
            index[node.id] = node

        root = index.get(self.root_id)
        if root is None:
            raise ValidationError(f"Root node {self.root_id!r} is missing from network")
        roots = [n.id for n in self.nodes if n.role is NodeRole.ROOT]
        if roots != [self.root_id]:
            raise ValidationError(f"Network must have exactly one root, found {roots}")

        for edge in self.edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in index:
                    raise ValidationError(
                        f"Edge {edge.source!r} -> {edge.target!r} references "
                        f"unknown node {endpoint!r}"
                    )

        object.__setattr__(self, "_index", index)

    @classmethod
    def create(
        cls,
        root_id: str,
        nodes: Iterable[Node],
        edges: Iterable[Edge],
    ) -> "Network":
        nodes = tuple(nodes)
        edges = tuple(edges)
        return cls(
            root_id=root_id,
            nodes=nodes,
            edges=edges,
            stats=NetworkStats.compute(nodes, edges),
        )

    @property
    def root(self) -> Node:
        return self._index[self.root_id]

    def node(self, node_id: str) -> Optional[Node]:
        return self._index.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __len__(self) -> int:
        return len(self.nodes)

    def papers(self) -> List[Paper]:
        return [n.paper for n in self.nodes]

    def non_root_nodes(self) -> List[Node]:
        return [n for n in self.nodes if not n.is_root]

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Directed multigraph view with node/edge attributes, for analytics
        and export.
        """
        G = nx.MultiDiGraph()
        for node in self.nodes:
            G.add_node(
                node.id,
                title=node.paper.title,
                role=node.role.value,
                citations=node.citations,
                year=node.year,
                weight=node.weight,
            )
        for edge in self.edges:
            attrs: Dict[str, Any] = {"type": edge.type.value, "weight": edge.weight}
            if edge.metadata is not None:
                attrs["similarity"] = edge.metadata.similarity_score
            G.add_edge(edge.source, edge.target, **attrs)
        return G
