# citenet/analytics/clustering.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from citenet.errors import ValidationError
from citenet.models.network import Node

UNKNOWN_YEAR = "unknown"
OTHER = "other"


class ClusterKind(str, Enum):
    YEAR = "year"
    CITATIONS = "citations"
    ROLE = "role"


@dataclass(frozen=True)
class ClusterBounds:
    """
    Bounding box of a cluster in layout space. All zeros until the
    visualization layer has positioned the nodes.
    """

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Cluster:
    id: str
    label: str
    nodes: Tuple[Node, ...]
    bounds: ClusterBounds = field(default_factory=ClusterBounds)

    @property
    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]


@dataclass(frozen=True)
class CitationRange:
    min: int
    max: Optional[int]
    label: str

    def contains(self, citations: int) -> bool:
        if citations < self.min:
            return False
        return self.max is None or citations <= self.max


DEFAULT_CITATION_RANGES: Tuple[CitationRange, ...] = (
    CitationRange(0, 9, "0-9"),
    CitationRange(10, 99, "10-99"),
    CitationRange(100, 999, "100-999"),
    CitationRange(1000, None, "1000+"),
)


def _group(nodes: Sequence[Node], key_fn) -> Dict[str, List[Node]]:
    groups: Dict[str, List[Node]] = {}
    for node in nodes:
        groups.setdefault(key_fn(node), []).append(node)
    return groups


def cluster_by_year(nodes: Sequence[Node], year_range: int = 5) -> List[Cluster]:
    """
    Bucket nodes into `year_range`-wide windows aligned on multiples of
    `year_range` (2019 with a range of 5 lands in "2015-2019"). Nodes
    without a year go to "unknown". Buckets appear in first-seen order.
    """
    if year_range < 1:
        raise ValidationError(f"year_range must be at least 1, got {year_range}")

    def _key(node: Node) -> str:
        if not node.year:
            return UNKNOWN_YEAR
        start = (node.year // year_range) * year_range
        return f"{start}-{start + year_range - 1}"

    return [
        Cluster(
            id=key,
            label="Unknown Year" if key == UNKNOWN_YEAR else key,
            nodes=tuple(members),
        )
        for key, members in _group(nodes, _key).items()
    ]


def cluster_by_citations(
    nodes: Sequence[Node],
    ranges: Sequence[CitationRange] = DEFAULT_CITATION_RANGES,
) -> List[Cluster]:
    """
    Assign each node to the first range containing its citation count;
    everything else goes to "other". Empty clusters are dropped; the
    survivors keep the order of `ranges`, with "other" last.
    """
    groups: Dict[str, List[Node]] = {r.label: [] for r in ranges}
    groups.setdefault(OTHER, [])

    for node in nodes:
        citations = node.citations or 0
        for r in ranges:
            if r.contains(citations):
                groups[r.label].append(node)
                break
        else:
            groups[OTHER].append(node)

    return [
        Cluster(id=label, label=label, nodes=tuple(members))
        for label, members in groups.items()
        if members
    ]


def cluster_by_role(nodes: Sequence[Node]) -> List[Cluster]:
    return [
        Cluster(id=role, label=role.capitalize(), nodes=tuple(members))
        for role, members in _group(nodes, lambda n: n.role.value).items()
    ]


def cluster_nodes(
    nodes: Sequence[Node],
    kind: ClusterKind = ClusterKind.YEAR,
    **opts: Any,
) -> List[Cluster]:
    """
    Dispatch to the clustering for `kind`.

    Options: `year_range` for year clustering, `ranges` for citation clustering.
    """
    kind = ClusterKind(kind)
    if kind is ClusterKind.YEAR:
        return cluster_by_year(nodes, year_range=opts.get("year_range", 5))
    if kind is ClusterKind.CITATIONS:
        return cluster_by_citations(nodes, ranges=opts.get("ranges") or DEFAULT_CITATION_RANGES)
    return cluster_by_role(nodes)


def calculate_cluster_bounds(
    cluster: Cluster,
    positions: Mapping[str, Tuple[float, float]],
) -> Cluster:
    """
    Bounding box of the cluster's nodes given (x, y) positions computed by
    the layout. Unpositioned nodes count as (0, 0).
    """
    if not cluster.nodes:
        return cluster

    points = [positions.get(n.id, (0.0, 0.0)) for n in cluster.nodes]
    xs = [float(p[0]) for p in points]
    ys = [float(p[1]) for p in points]

    return replace(
        cluster,
        bounds=ClusterBounds(
            x=min(xs),
            y=min(ys),
            width=max(xs) - min(xs),
            height=max(ys) - min(ys),
        ),
    )
