# citenet/graph/io.py

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from citenet.errors import ValidationError
from citenet.models.network import Edge, EdgeMetadata, EdgeType, Network, Node, NodeRole
from citenet.models.paper import Paper

PathLike = Union[str, Path]


# ----------------------------------------------------------------------
# dict <-> Network
# ----------------------------------------------------------------------


def node_to_dict(node: Node) -> Dict[str, Any]:
    return {
        "id": node.id,
        "label": node.label,
        "type": node.role.value,
        "citations": node.citations,
        "year": node.year,
        "weight": node.weight,
        "data": node.paper.to_api(),
    }


def edge_to_dict(edge: Edge) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "source": edge.source,
        "target": edge.target,
        "type": edge.type.value,
        "weight": edge.weight,
    }
    if edge.metadata is not None:
        payload["metadata"] = {
            "sharedKeywords": list(edge.metadata.shared_keywords),
            "sharedAuthors": list(edge.metadata.shared_authors),
            "similarityScore": edge.metadata.similarity_score,
        }
    return payload


def network_to_dict(network: Network) -> Dict[str, Any]:
    """
    JSON-ready dict in the shape visualization clients consume:
    {rootId, nodes: [...], edges: [...], stats: {...}}.
    """
    return {
        "rootId": network.root_id,
        "nodes": [node_to_dict(n) for n in network.nodes],
        "edges": [edge_to_dict(e) for e in network.edges],
        "stats": {
            "totalNodes": network.stats.total_nodes,
            "totalEdges": network.stats.total_edges,
            "citingCount": network.stats.citing_count,
            "referencedCount": network.stats.referenced_count,
        },
    }


def _node_from_dict(raw: Mapping[str, Any]) -> Node:
    data = dict(raw.get("data") or {})
    data.setdefault("id", raw.get("id"))
    data.setdefault("title", raw.get("label") or "")
    if data.get("year") is None and raw.get("year") is not None:
        data["year"] = raw.get("year")
    paper = Paper.from_api(data)

    citations = raw.get("citations")
    return Node(
        paper=paper,
        role=NodeRole(raw.get("type") or raw.get("role")),
        citations=int(citations) if citations is not None else paper.citation_count,
        weight=raw.get("weight"),
    )


def _edge_from_dict(raw: Mapping[str, Any]) -> Edge:
    meta_raw = raw.get("metadata")
    metadata: Optional[EdgeMetadata] = None
    if meta_raw:
        metadata = EdgeMetadata(
            shared_keywords=tuple(meta_raw.get("sharedKeywords") or ()),
            shared_authors=tuple(meta_raw.get("sharedAuthors") or ()),
            similarity_score=float(meta_raw.get("similarityScore") or 0.0),
        )
    return Edge(
        source=str(raw["source"]),
        target=str(raw["target"]),
        type=EdgeType(raw["type"]),
        weight=float(raw.get("weight", 0.5)),
        metadata=metadata,
    )


def network_from_dict(payload: Mapping[str, Any]) -> Network:
    """
    Rebuild a Network from `network_to_dict` output.

    Stats are recomputed rather than trusted. Malformed payloads raise
    ValidationError.
    """
    if not isinstance(payload, Mapping) or not payload.get("nodes"):
        raise ValidationError("citation network with nodes is required")

    try:
        nodes = [_node_from_dict(n) for n in payload["nodes"]]
        edges = [_edge_from_dict(e) for e in payload.get("edges") or ()]
    except ValidationError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise ValidationError(f"Malformed citation network: {exc}") from exc

    root_id = payload.get("rootId")
    if root_id is None:
        roots = [n.id for n in nodes if n.role is NodeRole.ROOT]
        root_id = roots[0] if roots else None
    if root_id is None:
        raise ValidationError("citation network has no root node")

    return Network.create(str(root_id), nodes, edges)


# ----------------------------------------------------------------------
# Files
# ----------------------------------------------------------------------


def save_network(
    network: Network,
    path: PathLike,
    overwrite: bool = True,
) -> Path:
    """
    Write a network to disk as JSON.

    - If `path` has no suffix, `.json` is appended.
    - Creates parent directories if needed.
    - If `overwrite` is False and the file already exists, raises FileExistsError.
    """
    output_path = Path(path)
    if output_path.suffix == "":
        output_path = output_path.with_suffix(".json")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Network file already exists and overwrite=False: {output_path}")

    output_path.write_text(
        json.dumps(network_to_dict(network), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return output_path


def load_network(path: PathLike) -> Network:
    p = Path(path)
    payload = json.loads(p.read_text(encoding="utf-8"))
    return network_from_dict(payload)
