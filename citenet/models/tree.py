# citenet/models/tree.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from citenet.models.paper import Paper


@dataclass(frozen=True)
class TreeLevel:
    level: int
    papers: Tuple[Paper, ...]
    description: str = ""


@dataclass
class TreeRelationship:
    parent: Optional[str] = None
    children: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Tree:
    """
    Leveled view over a network, anchored at the root.

    Only indexes papers; it never owns them. Derived fresh from a network
    every time and never mutated afterwards.
    """

    root: Paper
    levels: Tuple[TreeLevel, ...]
    relationships: Dict[str, TreeRelationship]

    def level_of(self, paper_id: str) -> Optional[int]:
        for level in self.levels:
            if any(p.id == paper_id for p in level.papers):
                return level.level
        return None

    def paper_ids(self) -> List[str]:
        return [p.id for level in self.levels for p in level.papers]

    def to_nested(self, roles: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Nested {id, label, ..., children: [...]} dict rooted at the root paper,
        the shape tree-view widgets consume.

        `roles` optionally maps paper id -> role string (taken from the network).
        """
        roles = roles or {}
        by_id: Dict[str, Paper] = {p.id: p for level in self.levels for p in level.papers}

        def _build(paper_id: str) -> Dict[str, Any]:
            paper = by_id[paper_id]
            rel = self.relationships.get(paper_id) or TreeRelationship()
            return {
                "id": paper.id,
                "label": paper.title,
                "role": roles.get(paper.id),
                "citations": paper.citation_count,
                "year": paper.year,
                "children": [_build(c) for c in rel.children if c in by_id],
            }

        return _build(self.root.id)
