# citenet/models/__init__.py

"""
Explicit data types for papers, citation networks and the trees derived from them.
"""

from .inputs import UserInputs
from .network import Edge, EdgeMetadata, EdgeType, Network, NetworkStats, Node, NodeRole
from .paper import Paper, PaperRef
from .tree import Tree, TreeLevel, TreeRelationship

__all__ = [
    "Edge",
    "EdgeMetadata",
    "EdgeType",
    "Network",
    "NetworkStats",
    "Node",
    "NodeRole",
    "Paper",
    "PaperRef",
    "Tree",
    "TreeLevel",
    "TreeRelationship",
    "UserInputs",
]
