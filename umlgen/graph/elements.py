"""Generic renderable nodes and edges."""

import copy
from dataclasses import dataclass, field, replace
from typing import Any

from .node_types import EdgeType, NodeShape


@dataclass
class Position:
    """Top-left anchored coordinate of a node."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class GraphNode:
    """A renderable node.

    ``id`` is the source element id and ``data`` an owned copy of the
    element fields relevant to the node's shape.
    """

    id: str
    type: NodeShape
    position: Position = field(default_factory=Position)
    data: dict[str, Any] = field(default_factory=dict)

    def moved_to(self, x: float, y: float) -> "GraphNode":
        """Return a copy of this node, with its own data, at a new position."""
        return replace(self, position=Position(x, y), data=copy.deepcopy(self.data))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "position": {"x": self.position.x, "y": self.position.y},
            "data": self.data,
        }


@dataclass
class GraphEdge:
    """A renderable connector between two nodes.

    ``label`` is the display text; ``data`` holds the relationship kind and
    the raw element fields. ``animated`` and ``dashed`` are style hints.
    """

    id: str
    source: str
    target: str
    type: EdgeType = EdgeType.DEFAULT
    label: str | None = None
    animated: bool = False
    dashed: bool = False
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def relation(self) -> str | None:
        """The relationship/transition kind carried by this edge, if any."""
        return self.data.get("type") or self.data.get("edgeType")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type.value,
            "label": self.label,
            "animated": self.animated,
            "dashed": self.dashed,
            "data": self.data,
        }


@dataclass
class GraphModel:
    """Nodes and edges produced from one diagram."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
