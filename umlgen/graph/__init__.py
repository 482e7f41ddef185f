"""Graph layer: renderable nodes and edges, transformation and layout."""

from .node_types import NodeShape, EdgeType
from .elements import Position, GraphNode, GraphEdge, GraphModel
from .transformer import transform, edge_id, compose_transition_label
from .reverse import graph_to_diagram
from .layered_graph import LayeredGraph, count_crossings
from .layout import (
    LayoutConfig,
    DEFAULT_LAYOUT_CONFIG,
    DEFAULT_NODE_SIZES,
    LAYOUT_PROFILES,
    Spacing,
    layout,
    node_size,
    detect_kind,
    profile_for_kind,
    get_node_spacing,
)

__all__ = [
    "NodeShape",
    "EdgeType",
    "Position",
    "GraphNode",
    "GraphEdge",
    "GraphModel",
    "transform",
    "edge_id",
    "compose_transition_label",
    "graph_to_diagram",
    "LayeredGraph",
    "count_crossings",
    "LayoutConfig",
    "DEFAULT_LAYOUT_CONFIG",
    "DEFAULT_NODE_SIZES",
    "LAYOUT_PROFILES",
    "Spacing",
    "layout",
    "node_size",
    "detect_kind",
    "profile_for_kind",
    "get_node_spacing",
]
