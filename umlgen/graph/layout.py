"""Layered layout of graph nodes with per-diagram-kind profiles."""

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from ..schema.models import DiagramKind
from .elements import GraphEdge, GraphNode
from .layered_graph import LayeredGraph
from .node_types import NodeShape

logger = logging.getLogger(__name__)

# Default bounding box (width, height) of each node shape
DEFAULT_NODE_SIZES: dict[NodeShape, tuple[float, float]] = {
    NodeShape.CLASS: (220, 160),
    NodeShape.ACTOR: (60, 100),
    NodeShape.USE_CASE: (160, 70),
    NodeShape.ACTIVITY: (150, 60),
    NodeShape.PARTICIPANT: (140, 60),
    NodeShape.STATE: (150, 70),
    NodeShape.COMPONENT: (200, 110),
}

# Size used for shapes no profile knows about
FALLBACK_NODE_SIZE = DEFAULT_NODE_SIZES[NodeShape.CLASS]

SHAPE_KINDS: dict[NodeShape, DiagramKind] = {
    NodeShape.CLASS: DiagramKind.CLASS,
    NodeShape.ACTOR: DiagramKind.USE_CASE,
    NodeShape.USE_CASE: DiagramKind.USE_CASE,
    NodeShape.ACTIVITY: DiagramKind.ACTIVITY,
    NodeShape.PARTICIPANT: DiagramKind.SEQUENCE,
    NodeShape.STATE: DiagramKind.STATE_MACHINE,
    NodeShape.COMPONENT: DiagramKind.COMPONENT,
}


@dataclass(frozen=True)
class LayoutConfig:
    """Layout parameters.

    Attributes:
        rankdir: ``"TB"`` stacks ranks top to bottom, ``"LR"`` left to right.
        nodesep: Gap between adjacent nodes of the same rank.
        ranksep: Gap between adjacent ranks.
        node_sizes: Bounding box (width, height) per node shape.
    """

    rankdir: str = "TB"
    nodesep: float = 80
    ranksep: float = 100
    node_sizes: dict[NodeShape, tuple[float, float]] = field(
        default_factory=lambda: dict(DEFAULT_NODE_SIZES)
    )

    def __post_init__(self):
        if self.rankdir not in ("TB", "LR"):
            raise ValueError(f"Unsupported rankdir: {self.rankdir!r}")


DEFAULT_LAYOUT_CONFIG = LayoutConfig()

LAYOUT_PROFILES: dict[DiagramKind, LayoutConfig] = {
    DiagramKind.CLASS: DEFAULT_LAYOUT_CONFIG,
    DiagramKind.USE_CASE: LayoutConfig(rankdir="LR", nodesep=50, ranksep=150),
    DiagramKind.ACTIVITY: LayoutConfig(rankdir="TB", nodesep=50, ranksep=70),
    DiagramKind.SEQUENCE: LayoutConfig(rankdir="LR", nodesep=80, ranksep=120),
    DiagramKind.STATE_MACHINE: LayoutConfig(rankdir="LR", nodesep=60, ranksep=100),
    DiagramKind.COMPONENT: LayoutConfig(rankdir="TB", nodesep=70, ranksep=100),
}


class Spacing(NamedTuple):
    horizontal: float
    vertical: float


def profile_for_kind(kind: DiagramKind | str) -> LayoutConfig:
    """Get the layout profile of a diagram kind."""
    return LAYOUT_PROFILES[DiagramKind(kind)]


def detect_kind(nodes: list[GraphNode]) -> DiagramKind:
    """Guess the diagram kind from the shape of the first node.

    Unrecognized shapes (and an empty node list) map to the class kind.
    """
    if not nodes:
        return DiagramKind.CLASS
    return SHAPE_KINDS.get(nodes[0].type, DiagramKind.CLASS)


def node_size(shape: NodeShape | str, config: LayoutConfig = DEFAULT_LAYOUT_CONFIG) -> tuple[float, float]:
    """Get the (width, height) bounding box of a node shape."""
    if shape in config.node_sizes:
        return config.node_sizes[shape]
    return DEFAULT_NODE_SIZES.get(shape, FALLBACK_NODE_SIZE)


def layout(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    config: LayoutConfig | None = None,
) -> list[GraphNode]:
    """Compute positions for all nodes.

    Nodes are ranked along the flow direction and ordered within each rank
    to reduce edge crossings. Every rank occupies a band as deep as its
    largest node, bands are ``ranksep`` apart, and nodes of one rank are
    packed ``nodesep`` apart and centered on the rank axis. Positions are the
    top-left corner of each node's own bounding box, translated so the
    drawing starts at the origin.

    Edges naming an unknown node are left out of the computation. Neither
    the node list nor the nodes themselves are modified.

    Args:
        nodes: The nodes to position.
        edges: The edges connecting them.
        config: Layout parameters; detected from the node shapes if omitted.

    Returns:
        New nodes, in input order, with positions set.
    """
    if not nodes:
        return []

    if config is None:
        config = profile_for_kind(detect_kind(nodes))

    graph = LayeredGraph(node.id for node in nodes)
    skipped = sum(1 for edge in edges if not graph.add_edge(edge.source, edge.target))
    if skipped:
        logger.debug("Layout ignores %d self-referencing or dangling edge(s)", skipped)

    sizes: dict[str, tuple[float, float]] = {}
    for node in nodes:
        sizes.setdefault(node.id, node_size(node.type, config))

    centers = _place(graph.layers(), sizes, config)

    top_left = {
        node_id: (cx - sizes[node_id][0] / 2, cy - sizes[node_id][1] / 2)
        for node_id, (cx, cy) in centers.items()
    }
    min_x = min(x for x, _ in top_left.values())
    min_y = min(y for _, y in top_left.values())

    return [
        node.moved_to(top_left[node.id][0] - min_x, top_left[node.id][1] - min_y)
        for node in nodes
    ]


def _place(
    layers: list[list[str]],
    sizes: dict[str, tuple[float, float]],
    config: LayoutConfig,
) -> dict[str, tuple[float, float]]:
    vertical = config.rankdir == "TB"

    def extents(node_id: str) -> tuple[float, float]:
        width, height = sizes[node_id]
        # (along the rank axis, across it)
        return (height, width) if vertical else (width, height)

    centers: dict[str, tuple[float, float]] = {}
    band_start = 0.0
    for layer in layers:
        depth = max(extents(node_id)[0] for node_id in layer)
        rank_center = band_start + depth / 2

        breadth = sum(extents(node_id)[1] for node_id in layer)
        cursor = -(breadth + config.nodesep * (len(layer) - 1)) / 2
        for node_id in layer:
            across = extents(node_id)[1]
            cross_center = cursor + across / 2
            centers[node_id] = (
                (cross_center, rank_center) if vertical else (rank_center, cross_center)
            )
            cursor += across + config.nodesep

        band_start += depth + config.ranksep

    return centers


def get_node_spacing(
    first: GraphNode, second: GraphNode, config: LayoutConfig = DEFAULT_LAYOUT_CONFIG
) -> Spacing:
    """Measure the gap between the bounding boxes of two positioned nodes.

    Args:
        first: A positioned node.
        second: Another positioned node.
        config: Layout parameters supplying the node sizes.

    Returns:
        The horizontal and vertical gap, 0 on an axis where the boxes overlap.
    """
    first_width, first_height = node_size(first.type, config)
    second_width, second_height = node_size(second.type, config)

    horizontal = 0.0
    if second.position.x >= first.position.x + first_width:
        horizontal = second.position.x - (first.position.x + first_width)
    elif first.position.x >= second.position.x + second_width:
        horizontal = first.position.x - (second.position.x + second_width)

    vertical = 0.0
    if second.position.y >= first.position.y + first_height:
        vertical = second.position.y - (first.position.y + first_height)
    elif first.position.y >= second.position.y + second_height:
        vertical = first.position.y - (second.position.y + second_height)

    return Spacing(horizontal=horizontal, vertical=vertical)
