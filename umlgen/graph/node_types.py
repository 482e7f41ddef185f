"""Node and edge type definitions for the rendered graph."""

from enum import Enum


class NodeShape(str, Enum):
    """Shape tags of renderable nodes, one family per diagram kind."""

    CLASS = "classNode"
    ACTOR = "actorNode"
    USE_CASE = "useCaseNode"
    ACTIVITY = "activityNode"
    PARTICIPANT = "participantNode"
    STATE = "stateNode"
    COMPONENT = "componentNode"


class EdgeType(str, Enum):
    """Connector tags of renderable edges."""

    RELATIONSHIP = "relationshipEdge"  # Class relationships
    DEFAULT = "default"  # Every other kind
