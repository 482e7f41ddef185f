"""Reconstruct unified diagrams from the live node/edge graph."""

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from ..schema.models import (
    Activity,
    ActivityDiagram,
    ActivityTransition,
    ClassDiagram,
    Component,
    ComponentDependency,
    ComponentDiagram,
    ComponentInterface,
    DiagramKind,
    DiagramModel,
    SequenceDiagram,
    SequenceMessage,
    SequenceParticipant,
    State,
    StateMachineDiagram,
    StateTransition,
    UMLClass,
    UMLRelationship,
    UseCase,
    UseCaseActor,
    UseCaseDiagram,
    UseCaseRelationship,
)
from .elements import GraphEdge, GraphNode
from .node_types import NodeShape

logger = logging.getLogger(__name__)

KIND_SHAPES: dict[DiagramKind, set[NodeShape]] = {
    DiagramKind.CLASS: {NodeShape.CLASS},
    DiagramKind.USE_CASE: {NodeShape.ACTOR, NodeShape.USE_CASE},
    DiagramKind.ACTIVITY: {NodeShape.ACTIVITY},
    DiagramKind.SEQUENCE: {NodeShape.PARTICIPANT},
    DiagramKind.STATE_MACHINE: {NodeShape.STATE},
    DiagramKind.COMPONENT: {NodeShape.COMPONENT},
}


def _choice(value: Any, allowed: Iterable[str], default: str) -> str:
    return value if isinstance(value, str) and value in allowed else default


def _text(value: Any, default: str | None = None) -> str | None:
    return value if isinstance(value, str) else default


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _nodes_of(nodes: list[GraphNode], kind: DiagramKind) -> list[GraphNode]:
    shapes = KIND_SHAPES[kind]
    kept = [node for node in nodes if node.type in shapes]
    if len(kept) != len(nodes):
        logger.warning(
            "Skipping %d node(s) that do not belong to a %s diagram",
            len(nodes) - len(kept),
            kind.value,
        )
    return kept


def graph_to_diagram(
    nodes: list[GraphNode], edges: list[GraphEdge], kind: DiagramKind | str
) -> DiagramModel:
    """Rebuild the diagram a graph was produced from.

    This is the structural inverse of :func:`umlgen.graph.transformer.transform`:
    transforming the result again yields the same node data and edges.
    Fields missing from interactively edited nodes or edges fall back to
    the contract defaults.

    Args:
        nodes: The live nodes; positions are ignored.
        edges: The live edges.
        kind: The active diagram kind.

    Returns:
        A diagram model suitable for persistence.
    """
    kind = DiagramKind(kind)
    kept = _nodes_of(nodes, kind)
    return _REBUILDERS[kind](kept, edges)


def _class_diagram(nodes: list[GraphNode], edges: list[GraphEdge]) -> ClassDiagram:
    return ClassDiagram(
        classes=[
            UMLClass(
                id=node.id,
                name=_text(node.data.get("name"), ""),
                attributes=_strings(node.data.get("attributes")),
                operations=_strings(node.data.get("operations")),
            )
            for node in nodes
        ],
        relationships=[
            UMLRelationship(
                source=edge.source,
                target=edge.target,
                type=_choice(
                    edge.data.get("type"),
                    ("association", "inheritance", "composition", "aggregation"),
                    "association",
                ),
                label=_text(edge.data.get("label", edge.label)),
            )
            for edge in edges
        ],
    )


def _use_case_diagram(nodes: list[GraphNode], edges: list[GraphEdge]) -> UseCaseDiagram:
    return UseCaseDiagram(
        actors=[
            UseCaseActor(id=node.id, name=_text(node.data.get("name"), ""))
            for node in nodes
            if node.type == NodeShape.ACTOR
        ],
        use_cases=[
            UseCase(
                id=node.id,
                name=_text(node.data.get("name"), ""),
                description=_text(node.data.get("description")),
            )
            for node in nodes
            if node.type == NodeShape.USE_CASE
        ],
        use_case_relationships=[
            UseCaseRelationship(
                source=edge.source,
                target=edge.target,
                type=_choice(
                    edge.data.get("edgeType"),
                    ("association", "include", "extend", "generalization"),
                    "association",
                ),
                label=_text(edge.data.get("label")),
            )
            for edge in edges
        ],
    )


def _activity_diagram(nodes: list[GraphNode], edges: list[GraphEdge]) -> ActivityDiagram:
    transitions = []
    for edge in edges:
        if "guard" in edge.data or "label" in edge.data:
            guard, label = _text(edge.data.get("guard")), _text(edge.data.get("label"))
        else:
            guard, label = None, edge.label
        transitions.append(
            ActivityTransition(source=edge.source, target=edge.target, guard=guard, label=label)
        )

    return ActivityDiagram(
        activities=[
            Activity(
                id=node.id,
                type=_choice(
                    node.data.get("nodeType"),
                    ("initial", "action", "decision", "merge", "fork", "join", "final", "flowFinal"),
                    "action",
                ),
                label=_text(node.data.get("label"), ""),
            )
            for node in nodes
        ],
        transitions=transitions,
    )


def _sequence_diagram(nodes: list[GraphNode], edges: list[GraphEdge]) -> SequenceDiagram:
    messages = []
    for index, edge in enumerate(edges):
        order = edge.data.get("order")
        messages.append(
            SequenceMessage(
                id=edge.id,
                from_=edge.source,
                to=edge.target,
                label=_text(edge.data.get("label", edge.label), ""),
                type=_choice(
                    edge.data.get("edgeType"),
                    ("sync", "async", "return", "create", "destroy"),
                    "sync",
                ),
                order=order if isinstance(order, int) and not isinstance(order, bool) else index,
            )
        )

    return SequenceDiagram(
        participants=[
            SequenceParticipant(
                id=node.id,
                name=_text(node.data.get("name"), ""),
                type=_choice(
                    node.data.get("participantType"),
                    ("actor", "object", "boundary", "control", "entity"),
                    "object",
                ),
            )
            for node in nodes
        ],
        messages=messages,
    )


def _state_machine_diagram(
    nodes: list[GraphNode], edges: list[GraphEdge]
) -> StateMachineDiagram:
    transitions = []
    for edge in edges:
        if any(key in edge.data for key in ("trigger", "guard", "action")):
            transitions.append(
                StateTransition(
                    source=edge.source,
                    target=edge.target,
                    trigger=_text(edge.data.get("trigger")),
                    guard=_text(edge.data.get("guard")),
                    action=_text(edge.data.get("action")),
                )
            )
        else:
            transitions.append(
                StateTransition(source=edge.source, target=edge.target, trigger=edge.label)
            )

    return StateMachineDiagram(
        states=[
            State(
                id=node.id,
                name=_text(node.data.get("name"), ""),
                is_initial=node.data.get("isInitial") is True,
                is_final=node.data.get("isFinal") is True,
                entry_action=_text(node.data.get("entryAction")),
                exit_action=_text(node.data.get("exitAction")),
            )
            for node in nodes
        ],
        state_transitions=transitions,
    )


def _interfaces(value: Any) -> list[ComponentInterface] | None:
    if not isinstance(value, list):
        return None
    interfaces = []
    for item in value:
        try:
            interfaces.append(ComponentInterface.model_validate(item))
        except ValidationError:
            logger.warning("Dropping malformed component interface: %r", item)
    return interfaces


def _component_diagram(nodes: list[GraphNode], edges: list[GraphEdge]) -> ComponentDiagram:
    return ComponentDiagram(
        components=[
            Component(
                id=node.id,
                name=_text(node.data.get("name"), ""),
                stereotype=_text(node.data.get("stereotype")),
                interfaces=_interfaces(node.data.get("interfaces")),
            )
            for node in nodes
        ],
        dependencies=[
            ComponentDependency(
                source=edge.source,
                target=edge.target,
                label=_text(edge.data.get("label", edge.label)),
                type=_choice(
                    edge.data.get("edgeType"), ("dependency", "realization"), "dependency"
                ),
            )
            for edge in edges
        ],
    )


_REBUILDERS = {
    DiagramKind.CLASS: _class_diagram,
    DiagramKind.USE_CASE: _use_case_diagram,
    DiagramKind.ACTIVITY: _activity_diagram,
    DiagramKind.SEQUENCE: _sequence_diagram,
    DiagramKind.STATE_MACHINE: _state_machine_diagram,
    DiagramKind.COMPONENT: _component_diagram,
}
