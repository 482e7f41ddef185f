"""Transform unified diagrams into generic renderable graphs."""

import logging
from typing import Any, Callable

from ..schema.loader import coerce_diagram
from ..schema.models import (
    ActivityDiagram,
    ClassDiagram,
    ComponentDiagram,
    DiagramKind,
    DiagramModel,
    SequenceDiagram,
    StateMachineDiagram,
    UseCaseDiagram,
)
from .elements import GraphEdge, GraphModel, GraphNode, Position
from .node_types import EdgeType, NodeShape

logger = logging.getLogger(__name__)

# Horizontal spacing of the initial participant hint in sequence diagrams
PARTICIPANT_SPACING = 200

STEREOTYPE_LABELS = {"include": "<<include>>", "extend": "<<extend>>"}


def edge_id(source: str, target: str, index: int) -> str:
    """Synthesize the id of an edge that has none of its own."""
    return f"edge-{source}-{target}-{index}"


def compose_transition_label(
    trigger: str | None, guard: str | None, action: str | None
) -> str | None:
    """Build ``<trigger> [<guard>] / <action>``, omitting absent segments."""
    label = trigger or ""
    if guard:
        label += f" [{guard}]"
    if action:
        label += f" / {action}"
    return label.strip() or None


def transform(diagram: DiagramModel | dict[str, Any]) -> GraphModel:
    """Transform a diagram into nodes and edges.

    Raw mappings are coerced leniently first, so missing collections are
    treated as empty and this never raises for malformed input. Mapping is
    deterministic and preserves input order, except for sequence messages
    which are ordered by their ``order`` field. An unrecognized ``type``
    falls back to the class mapping with a logged warning.

    Args:
        diagram: A parsed diagram model or raw diagram data.

    Returns:
        The GraphModel for the diagram, with unpositioned nodes.
    """
    model = coerce_diagram(diagram)
    kind = DiagramKind(model.type)

    logger.debug("Transforming %s diagram", kind.value)
    return _TRANSFORMERS[kind](model)


def _transform_class(diagram: ClassDiagram) -> GraphModel:
    nodes = [
        GraphNode(
            id=cls.id,
            type=NodeShape.CLASS,
            data={
                "name": cls.name,
                "attributes": list(cls.attributes),
                "operations": list(cls.operations),
            },
        )
        for cls in diagram.classes
    ]

    edges = [
        GraphEdge(
            id=edge_id(rel.source, rel.target, index),
            source=rel.source,
            target=rel.target,
            type=EdgeType.RELATIONSHIP,
            label=rel.label,
            data={"type": rel.type, "label": rel.label},
        )
        for index, rel in enumerate(diagram.relationships)
    ]

    return GraphModel(nodes=nodes, edges=edges)


def _transform_use_case(diagram: UseCaseDiagram) -> GraphModel:
    nodes = [
        GraphNode(id=actor.id, type=NodeShape.ACTOR, data={"name": actor.name})
        for actor in diagram.actors
    ]
    nodes.extend(
        GraphNode(
            id=use_case.id,
            type=NodeShape.USE_CASE,
            data={"name": use_case.name, "description": use_case.description},
        )
        for use_case in diagram.use_cases
    )

    edges = []
    for index, rel in enumerate(diagram.use_case_relationships):
        stereotype = STEREOTYPE_LABELS.get(rel.type)
        edges.append(
            GraphEdge(
                id=edge_id(rel.source, rel.target, index),
                source=rel.source,
                target=rel.target,
                label=stereotype or rel.label,
                dashed=stereotype is not None,
                data={"edgeType": rel.type, "label": rel.label},
            )
        )

    return GraphModel(nodes=nodes, edges=edges)


def _transform_activity(diagram: ActivityDiagram) -> GraphModel:
    nodes = [
        GraphNode(
            id=activity.id,
            type=NodeShape.ACTIVITY,
            data={"nodeType": activity.type, "label": activity.label},
        )
        for activity in diagram.activities
    ]

    edges = [
        GraphEdge(
            id=edge_id(transition.source, transition.target, index),
            source=transition.source,
            target=transition.target,
            label=transition.guard or transition.label,
            data={"guard": transition.guard, "label": transition.label},
        )
        for index, transition in enumerate(diagram.transitions)
    ]

    return GraphModel(nodes=nodes, edges=edges)


def _transform_sequence(diagram: SequenceDiagram) -> GraphModel:
    nodes = [
        GraphNode(
            id=participant.id,
            type=NodeShape.PARTICIPANT,
            position=Position(x=index * PARTICIPANT_SPACING, y=0),
            data={"name": participant.name, "participantType": participant.type},
        )
        for index, participant in enumerate(diagram.participants)
    ]

    ordered = sorted(diagram.messages, key=lambda message: message.order)
    edges = [
        GraphEdge(
            id=message.id or f"msg-{index}",
            source=message.from_,
            target=message.to,
            label=message.label,
            animated=message.type == "async",
            dashed=message.type == "return",
            data={"edgeType": message.type, "label": message.label, "order": message.order},
        )
        for index, message in enumerate(ordered)
    ]

    return GraphModel(nodes=nodes, edges=edges)


def _transform_state_machine(diagram: StateMachineDiagram) -> GraphModel:
    nodes = [
        GraphNode(
            id=state.id,
            type=NodeShape.STATE,
            data={
                "name": state.name,
                "isInitial": state.is_initial,
                "isFinal": state.is_final,
                "entryAction": state.entry_action,
                "exitAction": state.exit_action,
            },
        )
        for state in diagram.states
    ]

    edges = [
        GraphEdge(
            id=edge_id(transition.source, transition.target, index),
            source=transition.source,
            target=transition.target,
            label=compose_transition_label(
                transition.trigger, transition.guard, transition.action
            ),
            data={
                "trigger": transition.trigger,
                "guard": transition.guard,
                "action": transition.action,
            },
        )
        for index, transition in enumerate(diagram.state_transitions)
    ]

    return GraphModel(nodes=nodes, edges=edges)


def _transform_component(diagram: ComponentDiagram) -> GraphModel:
    nodes = [
        GraphNode(
            id=component.id,
            type=NodeShape.COMPONENT,
            data={
                "name": component.name,
                "stereotype": component.stereotype,
                "interfaces": (
                    [interface.model_dump() for interface in component.interfaces]
                    if component.interfaces is not None
                    else None
                ),
            },
        )
        for component in diagram.components
    ]

    edges = [
        GraphEdge(
            id=edge_id(dependency.source, dependency.target, index),
            source=dependency.source,
            target=dependency.target,
            label=dependency.label,
            dashed=dependency.type == "dependency",
            data={"edgeType": dependency.type, "label": dependency.label},
        )
        for index, dependency in enumerate(diagram.dependencies)
    ]

    return GraphModel(nodes=nodes, edges=edges)


_TRANSFORMERS: dict[DiagramKind, Callable[[Any], GraphModel]] = {
    DiagramKind.CLASS: _transform_class,
    DiagramKind.USE_CASE: _transform_use_case,
    DiagramKind.ACTIVITY: _transform_activity,
    DiagramKind.SEQUENCE: _transform_sequence,
    DiagramKind.STATE_MACHINE: _transform_state_machine,
    DiagramKind.COMPONENT: _transform_component,
}
