"""Schema layer for the unified diagram contract."""

from .errors import SchemaLoadError, SchemaValidationError
from .loader import (
    coerce_diagram,
    load_diagram_file,
    load_json,
    load_yaml,
    parse_diagram,
    resolve_kind,
)
from .models import (
    DIAGRAM_KIND_LABELS,
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
    UnifiedDiagram,
    UseCase,
    UseCaseActor,
    UseCaseDiagram,
    UseCaseRelationship,
    diagram_kind,
    diagram_to_dict,
)

__all__ = [
    "SchemaLoadError",
    "SchemaValidationError",
    "coerce_diagram",
    "load_diagram_file",
    "load_json",
    "load_yaml",
    "parse_diagram",
    "resolve_kind",
    "DIAGRAM_KIND_LABELS",
    "Activity",
    "ActivityDiagram",
    "ActivityTransition",
    "ClassDiagram",
    "Component",
    "ComponentDependency",
    "ComponentDiagram",
    "ComponentInterface",
    "DiagramKind",
    "DiagramModel",
    "SequenceDiagram",
    "SequenceMessage",
    "SequenceParticipant",
    "State",
    "StateMachineDiagram",
    "StateTransition",
    "UMLClass",
    "UMLRelationship",
    "UnifiedDiagram",
    "UseCase",
    "UseCaseActor",
    "UseCaseDiagram",
    "UseCaseRelationship",
    "diagram_kind",
    "diagram_to_dict",
]
