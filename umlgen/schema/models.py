"""Pydantic models for the unified diagram contract."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class DiagramKind(str, Enum):
    """Supported UML diagram kinds."""

    CLASS = "class"
    USE_CASE = "useCase"
    ACTIVITY = "activity"
    SEQUENCE = "sequence"
    STATE_MACHINE = "stateMachine"
    COMPONENT = "component"


DIAGRAM_KIND_LABELS = {
    DiagramKind.CLASS: "Class Diagram",
    DiagramKind.USE_CASE: "Use Case Diagram",
    DiagramKind.ACTIVITY: "Activity Diagram",
    DiagramKind.SEQUENCE: "Sequence Diagram",
    DiagramKind.STATE_MACHINE: "State Machine Diagram",
    DiagramKind.COMPONENT: "Component Diagram",
}

ClassRelationshipType = Literal["association", "inheritance", "composition", "aggregation"]
UseCaseRelationshipType = Literal["association", "include", "extend", "generalization"]
ActivityNodeType = Literal[
    "initial", "action", "decision", "merge", "fork", "join", "final", "flowFinal"
]
ParticipantType = Literal["actor", "object", "boundary", "control", "entity"]
MessageType = Literal["sync", "async", "return", "create", "destroy"]
InterfaceType = Literal["provided", "required"]
DependencyType = Literal["dependency", "realization"]


class DiagramElement(BaseModel):
    """Base for all contract elements: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True)


# -----------------------------------------------------------------------------
# Class diagram
# -----------------------------------------------------------------------------


class UMLClass(DiagramElement):
    """A class with verbatim attribute and operation strings."""

    id: str
    name: str
    attributes: list[str] = Field(default_factory=list)
    operations: list[str] = Field(default_factory=list)


class UMLRelationship(DiagramElement):
    """A relationship between two classes."""

    source: str
    target: str
    type: ClassRelationshipType
    label: str | None = None


# -----------------------------------------------------------------------------
# Use case diagram
# -----------------------------------------------------------------------------


class UseCaseActor(DiagramElement):
    id: str
    name: str


class UseCase(DiagramElement):
    id: str
    name: str
    description: str | None = None


class UseCaseRelationship(DiagramElement):
    source: str
    target: str
    type: UseCaseRelationshipType
    label: str | None = None


# -----------------------------------------------------------------------------
# Activity diagram
# -----------------------------------------------------------------------------


class Activity(DiagramElement):
    id: str
    type: ActivityNodeType
    label: str = ""


class ActivityTransition(DiagramElement):
    source: str
    target: str
    guard: str | None = None  # Condition for decision branches
    label: str | None = None


# -----------------------------------------------------------------------------
# Sequence diagram
# -----------------------------------------------------------------------------


class SequenceParticipant(DiagramElement):
    id: str
    name: str
    type: ParticipantType = "object"


class SequenceMessage(DiagramElement):
    """A message between participants; `order` is authoritative, not list position."""

    id: str | None = None
    from_: str = Field(alias="from")
    to: str
    label: str = ""
    type: MessageType = "sync"
    order: int


# -----------------------------------------------------------------------------
# State machine diagram
# -----------------------------------------------------------------------------


class State(DiagramElement):
    id: str
    name: str
    is_initial: bool = Field(default=False, alias="isInitial")
    is_final: bool = Field(default=False, alias="isFinal")
    entry_action: str | None = Field(default=None, alias="entryAction")
    exit_action: str | None = Field(default=None, alias="exitAction")


class StateTransition(DiagramElement):
    source: str
    target: str
    trigger: str | None = None
    guard: str | None = None
    action: str | None = None


# -----------------------------------------------------------------------------
# Component diagram
# -----------------------------------------------------------------------------


class ComponentInterface(DiagramElement):
    id: str
    name: str
    type: InterfaceType


class Component(DiagramElement):
    id: str
    name: str
    stereotype: str | None = None
    interfaces: list[ComponentInterface] | None = None


class ComponentDependency(DiagramElement):
    source: str
    target: str
    label: str | None = None
    type: DependencyType = "dependency"


# -----------------------------------------------------------------------------
# Unified diagram
# -----------------------------------------------------------------------------


class ClassDiagram(DiagramElement):
    type: Literal["class"] = "class"
    classes: list[UMLClass] = Field(default_factory=list)
    relationships: list[UMLRelationship] = Field(default_factory=list)


class UseCaseDiagram(DiagramElement):
    type: Literal["useCase"] = "useCase"
    actors: list[UseCaseActor] = Field(default_factory=list)
    use_cases: list[UseCase] = Field(default_factory=list, alias="useCases")
    use_case_relationships: list[UseCaseRelationship] = Field(
        default_factory=list, alias="useCaseRelationships"
    )


class ActivityDiagram(DiagramElement):
    type: Literal["activity"] = "activity"
    activities: list[Activity] = Field(default_factory=list)
    transitions: list[ActivityTransition] = Field(default_factory=list)


class SequenceDiagram(DiagramElement):
    type: Literal["sequence"] = "sequence"
    participants: list[SequenceParticipant] = Field(default_factory=list)
    messages: list[SequenceMessage] = Field(default_factory=list)


class StateMachineDiagram(DiagramElement):
    type: Literal["stateMachine"] = "stateMachine"
    states: list[State] = Field(default_factory=list)
    state_transitions: list[StateTransition] = Field(
        default_factory=list, alias="stateTransitions"
    )


class ComponentDiagram(DiagramElement):
    type: Literal["component"] = "component"
    components: list[Component] = Field(default_factory=list)
    dependencies: list[ComponentDependency] = Field(default_factory=list)


UnifiedDiagram = Annotated[
    Union[
        ClassDiagram,
        UseCaseDiagram,
        ActivityDiagram,
        SequenceDiagram,
        StateMachineDiagram,
        ComponentDiagram,
    ],
    Field(discriminator="type"),
]

DIAGRAM_MODELS: dict[DiagramKind, type[BaseModel]] = {
    DiagramKind.CLASS: ClassDiagram,
    DiagramKind.USE_CASE: UseCaseDiagram,
    DiagramKind.ACTIVITY: ActivityDiagram,
    DiagramKind.SEQUENCE: SequenceDiagram,
    DiagramKind.STATE_MACHINE: StateMachineDiagram,
    DiagramKind.COMPONENT: ComponentDiagram,
}

# (wire name, attribute name, element model) for each collection of a kind.
DIAGRAM_COLLECTIONS: dict[DiagramKind, list[tuple[str, str, type[BaseModel]]]] = {
    DiagramKind.CLASS: [
        ("classes", "classes", UMLClass),
        ("relationships", "relationships", UMLRelationship),
    ],
    DiagramKind.USE_CASE: [
        ("actors", "actors", UseCaseActor),
        ("useCases", "use_cases", UseCase),
        ("useCaseRelationships", "use_case_relationships", UseCaseRelationship),
    ],
    DiagramKind.ACTIVITY: [
        ("activities", "activities", Activity),
        ("transitions", "transitions", ActivityTransition),
    ],
    DiagramKind.SEQUENCE: [
        ("participants", "participants", SequenceParticipant),
        ("messages", "messages", SequenceMessage),
    ],
    DiagramKind.STATE_MACHINE: [
        ("states", "states", State),
        ("stateTransitions", "state_transitions", StateTransition),
    ],
    DiagramKind.COMPONENT: [
        ("components", "components", Component),
        ("dependencies", "dependencies", ComponentDependency),
    ],
}


def diagram_to_dict(diagram: BaseModel) -> dict:
    """Serialize a diagram to its camelCase wire form."""
    return diagram.model_dump(mode="json", by_alias=True, exclude_none=True)


DiagramModel = Union[
    ClassDiagram,
    UseCaseDiagram,
    ActivityDiagram,
    SequenceDiagram,
    StateMachineDiagram,
    ComponentDiagram,
]

unified_diagram_adapter: TypeAdapter = TypeAdapter(UnifiedDiagram)


def diagram_kind(diagram: DiagramModel) -> DiagramKind:
    """Get the DiagramKind of a parsed diagram."""
    return DiagramKind(diagram.type)
