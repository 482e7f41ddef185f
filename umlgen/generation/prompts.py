"""Prompt templates for diagram generation."""

import json

from ..schema.models import DIAGRAM_KIND_LABELS, DiagramKind
from .templates import load_template, template_for

SYSTEM_PROMPT = """You are a software architect who designs UML diagrams. Your task is to turn a natural language description of a system into a single UML diagram expressed as JSON.

Respond with exactly one JSON object and nothing else: no prose, no explanations, no markdown fences.

General rules:
- Every element id is a short lowercase identifier, unique within the diagram
- Every reference to another element uses that element's id
- Use names from the problem domain described by the user
- Keep the diagram focused: prefer 3 to 10 elements"""

KIND_CONTRACTS: dict[DiagramKind, str] = {
    DiagramKind.CLASS: """The object has "type": "class" and two arrays:
- "classes": objects with "id", "name", "attributes" (array of strings like "- email: string") and "operations" (array of strings like "+ login()")
- "relationships": objects with "source" and "target" (class ids), "type" (one of association, inheritance, composition, aggregation) and an optional "label".""",
    DiagramKind.USE_CASE: """The object has "type": "useCase" and three arrays:
- "actors": objects with "id" and "name"
- "useCases": objects with "id", "name" and an optional "description"
- "useCaseRelationships": objects with "source" and "target" (actor or use case ids), "type" (one of association, include, extend, generalization) and an optional "label".""",
    DiagramKind.ACTIVITY: """The object has "type": "activity" and two arrays:
- "activities": objects with "id", "type" (one of initial, action, decision, merge, fork, join, final, flowFinal) and "label"
- "transitions": objects with "source" and "target" (activity ids) and optional "guard" and "label"
Start with exactly one initial node and end in at least one final node.""",
    DiagramKind.SEQUENCE: """The object has "type": "sequence" and two arrays:
- "participants": objects with "id", "name" and "type" (one of actor, object, boundary, control, entity)
- "messages": objects with "id", "from" and "to" (participant ids), "label", "type" (one of sync, async, return, create, destroy) and "order" (an integer, ascending in time)""",
    DiagramKind.STATE_MACHINE: """The object has "type": "stateMachine" and two arrays:
- "states": objects with "id", "name", "isInitial", "isFinal" and optional "entryAction" and "exitAction"
- "stateTransitions": objects with "source" and "target" (state ids) and optional "trigger", "guard" and "action"
Mark exactly one state as initial.""",
    DiagramKind.COMPONENT: """The object has "type": "component" and two arrays:
- "components": objects with "id", "name", an optional "stereotype" and optional "interfaces" (objects with "id", "name" and "type", one of provided or required)
- "dependencies": objects with "source" and "target" (component ids), an optional "label" and "type" (one of dependency, realization)""",
}


def build_system_prompt(kind: DiagramKind | str) -> str:
    """Build the system prompt describing the JSON contract of a kind.

    Args:
        kind: The diagram kind to generate.

    Returns:
        The system prompt, including a complete example diagram.
    """
    kind = DiagramKind(kind)
    example = template_for("", kind) if kind != DiagramKind.CLASS else load_template("vehicle")
    return (
        f"{SYSTEM_PROMPT}\n\n"
        f"Diagram kind: {DIAGRAM_KIND_LABELS[kind]}\n\n"
        f"{KIND_CONTRACTS[kind]}\n\n"
        f"Example:\n{json.dumps(example, indent=2)}"
    )


def build_generation_prompt(prompt: str, kind: DiagramKind | str) -> str:
    """Build the user message asking for a diagram."""
    label = DIAGRAM_KIND_LABELS[DiagramKind(kind)]
    return f"""Create a {label} for the following description:

{prompt.strip()}

Return only the JSON object."""
