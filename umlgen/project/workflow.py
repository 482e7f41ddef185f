"""Prompt submission: generation applied to the active project."""

import logging
from typing import Any

from ..generation import ApiKeyNotConfiguredError, GenerationClient, GenerationError
from ..schema import DiagramKind, DiagramModel, coerce_diagram
from ..validators import ValidationResult
from .models import UNTITLED_PROJECT_NAME
from .store import ProjectStore

logger = logging.getLogger(__name__)

PROJECT_NAME_LIMIT = 30

API_KEY_MESSAGE = "Please configure your Anthropic API key to generate diagrams."


def project_name_from_prompt(prompt: str) -> str:
    """Derive a project name from the first prompt of a project."""
    cleaned = " ".join(prompt.split())
    if len(cleaned) <= PROJECT_NAME_LIMIT:
        return cleaned
    return cleaned[:PROJECT_NAME_LIMIT].strip() + "..."


def describe_diagram(diagram: DiagramModel | dict[str, Any]) -> str:
    """Summarize a generated diagram for the conversation log."""
    model = coerce_diagram(diagram)
    kind = DiagramKind(model.type)

    if kind == DiagramKind.CLASS:
        counts = f"{len(model.classes)} classes and {len(model.relationships)} relationships"
    elif kind == DiagramKind.USE_CASE:
        counts = f"{len(model.actors)} actors and {len(model.use_cases)} use cases"
    elif kind == DiagramKind.ACTIVITY:
        counts = f"{len(model.activities)} activities"
    elif kind == DiagramKind.SEQUENCE:
        counts = f"{len(model.participants)} participants and {len(model.messages)} messages"
    elif kind == DiagramKind.STATE_MACHINE:
        counts = f"{len(model.states)} states"
    else:
        counts = f"{len(model.components)} components"

    return f"Generated {kind.value} diagram with {counts}."


async def submit_prompt(
    store: ProjectStore, client: GenerationClient, prompt: str
) -> ValidationResult:
    """Generate a diagram for a prompt and apply it to the active project.

    A project is created when none is active. The first prompt of an
    untitled project names it. The user prompt and an assistant reply are
    appended to the conversation, and ``is_loading`` is set for the
    duration of the generation call.

    There is no request fencing: if several submissions overlap, the
    response applied last wins.

    Args:
        store: The project store to update.
        client: The generation client to call.
        prompt: The natural language request.

    Returns:
        The validation result of the generated diagram.

    Raises:
        GenerationError: If generation fails. The live graph is untouched and
            the failure is recorded in the conversation.
    """
    project = store.current_project
    if project is None:
        project = store.create_project(store.current_diagram_type)

    if not store.messages and project.name == UNTITLED_PROJECT_NAME:
        store.rename_active_project(project_name_from_prompt(prompt))

    store.add_message(store.new_message("user", prompt))
    store.set_loading(True)

    try:
        diagram = await client.generate(prompt, store.current_diagram_type)
        validation = store.update_diagram_from_payload(diagram)
        store.add_message(store.new_message("assistant", describe_diagram(diagram)))
        return validation
    except GenerationError as e:
        logger.error("Generation failed: %s", e)
        content = API_KEY_MESSAGE if isinstance(e, ApiKeyNotConfiguredError) else str(e)
        store.add_message(store.new_message("assistant", content))
        raise
    finally:
        store.set_loading(False)
