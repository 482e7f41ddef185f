"""State manager for the active project and its live graph."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from pydantic import BaseModel

from ..graph import (
    GraphEdge,
    GraphNode,
    graph_to_diagram,
    layout,
    profile_for_kind,
    transform,
)
from ..schema import DiagramKind, DiagramModel, coerce_diagram, diagram_to_dict
from ..validators import ValidationResult, validate
from .models import UNTITLED_PROJECT_NAME, Message, MessageRole, Project, StoredProject
from .storage import MemoryStorage, ProjectStorage, StorageResult

logger = logging.getLogger(__name__)


def generate_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProjectStore:
    """Holds the project index and one live project.

    The store is either without an active project, or has an active project
    whose live graph is clean (matches what was last saved or loaded) or
    dirty. All mutation goes through the methods of this class; callers read
    ``nodes``, ``edges`` and ``messages`` directly.

    Storage failures never raise: the operation becomes a no-op, the error
    is logged, and the in-memory state is left as it was.
    """

    def __init__(
        self,
        storage: ProjectStorage | None = None,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize an empty store.

        Args:
            storage: Where projects are persisted (in memory if omitted).
            id_factory: Produces ids for new projects and messages.
            clock: Produces the current time.
        """
        self.storage = storage if storage is not None else MemoryStorage()
        self._new_id = id_factory
        self._now = clock

        self.projects: list[Project] = []
        self.current_project_id: str | None = None
        self.current_diagram_type: DiagramKind = DiagramKind.CLASS
        self.nodes: list[GraphNode] = []
        self.edges: list[GraphEdge] = []
        self.messages: list[Message] = []
        self.is_loading = False
        self.is_dirty = False

    @property
    def current_project(self) -> Project | None:
        """The index entry of the active project, if any."""
        if self.current_project_id is None:
            return None
        return next((p for p in self.projects if p.id == self.current_project_id), None)

    # -------------------------------------------------------------------------
    # Project lifecycle
    # -------------------------------------------------------------------------

    def initialize(self) -> StorageResult:
        """Load the project index from storage."""
        result = self.storage.load_all()
        if result.success:
            self.projects = [stored.to_project() for stored in result.data]
            logger.info("Loaded %d project(s)", len(self.projects))
        return result

    def create_project(self, kind: DiagramKind | str = DiagramKind.CLASS) -> Project:
        """Start a new, empty project and make it active.

        Unsaved edits of the previously active project are discarded.

        Args:
            kind: The diagram kind of the new project.

        Returns:
            The index entry of the new project.
        """
        kind = DiagramKind(kind)
        now = self._now()
        project = Project(
            id=self._new_id(),
            name=UNTITLED_PROJECT_NAME,
            diagram_type=kind,
            created_at=now,
            updated_at=now,
        )
        if self.is_dirty:
            logger.info("Discarding unsaved changes of project %s", self.current_project_id)

        self.projects.append(project)
        self.current_project_id = project.id
        self.current_diagram_type = kind
        self._reset_live_state()
        logger.debug("Created %s project %s", kind.value, project.id)
        return project

    def save_project(self) -> bool:
        """Persist the active project.

        The diagram is rebuilt from the live graph, so interactive edits are
        saved along with generated content.

        Returns:
            True if the project was written to storage.
        """
        project = self.current_project
        if project is None:
            logger.debug("No active project to save")
            return False

        diagram = graph_to_diagram(self.nodes, self.edges, self.current_diagram_type)
        now = self._now()
        stored = StoredProject(
            id=project.id,
            name=project.name,
            diagram_type=self.current_diagram_type,
            diagram=diagram_to_dict(diagram),
            messages=list(self.messages),
            created_at=project.created_at,
            updated_at=now,
        )

        result = self.storage.save(stored)
        if not result.success:
            return False

        project.updated_at = now
        project.diagram_type = self.current_diagram_type
        self.is_dirty = False
        logger.info("Saved project %s", project.id)
        return True

    def load_project(self, project_id: str) -> bool:
        """Make a stored project active.

        The graph is always recomputed from the stored diagram; stored
        positions are never trusted.

        Args:
            project_id: The id of the project to load.

        Returns:
            True if the project was found and loaded.
        """
        result = self.storage.load_by_id(project_id)
        if not result.success:
            return False
        if result.data is None:
            logger.warning("Project %s not found", project_id)
            return False

        stored = result.data
        payload = dict(stored.diagram)
        payload.setdefault("type", stored.diagram_type.value)
        self._apply(coerce_diagram(payload))

        if not any(p.id == stored.id for p in self.projects):
            self.projects.append(stored.to_project())

        self.current_project_id = stored.id
        self.messages = list(stored.messages)
        self.is_loading = False
        self.is_dirty = False
        logger.debug("Loaded project %s", stored.id)
        return True

    def delete_project(self, project_id: str) -> bool:
        """Delete a project from storage and from the index.

        Deleting the active project leaves the store without one.

        Returns:
            True if storage accepted the deletion.
        """
        result = self.storage.delete_by_id(project_id)
        if not result.success:
            return False

        self.projects = [p for p in self.projects if p.id != project_id]
        if self.current_project_id == project_id:
            self.current_project_id = None
            self.current_diagram_type = DiagramKind.CLASS
            self._reset_live_state()
        logger.debug("Deleted project %s", project_id)
        return True

    # -------------------------------------------------------------------------
    # Live graph
    # -------------------------------------------------------------------------

    def update_diagram_from_payload(
        self, diagram: DiagramModel | dict[str, Any]
    ) -> ValidationResult:
        """Replace the live graph with a diagram.

        The payload is validated, transformed and laid out. Validation
        errors are logged but do not prevent the best-effort graph from
        being applied.

        Args:
            diagram: A diagram model or raw diagram data, possibly invalid.

        Returns:
            The validation result of the payload.
        """
        candidate = diagram_to_dict(diagram) if isinstance(diagram, BaseModel) else diagram
        validation = validate(candidate)
        if not validation.valid:
            logger.warning(
                "Applying diagram with %d validation error(s): %s",
                len(validation.errors),
                "; ".join(validation.errors),
            )

        self._apply(coerce_diagram(diagram))
        self.is_dirty = True
        return validation

    def _apply(self, model: DiagramModel) -> None:
        kind = DiagramKind(model.type)
        graph = transform(model)
        self.nodes = layout(graph.nodes, graph.edges, profile_for_kind(kind))
        self.edges = graph.edges
        self.current_diagram_type = kind

    def set_nodes(self, nodes: list[GraphNode]) -> None:
        self.nodes = list(nodes)
        self.is_dirty = True

    def set_edges(self, edges: list[GraphEdge]) -> None:
        self.edges = list(edges)
        self.is_dirty = True

    def set_diagram_type(self, kind: DiagramKind | str) -> None:
        self.current_diagram_type = DiagramKind(kind)
        self.is_dirty = True

    def move_node(self, node_id: str, x: float, y: float) -> bool:
        """Move one node without recomputing the layout.

        Returns:
            True if a node with that id exists.
        """
        for index, node in enumerate(self.nodes):
            if node.id == node_id:
                self.nodes = [*self.nodes[:index], node.moved_to(x, y), *self.nodes[index + 1 :]]
                self.is_dirty = True
                return True
        return False

    # -------------------------------------------------------------------------
    # Conversation and metadata
    # -------------------------------------------------------------------------

    def new_message(self, role: MessageRole, content: str) -> Message:
        """Create a message stamped with a fresh id and the current time."""
        return Message(id=self._new_id(), role=role, content=content, timestamp=self._now())

    def add_message(self, message: Message) -> None:
        self.messages = [*self.messages, message]
        self.is_dirty = True

    def set_loading(self, loading: bool) -> None:
        self.is_loading = loading

    def rename_active_project(self, name: str) -> bool:
        """Rename the active project.

        Returns:
            False if there is no active project.
        """
        project = self.current_project
        if project is None:
            return False
        project.name = name
        project.updated_at = self._now()
        self.is_dirty = True
        return True

    def _reset_live_state(self) -> None:
        self.nodes = []
        self.edges = []
        self.messages = []
        self.is_loading = False
        self.is_dirty = False
