"""Project, message and stored project models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..schema.models import DiagramKind

UNTITLED_PROJECT_NAME = "Untitled Project"

MessageRole = Literal["user", "assistant"]


class Message(BaseModel):
    """One entry of a project's conversation log."""

    id: str
    role: MessageRole
    content: str
    timestamp: datetime


@dataclass
class Project:
    """An entry of the in-memory project index."""

    id: str
    name: str
    diagram_type: DiagramKind
    created_at: datetime
    updated_at: datetime


class StoredProject(BaseModel):
    """The persisted record of a project.

    The diagram is kept as raw wire data so a record whose diagram no
    longer matches the contract can still be listed and loaded leniently.
    Timestamps are ISO-8601 strings on disk.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    diagram_type: DiagramKind = Field(default=DiagramKind.CLASS, alias="diagramType")
    diagram: dict[str, Any] = Field(default_factory=dict)
    messages: list[Message] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    def to_project(self) -> Project:
        """Get the index entry for this record."""
        return Project(
            id=self.id,
            name=self.name,
            diagram_type=self.diagram_type,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def to_wire(self) -> dict[str, Any]:
        """Get the JSON-serializable record, with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
