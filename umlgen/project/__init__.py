"""Project state: index, live graph, conversation and persistence."""

from .models import UNTITLED_PROJECT_NAME, Message, Project, StoredProject
from .storage import JsonFileStorage, MemoryStorage, ProjectStorage, StorageResult
from .store import ProjectStore
from .workflow import describe_diagram, project_name_from_prompt, submit_prompt

__all__ = [
    "UNTITLED_PROJECT_NAME",
    "Message",
    "Project",
    "StoredProject",
    "JsonFileStorage",
    "MemoryStorage",
    "ProjectStorage",
    "StorageResult",
    "ProjectStore",
    "describe_diagram",
    "project_name_from_prompt",
    "submit_prompt",
]
