"""Shared fixtures for tests."""

import itertools
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from umlgen.project.storage import MemoryStorage, StorageResult
from umlgen.project.store import ProjectStore


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def user_class_diagram() -> dict:
    """Return the single-class diagram used throughout the docs."""
    return {
        "type": "class",
        "classes": [
            {
                "id": "user",
                "name": "User",
                "attributes": ["- id: string"],
                "operations": ["+ login()"],
            }
        ],
        "relationships": [],
    }


@pytest.fixture
def blog_class_diagram() -> dict:
    """Return a class diagram with two related classes."""
    return {
        "type": "class",
        "classes": [
            {
                "id": "user",
                "name": "User",
                "attributes": ["- id: string", "+ email: string"],
                "operations": ["+ login()", "+ logout()"],
            },
            {
                "id": "post",
                "name": "Post",
                "attributes": ["+ title: string"],
                "operations": ["+ publish()"],
            },
        ],
        "relationships": [
            {"source": "user", "target": "post", "type": "association", "label": "writes"}
        ],
    }


@pytest.fixture
def use_case_diagram() -> dict:
    return {
        "type": "useCase",
        "actors": [{"id": "customer", "name": "Customer"}],
        "useCases": [
            {"id": "checkout", "name": "Checkout", "description": "Pay for the cart"},
            {"id": "login", "name": "Log In"},
            {"id": "coupon", "name": "Apply Coupon"},
        ],
        "useCaseRelationships": [
            {"source": "customer", "target": "checkout", "type": "association"},
            {"source": "checkout", "target": "login", "type": "include"},
            {"source": "coupon", "target": "checkout", "type": "extend", "label": "optional"},
        ],
    }


@pytest.fixture
def activity_diagram() -> dict:
    return {
        "type": "activity",
        "activities": [
            {"id": "start", "type": "initial", "label": "Start"},
            {"id": "check", "type": "decision", "label": "In stock?"},
            {"id": "ship", "type": "action", "label": "Ship"},
            {"id": "end", "type": "final", "label": "End"},
        ],
        "transitions": [
            {"source": "start", "target": "check"},
            {"source": "check", "target": "ship", "guard": "yes"},
            {"source": "check", "target": "end", "guard": "no", "label": "cancel"},
            {"source": "ship", "target": "end", "label": "done"},
        ],
    }


@pytest.fixture
def sequence_diagram() -> dict:
    return {
        "type": "sequence",
        "participants": [
            {"id": "client", "name": "Client", "type": "actor"},
            {"id": "server", "name": "Server", "type": "control"},
        ],
        "messages": [
            {"id": "m2", "from": "server", "to": "client", "label": "200 OK", "type": "return", "order": 2},
            {"id": "m1", "from": "client", "to": "server", "label": "GET /", "type": "sync", "order": 1},
            {"id": "m3", "from": "client", "to": "server", "label": "log", "type": "async", "order": 3},
        ],
    }


@pytest.fixture
def state_machine_diagram() -> dict:
    return {
        "type": "stateMachine",
        "states": [
            {"id": "idle", "name": "Idle", "isInitial": True, "isFinal": False},
            {"id": "running", "name": "Running", "isInitial": False, "isFinal": False, "entryAction": "start()"},
            {"id": "done", "name": "Done", "isInitial": False, "isFinal": True},
        ],
        "stateTransitions": [
            {"source": "idle", "target": "running", "trigger": "go", "guard": "ready", "action": "log()"},
            {"source": "running", "target": "done", "trigger": "finish"},
        ],
    }


@pytest.fixture
def component_diagram() -> dict:
    return {
        "type": "component",
        "components": [
            {
                "id": "api",
                "name": "API",
                "stereotype": "service",
                "interfaces": [{"id": "rest", "name": "REST", "type": "provided"}],
            },
            {"id": "db", "name": "Database"},
        ],
        "dependencies": [
            {"source": "api", "target": "db", "label": "queries", "type": "dependency"},
        ],
    }


@pytest.fixture
def all_kind_diagrams(
    blog_class_diagram,
    use_case_diagram,
    activity_diagram,
    sequence_diagram,
    state_machine_diagram,
    component_diagram,
) -> list[dict]:
    """Return one valid diagram of every kind."""
    return [
        blog_class_diagram,
        use_case_diagram,
        activity_diagram,
        sequence_diagram,
        state_machine_diagram,
        component_diagram,
    ]


@pytest.fixture
def fixed_clock():
    """Return a clock that advances one minute per call."""
    start = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: start + timedelta(minutes=next(ticks))


@pytest.fixture
def sequential_ids():
    """Return an id factory yielding id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage, sequential_ids, fixed_clock) -> ProjectStore:
    """Return a store over in-memory storage with deterministic ids and time."""
    return ProjectStore(storage, id_factory=sequential_ids, clock=fixed_clock)


class FailingStorage(MemoryStorage):
    """Storage whose every operation fails."""

    def save(self, project):
        return StorageResult.fail("Failed to save project: disk full")

    def load_all(self):
        return StorageResult.fail("Failed to load projects: unreadable")

    def load_by_id(self, project_id):
        return StorageResult.fail("Failed to load projects: unreadable")

    def delete_by_id(self, project_id):
        return StorageResult.fail("Failed to delete project: read-only")


@pytest.fixture
def failing_storage() -> FailingStorage:
    return FailingStorage()
