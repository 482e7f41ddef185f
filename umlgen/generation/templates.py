"""Sample diagrams selected by prompt keywords."""

import copy
from functools import lru_cache
from importlib import resources
from typing import Any

import yaml

from ..schema.models import DiagramKind

# Class diagram templates and their trigger keywords, checked in order
CLASS_TEMPLATE_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    (
        "ecommerce",
        ("shop", "ecommerce", "e-commerce", "store", "cart", "order", "product"),
    ),
    ("library", ("library", "book", "borrow", "loan", "librarian")),
    ("vehicle", ("vehicle", "car", "motorcycle", "engine", "automobile", "truck")),
    ("blog", ("blog", "cms", "post", "article", "comment", "content management")),
    (
        "hospital",
        (
            "hospital",
            "healthcare",
            "patient",
            "doctor",
            "medical",
            "clinic",
            "appointment",
            "prescription",
        ),
    ),
    (
        "school",
        ("school", "education", "student", "teacher", "course", "university", "college", "class"),
    ),
    (
        "restaurant",
        ("restaurant", "food", "menu", "table", "reservation", "dining", "cafe", "kitchen"),
    ),
    (
        "banking",
        ("bank", "finance", "account", "transaction", "savings", "checking", "deposit", "withdraw"),
    ),
]

DEFAULT_CLASS_TEMPLATE = "default"

# Sample diagram of every other kind
KIND_TEMPLATES: dict[DiagramKind, str] = {
    DiagramKind.USE_CASE: "use_case",
    DiagramKind.ACTIVITY: "activity",
    DiagramKind.SEQUENCE: "sequence",
    DiagramKind.STATE_MACHINE: "state_machine",
    DiagramKind.COMPONENT: "component",
}


@lru_cache(maxsize=None)
def _read_template(name: str) -> dict[str, Any]:
    source = resources.files(__package__).joinpath("templates", f"{name}.yaml")
    return yaml.safe_load(source.read_text(encoding="utf-8"))


def load_template(name: str) -> dict[str, Any]:
    """Load a sample diagram by name.

    Returns:
        A fresh deep copy; callers may mutate it freely.
    """
    return copy.deepcopy(_read_template(name))


def detect_template(prompt: str) -> str:
    """Pick the class diagram template whose keywords appear in the prompt."""
    lowered = prompt.lower()
    for name, keywords in CLASS_TEMPLATE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return name
    return DEFAULT_CLASS_TEMPLATE


def template_for(prompt: str, kind: DiagramKind | str) -> dict[str, Any]:
    """Get the sample diagram answering a prompt for a diagram kind."""
    kind = DiagramKind(kind)
    if kind == DiagramKind.CLASS:
        return load_template(detect_template(prompt))
    return load_template(KIND_TEMPLATES[kind])
