"""Top-level structure checks: input shape, diagram kind, element collections."""

from typing import Any

from ..schema.models import DiagramKind
from .base import ValidationResult, type_name

VALID_DIAGRAM_TYPES = [kind.value for kind in DiagramKind]

# Collections that must be present (as lists) for each kind. A tuple entry
# means at least one of the named collections must be present.
REQUIRED_COLLECTIONS: dict[DiagramKind, list[str | tuple[str, ...]]] = {
    DiagramKind.CLASS: ["classes", "relationships"],
    DiagramKind.USE_CASE: [("actors", "useCases")],
    DiagramKind.ACTIVITY: ["activities"],
    DiagramKind.SEQUENCE: ["participants"],
    DiagramKind.STATE_MACHINE: ["states"],
    DiagramKind.COMPONENT: ["components"],
}

OPTIONAL_COLLECTIONS: dict[DiagramKind, list[str]] = {
    DiagramKind.CLASS: [],
    DiagramKind.USE_CASE: ["actors", "useCases", "useCaseRelationships"],
    DiagramKind.ACTIVITY: ["transitions"],
    DiagramKind.SEQUENCE: ["messages"],
    DiagramKind.STATE_MACHINE: ["stateTransitions"],
    DiagramKind.COMPONENT: ["dependencies"],
}


def check_diagram_type(obj: dict) -> tuple[DiagramKind | None, ValidationResult]:
    """Resolve the diagram kind from the ``type`` field.

    A payload without a ``type`` field is a legacy class diagram. A ``type``
    that is present but not one of the known kinds is an error.

    Args:
        obj: The candidate mapping.

    Returns:
        The resolved kind (None if invalid) and the result of the check.
    """
    result = ValidationResult()

    if "type" not in obj:
        return DiagramKind.CLASS, result

    raw_type = obj["type"]
    if not isinstance(raw_type, str) or raw_type not in VALID_DIAGRAM_TYPES:
        result.add_error(
            code="INVALID_DIAGRAM_TYPE",
            message="Missing or invalid diagram type",
            received=type_name(raw_type) if not isinstance(raw_type, str) else raw_type,
        )
        return None, result

    return DiagramKind(raw_type), result


def check_collections(kind: DiagramKind, obj: dict) -> ValidationResult:
    """Check presence and list-ness of each element collection of a kind.

    All collection errors are collected; nothing short-circuits.

    Args:
        kind: The resolved diagram kind.
        obj: The candidate mapping.

    Returns:
        ValidationResult with one error per missing or malformed collection.
    """
    result = ValidationResult()

    for requirement in REQUIRED_COLLECTIONS[kind]:
        if isinstance(requirement, tuple):
            if not any(isinstance(obj.get(name), list) for name in requirement):
                result.add_error(
                    code="MISSING_COLLECTION",
                    message=f"Missing {' or '.join(requirement)} array",
                    collection=list(requirement),
                )
        elif not isinstance(obj.get(requirement), list):
            result.add_error(
                code="MISSING_COLLECTION",
                message=f"Missing required field: {requirement}",
                collection=requirement,
            )

    for name in OPTIONAL_COLLECTIONS[kind]:
        value = obj.get(name)
        if value is not None and not isinstance(value, list):
            result.add_error(
                code="MALFORMED_COLLECTION",
                message=f"{name}: Expected array, got {type_name(value)}",
                collection=name,
            )

    return result


def element_mapping(
    item: Any, path: str, result: ValidationResult
) -> dict | None:
    """Return ``item`` if it is a mapping, otherwise record an error."""
    if isinstance(item, dict):
        return item
    result.add_error(
        code="INVALID_ELEMENT",
        message=f"Expected object, got {type_name(item)}",
        path=path,
    )
    return None
