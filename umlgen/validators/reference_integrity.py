"""Reference integrity and id uniqueness across all diagram kinds."""

from ..schema.models import DiagramKind
from .base import ValidationResult
from .structure import element_mapping

# Node-bearing collections of each kind. Ids must be unique across all of them.
NODE_COLLECTIONS: dict[DiagramKind, list[str]] = {
    DiagramKind.CLASS: ["classes"],
    DiagramKind.USE_CASE: ["actors", "useCases"],
    DiagramKind.ACTIVITY: ["activities"],
    DiagramKind.SEQUENCE: ["participants"],
    DiagramKind.STATE_MACHINE: ["states"],
    DiagramKind.COMPONENT: ["components"],
}

# Edge collections whose elements carry their own ids. Ids must be unique
# within the collection.
IDENTIFIED_EDGE_COLLECTIONS: dict[DiagramKind, str] = {
    DiagramKind.SEQUENCE: "messages",
}

# Edge-bearing collection of each kind and the names of its endpoint fields.
# Class relationships are covered by the class contract checks.
EDGE_COLLECTIONS: dict[DiagramKind, tuple[str, str, str]] = {
    DiagramKind.USE_CASE: ("useCaseRelationships", "source", "target"),
    DiagramKind.ACTIVITY: ("transitions", "source", "target"),
    DiagramKind.SEQUENCE: ("messages", "from", "to"),
    DiagramKind.STATE_MACHINE: ("stateTransitions", "source", "target"),
    DiagramKind.COMPONENT: ("dependencies", "source", "target"),
}


def collect_node_ids(kind: DiagramKind, obj: dict) -> list[tuple[str, str]]:
    """Collect ``(path, id)`` for every node element carrying a string id."""
    ids = []
    for collection in NODE_COLLECTIONS[kind]:
        items = obj.get(collection)
        if not isinstance(items, list):
            continue
        for index, item in enumerate(items):
            if isinstance(item, dict) and isinstance(item.get("id"), str):
                ids.append((f"{collection}[{index}]", item["id"]))
    return ids


def check_unique_ids(kind: DiagramKind, obj: dict) -> ValidationResult:
    """Check that node ids are unique within the diagram.

    Edge elements that carry ids, such as sequence messages, must also be
    unique within their own collection.

    Args:
        kind: The diagram kind.
        obj: The candidate mapping.

    Returns:
        ValidationResult with one error per repeated id occurrence.
    """
    result = ValidationResult()
    seen: set[str] = set()

    for path, node_id in collect_node_ids(kind, obj):
        if node_id in seen:
            result.add_error(
                code="DUPLICATE_ID",
                message=f"Duplicate id: {node_id}",
                path=path,
                duplicate_id=node_id,
            )
        seen.add(node_id)

    collection = IDENTIFIED_EDGE_COLLECTIONS.get(kind)
    items = obj.get(collection) if collection else None
    if isinstance(items, list):
        seen_edges: set[str] = set()
        for index, item in enumerate(items):
            if not (isinstance(item, dict) and isinstance(item.get("id"), str)):
                continue
            if item["id"] in seen_edges:
                result.add_error(
                    code="DUPLICATE_ID",
                    message=f"Duplicate id: {item['id']}",
                    path=f"{collection}[{index}]",
                    duplicate_id=item["id"],
                )
            seen_edges.add(item["id"])

    return result


def check_reference_integrity(kind: DiagramKind, obj: dict) -> ValidationResult:
    """Check that every edge endpoint references a defined node.

    This validator checks, for non-class kinds:
    - Each edge element is an object
    - Both endpoints are strings naming an element of the kind's node collections

    Args:
        kind: The diagram kind.
        obj: The candidate mapping.

    Returns:
        ValidationResult with errors for malformed or dangling edges.
    """
    result = ValidationResult()

    if kind not in EDGE_COLLECTIONS:
        return result

    collection, source_field, target_field = EDGE_COLLECTIONS[kind]
    items = obj.get(collection)
    if not isinstance(items, list):
        return result

    node_ids = {node_id for _, node_id in collect_node_ids(kind, obj)}

    for index, item in enumerate(items):
        path = f"{collection}[{index}]"
        edge = element_mapping(item, path, result)
        if edge is None:
            continue

        for endpoint in (source_field, target_field):
            value = edge.get(endpoint)
            if not isinstance(value, str):
                result.add_error(
                    code="MISSING_FIELD",
                    message=f"Missing required field: {endpoint}",
                    path=path,
                )
            elif value not in node_ids:
                result.add_error(
                    code="UNDEFINED_REFERENCE",
                    message=f"Invalid reference: {value}",
                    path=path,
                    referenced_id=value,
                )

    return result
