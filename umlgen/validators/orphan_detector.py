"""Orphan node detection advisory."""

from ..schema.models import DiagramKind
from .base import ValidationResult
from .reference_integrity import EDGE_COLLECTIONS, collect_node_ids

CLASS_EDGES = ("relationships", "source", "target")


def check_orphan_nodes(kind: DiagramKind, obj: dict) -> ValidationResult:
    """Warn about elements that take part in no relationship at all.

    An orphan may indicate a missing relationship or an element that should
    be removed. Sequence participants are exempt since lifelines without
    messages are common.

    Args:
        kind: The diagram kind.
        obj: The candidate mapping.

    Returns:
        ValidationResult with warnings for orphan elements.
    """
    result = ValidationResult()

    if kind == DiagramKind.SEQUENCE:
        return result

    collection, source_field, target_field = (
        CLASS_EDGES if kind == DiagramKind.CLASS else EDGE_COLLECTIONS[kind]
    )
    edges = obj.get(collection)
    connected: set[str] = set()
    for edge in edges if isinstance(edges, list) else []:
        if not isinstance(edge, dict):
            continue
        for endpoint in (edge.get(source_field), edge.get(target_field)):
            if isinstance(endpoint, str):
                connected.add(endpoint)

    node_ids = collect_node_ids(kind, obj)
    if len(node_ids) < 2:
        return result

    for path, node_id in node_ids:
        if node_id not in connected:
            result.add_warning(
                code="ORPHAN_NODE",
                message=f"'{node_id}' has no relationships to other elements",
                path=path,
            )

    return result
