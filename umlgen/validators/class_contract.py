"""Deep validation of the class diagram contract."""

from typing import Any

from .base import ValidationResult, is_non_empty_string, type_name
from .structure import element_mapping

VALID_RELATIONSHIP_TYPES = ["association", "inheritance", "composition", "aggregation"]


def check_classes(classes: list[Any]) -> tuple[set[str], ValidationResult]:
    """Check every class element and collect the known class ids.

    Each violated field produces its own error, prefixed with the element
    position (``classes[2]: ...``).

    Args:
        classes: The ``classes`` collection.

    Returns:
        The set of class ids usable as relationship endpoints, and the
        ValidationResult for the collection.
    """
    result = ValidationResult()
    class_ids: set[str] = set()

    for index, item in enumerate(classes):
        path = f"classes[{index}]"
        cls = element_mapping(item, path, result)
        if cls is None:
            continue

        class_id = cls.get("id")
        if not is_non_empty_string(class_id):
            result.add_error(code="MISSING_FIELD", message="Missing required field: id", path=path)
        else:
            class_ids.add(class_id)

        if not is_non_empty_string(cls.get("name")):
            result.add_error(code="MISSING_FIELD", message="Missing required field: name", path=path)

        for field_name in ("attributes", "operations"):
            value = cls.get(field_name)
            if not isinstance(value, list):
                result.add_error(
                    code="MISSING_FIELD",
                    message=f"Missing required field: {field_name}",
                    path=path,
                )
            elif not all(isinstance(entry, str) for entry in value):
                result.add_error(
                    code="INVALID_FIELD",
                    message="Expected array of strings",
                    path=f"{path}.{field_name}",
                )

    return class_ids, result


def check_relationships(relationships: list[Any], class_ids: set[str]) -> ValidationResult:
    """Check every relationship and that both endpoints name a known class.

    Args:
        relationships: The ``relationships`` collection.
        class_ids: Ids of the classes defined in the diagram.

    Returns:
        ValidationResult with errors for malformed or dangling relationships.
    """
    result = ValidationResult()

    for index, item in enumerate(relationships):
        path = f"relationships[{index}]"
        rel = element_mapping(item, path, result)
        if rel is None:
            continue

        for endpoint in ("source", "target"):
            value = rel.get(endpoint)
            if not isinstance(value, str):
                result.add_error(
                    code="MISSING_FIELD",
                    message=f"Missing required field: {endpoint}",
                    path=path,
                )
            elif value not in class_ids:
                result.add_error(
                    code="UNDEFINED_REFERENCE",
                    message=f"Invalid class reference: {value}",
                    path=path,
                    referenced_id=value,
                )

        rel_type = rel.get("type")
        if not isinstance(rel_type, str) or rel_type not in VALID_RELATIONSHIP_TYPES:
            result.add_error(code="MISSING_FIELD", message="Missing required field: type", path=path)

        label = rel.get("label")
        if label is not None and not isinstance(label, str):
            result.add_error(
                code="INVALID_FIELD",
                message=f"Expected string, got {type_name(label)}",
                path=f"{path}.label",
            )

    return result


def check_class_diagram(obj: dict) -> ValidationResult:
    """Run the deep class checks on a candidate whose collections are lists."""
    result = ValidationResult()
    class_ids, classes_result = check_classes(obj["classes"])
    result.merge(classes_result)
    result.merge(check_relationships(obj["relationships"], class_ids))
    return result
