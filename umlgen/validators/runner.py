"""Validation runner that orchestrates all validators."""

import logging
from pathlib import Path
from typing import Any

from ..schema.loader import load_diagram_file
from ..schema.models import DiagramKind
from .base import ValidationResult
from .class_contract import check_class_diagram
from .orphan_detector import check_orphan_nodes
from .reachability import check_unreachable_states
from .reference_integrity import check_reference_integrity, check_unique_ids
from .structure import check_collections, check_diagram_type

logger = logging.getLogger(__name__)


def validate(candidate: Any) -> ValidationResult:
    """Validate an arbitrary value against the per-kind diagram contract.

    Never raises: ``None``, primitives, lists and wrongly shaped mappings all
    produce an invalid result with at least one error.

    Args:
        candidate: The untrusted value to check.

    Returns:
        ValidationResult; ``valid`` is True iff no errors were found.
    """
    result = ValidationResult()

    if not isinstance(candidate, dict):
        result.add_error(code="INVALID_INPUT", message="Invalid JSON syntax")
        return result

    kind, type_result = check_diagram_type(candidate)
    result.merge(type_result)
    if kind is None:
        return result

    # Collect every top-level error before looking inside elements
    result.merge(check_collections(kind, candidate))
    if result.has_errors:
        return result

    if kind == DiagramKind.CLASS:
        result.merge(check_class_diagram(candidate))
    else:
        result.merge(check_reference_integrity(kind, candidate))
    result.merge(check_unique_ids(kind, candidate))

    # Advisories
    result.merge(check_orphan_nodes(kind, candidate))
    if kind == DiagramKind.STATE_MACHINE:
        result.merge(check_unreachable_states(candidate))

    if result.has_errors:
        logger.debug("Diagram failed validation with %d error(s)", len(result.errors))

    return result


def validate_diagram_file(path: str | Path) -> ValidationResult:
    """Load and validate a diagram file.

    Args:
        path: Path to a JSON or YAML diagram file.

    Returns:
        ValidationResult from all validators.

    Raises:
        SchemaLoadError: If the file cannot be loaded.
    """
    return validate(load_diagram_file(path))
