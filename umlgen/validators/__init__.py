"""Validators for structural validation of diagram payloads."""

from .base import Severity, ValidationIssue, ValidationResult
from .class_contract import check_class_diagram
from .orphan_detector import check_orphan_nodes
from .reachability import check_unreachable_states
from .reference_integrity import check_reference_integrity, check_unique_ids
from .runner import validate, validate_diagram_file
from .structure import check_collections, check_diagram_type

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_class_diagram",
    "check_collections",
    "check_diagram_type",
    "check_orphan_nodes",
    "check_reference_integrity",
    "check_unique_ids",
    "check_unreachable_states",
    "validate",
    "validate_diagram_file",
]
