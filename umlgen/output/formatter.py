"""Output formatting for validation results, graphs and projects."""

import json
from typing import Literal

from ..graph.elements import GraphEdge, GraphNode
from ..project.models import Project
from ..validators.base import Severity, ValidationIssue, ValidationResult


def format_validation_result(
    result: ValidationResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a validation result for output.

    Args:
        result: The validation result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_json(result)
    return _format_text(result)


def _format_text(result: ValidationResult) -> str:
    """Format result as human-readable text."""
    lines: list[str] = []

    errors = result.error_issues
    warnings = result.warning_issues

    lines.append("ERRORS:")
    if errors:
        for issue in errors:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")

    lines.append("WARNINGS:")
    if warnings:
        for issue in warnings:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    # Summary
    lines.append("")
    if result.valid:
        if warnings:
            lines.append(f"Validation passed with {len(warnings)} warning(s)")
        else:
            lines.append("Validation passed")
    else:
        lines.append(
            f"Validation failed: {len(errors)} error(s), {len(warnings)} warning(s)"
        )

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    symbol = "✘" if issue.severity == Severity.ERROR else "⚠"
    return f"{symbol} {issue.code}: {issue.message}"


def _format_json(result: ValidationResult) -> str:
    """Format result as JSON."""
    data = {
        "valid": result.valid,
        "errors": result.errors,
        "warnings": result.warnings,
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "path": issue.path,
                "details": issue.details,
            }
            for issue in result.issues
        ],
    }
    return json.dumps(data, indent=2)


def format_graph(nodes: list[GraphNode], edges: list[GraphEdge]) -> str:
    """Format a laid-out graph as JSON."""
    data = {
        "nodes": [node.to_dict() for node in nodes],
        "edges": [edge.to_dict() for edge in edges],
    }
    return json.dumps(data, indent=2)


def format_project_list(projects: list[Project]) -> str:
    """Format the project index as an aligned text table."""
    if not projects:
        return "No saved projects"

    id_width = max(len(project.id) for project in projects)
    lines = []
    for project in sorted(projects, key=lambda p: p.updated_at.timestamp(), reverse=True):
        updated = project.updated_at.strftime("%Y-%m-%d %H:%M")
        lines.append(
            f"{project.id:<{id_width}}  {project.diagram_type.value:<12}  {updated}  {project.name}"
        )
    return "\n".join(lines)
