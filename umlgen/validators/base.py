"""Base classes for validation results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity level of a validation issue."""

    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """A single validation issue.

    ``message`` is the human-readable text reported to callers, already
    prefixed with the element path (e.g. ``classes[2].attributes: ...``).
    """

    code: str
    message: str
    severity: Severity
    path: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.severity.value.upper()}: {self.code} - {self.message}"


@dataclass
class ValidationResult:
    """Result of validating a candidate diagram."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def error_issues(self) -> list[ValidationIssue]:
        """Get all error-level issues."""
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warning_issues(self) -> list[ValidationIssue]:
        """Get all warning-level issues."""
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def errors(self) -> list[str]:
        """Error messages, in the order they were found."""
        return [i.message for i in self.error_issues]

    @property
    def warnings(self) -> list[str]:
        """Warning messages, in the order they were found."""
        return [i.message for i in self.warning_issues]

    @property
    def has_errors(self) -> bool:
        return len(self.error_issues) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warning_issues) > 0

    @property
    def valid(self) -> bool:
        """The candidate is valid iff no errors were found."""
        return not self.has_errors

    def add_issue(self, issue: ValidationIssue) -> None:
        """Add an issue to the result."""
        self.issues.append(issue)

    def add_error(
        self,
        code: str,
        message: str,
        path: str | None = None,
        **details: Any,
    ) -> None:
        """Add an error issue.

        When ``path`` is given the message is reported as ``<path>: <message>``.
        """
        self.issues.append(
            ValidationIssue(
                code=code,
                message=f"{path}: {message}" if path else message,
                severity=Severity.ERROR,
                path=path,
                details=details,
            )
        )

    def add_warning(
        self,
        code: str,
        message: str,
        path: str | None = None,
        **details: Any,
    ) -> None:
        """Add a warning issue."""
        self.issues.append(
            ValidationIssue(
                code=code,
                message=f"{path}: {message}" if path else message,
                severity=Severity.WARNING,
                path=path,
                details=details,
            )
        )

    def merge(self, other: "ValidationResult") -> None:
        """Merge another result into this one."""
        self.issues.extend(other.issues)

    def to_dict(self) -> dict[str, Any]:
        """The ``{valid, errors}`` shape handed to callers."""
        return {"valid": self.valid, "errors": self.errors}


def type_name(value: Any) -> str:
    """Name a value's type the way error messages report it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0
