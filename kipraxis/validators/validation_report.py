"""Validation report for collecting and formatting data-quality issues."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional


class ValidationSeverity(IntEnum):
    """Severity levels for validation issues."""

    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class ValidationIssue:
    """A single validation finding.

    Attributes:
        severity: The severity level of the issue
        field: The field (or record) the issue refers to
        message: Human-readable description of the issue
        value: The offending value
        context: Optional context information (e.g. row, date)
    """

    severity: ValidationSeverity
    field: str
    message: str
    value: Any
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        context_str = ""
        if self.context:
            context_str = " (" + ", ".join(f"{k}={v}" for k, v in self.context.items()) + ")"
        return f"[{self.severity.name}] {self.field}: {self.message}{context_str}"


class ValidationReport:
    """Collects validation issues for a batch of usage records.

    Example:
        >>> report = ValidationReport()
        >>> report.add_warning("date", "Duplicate day", "2025-08-04")
        >>> report.is_valid()
        True
    """

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def _count(self, severity: ValidationSeverity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    @property
    def error_count(self) -> int:
        return self._count(ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return self._count(ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return self._count(ValidationSeverity.INFO)

    def is_valid(self) -> bool:
        """True when no error-level issue was recorded.

        Warnings and info messages do not affect validity.
        """
        return self.error_count == 0

    def add(
        self,
        severity: ValidationSeverity,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record an issue of the given severity."""
        self.issues.append(
            ValidationIssue(
                severity=severity,
                field=field,
                message=message,
                value=value,
                context=context,
            )
        )

    def add_error(self, field: str, message: str, value: Any, context=None) -> None:
        self.add(ValidationSeverity.ERROR, field, message, value, context)

    def add_warning(self, field: str, message: str, value: Any, context=None) -> None:
        self.add(ValidationSeverity.WARNING, field, message, value, context)

    def add_info(self, field: str, message: str, value: Any, context=None) -> None:
        self.add(ValidationSeverity.INFO, field, message, value, context)

    def filter(self, min_severity: ValidationSeverity) -> List[ValidationIssue]:
        """Return issues at or above ``min_severity``."""
        return [issue for issue in self.issues if issue.severity >= min_severity]

    def merge(self, other: "ValidationReport") -> None:
        """Append all issues of another report to this one."""
        self.issues.extend(other.issues)

    def summary(self) -> str:
        """One-line summary of issue counts."""
        parts = []
        if self.error_count:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count:
            parts.append(f"{self.warning_count} warning(s)")
        if self.info_count:
            parts.append(f"{self.info_count} info message(s)")
        return ", ".join(parts) if parts else "No issues found"

    def format(self) -> str:
        """Format the report for display, grouped by severity (highest first)."""
        if not self.issues:
            return "Validation successful - no issues found"

        lines = [f"Validation Report - {self.summary()}", "=" * 60]
        for severity in sorted(ValidationSeverity, reverse=True):
            group = [issue for issue in self.issues if issue.severity == severity]
            if group:
                lines.append(f"\n{severity.name}:")
                lines.extend(f"  - {issue}" for issue in group)
        return "\n".join(lines)
