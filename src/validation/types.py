"""Validation issue and report structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValidationLevel(Enum):
    """Severity of a validation issue."""
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass
class ValidationIssue:
    """A single validation issue."""

    level: ValidationLevel
    path: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level": self.level.value,
            "path": self.path,
            "message": self.message,
        }


@dataclass
class ValidationReport:
    """Result of validating one artifact."""

    issues: list[ValidationIssue] = field(default_factory=list)
    strict: bool = False

    @property
    def error_count(self) -> int:
        """Count of errors."""
        return sum(1 for i in self.issues if i.level == ValidationLevel.ERROR)

    @property
    def warning_count(self) -> int:
        """Count of warnings."""
        return sum(1 for i in self.issues if i.level == ValidationLevel.WARNING)

    @property
    def info_count(self) -> int:
        """Count of info issues."""
        return sum(1 for i in self.issues if i.level == ValidationLevel.INFO)

    @property
    def valid(self) -> bool:
        """No errors, and in strict mode no warnings either."""
        if self.strict:
            return self.error_count == 0 and self.warning_count == 0
        return self.error_count == 0

    @property
    def summary(self) -> dict[str, int]:
        """Issue counts by level."""
        return {
            "errors": self.error_count,
            "warnings": self.warning_count,
            "info": self.info_count,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON report shape."""
        return {
            "valid": self.valid,
            "issues": [i.to_dict() for i in self.issues],
            "summary": self.summary,
        }
