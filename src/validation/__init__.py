"""Validation of specs, changes, and change delta files."""

from src.validation.types import ValidationIssue, ValidationLevel, ValidationReport
from src.validation.rules import RuleSet, RuleTarget, ValidationRule
from src.validation.validator import Validator

__all__ = [
    "RuleSet",
    "RuleTarget",
    "ValidationIssue",
    "ValidationLevel",
    "ValidationReport",
    "ValidationRule",
    "Validator",
]
