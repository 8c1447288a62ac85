"""Declarative shape checks for parsed specs and changes."""

from __future__ import annotations

from src.config import ValidationConfig
from src.spec.schemas import Change, Delta, Requirement, Scenario, Spec
from src.validation import constants as msg
from src.validation.types import ValidationIssue, ValidationLevel

NORMATIVE_KEYWORDS = ("SHALL", "MUST")


def has_normative_keyword(text: str) -> bool:
    """Check for a case-sensitive SHALL or MUST."""
    return any(keyword in text for keyword in NORMATIVE_KEYWORDS)


def _error(path: str, message: str) -> ValidationIssue:
    return ValidationIssue(level=ValidationLevel.ERROR, path=path, message=message)


def check_scenario(scenario: Scenario, path: str) -> list[ValidationIssue]:
    """Check a single scenario."""
    if not scenario.raw_text.strip():
        return [_error(path, msg.SCENARIO_EMPTY)]
    return []


def check_requirement(requirement: Requirement, path: str) -> list[ValidationIssue]:
    """Check a requirement and its scenarios.

    Args:
        requirement: Requirement to check.
        path: Locator prefix, e.g. ``requirements[2]``.
    """
    issues = []

    if not requirement.text.strip():
        issues.append(_error(f"{path}.text", msg.REQUIREMENT_EMPTY))
    elif not has_normative_keyword(requirement.text):
        issues.append(_error(f"{path}.text", msg.REQUIREMENT_NO_SHALL))

    if not requirement.scenarios:
        issues.append(_error(f"{path}.scenarios", msg.REQUIREMENT_NO_SCENARIOS))

    for index, scenario in enumerate(requirement.scenarios):
        issues.extend(check_scenario(scenario, f"{path}.scenarios[{index}]"))

    return issues


def check_spec(spec: Spec) -> list[ValidationIssue]:
    """Check the shape of a parsed spec."""
    issues = []

    if not spec.name.strip():
        issues.append(_error("name", msg.SPEC_NAME_EMPTY))
    if not spec.overview.strip():
        issues.append(_error("overview", msg.SPEC_PURPOSE_EMPTY))
    if not spec.requirements:
        issues.append(_error("requirements", msg.SPEC_NO_REQUIREMENTS))

    for index, requirement in enumerate(spec.requirements):
        issues.extend(check_requirement(requirement, f"requirements[{index}]"))

    return issues


def check_delta(delta: Delta, path: str) -> list[ValidationIssue]:
    """Check a single legacy delta entry."""
    issues = []

    if not delta.spec.strip():
        issues.append(_error(f"{path}.spec", msg.DELTA_SPEC_EMPTY))
    if not delta.description.strip():
        issues.append(_error(f"{path}.description", msg.DELTA_DESCRIPTION_EMPTY))

    for index, requirement in enumerate(delta.requirements or []):
        issues.extend(check_requirement(requirement, f"{path}.requirements[{index}]"))

    return issues


def check_change(change: Change, config: ValidationConfig | None = None) -> list[ValidationIssue]:
    """Check the shape of a parsed whole-document change.

    Exceeding the delta limit is reported as a WARNING rather than an error,
    the limit is a hint to split large changes.
    """
    config = config or ValidationConfig()
    issues = []

    if not change.name.strip():
        issues.append(_error("name", msg.CHANGE_NAME_EMPTY))

    if len(change.why) < config.min_why_length:
        issues.append(_error("why", msg.CHANGE_WHY_TOO_SHORT.format(min=config.min_why_length)))
    elif len(change.why) > config.max_why_length:
        issues.append(_error("why", msg.CHANGE_WHY_TOO_LONG.format(max=config.max_why_length)))

    if not change.what_changes.strip():
        issues.append(_error("whatChanges", msg.CHANGE_WHAT_EMPTY))

    if not change.deltas:
        issues.append(_error("deltas", f"{msg.CHANGE_NO_DELTAS}. {msg.GUIDE_NO_DELTAS}"))
    elif len(change.deltas) > config.max_deltas:
        issues.append(ValidationIssue(
            level=ValidationLevel.WARNING,
            path="deltas",
            message=msg.CHANGE_TOO_MANY_DELTAS.format(max=config.max_deltas),
        ))

    for index, delta in enumerate(change.deltas):
        issues.extend(check_delta(delta, f"deltas[{index}]"))

    return issues
