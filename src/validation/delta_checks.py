"""Structural checks for a change's per-capability delta files."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from src.spec.requirement_blocks import (
    DeltaPlan,
    RequirementBlock,
    normalize_requirement_name,
    parse_delta_spec,
)
from src.validation import constants as msg
from src.validation.schema_checks import has_normative_keyword
from src.validation.types import ValidationIssue, ValidationLevel

logger = logging.getLogger(__name__)


def delta_file_path(capability: str) -> str:
    """Locator used for issues raised against a capability delta file."""
    return f"specs/{capability}/spec.md"


def _duplicates(names: Iterable[str]) -> list[str]:
    """Names whose normalized form was already seen, reported once each."""
    seen: set[str] = set()
    reported: set[str] = set()
    duplicates = []
    for name in names:
        key = normalize_requirement_name(name)
        if key in seen and key not in reported:
            duplicates.append(name)
            reported.add(key)
        seen.add(key)
    return duplicates


def _first_shared(left: Iterable[str], right: Iterable[str]) -> list[str]:
    """Names from ``left`` whose normalized form also appears in ``right``."""
    right_keys = {normalize_requirement_name(n) for n in right}
    shared = []
    reported: set[str] = set()
    for name in left:
        key = normalize_requirement_name(name)
        if key in right_keys and key not in reported:
            shared.append(name)
            reported.add(key)
    return shared


def plan_duplicate_messages(plan: DeltaPlan) -> list[str]:
    """Messages for names repeated within a single section."""
    messages = []
    for label, names in (
        ("ADDED", [b.name for b in plan.added]),
        ("MODIFIED", [b.name for b in plan.modified]),
        ("REMOVED", plan.removed),
        ("RENAMED FROM", [r.from_name for r in plan.renamed]),
        ("RENAMED TO", [r.to_name for r in plan.renamed]),
    ):
        for name in _duplicates(names):
            messages.append(f'Duplicate requirement in {label}: "{name}"')
    return messages


def plan_conflict_messages(plan: DeltaPlan) -> list[str]:
    """Messages for names that appear in conflicting sections."""
    added = [b.name for b in plan.added]
    modified = [b.name for b in plan.modified]
    messages = []

    for name in _first_shared(modified, plan.removed):
        messages.append(f'Requirement present in both MODIFIED and REMOVED: "{name}"')
    for name in _first_shared(modified, added):
        messages.append(f'Requirement present in both MODIFIED and ADDED: "{name}"')
    for name in _first_shared(added, plan.removed):
        messages.append(f'Requirement present in both ADDED and REMOVED: "{name}"')

    modified_keys = {normalize_requirement_name(n) for n in modified}
    added_keys = {normalize_requirement_name(n) for n in added}
    for pair in plan.renamed:
        if normalize_requirement_name(pair.from_name) in modified_keys:
            messages.append(
                f'MODIFIED references old name "{pair.from_name}" from RENAMED, '
                f'use the new header "{pair.to_name}" instead'
            )
        if normalize_requirement_name(pair.to_name) in added_keys:
            messages.append(f'RENAMED TO collides with ADDED: "{pair.to_name}"')

    return messages


def _check_block(block: RequirementBlock, label: str, path: str) -> list[ValidationIssue]:
    issues = []
    if not has_normative_keyword(block.text):
        issues.append(ValidationIssue(
            level=ValidationLevel.ERROR,
            path=path,
            message=f'{label} "{block.name}" must contain SHALL or MUST',
        ))
    if block.scenario_count < 1:
        issues.append(ValidationIssue(
            level=ValidationLevel.ERROR,
            path=path,
            message=f'{label} "{block.name}" must include at least one scenario',
        ))
    return issues


def check_delta_plan(plan: DeltaPlan, path: str) -> list[ValidationIssue]:
    """Check one parsed delta plan.

    Args:
        plan: Parsed plan for a single capability.
        path: Locator for the capability's delta file.
    """
    issues = []

    for block in plan.added:
        issues.extend(_check_block(block, "ADDED", path))
    for block in plan.modified:
        issues.extend(_check_block(block, "MODIFIED", path))

    for message in plan_duplicate_messages(plan) + plan_conflict_messages(plan):
        issues.append(ValidationIssue(level=ValidationLevel.ERROR, path=path, message=message))

    return issues


def check_change_delta_specs(files: Mapping[str, str]) -> list[ValidationIssue]:
    """Validate every capability delta file of a change.

    Args:
        files: Capability name to delta file content, in reporting order.

    Returns:
        Issues for all files, plus a top-level error if no file contains any
        delta operation.
    """
    issues = []
    total_operations = 0

    for capability, content in files.items():
        plan = parse_delta_spec(content)
        total_operations += plan.operation_count
        logger.debug("Capability %s: %d delta operation(s)", capability, plan.operation_count)
        issues.extend(check_delta_plan(plan, delta_file_path(capability)))

    if total_operations == 0:
        issues.append(ValidationIssue(
            level=ValidationLevel.ERROR,
            path="file",
            message=f"{msg.CHANGE_NO_DELTAS}. {msg.GUIDE_NO_DELTAS}",
        ))

    return issues
