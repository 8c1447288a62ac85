"""Apply a capability delta plan to an existing spec document."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from src.spec.requirement_blocks import (
    REQUIREMENT_HEADER_PATTERN,
    DeltaPlan,
    RequirementBlock,
    RequirementsSectionParts,
    extract_requirements_section,
    normalize_requirement_name,
    requirement_header,
)
from src.validation.delta_checks import plan_conflict_messages, plan_duplicate_messages

logger = logging.getLogger(__name__)

EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


class MergeError(ValueError):
    """Raised when a delta plan can't be applied to its target spec."""


@dataclass
class MergeCounts:
    """Number of operations applied, by kind."""

    added: int = 0
    modified: int = 0
    removed: int = 0
    renamed: int = 0

    @property
    def total(self) -> int:
        """Total number of operations."""
        return self.added + self.modified + self.removed + self.renamed

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "added": self.added,
            "modified": self.modified,
            "removed": self.removed,
            "renamed": self.renamed,
        }


@dataclass
class MergeResult:
    """Rebuilt spec text plus what was applied."""

    rebuilt: str
    counts: MergeCounts = field(default_factory=MergeCounts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"rebuilt": self.rebuilt, "counts": self.counts.to_dict()}


def build_skeleton(capability: str) -> str:
    """Minimal spec used as the base when a capability has no spec yet."""
    return (
        f"# {capability} Specification\n\n"
        "## Purpose\n"
        "TBD - created by archiving a change. Update Purpose after archive.\n\n"
        "## Requirements\n"
    )


def _header(name: str) -> str:
    return f'"{requirement_header(name)}"'


def _check_plan(capability: str, plan: DeltaPlan, target_exists: bool) -> None:
    if not target_exists and (plan.modified or plan.removed or plan.renamed):
        raise MergeError(
            f"{capability}: target spec does not exist; only ADDED requirements "
            "are allowed for new specs"
        )

    problems = plan_duplicate_messages(plan) + plan_conflict_messages(plan)
    if problems:
        raise MergeError(f"{capability} validation failed - " + "; ".join(problems))


def _reassemble(parts: RequirementsSectionParts, blocks: list[RequirementBlock]) -> str:
    body = "\n\n".join(
        chunk
        for chunk in [parts.preamble.strip(), *(b.raw.rstrip() for b in blocks), parts.trailing]
        if chunk
    )
    pieces = [parts.before.rstrip(), parts.header_line.rstrip(), body, parts.after.strip()]
    rebuilt = "\n\n".join(piece for piece in pieces if piece)
    return EXCESS_BLANK_LINES.sub("\n\n", rebuilt).rstrip() + "\n"


def build_updated_spec(
    capability: str, plan: DeltaPlan, target_content: str | None
) -> MergeResult:
    """Rebuild a capability spec by applying a delta plan.

    Operations are applied in the order RENAMED, REMOVED, MODIFIED, ADDED.
    Requirements that existed before keep their original position (renamed
    ones included); new requirements are appended in delta order.

    Args:
        capability: Capability name, used in error messages and the skeleton.
        plan: Parsed delta plan for the capability.
        target_content: Current spec text, or None if the spec doesn't exist.

    Returns:
        MergeResult with the rebuilt document and operation counts.

    Raises:
        MergeError: If any operation can't be applied. Nothing is partially
            applied; the caller gets either a full result or an error.
    """
    _check_plan(capability, plan, target_exists=target_content is not None)
    if target_content is None:
        logger.debug("Creating new spec skeleton for %s", capability)
        target_content = build_skeleton(capability)

    parts = extract_requirements_section(target_content)
    name_to_block: dict[str, RequirementBlock] = {}
    positions: dict[str, int] = {}
    for index, block in enumerate(parts.body_blocks):
        name_to_block[block.key] = block
        positions.setdefault(block.key, index)

    for pair in plan.renamed:
        from_key = normalize_requirement_name(pair.from_name)
        to_key = normalize_requirement_name(pair.to_name)
        if from_key not in name_to_block:
            raise MergeError(
                f"{capability} RENAMED failed for header {_header(pair.from_name)} - source not found"
            )
        if to_key in name_to_block:
            raise MergeError(
                f"{capability} RENAMED failed for header {_header(pair.to_name)} - target already exists"
            )
        block = name_to_block.pop(from_key)
        name_to_block[to_key] = block.renamed(pair.to_name)
        if from_key in positions:
            positions[to_key] = positions.pop(from_key)
        logger.debug("%s: renamed %r to %r", capability, pair.from_name, pair.to_name)

    for name in plan.removed:
        key = normalize_requirement_name(name)
        if key not in name_to_block:
            raise MergeError(f"{capability} REMOVED failed for header {_header(name)} - not found")
        del name_to_block[key]
        logger.debug("%s: removed %r", capability, name)

    for block in plan.modified:
        if block.key not in name_to_block:
            raise MergeError(f"{capability} MODIFIED failed for header {_header(block.name)} - not found")
        header = REQUIREMENT_HEADER_PATTERN.match(block.header_line)
        if header is None or normalize_requirement_name(header.group(1)) != block.key:
            raise MergeError(
                f"{capability} MODIFIED failed for header {_header(block.name)} - header mismatch in content"
            )
        name_to_block[block.key] = block
        logger.debug("%s: modified %r", capability, block.name)

    for block in plan.added:
        if block.key in name_to_block:
            raise MergeError(f"{capability} ADDED failed for header {_header(block.name)} - already exists")
        name_to_block[block.key] = block
        logger.debug("%s: added %r", capability, block.name)

    if len(positions) != len(parts.body_blocks):
        raise MergeError(f"{capability} validation failed - duplicate requirement headers detected")

    retained = sorted((k for k in name_to_block if k in positions), key=positions.__getitem__)
    appended = [k for k in name_to_block if k not in positions]
    ordered = [name_to_block[k] for k in retained + appended]

    counts = MergeCounts(
        added=len(plan.added),
        modified=len(plan.modified),
        removed=len(plan.removed),
        renamed=len(plan.renamed),
    )
    return MergeResult(rebuilt=_reassemble(parts, ordered), counts=counts)
