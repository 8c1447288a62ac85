"""Requirement-level spec diffing."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from rich.markup import escape

from src.spec.requirement_blocks import RequirementBlock, extract_requirements_section


class ChangeType(Enum):
    """Type of change in diff."""
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass
class RequirementChange:
    """Change to a single requirement block."""

    name: str
    change_type: ChangeType
    old_content: str | None = None
    new_content: str | None = None
    line_changes: list[str] = field(default_factory=list)

    @property
    def summary(self) -> str:
        """Get a summary of the change."""
        if self.change_type == ChangeType.ADDED:
            return f"+ {self.name} (new requirement)"
        elif self.change_type == ChangeType.REMOVED:
            return f"- {self.name} (removed)"
        elif self.change_type == ChangeType.MODIFIED:
            additions = sum(1 for l in self.line_changes if l.startswith("+") and not l.startswith("+++"))
            deletions = sum(1 for l in self.line_changes if l.startswith("-") and not l.startswith("---"))
            return f"~ {self.name} (+{additions}, -{deletions})"
        else:
            return f"  {self.name} (unchanged)"


@dataclass
class SpecDiff:
    """Diff between two versions of a spec."""

    old_label: str
    new_label: str
    requirement_changes: list[RequirementChange] = field(default_factory=list)
    unified_diff: str = ""

    @property
    def has_changes(self) -> bool:
        """Check if there are any changes."""
        return any(
            c.change_type != ChangeType.UNCHANGED
            for c in self.requirement_changes
        ) or bool(self.unified_diff)

    def count(self, change_type: ChangeType) -> int:
        """Count requirement changes of one type."""
        return sum(1 for c in self.requirement_changes if c.change_type == change_type)

    @property
    def summary(self) -> str:
        """Get a summary of all changes."""
        lines = [f"Comparing {self.old_label} -> {self.new_label}", ""]
        lines.append(
            f"Requirements: +{self.count(ChangeType.ADDED)} added, "
            f"-{self.count(ChangeType.REMOVED)} removed, "
            f"~{self.count(ChangeType.MODIFIED)} modified"
        )
        lines.append("")

        for change in self.requirement_changes:
            if change.change_type != ChangeType.UNCHANGED:
                lines.append(change.summary)

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "old": self.old_label,
            "new": self.new_label,
            "has_changes": self.has_changes,
            "requirement_changes": [
                {
                    "requirement": c.name,
                    "type": c.change_type.value,
                    "summary": c.summary,
                }
                for c in self.requirement_changes
            ],
        }


class SpecDiffer:
    """Compare two spec documents requirement by requirement."""

    def parse_requirements(self, content: str) -> dict[str, RequirementBlock]:
        """Map normalized requirement names to blocks, in document order."""
        parts = extract_requirements_section(content)
        return {block.key: block for block in parts.body_blocks}

    def diff_requirements(
        self,
        old_blocks: dict[str, RequirementBlock],
        new_blocks: dict[str, RequirementBlock],
    ) -> list[RequirementChange]:
        """Compare two requirement maps.

        Changes are listed in new-document order, followed by removals in
        old-document order.
        """
        changes = []

        for key, new_block in new_blocks.items():
            old_block = old_blocks.get(key)
            if old_block is None:
                changes.append(RequirementChange(
                    name=new_block.name,
                    change_type=ChangeType.ADDED,
                    new_content=new_block.raw,
                ))
            elif old_block.raw != new_block.raw:
                line_diff = list(difflib.unified_diff(
                    old_block.raw.splitlines(),
                    new_block.raw.splitlines(),
                    lineterm="",
                ))
                changes.append(RequirementChange(
                    name=new_block.name,
                    change_type=ChangeType.MODIFIED,
                    old_content=old_block.raw,
                    new_content=new_block.raw,
                    line_changes=line_diff,
                ))
            else:
                changes.append(RequirementChange(
                    name=new_block.name,
                    change_type=ChangeType.UNCHANGED,
                    old_content=old_block.raw,
                    new_content=new_block.raw,
                ))

        for key, old_block in old_blocks.items():
            if key not in new_blocks:
                changes.append(RequirementChange(
                    name=old_block.name,
                    change_type=ChangeType.REMOVED,
                    old_content=old_block.raw,
                ))

        return changes

    def diff_content(
        self,
        old_content: str,
        new_content: str,
        old_label: str = "old",
        new_label: str = "new"
    ) -> SpecDiff:
        """Diff two spec contents.

        Args:
            old_content: Current spec content (empty for a new spec).
            new_content: Proposed spec content.
            old_label: Label for old version.
            new_label: Label for new version.

        Returns:
            SpecDiff with all changes.
        """
        requirement_changes = self.diff_requirements(
            self.parse_requirements(old_content) if old_content else {},
            self.parse_requirements(new_content),
        )

        unified = "\n".join(difflib.unified_diff(
            old_content.splitlines(),
            new_content.splitlines(),
            fromfile=old_label,
            tofile=new_label,
            lineterm="",
        ))

        return SpecDiff(
            old_label=old_label,
            new_label=new_label,
            requirement_changes=requirement_changes,
            unified_diff=unified,
        )


def format_diff_for_terminal(diff: SpecDiff, color: bool = True) -> str:
    """Format a diff for terminal output.

    Args:
        diff: The spec diff.
        color: Whether to use rich color markup.

    Returns:
        Formatted string.
    """
    def paint(text: str, style: str) -> str:
        return f"[{style}]{escape(text)}[/{style}]" if color else text

    lines = [
        paint("Spec Diff", "bold"),
        "=" * 60,
        f"From: {diff.old_label}",
        f"To:   {diff.new_label}",
        "",
        "Changes: "
        f"{paint(f'+{diff.count(ChangeType.ADDED)} added', 'green')}, "
        f"{paint(f'-{diff.count(ChangeType.REMOVED)} removed', 'red')}, "
        f"{paint(f'~{diff.count(ChangeType.MODIFIED)} modified', 'yellow')}",
        "",
    ]

    for change in diff.requirement_changes:
        if change.change_type == ChangeType.ADDED:
            lines.append(paint(f"+ {change.name}", "green"))
        elif change.change_type == ChangeType.REMOVED:
            lines.append(paint(f"- {change.name}", "red"))
        elif change.change_type == ChangeType.MODIFIED:
            lines.append(paint(change.summary, "yellow"))

    return "\n".join(lines)
