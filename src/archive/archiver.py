"""Archive a change: merge its deltas into the main specs and move it aside."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from src.archive.merge import MergeCounts, MergeError, build_updated_spec
from src.spec.requirement_blocks import parse_delta_spec
from src.validation.types import ValidationLevel
from src.validation.validator import Validator
from src.workspace import Workspace

logger = logging.getLogger(__name__)


class ArchiveError(RuntimeError):
    """Raised when a change can't be archived. No spec files are modified."""


@dataclass
class SpecUpdate:
    """A capability delta file and the main spec it applies to."""

    capability: str
    source: Path
    target: Path
    exists: bool


@dataclass
class PreparedUpdate:
    """A fully built spec waiting to be written."""

    update: SpecUpdate
    rebuilt: str
    counts: MergeCounts


@dataclass
class ArchiveResult:
    """Outcome of a successful archive."""

    change_id: str
    archive_name: str
    archive_path: Path
    updates: list[PreparedUpdate] = field(default_factory=list)

    @property
    def totals(self) -> MergeCounts:
        """Operation counts summed over all capabilities."""
        totals = MergeCounts()
        for prepared in self.updates:
            totals.added += prepared.counts.added
            totals.modified += prepared.counts.modified
            totals.removed += prepared.counts.removed
            totals.renamed += prepared.counts.renamed
        return totals

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "change": self.change_id,
            "archive": self.archive_name,
            "specs": {
                p.update.capability: p.counts.to_dict() for p in self.updates
            },
            "totals": self.totals.to_dict(),
        }


class Archiver:
    """Apply a change's capability deltas and archive the change.

    Every rebuilt spec is built and validated before anything is written, so
    a failure in any capability leaves all spec files untouched.
    """

    def __init__(self, workspace: Workspace, validator: Validator | None = None) -> None:
        self.workspace = workspace
        self.validator = validator or Validator()

    def count_incomplete_tasks(self, change_id: str) -> int:
        """Count unchecked ``- [ ]`` items in the change's tasks.md."""
        completed, total = self.workspace.task_progress(change_id)
        return total - completed

    def find_spec_updates(self, change_id: str) -> list[SpecUpdate]:
        """List the main specs a change will update or create."""
        updates = []
        for capability, source in self.workspace.get_change_delta_files(change_id).items():
            updates.append(SpecUpdate(
                capability=capability,
                source=source,
                target=self.workspace.spec_path(capability),
                exists=self.workspace.spec_exists(capability),
            ))
        return updates

    def prepare_updates(self, updates: list[SpecUpdate]) -> list[PreparedUpdate]:
        """Build and validate every rebuilt spec without writing anything.

        Raises:
            ArchiveError: On the first capability that fails to merge or whose
                rebuilt spec doesn't validate.
        """
        prepared = []
        for update in updates:
            plan = parse_delta_spec(self.workspace.read_text(update.source))
            target_content = self.workspace.read_text(update.target) if update.exists else None

            try:
                result = build_updated_spec(update.capability, plan, target_content)
            except MergeError as e:
                raise ArchiveError(str(e)) from e

            report = self.validator.validate_spec_content(update.capability, result.rebuilt)
            if report.error_count:
                details = "; ".join(
                    f"{i.path}: {i.message}" for i in report.issues if i.level == ValidationLevel.ERROR
                )
                raise ArchiveError(
                    f"Validation failed for rebuilt spec '{update.capability}': {details}"
                )

            prepared.append(PreparedUpdate(update=update, rebuilt=result.rebuilt, counts=result.counts))
        return prepared

    def write_updates(self, prepared: list[PreparedUpdate]) -> None:
        """Write every prepared spec to disk."""
        for item in prepared:
            item.update.target.parent.mkdir(parents=True, exist_ok=True)
            item.update.target.write_text(item.rebuilt, encoding="utf-8")
            counts = item.counts
            logger.info(
                "Applied changes to %s: +%d added, ~%d modified, -%d removed, %d renamed",
                item.update.target,
                counts.added,
                counts.modified,
                counts.removed,
                counts.renamed,
            )

    def archive(
        self,
        change_id: str,
        skip_specs: bool = False,
        archive_date: date | None = None,
    ) -> ArchiveResult:
        """Archive a change.

        Args:
            change_id: Name of the active change directory.
            skip_specs: Move the change without touching any spec.
            archive_date: Date used in the archive name (defaults to today).

        Returns:
            ArchiveResult describing what was written and where the change went.

        Raises:
            ArchiveError: If the change is missing, the archive target exists,
                delta validation fails, or any capability fails to merge.
        """
        if not self.workspace.has_changes_dir():
            raise ArchiveError("No openspec changes directory found.")
        if not self.workspace.change_exists(change_id):
            raise ArchiveError(f"Change '{change_id}' not found.")

        archive_name = f"{(archive_date or date.today()).isoformat()}-{change_id}"
        archive_path = self.workspace.archive_dir / archive_name
        if archive_path.exists():
            raise ArchiveError(f"Archive '{archive_name}' already exists.")

        prepared: list[PreparedUpdate] = []
        if not skip_specs:
            updates = self.find_spec_updates(change_id)
            if updates:
                report = self.validator.validate_change_directory(self.workspace.change_dir(change_id))
                if not report.valid:
                    details = "; ".join(f"{i.path}: {i.message}" for i in report.issues)
                    raise ArchiveError(f"Change '{change_id}' has invalid deltas: {details}")
            prepared = self.prepare_updates(updates)
            self.write_updates(prepared)

        self.workspace.archive_dir.mkdir(parents=True, exist_ok=True)
        shutil.move(str(self.workspace.change_dir(change_id)), str(archive_path))
        logger.info("Change %s archived as %s", change_id, archive_name)

        return ArchiveResult(
            change_id=change_id,
            archive_name=archive_name,
            archive_path=archive_path,
            updates=prepared,
        )
