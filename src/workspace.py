"""Filesystem layout of an openspec project."""

from __future__ import annotations

import re
from pathlib import Path

from src.spec.parser import normalize_line_endings

OPENSPEC_DIR = "openspec"
SPEC_FILENAME = "spec.md"
PROPOSAL_FILENAME = "proposal.md"
TASKS_FILENAME = "tasks.md"
ARCHIVE_DIRNAME = "archive"

TASK_PATTERN = re.compile(r"^\s*-\s+\[([ xX])\]")


class Workspace:
    """Locate specs and changes under ``<root>/openspec``.

    Layout::

        openspec/
          specs/<capability>/spec.md
          changes/<change>/proposal.md
          changes/<change>/tasks.md
          changes/<change>/specs/<capability>/spec.md
          changes/archive/<YYYY-MM-DD>-<change>/
    """

    def __init__(self, root: Path | str = ".") -> None:
        self.root = Path(root)
        self.openspec_dir = self.root / OPENSPEC_DIR
        self.specs_dir = self.openspec_dir / "specs"
        self.changes_dir = self.openspec_dir / "changes"
        self.archive_dir = self.changes_dir / ARCHIVE_DIRNAME

    def spec_path(self, spec_id: str) -> Path:
        """Path of a capability's main spec file."""
        return self.specs_dir / spec_id / SPEC_FILENAME

    def change_dir(self, change_id: str) -> Path:
        """Directory of an active change."""
        return self.changes_dir / change_id

    def tasks_path(self, change_id: str) -> Path:
        """Path of a change's task list."""
        return self.change_dir(change_id) / TASKS_FILENAME

    def has_changes_dir(self) -> bool:
        """Check if the project has a changes directory."""
        return self.changes_dir.is_dir()

    def spec_exists(self, spec_id: str) -> bool:
        """Check if a main spec exists for a capability."""
        return self.spec_path(spec_id).is_file()

    def change_exists(self, change_id: str) -> bool:
        """Check if an active change directory exists."""
        return change_id != ARCHIVE_DIRNAME and self.change_dir(change_id).is_dir()

    def get_spec_ids(self) -> list[str]:
        """Capabilities that have a spec file, sorted."""
        if not self.specs_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.specs_dir.iterdir()
            if entry.is_dir() and not entry.name.startswith(".") and (entry / SPEC_FILENAME).is_file()
        )

    def get_active_change_ids(self) -> list[str]:
        """Active change directories, sorted, excluding the archive."""
        if not self.changes_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.changes_dir.iterdir()
            if entry.is_dir() and not entry.name.startswith(".") and entry.name != ARCHIVE_DIRNAME
        )

    def get_change_delta_files(self, change_id: str) -> dict[str, Path]:
        """Capability delta files of a change, keyed by capability name."""
        return find_delta_files(self.change_dir(change_id))

    def task_progress(self, change_id: str) -> tuple[int, int]:
        """Return (completed, total) checklist items from a change's tasks.md."""
        tasks_path = self.tasks_path(change_id)
        if not tasks_path.is_file():
            return 0, 0
        return count_tasks(read_document(tasks_path))

    def read_text(self, path: Path) -> str:
        """Read a document with normalized line endings."""
        return read_document(path)


def find_delta_files(change_dir: Path) -> dict[str, Path]:
    """Map capability names to ``specs/<capability>/spec.md`` under a change."""
    change_specs_dir = change_dir / "specs"
    if not change_specs_dir.is_dir():
        return {}

    files = {}
    for entry in sorted(change_specs_dir.iterdir()):
        spec_file = entry / SPEC_FILENAME
        if entry.is_dir() and spec_file.is_file():
            files[entry.name] = spec_file
    return files


def count_tasks(content: str) -> tuple[int, int]:
    """Count ``- [ ]`` and ``- [x]`` checklist lines.

    Returns:
        Tuple of (completed, total).
    """
    completed = total = 0
    for line in content.split("\n"):
        match = TASK_PATTERN.match(line)
        if match:
            total += 1
            if match.group(1) != " ":
                completed += 1
    return completed, total


def read_document(path: Path) -> str:
    """Read a markdown document with normalized line endings."""
    return normalize_line_endings(path.read_text(encoding="utf-8"))
