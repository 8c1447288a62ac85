"""Delta merging and change archival."""

from src.archive.merge import MergeCounts, MergeError, MergeResult, build_updated_spec
from src.archive.archiver import (
    ArchiveError,
    ArchiveResult,
    Archiver,
    PreparedUpdate,
    SpecUpdate,
)

__all__ = [
    "ArchiveError",
    "ArchiveResult",
    "Archiver",
    "MergeCounts",
    "MergeError",
    "MergeResult",
    "PreparedUpdate",
    "SpecUpdate",
    "build_updated_spec",
]
