"""Validator combining schema checks and content rules into one report."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from src.config import ValidationConfig
from src.spec.parser import (
    CHANGE_MISSING_WHAT_CHANGES,
    CHANGE_MISSING_WHY,
    SPEC_MISSING_PURPOSE,
    SPEC_MISSING_REQUIREMENTS,
    MarkdownParser,
    SpecParseError,
)
from src.spec.requirement_blocks import parse_delta_spec
from src.spec.schemas import Change
from src.validation import constants as msg
from src.validation.delta_checks import check_change_delta_specs
from src.validation.rules import RuleSet
from src.validation.schema_checks import check_change, check_spec
from src.validation.types import ValidationIssue, ValidationLevel, ValidationReport
from src.workspace import PROPOSAL_FILENAME, find_delta_files, read_document

logger = logging.getLogger(__name__)


def extract_name_from_path(file_path: Path | str) -> str:
    """Get the item name for a spec or change file.

    The name is the directory following the nearest ``specs`` or ``changes``
    component, falling back to the file stem.
    """
    parts = Path(file_path).parts
    for i in range(len(parts) - 1, -1, -1):
        if parts[i] in ("specs", "changes") and i < len(parts) - 1:
            return parts[i + 1]
    return Path(file_path).stem


def enrich_top_level_error(message: str) -> str:
    """Append guidance to well-known structural errors."""
    message = message.strip()
    if message == msg.CHANGE_NO_DELTAS:
        return f"{message}. {msg.GUIDE_NO_DELTAS}"
    if message in (SPEC_MISSING_PURPOSE, SPEC_MISSING_REQUIREMENTS):
        return f"{message}. {msg.GUIDE_MISSING_SPEC_SECTIONS}"
    if message in (CHANGE_MISSING_WHY, CHANGE_MISSING_WHAT_CHANGES):
        return f"{message}. {msg.GUIDE_MISSING_CHANGE_SECTIONS}"
    return message


def attach_delta_requirements(change: Change, delta_files: Mapping[str, str]) -> None:
    """Fill in ``Delta.requirements`` from the change's capability delta files.

    Each delta whose ``spec`` names a capability with a delta file gets that
    file's ADDED and MODIFIED blocks. Deltas without a matching file are left
    untouched.

    Args:
        change: Parsed change, updated in place.
        delta_files: Capability name to delta file content.
    """
    for delta in change.deltas:
        content = delta_files.get(delta.spec.strip())
        if content is None:
            continue
        plan = parse_delta_spec(content)
        blocks = "\n\n".join(b.raw for b in plan.added + plan.modified)
        delta.requirements = MarkdownParser(blocks).parse_requirement_blocks()


class Validator:
    """Validate specs, changes, and change delta files.

    Content problems never raise; they come back as issues in a
    ValidationReport. In strict mode warnings also make a report invalid.
    """

    def __init__(self, strict: bool | None = None, config: ValidationConfig | None = None) -> None:
        self.config = config or ValidationConfig()
        self.strict = self.config.strict if strict is None else strict
        self.rules = RuleSet(self.config)

    def _report(self, issues: list[ValidationIssue]) -> ValidationReport:
        return ValidationReport(issues=issues, strict=self.strict)

    def _parse_failure(self, error: SpecParseError) -> ValidationReport:
        return self._report([ValidationIssue(
            level=ValidationLevel.ERROR,
            path="file",
            message=enrich_top_level_error(str(error)),
        )])

    def validate_spec_content(
        self, name: str, content: str, source_path: str | None = None
    ) -> ValidationReport:
        """Validate the text of a capability spec."""
        try:
            spec = MarkdownParser(content).parse_spec(name, source_path=source_path)
        except SpecParseError as e:
            return self._parse_failure(e)

        issues = check_spec(spec)
        issues.extend(self.rules.check_spec(spec))
        return self._report(issues)

    def validate_change_content(
        self,
        name: str,
        content: str,
        source_path: str | None = None,
        delta_files: Mapping[str, str] | None = None,
    ) -> ValidationReport:
        """Validate a whole-document change proposal.

        Args:
            name: Change identifier.
            content: Proposal text.
            source_path: Optional path recorded in the metadata.
            delta_files: Capability name to delta file content, used to
                attach requirements to the proposal's deltas.
        """
        try:
            change = MarkdownParser(content).parse_change(name, source_path=source_path)
        except SpecParseError as e:
            return self._parse_failure(e)

        if delta_files:
            attach_delta_requirements(change, delta_files)

        issues = check_change(change, self.config)
        issues.extend(self.rules.check_change(change))
        return self._report(issues)

    def validate_change_delta_specs(self, files: Mapping[str, str]) -> ValidationReport:
        """Validate a change's capability delta files.

        Args:
            files: Capability name to delta file content.
        """
        return self._report(check_change_delta_specs(files))

    def validate_spec_file(self, file_path: Path | str) -> ValidationReport:
        """Read and validate a spec file."""
        file_path = Path(file_path)
        logger.debug("Validating spec file %s", file_path)
        return self.validate_spec_content(
            extract_name_from_path(file_path),
            read_document(file_path),
            source_path=str(file_path),
        )

    def validate_change_file(self, file_path: Path | str) -> ValidationReport:
        """Read and validate a whole-document change file.

        Delta files next to the proposal (``specs/<capability>/spec.md``)
        supply the requirements of the deltas they match.
        """
        file_path = Path(file_path)
        logger.debug("Validating change file %s", file_path)
        return self.validate_change_content(
            extract_name_from_path(file_path),
            read_document(file_path),
            source_path=str(file_path),
            delta_files=_read_delta_files(file_path.parent),
        )

    def validate_change_directory(self, change_dir: Path | str) -> ValidationReport:
        """Read and validate every delta file under a change directory."""
        delta_files = _read_delta_files(Path(change_dir))
        logger.debug("Validating %d delta file(s) in %s", len(delta_files), change_dir)
        return self.validate_change_delta_specs(delta_files)

    def validate_change(self, change_dir: Path | str) -> ValidationReport:
        """Validate a change's delta files and, when present, its proposal.md."""
        change_dir = Path(change_dir)
        issues = list(self.validate_change_directory(change_dir).issues)

        proposal = change_dir / PROPOSAL_FILENAME
        if proposal.is_file():
            issues.extend(self.validate_change_file(proposal).issues)

        return self._report(issues)


def _read_delta_files(change_dir: Path) -> dict[str, str]:
    return {capability: read_document(path) for capability, path in find_delta_files(change_dir).items()}
