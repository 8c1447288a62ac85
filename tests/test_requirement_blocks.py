"""Tests for requirement blocks and delta notation parsing."""

from src.spec.requirement_blocks import (
    REQUIREMENTS_HEADER,
    RequirementBlock,
    extract_requirements_section,
    normalize_requirement_name,
    parse_delta_spec,
)


class TestNormalization:
    """Tests for requirement name normalization."""

    def test_case_and_whitespace(self) -> None:
        """Test names differing in case and spacing share a key."""
        assert normalize_requirement_name("  User   Login ") == normalize_requirement_name("user login")

    def test_distinct_names(self) -> None:
        """Test different names stay different."""
        assert normalize_requirement_name("Login") != normalize_requirement_name("Logout")


class TestRequirementBlock:
    """Tests for RequirementBlock properties."""

    def test_text_and_scenarios(self) -> None:
        """Test statement text and scenario counting."""
        block = RequirementBlock(
            header_line="### Requirement: A",
            name="A",
            raw="### Requirement: A\n\nThe system SHALL a.\n\n#### Scenario: One\n- x\n#### Scenario: Two\n- y",
        )

        assert block.text == "The system SHALL a."
        assert block.scenario_count == 2

    def test_text_empty_when_heading_first(self) -> None:
        """Test a block whose body starts with a scenario has no text."""
        block = RequirementBlock("### Requirement: A", "A", "### Requirement: A\n#### Scenario: S\nThe system SHALL a.")

        assert block.text == ""

    def test_renamed(self) -> None:
        """Test renaming rewrites only the header line."""
        block = RequirementBlock("### Requirement: Foo", "Foo", "### Requirement: Foo\nThe system SHALL foo.")
        renamed = block.renamed("Bar")

        assert renamed.header_line == "### Requirement: Bar"
        assert renamed.raw == "### Requirement: Bar\nThe system SHALL foo."
        assert renamed.key == "bar"
        assert block.name == "Foo"


class TestParseDeltaSpec:
    """Tests for parse_delta_spec."""

    def test_added(self, add_logout_delta: str) -> None:
        """Test ADDED blocks are captured verbatim."""
        plan = parse_delta_spec(add_logout_delta)

        assert [b.name for b in plan.added] == ["Logout"]
        block = plan.added[0]
        assert block.raw.startswith("### Requirement: Logout\n")
        assert block.raw.endswith("- **THEN** the session is destroyed")
        assert block.scenario_count == 1
        assert plan.operation_count == 1

    def test_all_sections_any_order(self) -> None:
        """Test every section type, out of order and in mixed case."""
        content = """## renamed requirements
- FROM: `### Requirement: Login`
- TO: `### Requirement: Sign In`

## REMOVED Requirements
### Requirement: Remember Me
- `### Requirement: Legacy Tokens`

## MODIFIED Requirements
### Requirement: Lockout
The system SHALL lock after three attempts.
#### Scenario: Locked
- **THEN** locked

## ADDED Requirements
### Requirement: Logout
The system SHALL log out.
#### Scenario: Out
- **THEN** out
"""
        plan = parse_delta_spec(content)

        assert [b.name for b in plan.added] == ["Logout"]
        assert [b.name for b in plan.modified] == ["Lockout"]
        assert plan.removed == ["Remember Me", "Legacy Tokens"]
        assert [(r.from_name, r.to_name) for r in plan.renamed] == [("Login", "Sign In")]
        assert plan.to_dict()["renamed"] == [{"from": "Login", "to": "Sign In"}]

    def test_renamed_without_bullets_or_backticks(self) -> None:
        """Test the FROM/TO labels also work as plain lines."""
        plan = parse_delta_spec("## RENAMED Requirements\nFROM: ### Requirement: A\nTO: ### Requirement: B\n")

        assert [(r.from_name, r.to_name) for r in plan.renamed] == [("A", "B")]

    def test_unpaired_to_ignored(self) -> None:
        """Test a TO line without a preceding FROM is skipped."""
        plan = parse_delta_spec("## RENAMED Requirements\n- TO: `### Requirement: B`\n")

        assert plan.renamed == []

    def test_block_ends_at_section_heading(self) -> None:
        """Test text after an unrelated ## heading is not part of a block."""
        content = (
            "## ADDED Requirements\n### Requirement: A\nThe system SHALL a.\n"
            "#### Scenario: S\n- x\n## Notes\nnot part of A\n"
        )
        plan = parse_delta_spec(content)

        assert "not part of A" not in plan.added[0].raw

    def test_duplicates_preserved(self) -> None:
        """Test parsing keeps duplicates for validation to report."""
        content = "## REMOVED Requirements\n### Requirement: Foo\n### Requirement: foo\n"

        assert parse_delta_spec(content).removed == ["Foo", "foo"]

    def test_empty_document(self) -> None:
        """Test a document with no delta sections."""
        plan = parse_delta_spec("# Just a title\n\nSome text.\n")

        assert plan.is_empty


class TestExtractRequirementsSection:
    """Tests for extract_requirements_section."""

    def test_split(self, auth_spec: str) -> None:
        """Test a spec splits into before, header and blocks."""
        parts = extract_requirements_section(auth_spec)

        assert parts.before.startswith("# user-auth Specification")
        assert "## Purpose" in parts.before
        assert parts.header_line == "## Requirements"
        assert parts.preamble == ""
        assert [b.name for b in parts.body_blocks] == ["Login", "Password Reset", "Lockout"]
        assert parts.after == ""

    def test_after_section(self) -> None:
        """Test content after the Requirements section is kept separately."""
        content = "## Purpose\np\n\n## Requirements\nIntro text.\n### Requirement: A\nThe system SHALL a.\n\n## Notes\nlater\n"
        parts = extract_requirements_section(content)

        assert parts.preamble == "Intro text."
        assert parts.body_blocks[0].raw == "### Requirement: A\nThe system SHALL a."
        assert parts.after.startswith("## Notes\nlater")

    def test_non_requirement_heading_ends_block(self) -> None:
        """Test a plain ### heading is kept outside the preceding block."""
        content = (
            "## Purpose\np\n\n## Requirements\n### Requirement: A\nThe system SHALL a.\n\n"
            "### Notes\nGeneral notes.\n"
        )
        parts = extract_requirements_section(content)

        assert parts.body_blocks[0].raw == "### Requirement: A\nThe system SHALL a."
        assert parts.trailing == "### Notes\nGeneral notes."

    def test_missing_section(self) -> None:
        """Test a spec without Requirements gets an empty standard section."""
        parts = extract_requirements_section("# Title\n\n## Purpose\np\n")

        assert parts.before == "# Title\n\n## Purpose\np\n\n"
        assert parts.header_line == REQUIREMENTS_HEADER
        assert parts.body_blocks == []
