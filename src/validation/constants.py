"""Validation messages. Numeric thresholds live in ``ValidationConfig``."""

# Schema errors
SCENARIO_EMPTY = "Scenario text cannot be empty"
REQUIREMENT_EMPTY = "Requirement text cannot be empty"
REQUIREMENT_NO_SHALL = "Requirement must contain SHALL or MUST keyword"
REQUIREMENT_NO_SCENARIOS = "Requirement must have at least one scenario"
SPEC_NAME_EMPTY = "Spec name cannot be empty"
SPEC_PURPOSE_EMPTY = "Purpose section cannot be empty"
SPEC_NO_REQUIREMENTS = "Spec must have at least one requirement"
CHANGE_NAME_EMPTY = "Change name cannot be empty"
CHANGE_WHY_TOO_SHORT = "Why section must be at least {min} characters"
CHANGE_WHY_TOO_LONG = "Why section should not exceed {max} characters"
CHANGE_WHAT_EMPTY = "What Changes section cannot be empty"
CHANGE_NO_DELTAS = "Change must have at least one delta"
CHANGE_TOO_MANY_DELTAS = "Consider splitting changes with more than {max} deltas"
DELTA_SPEC_EMPTY = "Spec name cannot be empty"
DELTA_DESCRIPTION_EMPTY = "Delta description cannot be empty"

# Rule warnings and info
PURPOSE_TOO_BRIEF = "Purpose section is too brief (less than {min} characters)"
REQUIREMENT_TOO_LONG = (
    "Requirement text is very long (>{max} characters). Consider breaking it down."
)
DELTA_DESCRIPTION_TOO_BRIEF = "Delta description is too brief"
DELTA_MISSING_REQUIREMENTS = "Delta should include requirements"
SCENARIO_NO_GIVEN_WHEN_THEN = "Scenario does not follow Given/When/Then structure"

# Guidance appended to top-level errors
GUIDE_NO_DELTAS = (
    "No deltas found. Ensure your change has a specs/ directory with capability "
    "folders (e.g. specs/http-server/spec.md) containing ## ADDED/MODIFIED/"
    "REMOVED/RENAMED Requirements sections, with ### Requirement: headers"
)
GUIDE_MISSING_SPEC_SECTIONS = (
    "Missing required sections. Expected headers: \"## Purpose\" and "
    "\"## Requirements\". Example:\n## Purpose\n[brief purpose]\n\n"
    "## Requirements\n### Requirement: Clear requirement statement\n"
    "The system SHALL ...\n\n#### Scenario: Descriptive name\n"
    "- **WHEN** ...\n- **THEN** ..."
)
GUIDE_MISSING_CHANGE_SECTIONS = (
    "Missing required sections. Expected headers: \"## Why\" and \"## What Changes\". "
    "Ensure deltas are documented in specs/ using delta headers."
)
GUIDE_SCENARIO_FORMAT = (
    "Scenarios must use level-4 headers. Convert bullet lists into:\n"
    "#### Scenario: Short name\n- **WHEN** ...\n- **THEN** ...\n- **AND** ..."
)
