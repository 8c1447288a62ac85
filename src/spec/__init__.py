"""Specification parsing and data structures."""

from src.spec.schemas import (
    Change,
    ChangeMetadata,
    Delta,
    DeltaOperation,
    Requirement,
    Scenario,
    Spec,
    SpecMetadata,
)
from src.spec.parser import MarkdownParser, Section, SpecParseError
from src.spec.requirement_blocks import (
    DeltaPlan,
    RenamePair,
    RequirementBlock,
    RequirementsSectionParts,
    extract_requirements_section,
    normalize_requirement_name,
    parse_delta_spec,
)

__all__ = [
    "Change",
    "ChangeMetadata",
    "Delta",
    "DeltaOperation",
    "DeltaPlan",
    "MarkdownParser",
    "RenamePair",
    "Requirement",
    "RequirementBlock",
    "RequirementsSectionParts",
    "Scenario",
    "Section",
    "Spec",
    "SpecMetadata",
    "SpecParseError",
    "extract_requirements_section",
    "normalize_requirement_name",
    "parse_delta_spec",
]
