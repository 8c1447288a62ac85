"""Content rules layered on top of schema checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from src.config import ValidationConfig
from src.spec.schemas import Change, DeltaOperation, Spec
from src.validation import constants as msg
from src.validation.types import ValidationIssue, ValidationLevel

logger = logging.getLogger(__name__)


class RuleTarget(Enum):
    """Kind of document a rule applies to."""
    SPEC = "spec"
    CHANGE = "change"


@dataclass
class ValidationRule:
    """A content rule definition."""

    rule_id: str
    name: str
    level: ValidationLevel
    target: RuleTarget
    description: str
    check_fn: Callable[[Any, ValidationConfig], list[ValidationIssue]]
    enabled: bool = True


class RuleSet:
    """Registry of content rules for specs and changes."""

    def __init__(self, config: ValidationConfig | None = None):
        """Initialize with default rules, disabling any named in config."""
        self.config = config or ValidationConfig()
        self.rules: list[ValidationRule] = []
        self._register_default_rules()
        for rule_id in self.config.disabled_rules:
            self.disable_rule(rule_id)

    def _register_default_rules(self) -> None:
        self.rules.append(ValidationRule(
            rule_id="SPEC-001",
            name="Brief Purpose",
            level=ValidationLevel.WARNING,
            target=RuleTarget.SPEC,
            description="Purpose/Overview should explain the capability in some detail",
            check_fn=self._check_purpose_length,
        ))

        self.rules.append(ValidationRule(
            rule_id="SPEC-002",
            name="Long Requirement",
            level=ValidationLevel.INFO,
            target=RuleTarget.SPEC,
            description="Very long requirement statements should be broken down",
            check_fn=self._check_requirement_length,
        ))

        self.rules.append(ValidationRule(
            rule_id="SPEC-003",
            name="Missing Scenarios",
            level=ValidationLevel.WARNING,
            target=RuleTarget.SPEC,
            description="Every requirement should have at least one scenario",
            check_fn=self._check_requirement_scenarios,
        ))

        self.rules.append(ValidationRule(
            rule_id="SPEC-004",
            name="Given/When/Then",
            level=ValidationLevel.INFO,
            target=RuleTarget.SPEC,
            description="Scenarios should follow Given/When/Then structure",
            check_fn=self._check_scenario_structure,
        ))

        self.rules.append(ValidationRule(
            rule_id="CHG-001",
            name="Brief Delta Description",
            level=ValidationLevel.WARNING,
            target=RuleTarget.CHANGE,
            description="Delta descriptions should say what changes",
            check_fn=self._check_delta_descriptions,
        ))

        self.rules.append(ValidationRule(
            rule_id="CHG-002",
            name="Delta Without Requirements",
            level=ValidationLevel.WARNING,
            target=RuleTarget.CHANGE,
            description="ADDED and MODIFIED deltas should include requirements",
            check_fn=self._check_delta_requirements,
        ))

    def _check_purpose_length(self, spec: Spec, config: ValidationConfig) -> list[ValidationIssue]:
        if len(spec.overview) >= config.min_purpose_length:
            return []
        return [ValidationIssue(
            level=ValidationLevel.WARNING,
            path="overview",
            message=msg.PURPOSE_TOO_BRIEF.format(min=config.min_purpose_length),
        )]

    def _check_requirement_length(self, spec: Spec, config: ValidationConfig) -> list[ValidationIssue]:
        issues = []
        for index, requirement in enumerate(spec.requirements):
            if len(requirement.text) > config.max_requirement_length:
                issues.append(ValidationIssue(
                    level=ValidationLevel.INFO,
                    path=f"requirements[{index}]",
                    message=msg.REQUIREMENT_TOO_LONG.format(max=config.max_requirement_length),
                ))
        return issues

    def _check_requirement_scenarios(self, spec: Spec, _: ValidationConfig) -> list[ValidationIssue]:
        issues = []
        for index, requirement in enumerate(spec.requirements):
            if not requirement.scenarios:
                issues.append(ValidationIssue(
                    level=ValidationLevel.WARNING,
                    path=f"requirements[{index}].scenarios",
                    message=f"{msg.REQUIREMENT_NO_SCENARIOS}. {msg.GUIDE_SCENARIO_FORMAT}",
                ))
        return issues

    def _check_scenario_structure(self, spec: Spec, _: ValidationConfig) -> list[ValidationIssue]:
        issues = []
        for r_index, requirement in enumerate(spec.requirements):
            for s_index, scenario in enumerate(requirement.scenarios):
                if not scenario.is_structured:
                    issues.append(ValidationIssue(
                        level=ValidationLevel.INFO,
                        path=f"requirements[{r_index}].scenarios[{s_index}]",
                        message=msg.SCENARIO_NO_GIVEN_WHEN_THEN,
                    ))
        return issues

    def _check_delta_descriptions(self, change: Change, config: ValidationConfig) -> list[ValidationIssue]:
        issues = []
        for index, delta in enumerate(change.deltas):
            if len(delta.description) < config.min_delta_description_length:
                issues.append(ValidationIssue(
                    level=ValidationLevel.WARNING,
                    path=f"deltas[{index}].description",
                    message=msg.DELTA_DESCRIPTION_TOO_BRIEF,
                ))
        return issues

    def _check_delta_requirements(self, change: Change, _: ValidationConfig) -> list[ValidationIssue]:
        issues = []
        for index, delta in enumerate(change.deltas):
            if delta.operation in (DeltaOperation.ADDED, DeltaOperation.MODIFIED) and not delta.requirements:
                issues.append(ValidationIssue(
                    level=ValidationLevel.WARNING,
                    path=f"deltas[{index}].requirements",
                    message=f"{delta.operation.value} {msg.DELTA_MISSING_REQUIREMENTS}",
                ))
        return issues

    def _apply(self, target: RuleTarget, document: Spec | Change) -> list[ValidationIssue]:
        issues = []
        for rule in self.rules:
            if not rule.enabled or rule.target != target:
                continue
            found = rule.check_fn(document, self.config)
            if found:
                logger.debug("Rule %s reported %d issue(s)", rule.rule_id, len(found))
            issues.extend(found)
        return issues

    def check_spec(self, spec: Spec) -> list[ValidationIssue]:
        """Apply all enabled spec rules."""
        return self._apply(RuleTarget.SPEC, spec)

    def check_change(self, change: Change) -> list[ValidationIssue]:
        """Apply all enabled change rules."""
        return self._apply(RuleTarget.CHANGE, change)

    def enable_rule(self, rule_id: str) -> None:
        """Enable a rule by ID."""
        for rule in self.rules:
            if rule.rule_id == rule_id:
                rule.enabled = True
                return

    def disable_rule(self, rule_id: str) -> None:
        """Disable a rule by ID."""
        for rule in self.rules:
            if rule.rule_id == rule_id:
                rule.enabled = False
                return

    def list_rules(self) -> list[dict[str, Any]]:
        """List all rules."""
        return [
            {
                "rule_id": r.rule_id,
                "name": r.name,
                "level": r.level.value,
                "target": r.target.value,
                "description": r.description,
                "enabled": r.enabled,
            }
            for r in self.rules
        ]
