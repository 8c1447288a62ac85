"""Project configuration loaded from openspec/config.yaml."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_RELATIVE_PATH = Path("openspec") / "config.yaml"


@dataclass
class ValidationConfig:
    """Thresholds and switches for validation.

    Every field has a default so that a missing or partial config file
    behaves the same as no config at all.
    """

    strict: bool = False
    min_purpose_length: int = 50
    max_requirement_length: int = 500
    min_why_length: int = 50
    max_why_length: int = 1000
    max_deltas: int = 10
    min_delta_description_length: int = 10
    disabled_rules: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidationConfig:
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        if "disabled_rules" in values:
            values["disabled_rules"] = [str(r) for r in values["disabled_rules"] or []]
        return cls(**values)


def load_config(project_root: Path | str) -> ValidationConfig:
    """Load validation config for a project.

    Args:
        project_root: Directory containing the ``openspec`` folder.

    Returns:
        Parsed config, or defaults if the file is absent or unreadable.
    """
    config_path = Path(project_root) / CONFIG_RELATIVE_PATH

    if not config_path.exists():
        return ValidationConfig()

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except (yaml.YAMLError, OSError) as e:
        # The config file is optional, fall back to defaults
        logger.warning("Could not load config from %s: %s", config_path, e)
        return ValidationConfig()

    section = data.get("validation", {}) if isinstance(data, dict) else {}
    if not isinstance(section, dict):
        logger.warning("Ignoring malformed 'validation' section in %s", config_path)
        return ValidationConfig()

    try:
        return ValidationConfig.from_dict(section)
    except TypeError as e:
        logger.warning("Invalid validation config in %s: %s", config_path, e)
        return ValidationConfig()


def save_config(config: ValidationConfig, project_root: Path | str) -> Path:
    """Write config to the project's config file."""
    config_path = Path(project_root) / CONFIG_RELATIVE_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(yaml.dump({"validation": config.to_dict()}, default_flow_style=False, sort_keys=False))
    return config_path
