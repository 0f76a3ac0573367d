"""Configuration for plan validation.

This module provides the Pydantic configuration model holding the
keyword tables and thresholds the validation rules consult, plus a
loader for JSON configuration files.

The configuration is immutable once built: the same instance is shared
by every rule of a validation run, including rules running concurrently.
Score weights and status bands are fixed and live in ``scoring``.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from ..validator_logging import get_logger

logger = get_logger()


class RuleConfig(BaseModel):
    """Individual rule configuration."""

    enabled: bool = Field(default=True, description="Enable this rule")

    class Config:
        extra = "allow"
        frozen = True


class ValidatorConfig(BaseModel):
    """Keyword tables and thresholds for plan validation.

    Defaults reproduce the standard rule set; a JSON file or keyword
    overrides can replace any of them.
    """

    # Risk identification
    high_risk_factors: tuple[str, ...] = Field(
        default=(
            "tight timeline",
            "complex dependencies",
            "unknown technology",
            "limited resources",
            "multiple stakeholders",
        ),
        description="Phrases marking a high-risk step",
    )
    medium_risk_factors: tuple[str, ...] = Field(
        default=(
            "moderate complexity",
            "some dependencies",
            "limited expertise",
            "budget constraints",
        ),
        description="Phrases marking a medium-risk step",
    )
    mitigation_keywords: tuple[str, ...] = Field(
        default=("mitigat",),
        description="Description substrings signalling a mitigation strategy",
    )
    backup_keywords: tuple[str, ...] = Field(
        default=("backup",),
        description="Resource substrings signalling a fallback resource",
    )
    mitigation_pass_score: int = Field(
        default=70, ge=0, le=100, description="Minimum passing mitigation score"
    )

    # Resources
    critical_resource_keywords: tuple[str, ...] = Field(
        default=("specialized", "expert", "licensed", "premium", "custom", "rare"),
        description="Resource substrings marking a critical resource",
    )
    max_distinct_resources: int = Field(
        default=10, ge=0, description="Distinct resources before a warning"
    )

    # Feasibility
    min_description_length: int = Field(
        default=20,
        ge=0,
        description="Descriptions must be longer than this to be feasible",
    )

    # Timeline
    default_duration_hours: float = Field(
        default=2.0, ge=0.0, description="Midpoint used for unparsable durations"
    )
    max_timeline_weeks: int = Field(
        default=4, ge=1, description="Longest acceptable plan, in weeks"
    )
    max_steps: int = Field(
        default=10, ge=1, description="Step count before the timeline is complex"
    )
    unbalanced_duration_hours: float = Field(
        default=4.0,
        ge=0.0,
        description="Gap between adjacent step midpoints flagged as unbalanced",
    )

    # Dependencies
    complex_dependency_threshold: int = Field(
        default=2,
        ge=0,
        description="Steps with more dependencies than this are complex",
    )

    rules: dict[str, RuleConfig] = Field(
        default_factory=dict, description="Rule-specific configuration"
    )

    class Config:
        extra = "forbid"
        frozen = True

    def is_rule_enabled(self, rule_id: str) -> bool:
        """Check if a specific rule is enabled.

        Args:
            rule_id: Rule identifier (e.g., 'PLAN.RISKS')

        Returns:
            True if the rule should run
        """
        if rule_id in self.rules:
            return self.rules[rule_id].enabled
        return True

    def get_rule_config(self, rule_id: str) -> RuleConfig | None:
        """Get configuration for a specific rule, if any."""
        return self.rules.get(rule_id)


def load_validator_config(
    config_path: Path | str | None = None, **overrides: Any
) -> ValidatorConfig:
    """Load validator configuration from a JSON file and overrides.

    Overrides take precedence over file values, which take precedence
    over defaults.

    Args:
        config_path: Optional path to a JSON configuration file.
        **overrides: Explicit field overrides.

    Returns:
        Validated ValidatorConfig.

    Raises:
        FileNotFoundError: If config_path does not exist.
        ValueError: If the file is not valid JSON or not a JSON object.
        pydantic.ValidationError: If a value fails validation.
    """
    data: dict[str, Any] = {}

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            logger.debug(f"No validator config at {path}")
            raise FileNotFoundError(f"Validator config not found: {path}")

        try:
            with open(path) as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in validator config: {e}")
            raise ValueError(f"Invalid validator config: {e}") from None

        if not isinstance(loaded, dict):
            raise ValueError(
                f"Invalid validator config: expected an object, got "
                f"{type(loaded).__name__}"
            )
        data.update(loaded)
        logger.info(f"Loaded validator config from {path}")

    data.update(overrides)
    return ValidatorConfig(**data)


__all__ = [
    "RuleConfig",
    "ValidatorConfig",
    "load_validator_config",
]
