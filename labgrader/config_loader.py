"""
Configuration loader for the Lab Autograder.

Handles parsing and validation of YAML configuration files.
"""

from datetime import datetime
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .config import (
    ASSIGNMENT_TITLE,
    DEADLINE,
    DEFAULT_ARTIFACTS_DIR,
    FEEDBACK_TITLE,
    IGNORE_DIRS,
    PREFERRED_FILENAME,
    STEP_SUMMARY_ENV,
    SUBMISSION_LATE,
    SUBMISSION_MAX,
)


class GraderConfig(BaseModel):
    """
    Configuration model for the grader.

    Every field has a default, so an empty config grades the lab
    with the built-in deadline and rubric marks.
    """
    root_dir: Path = Field(Path("."), description="Working tree containing the student's submission")
    artifacts_dir: Path = Field(DEFAULT_ARTIFACTS_DIR, description="Output folder, relative to root_dir unless absolute")
    preferred_filename: str = Field(PREFERRED_FILENAME, description="File checked before walking the tree")
    ignore_dirs: list[str] = Field(default_factory=lambda: list(IGNORE_DIRS), description="Directory names skipped while walking")

    deadline: datetime = Field(DEADLINE, description="Submission deadline (timezone-aware)")
    submission_max: float = Field(SUBMISSION_MAX, ge=0, description="Marks for an on-time submission")
    submission_late: float = Field(SUBMISSION_LATE, ge=0, description="Marks for a late submission")
    step_marks: dict[str, float] = Field(default_factory=dict, description="Per-step mark overrides keyed by step id")

    assignment_title: str = Field(ASSIGNMENT_TITLE, description="Heading of the CI summary")
    feedback_title: str = Field(FEEDBACK_TITLE, description="Heading of the feedback document")
    step_summary_env: str = Field(STEP_SUMMARY_ENV, description="Environment variable naming the CI summary file")
    verbose: bool = Field(False, description="Enable verbose output")

    @field_validator("deadline")
    @classmethod
    def _deadline_has_offset(cls, value: datetime) -> datetime:
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError("deadline must include a UTC offset, e.g. 2026-01-21T23:59:00+03:00")
        return value

    @field_validator("step_marks")
    @classmethod
    def _marks_not_negative(cls, value: dict[str, float]) -> dict[str, float]:
        for step_id, marks in value.items():
            if marks < 0:
                raise ValueError(f"step_marks[{step_id}] must be >= 0, got {marks}")
        return value

    @model_validator(mode="after")
    def _late_not_above_max(self) -> "GraderConfig":
        if self.submission_late > self.submission_max:
            raise ValueError("submission_late cannot exceed submission_max")
        return self

    @property
    def output_dir(self) -> Path:
        """Resolved artifacts directory."""
        if self.artifacts_dir.is_absolute():
            return self.artifacts_dir
        return self.root_dir / self.artifacts_dir


def load_config(config_path: Path) -> GraderConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        GraderConfig object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If config file is invalid YAML.
        ValidationError: If config data is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f)

    if not config_data:
        return GraderConfig(root_dir=config_path.parent)

    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(config_data).__name__}")

    # root_dir is relative to the config file; artifacts_dir stays relative to root_dir
    root_dir = Path(config_data.get("root_dir") or ".")
    if not root_dir.is_absolute():
        root_dir = config_path.parent / root_dir
    config_data["root_dir"] = root_dir

    return GraderConfig(**config_data)
