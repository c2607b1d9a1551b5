"""
Pydantic models for the Lab Autograder.

Defines the rubric definition types, per-step results, the submission
timing outcome, and the complete grade report.
"""

from datetime import datetime
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class Check(BaseModel):
    """
    Outcome of one rubric requirement.

    Attributes:
        label: Human-readable description of the requirement.
        ok: Whether the requirement was detected.
    """

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Requirement description")
    ok: bool = Field(..., description="Whether the requirement was detected")

    @property
    def line(self) -> str:
        return f"{'✅' if self.ok else '❌'} {self.label}"


class CheckSpec(BaseModel):
    """
    A named boolean test run against comment-stripped markup.

    Attributes:
        label: Human-readable description shown in reports.
        predicate: Callable returning True when the markup satisfies the check.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    predicate: Callable[[str], bool]


class RubricStep(BaseModel):
    """
    Static definition of one graded step.

    Attributes:
        id: Stable step identifier (e.g., "step2").
        name: Display name.
        marks: Maximum marks for the step.
        checks: Ordered checks, each weighted equally.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    marks: float = Field(..., ge=0)
    checks: list[CheckSpec] = Field(default_factory=list)


class StepResult(BaseModel):
    """
    Grade result for a single rubric step.

    Attributes:
        id: Step identifier.
        name: Step display name.
        max_marks: Maximum marks for the step.
        score: Marks awarded, always within [0, max_marks].
        checks: Outcome of every check that ran.
        deductions: Notes explaining lost marks.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Step identifier")
    name: str = Field(..., description="Step display name")
    max_marks: float = Field(..., ge=0, description="Maximum marks")
    score: float = Field(..., ge=0, description="Marks awarded")
    checks: list[Check] = Field(default_factory=list, description="Check outcomes")
    deductions: list[str] = Field(default_factory=list, description="Deduction notes")

    @model_validator(mode="after")
    def _score_within_max(self) -> "StepResult":
        if self.score > self.max_marks:
            raise ValueError(f"score {self.score} exceeds max_marks {self.max_marks} for {self.id}")
        return self

    @property
    def found(self) -> list[Check]:
        return [c for c in self.checks if c.ok]

    @property
    def missing(self) -> list[Check]:
        return [c for c in self.checks if not c.ok]

    @property
    def checklist(self) -> list[str]:
        return [c.line for c in self.checks]


class SubmissionTiming(BaseModel):
    """
    Timeliness outcome for the submission.

    Attributes:
        submitted_at: Submission time used for grading.
        source: Where submitted_at came from ("git" or "clock").
        deadline: Deadline the submission was compared against.
        is_late: Whether the late score was applied.
        score: Timeliness marks awarded.
        max_score: Maximum timeliness marks.
    """

    submitted_at: datetime | None = Field(default=None, description="Submission time")
    source: str = Field(default="git", description="Origin of submitted_at")
    deadline: datetime = Field(..., description="Submission deadline")
    is_late: bool = Field(..., description="Whether the submission counts as late")
    score: float = Field(..., ge=0, description="Timeliness marks awarded")
    max_score: float = Field(..., ge=0, description="Maximum timeliness marks")


class GradeReport(BaseModel):
    """
    Complete grading result for one run.

    Attributes:
        steps: Per-step results in rubric order.
        submission: Timeliness outcome.
        html_file: Path of the markup file that was checked, if any.
    """

    steps: list[StepResult] = Field(default_factory=list, description="Per-step results")
    submission: SubmissionTiming = Field(..., description="Timeliness outcome")
    html_file: str | None = Field(default=None, description="Checked markup file")

    @computed_field
    @property
    def steps_score(self) -> float:
        return round(sum(s.score for s in self.steps), 2)

    @computed_field
    @property
    def steps_max(self) -> float:
        return sum(s.max_marks for s in self.steps)

    @computed_field
    @property
    def total_score(self) -> float:
        return round(self.steps_score + self.submission.score, 2)

    @computed_field
    @property
    def total_max(self) -> float:
        return self.steps_max + self.submission.max_score
