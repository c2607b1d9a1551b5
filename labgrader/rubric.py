"""
Lab rubric definition and proportional step scoring.

The rubric is a list of RubricStep definitions, each holding the checks
it runs. Scoring only looks at how many checks failed, so it can be
exercised without any markup.
"""

from .markup import (
    any_required_attribute,
    attr_exists_on_tag,
    count_tag,
    has_attr_value_on_tag,
    has_external_link,
    has_for_id_match,
    has_internal_link,
    has_submit_button,
    has_tag,
    has_target_blank_on_anchor,
    header_wrapped_light,
)
from .models import Check, CheckSpec, RubricStep, StepResult

MISSING_FILE_REASON = "No .html file found (expected index.html or any .html file)."


def split_marks(step_marks: float, missing_count: int, total_checks: int) -> float:
    """
    Deduct marks uniformly for each failed check.

    Every check in a step is worth ``step_marks / total_checks``. The
    result is rounded to two decimals and never drops below zero.

    Args:
        step_marks: Maximum marks for the step.
        missing_count: Number of failed checks.
        total_checks: Number of checks in the step.

    Returns:
        Awarded marks.
    """
    if missing_count <= 0 or total_checks <= 0:
        return step_marks
    per_item = step_marks / total_checks
    deducted = per_item * missing_count
    return max(0, round(step_marks - deducted, 2))


def evaluate_step(html: str, step: RubricStep) -> StepResult:
    """
    Run a step's checks against comment-stripped markup and score it.

    Args:
        html: Markup with comments already removed.
        step: Step definition.

    Returns:
        StepResult with one "Missing: ..." deduction per failed check.
    """
    checks = [Check(label=spec.label, ok=bool(spec.predicate(html))) for spec in step.checks]
    missing = [c for c in checks if not c.ok]

    return StepResult(
        id=step.id,
        name=step.name,
        max_marks=step.marks,
        score=split_marks(step.marks, len(missing), len(checks)),
        checks=checks,
        deductions=[f"Missing: {c.label}" for c in missing],
    )


def evaluate_rubric(html: str, steps: list[RubricStep]) -> list[StepResult]:
    return [evaluate_step(html, step) for step in steps]


def fail_all_steps(steps: list[RubricStep], reason: str) -> list[StepResult]:
    """Score every step zero with ``reason`` as its only note, skipping the checks."""
    return [
        StepResult(id=step.id, name=step.name, max_marks=step.marks, score=0, checks=[], deductions=[reason])
        for step in steps
    ]


def _step2_checks() -> list[CheckSpec]:
    return [
        CheckSpec(label="At least one <div> (main container)", predicate=lambda html: has_tag(html, "div")),
    ]


def _step3_checks() -> list[CheckSpec]:
    return [
        CheckSpec(
            label="Header is wrapped (has <header> OR a <div> that contains <h1>)",
            predicate=header_wrapped_light,
        ),
        CheckSpec(label="At least one <h1>", predicate=lambda html: has_tag(html, "h1")),
        CheckSpec(label="At least one <p>", predicate=lambda html: has_tag(html, "p")),
    ]


def _step4_checks() -> list[CheckSpec]:
    return [
        CheckSpec(label="At least one <a> link", predicate=lambda html: has_tag(html, "a")),
        CheckSpec(label='At least one internal link (href="#...")', predicate=has_internal_link),
        CheckSpec(label='At least one external link (href="https://...")', predicate=has_external_link),
        CheckSpec(label='At least one link uses target="_blank"', predicate=has_target_blank_on_anchor),
    ]


def _step5_checks() -> list[CheckSpec]:
    return [
        CheckSpec(
            label="At least two <div> tags (main container + at least one post container)",
            predicate=lambda html: count_tag(html, "div") >= 2,
        ),
        CheckSpec(label="At least one <h4> (post author)", predicate=lambda html: has_tag(html, "h4")),
        CheckSpec(label="At least one <p> (post text)", predicate=lambda html: has_tag(html, "p")),
    ]


def _on_input_or_textarea(attr_name: str):
    def check(html: str) -> bool:
        return attr_exists_on_tag(html, "input", attr_name) or attr_exists_on_tag(html, "textarea", attr_name)

    return check


def _step6_checks() -> list[CheckSpec]:
    return [
        CheckSpec(label="A <form> tag", predicate=lambda html: has_tag(html, "form")),
        CheckSpec(
            label='Form uses action="#"',
            predicate=lambda html: has_attr_value_on_tag(html, "form", "action", "#"),
        ),
        CheckSpec(
            label='Form uses method="post"',
            predicate=lambda html: has_attr_value_on_tag(html, "form", "method", "post"),
        ),
        CheckSpec(label="At least one <label>", predicate=lambda html: has_tag(html, "label")),
        CheckSpec(label="At least one <input>", predicate=lambda html: has_tag(html, "input")),
        CheckSpec(label="At least one <textarea>", predicate=lambda html: has_tag(html, "textarea")),
        CheckSpec(label="A name attribute on an input/textarea", predicate=_on_input_or_textarea("name")),
        CheckSpec(
            label="A placeholder attribute on an input/textarea",
            predicate=_on_input_or_textarea("placeholder"),
        ),
        CheckSpec(label="Required fields used (required attribute exists)", predicate=any_required_attribute),
        CheckSpec(label="At least one label[for] matches an input/textarea id", predicate=has_for_id_match),
        CheckSpec(label='Submit button exists (type="submit")', predicate=has_submit_button),
    ]


# (id, name, default marks, check factory)
LAB_STEPS = [
    ("step2", "Step 2: Main Page Container", 15, _step2_checks),
    ("step3", "Step 3: Wrap the Header", 15, _step3_checks),
    ("step4", "Step 4: Navigation Links", 20, _step4_checks),
    ("step5", "Step 5: Wrap Each Post", 10, _step5_checks),
    ("step6", "Step 6: Complete the Form", 20, _step6_checks),
]


def build_lab_rubric(step_marks: dict[str, float] | None = None) -> list[RubricStep]:
    """
    Build the five-step lab rubric.

    Args:
        step_marks: Optional mark overrides keyed by step id.

    Returns:
        Ordered list of RubricStep definitions.

    Raises:
        ValueError: If step_marks names a step that is not in the rubric.
    """
    overrides = dict(step_marks or {})
    known_ids = {step_id for step_id, _, _, _ in LAB_STEPS}
    unknown = sorted(set(overrides) - known_ids)
    if unknown:
        raise ValueError(f"Unknown rubric step(s) in step_marks: {', '.join(unknown)}")

    return [
        RubricStep(id=step_id, name=name, marks=overrides.get(step_id, marks), checks=factory())
        for step_id, name, marks, factory in LAB_STEPS
    ]
