"""
Report rendering for a finished GradeReport.

Nothing here computes marks. Builders format values already held by
the report into the CI summary, the student feedback document, the
grade CSV record, and the console line.
"""

import csv
import html
import io
from datetime import datetime

from .config import CSV_STUDENT_ID, FEEDBACK_DIRNAME, FEEDBACK_FILENAME
from .config_loader import GraderConfig
from .models import GradeReport, StepResult

DEDUCTION_NOTES = [
    "This autograder ignores HTML comments (examples inside comments do NOT count).",
    "Checks only top-level tags and a few basic attributes (action/method/target/required).",
    "It does not check classes, ids, or inner text.",
    "Optional TODOs are ignored.",
    "Missing required items reduce marks proportionally within a step.",
]


def escape_markup(value: object) -> str:
    """Escape text so it cannot open or close tags in the rendered report."""
    return html.escape(str(value), quote=False)


def format_marks(value: float) -> str:
    """Render marks without a trailing ``.0`` (15, 3.33, 47.5)."""
    value = round(float(value), 2)
    if value == int(value):
        return str(int(value))
    return f"{value:.2f}".rstrip("0")


def utc_offset_label(moment: datetime) -> str:
    """Render a datetime's offset as ``UTC+03:00``."""
    offset = moment.utcoffset()
    if offset is None:
        return "UTC"
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"UTC{sign}{hours:02d}:{minutes:02d}"


def _bullets(items: list[str], empty: str) -> str:
    if not items:
        return f"- {empty}"
    return "\n".join(f"- {item}" for item in items)


def _submission_block(report: GradeReport) -> str:
    timing = report.submission
    submitted = timing.submitted_at.isoformat() if timing.submitted_at else "unknown"
    source = "from git log" if timing.source == "git" else "git history unavailable, current time used"
    status = "(Late submission)" if timing.is_late else "(On time)"
    return (
        f"- **Deadline ({utc_offset_label(timing.deadline)}):** {timing.deadline.isoformat()}\n"
        f"- **Last commit time ({source}):** {submitted}\n"
        f"- **Submission marks:** **{format_marks(timing.score)}/{format_marks(timing.max_score)}** {status}\n"
    )


def _step_details(step: StepResult) -> str:
    found = [escape_markup(c.line) for c in step.found]
    missed = [escape_markup(c.line) for c in step.missing]
    notes = [escape_markup(d) for d in step.deductions]

    return f"""
<details>
  <summary><strong>{escape_markup(step.name)}</strong> — {format_marks(step.score)}/{format_marks(step.max_marks)}</summary>

  <br/>

  <strong>✅ Found</strong>

{_bullets(found, "(Nothing detected)")}

  <br/><br/>

  <strong>❌ Missing</strong>

{_bullets(missed, "(Nothing missing)")}

  <br/><br/>

  <strong>❗ Deductions / Notes</strong>

{_bullets(notes, "No deductions.")}

</details>
"""


def build_summary(report: GradeReport, config: GraderConfig) -> str:
    """
    Build the CI step summary.

    Args:
        report: Completed grade report.
        config: Grader configuration (titles and output location).

    Returns:
        Markdown with a marks table and collapsible per-step details.
    """
    submission = report.submission
    lines = [
        f"# {escape_markup(config.assignment_title)} – Autograding Summary",
        "",
        "## Submission",
        "",
        _submission_block(report),
        "## Marks Breakdown",
        "",
        "| Component | Marks |",
        "|---|---:|",
    ]
    for step in report.steps:
        lines.append(f"| {escape_markup(step.name)} | {format_marks(step.score)}/{format_marks(step.max_marks)} |")
    lines.append(
        f"| Submission (timing) | {format_marks(submission.score)}/{format_marks(submission.max_score)} |"
    )
    lines += [
        "",
        "## Total Marks",
        "",
        f"**{format_marks(report.total_score)} / {format_marks(report.total_max)}**",
        "",
        "## Detailed Checks (What you did / missed)",
        "",
    ]

    summary = "\n".join(lines)
    summary += "".join(_step_details(step) for step in report.steps)

    feedback_path = (config.artifacts_dir / FEEDBACK_DIRNAME / FEEDBACK_FILENAME).as_posix()
    summary += f"\n> Full feedback is also available in: `{escape_markup(feedback_path)}`\n"
    return summary


def build_feedback(report: GradeReport, config: GraderConfig) -> str:
    """
    Build the narrative feedback document for the student.

    Args:
        report: Completed grade report.
        config: Grader configuration (titles).

    Returns:
        Markdown feedback with per-step checklist and deductions.
    """
    file_line = f"✅ {escape_markup(report.html_file)}" if report.html_file else "❌ No HTML file found"

    parts = [
        f"# {escape_markup(config.feedback_title)} – Feedback\n",
        "## Submission\n",
        _submission_block(report),
        "## File Checked\n",
        f"- {file_line}\n",
        "---\n",
        "## Step-by-step Feedback\n",
    ]

    for step in report.steps:
        checklist = [escape_markup(line) for line in step.checklist]
        deductions = [f"❗ {escape_markup(d)}" for d in step.deductions]
        parts.append(
            f"### {escape_markup(step.name)} — **{format_marks(step.score)}/{format_marks(step.max_marks)}**\n\n"
            f"**Checklist**\n{_bullets(checklist, '(No checks available)')}\n\n"
            f"**Deductions / Notes**\n{_bullets(deductions, '✅ No deductions. Good job!')}\n"
        )

    parts += [
        "---\n",
        "## How marks were deducted (if any)\n",
        _bullets(DEDUCTION_NOTES, "") + "\n",
    ]
    return "\n".join(parts)


def build_grade_csv(report: GradeReport) -> str:
    """Two-line CSV record: header plus one ``all_students`` row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["student", "score", "max_score"])
    writer.writerow([CSV_STUDENT_ID, format_marks(report.total_score), format_marks(report.total_max)])
    return buffer.getvalue()


def console_line(report: GradeReport) -> str:
    submission = report.submission
    return (
        f"✔ Lab graded: {format_marks(report.total_score)}/{format_marks(report.total_max)} "
        f"(Submission: {format_marks(submission.score)}/{format_marks(submission.max_score)}, "
        f"Steps: {format_marks(report.steps_score)}/{format_marks(report.steps_max)})."
    )
