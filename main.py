"""
Lab Autograder: light structural checks for an HTML lab + deadline marks

Usage:
  main.py [--config=PATH]
  main.py (-h | --help)

Options:
  --config=PATH  Path to YAML configuration file. When omitted,
                 the built-in deadline and rubric marks are used.
  -h --help      Show this screen.
"""

from docopt import docopt
import sys
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError
import yaml

from labgrader.artifacts import ArtifactWriter
from labgrader.config_loader import GraderConfig, load_config
from labgrader.discovery import find_html_file, safe_read
from labgrader.markup import strip_html_comments
from labgrader.models import GradeReport
from labgrader.report import console_line, format_marks
from labgrader.rubric import MISSING_FILE_REASON, build_lab_rubric, evaluate_rubric, fail_all_steps
from labgrader.timing import get_last_commit_time, score_submission


def print_grade_summary(report: GradeReport) -> None:
    """
    Print a per-step breakdown of the grade to console.

    Args:
        report: GradeReport to summarize.
    """
    print(f"\n  {'='*50}")
    print(f"  File: {report.html_file or '(none)'}")
    print(f"  Total Score: {format_marks(report.total_score)}/{format_marks(report.total_max)}")
    print(f"  On Time: {'No' if report.submission.is_late else 'Yes'}")
    print(f"  {'='*50}")

    for step in report.steps:
        status = "+" if step.score >= step.max_marks else "-"
        print(f"  [{status}] {step.name}: {format_marks(step.score)}/{format_marks(step.max_marks)}")

    print()


def run_grading_pipeline(config: GraderConfig, now: datetime | None = None) -> GradeReport:
    """
    Run the complete grading pipeline for one working tree.

    Args:
        config: Grader configuration.
        now: Clock time used when the commit time is unavailable.

    Returns:
        The GradeReport that was written out.
    """
    root = config.root_dir
    verbose = config.verbose
    rubric = build_lab_rubric(config.step_marks)

    # Locate and read the student's markup
    ignore_dirs = [*config.ignore_dirs, config.artifacts_dir.name]
    html_file = find_html_file(root, config.preferred_filename, ignore_dirs)
    html_raw = safe_read(html_file) if html_file else None
    html = strip_html_comments(html_raw) if html_raw else None

    if html_file is None:
        print(f"Warning: no .html file found under {root}")
        steps = fail_all_steps(rubric, MISSING_FILE_REASON)
    elif not html:
        print(f"Warning: could not read {html_file}")
        steps = fail_all_steps(rubric, f"Could not read HTML file at: {html_file}")
    else:
        if verbose:
            print(f"Checking {html_file}...")
        steps = evaluate_rubric(html, rubric)

    # Submission timing
    submitted_at = get_last_commit_time(root)
    if submitted_at is None:
        print("Warning: last commit time unavailable; current time used and submission counted as late.")
    submission = score_submission(
        submitted_at,
        deadline=config.deadline,
        max_score=config.submission_max,
        late_score=config.submission_late,
        now=now,
    )

    report = GradeReport(
        steps=steps,
        submission=submission,
        html_file=str(html_file) if html_file else None,
    )

    output_files = ArtifactWriter(config).save_all(report)
    if verbose:
        print_grade_summary(report)
        for name, path in output_files.items():
            print(f"  {name}: {path}")

    print(console_line(report))
    return report


def resolve_config(config_arg: str | None) -> GraderConfig:
    """
    Pick the configuration for this run.

    Raises:
        FileNotFoundError: If an explicitly requested config file is missing.
    """
    if config_arg:
        return load_config(Path(config_arg))
    # Never read configuration from the tree being graded
    return GraderConfig()


def main() -> int:
    """
    Main CLI entrypoint.

    Returns:
        Exit code (0 once grading ran, 1 for configuration errors).
    """
    arguments = docopt(__doc__)

    try:
        config = resolve_config(arguments["--config"])
        # Unknown step ids are a configuration error too
        build_lab_rubric(config.step_marks)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return 1
    except (yaml.YAMLError, ValidationError, ValueError) as e:
        print(f"Error loading config: {e}")
        return 1

    run_grading_pipeline(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
