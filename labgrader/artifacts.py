"""
Artifact writer for grading outputs.

Saves the grade CSV, the feedback document, and the JSON grade record
to the artifacts folder, and appends the CI step summary when a sink
is configured.
"""

import os
import tempfile
from pathlib import Path

from .config import FEEDBACK_DIRNAME, FEEDBACK_FILENAME, GRADE_CSV_FILENAME, GRADE_JSON_FILENAME
from .config_loader import GraderConfig
from .models import GradeReport
from .report import build_feedback, build_grade_csv, build_summary


def write_atomic(path: Path, content: str) -> None:
    """
    Write content to path through a temporary file in the same directory.

    The target either keeps its previous content or receives the whole
    new content; a failed write never leaves a partial file behind.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class ArtifactWriter:
    """
    Writes every output of a grading run.
    """

    def __init__(self, config: GraderConfig) -> None:
        """
        Initialize the artifact writer.

        Args:
            config: Grader configuration; output_dir decides where files go.
        """
        self.config = config
        self.output_dir = config.output_dir

    @property
    def feedback_path(self) -> Path:
        return self.output_dir / FEEDBACK_DIRNAME / FEEDBACK_FILENAME

    def save_all(self, report: GradeReport) -> dict[str, Path]:
        """
        Save all outputs for a report.

        Creates:
        - grade.csv with the single score record
        - feedback/README.md for the student
        - grade.json with the full report
        - the CI summary, appended if the sink variable is set

        Args:
            report: Completed grade report.

        Each file is written on its own; one failing write is reported
        and the others still go ahead.

        Returns:
            Dictionary of output file paths that were written.
        """
        outputs = [
            ("grade_csv", self.output_dir / GRADE_CSV_FILENAME, build_grade_csv(report)),
            ("feedback", self.feedback_path, build_feedback(report, self.config)),
            ("grade_json", self.output_dir / GRADE_JSON_FILENAME, report.model_dump_json(indent=2)),
        ]

        output_files: dict[str, Path] = {}
        for name, path, content in outputs:
            try:
                write_atomic(path, content)
            except OSError as e:
                print(f"  Warning: Failed to write {path}: {e}")
                continue
            output_files[name] = path

        try:
            summary_path = self.append_step_summary(report)
        except OSError as e:
            print(f"  Warning: Failed to append step summary: {e}")
            summary_path = None
        if summary_path is not None:
            output_files["step_summary"] = summary_path

        return output_files

    def append_step_summary(self, report: GradeReport) -> Path | None:
        """
        Append the CI summary to the file named by the sink variable.

        Returns:
            The sink path, or None when the variable is unset or empty.
        """
        sink = os.environ.get(self.config.step_summary_env)
        if not sink:
            return None

        summary_path = Path(sink)
        with open(summary_path, "a", encoding="utf-8") as f:
            f.write(build_summary(report, self.config))
        return summary_path
