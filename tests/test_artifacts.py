"""Tests for writing grading outputs."""

import stat
from datetime import datetime

import pytest

from labgrader import artifacts
from labgrader.artifacts import ArtifactWriter, write_atomic
from labgrader.config_loader import GraderConfig
from labgrader.models import GradeReport, StepResult, SubmissionTiming

DEADLINE = datetime.fromisoformat("2026-01-21T23:59:00+03:00")


@pytest.fixture
def report() -> GradeReport:
    submission = SubmissionTiming(submitted_at=DEADLINE, deadline=DEADLINE, is_late=False, score=20, max_score=20)
    steps = [StepResult(id="step2", name="Step 2: Main Page Container", max_marks=15, score=15)]
    return GradeReport(steps=steps, submission=submission, html_file="index.html")


def test_write_atomic_replaces_content(tmp_path):
    """The target gets the full new content and no temp files remain."""
    target = tmp_path / "out" / "grade.csv"
    write_atomic(target, "old\n")
    write_atomic(target, "new\n")

    assert target.read_text() == "new\n"
    assert [p.name for p in target.parent.iterdir()] == ["grade.csv"]


def test_write_atomic_keeps_old_content_on_failure(tmp_path, monkeypatch):
    """A failed replace leaves the previous file untouched."""
    target = tmp_path / "grade.csv"
    target.write_text("old\n")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(artifacts.os, "replace", broken_replace)

    with pytest.raises(OSError):
        write_atomic(target, "new\n")
    assert target.read_text() == "old\n"
    assert [p.name for p in tmp_path.iterdir()] == ["grade.csv"]


def test_save_all_writes_every_output(tmp_path, report):
    """CSV, feedback, and JSON land under the artifacts folder."""
    config = GraderConfig(root_dir=tmp_path)
    files = ArtifactWriter(config).save_all(report)

    assert set(files) == {"grade_csv", "feedback", "grade_json"}
    assert (tmp_path / "artifacts" / "grade.csv").read_text() == "student,score,max_score\nall_students,35,35\n"
    assert (tmp_path / "artifacts" / "feedback" / "README.md").read_text(encoding="utf-8").startswith("# Lab 1")
    restored = GradeReport.model_validate_json((tmp_path / "artifacts" / "grade.json").read_text())
    assert restored.steps == report.steps


def test_save_all_appends_step_summary(tmp_path, report, monkeypatch):
    """The CI summary is appended, not overwritten."""
    sink = tmp_path / "summary.md"
    sink.write_text("previous step\n")
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(sink))

    files = ArtifactWriter(GraderConfig(root_dir=tmp_path)).save_all(report)

    assert files["step_summary"] == sink
    content = sink.read_text(encoding="utf-8")
    assert content.startswith("previous step\n# demo_2.2_social_app – Autograding Summary")


def test_save_all_continues_after_a_failed_write(tmp_path, report, monkeypatch):
    """One failing output does not stop the others."""
    real_write = artifacts.write_atomic

    def flaky_write(path, content):
        if path.name == "README.md":
            raise OSError("permission denied")
        real_write(path, content)

    monkeypatch.setattr(artifacts, "write_atomic", flaky_write)

    files = ArtifactWriter(GraderConfig(root_dir=tmp_path)).save_all(report)

    assert "feedback" not in files
    assert (tmp_path / "artifacts" / "grade.csv").exists()
    assert (tmp_path / "artifacts" / "grade.json").exists()


def test_write_atomic_outputs_are_world_readable(tmp_path):
    """Written artifacts are readable by other users, not owner-only."""
    target = tmp_path / "grade.csv"
    write_atomic(target, "student,score,max_score\n")

    assert stat.S_IMODE(target.stat().st_mode) == 0o644
