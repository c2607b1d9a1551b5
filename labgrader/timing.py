"""
Deadline-based submission scoring.

The submission time comes from the last commit in the working tree.
When it cannot be determined, the wall clock is recorded instead and the
submission is treated as late.
"""

import subprocess
from datetime import datetime, timezone
from pathlib import Path

from .models import SubmissionTiming

GIT_LOG_ARGS: list[str] = ["git", "log", "-1", "--format=%cI"]


def parse_timestamp(value: str) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Returns None for empty or unparseable text and for naive timestamps.
    """
    value = value.strip()
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def get_last_commit_time(cwd: Path) -> datetime | None:
    """
    Get the committer time of the most recent commit.

    Args:
        cwd: Directory inside the student's working tree.

    Returns:
        Commit time, or None if git is unavailable or there is no history.
    """
    try:
        result = subprocess.run(
            GIT_LOG_ARGS,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return None

    if result.returncode != 0:
        return None
    return parse_timestamp(result.stdout)


def score_submission(
    submitted_at: datetime | None,
    deadline: datetime,
    max_score: float,
    late_score: float,
    now: datetime | None = None,
) -> SubmissionTiming:
    """
    Score submission timeliness against the deadline.

    Args:
        submitted_at: Submission time, or None if it could not be determined.
        deadline: Timezone-aware deadline.
        max_score: Marks for a submission at or before the deadline.
        late_score: Marks for a late submission.
        now: Clock time recorded when submitted_at is unknown.

    Returns:
        SubmissionTiming. An unknown submission time is always late.
    """
    if submitted_at is None:
        return SubmissionTiming(
            submitted_at=now or datetime.now(timezone.utc),
            source="clock",
            deadline=deadline,
            is_late=True,
            score=late_score,
            max_score=max_score,
        )

    is_late = submitted_at > deadline
    return SubmissionTiming(
        submitted_at=submitted_at,
        source="git",
        deadline=deadline,
        is_late=is_late,
        score=late_score if is_late else max_score,
        max_score=max_score,
    )
