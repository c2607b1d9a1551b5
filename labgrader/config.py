"""
Configuration constants for the Lab Autograder.
"""

from datetime import datetime
from pathlib import Path


# Deadline (Asia/Riyadh, UTC+03:00)
DEADLINE_ISO: str = "2026-01-21T23:59:00+03:00"
DEADLINE: datetime = datetime.fromisoformat(DEADLINE_ISO)

# Submission marks policy
SUBMISSION_MAX: float = 20
SUBMISSION_LATE: float = 10

# Input discovery
PREFERRED_FILENAME: str = "index.html"
HTML_SUFFIX: str = ".html"
IGNORE_DIRS: list[str] = ["node_modules", ".git"]

# Outputs
DEFAULT_ARTIFACTS_DIR: Path = Path("artifacts")
FEEDBACK_DIRNAME: str = "feedback"
FEEDBACK_FILENAME: str = "README.md"
GRADE_CSV_FILENAME: str = "grade.csv"
GRADE_JSON_FILENAME: str = "grade.json"
CSV_STUDENT_ID: str = "all_students"
STEP_SUMMARY_ENV: str = "GITHUB_STEP_SUMMARY"

# Report titles
ASSIGNMENT_TITLE: str = "demo_2.2_social_app"
FEEDBACK_TITLE: str = "Lab 1"
