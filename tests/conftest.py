"""Shared fixtures for the autograder tests."""

from datetime import datetime

import pytest

from labgrader.config_loader import GraderConfig
from labgrader.timing import parse_timestamp

FULL_MARKS_HTML = """<!DOCTYPE html>
<html>
<head><title>Social App</title></head>
<body>
  <div class="page">
    <header>
      <h1>My Feed</h1>
      <p>Welcome back.</p>
      <nav>
        <a href="#posts">Posts</a>
        <a href="https://example.com" target="_blank">Example</a>
      </nav>
    </header>
    <div class="post">
      <h4>Sara</h4>
      <p>First post!</p>
    </div>
    <form action="#" method="post">
      <label for="name">Name</label>
      <input id="name" name="name" type="text" placeholder="Your name" required>
      <label for="msg">Message</label>
      <textarea id="msg" name="msg" placeholder="Say hi"></textarea>
      <button type="submit">Send</button>
    </form>
  </div>
</body>
</html>
"""

DEADLINE = parse_timestamp("2026-01-21T23:59:00+03:00")


@pytest.fixture
def full_marks_html() -> str:
    return FULL_MARKS_HTML


@pytest.fixture
def grader_config(tmp_path) -> GraderConfig:
    return GraderConfig(root_dir=tmp_path, deadline=DEADLINE)


@pytest.fixture
def on_time_commit(monkeypatch):
    """Pretend the last commit landed an hour before the deadline."""
    commit = datetime.fromisoformat("2026-01-21T22:59:00+03:00")
    monkeypatch.setattr("main.get_last_commit_time", lambda cwd: commit)
    return commit


@pytest.fixture
def no_git(monkeypatch):
    monkeypatch.setattr("main.get_last_commit_time", lambda cwd: None)


@pytest.fixture(autouse=True)
def no_step_summary(monkeypatch):
    monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)
