"""Tests for locating and reading the student's HTML file."""

from labgrader.discovery import find_html_file, safe_read

IGNORE = ["node_modules", ".git", "artifacts"]


def test_prefers_index_html(tmp_path):
    """index.html at the root wins over everything else."""
    (tmp_path / "a.html").write_text("<p>a</p>")
    (tmp_path / "index.html").write_text("<p>index</p>")

    assert find_html_file(tmp_path, "index.html", IGNORE) == tmp_path / "index.html"


def test_walk_returns_first_file_by_name(tmp_path):
    """Without index.html, files are taken in name order."""
    (tmp_path / "b.html").write_text("")
    (tmp_path / "a.HTML").write_text("")
    (tmp_path / "notes.txt").write_text("")

    assert find_html_file(tmp_path, "index.html", IGNORE) == tmp_path / "a.HTML"


def test_walk_checks_files_before_subdirectories(tmp_path):
    """A file in a directory beats anything nested deeper."""
    (tmp_path / "aaa").mkdir()
    (tmp_path / "aaa" / "nested.html").write_text("")
    (tmp_path / "zzz.html").write_text("")

    assert find_html_file(tmp_path, "index.html", IGNORE) == tmp_path / "zzz.html"


def test_walk_descends_in_name_order(tmp_path):
    """Subdirectories are searched alphabetically, depth-first."""
    for name in ["src", "docs"]:
        (tmp_path / name).mkdir()
        (tmp_path / name / "page.html").write_text("")
    (tmp_path / "docs" / "deep").mkdir()
    (tmp_path / "docs" / "deep" / "a.html").write_text("")

    assert find_html_file(tmp_path, "index.html", IGNORE) == tmp_path / "docs" / "page.html"


def test_walk_skips_ignored_directories(tmp_path):
    """Dependency, VCS, and output folders are never searched."""
    for name in IGNORE:
        (tmp_path / name).mkdir()
        (tmp_path / name / "index.html").write_text("")

    assert find_html_file(tmp_path, "index.html", IGNORE) is None

    (tmp_path / "site").mkdir()
    (tmp_path / "site" / "home.html").write_text("")
    assert find_html_file(tmp_path, "index.html", IGNORE) == tmp_path / "site" / "home.html"


def test_no_html_file(tmp_path):
    """An empty tree has nothing to grade."""
    assert find_html_file(tmp_path, "index.html", IGNORE) is None


def test_safe_read(tmp_path):
    """Readable text comes back, missing files and directories give None."""
    page = tmp_path / "index.html"
    page.write_text("<p>hi</p>", encoding="utf-8")
    assert safe_read(page) == "<p>hi</p>"

    assert safe_read(tmp_path / "missing.html") is None

    folder = tmp_path / "pages.html"
    folder.mkdir()
    assert safe_read(folder) is None


def test_safe_read_replaces_invalid_utf8(tmp_path):
    """Non-UTF-8 bytes are replaced, the rest of the page is kept."""
    page = tmp_path / "index.html"
    page.write_bytes("<h1>Café</h1>".encode("latin-1"))
    assert safe_read(page) == "<h1>Caf\ufffd</h1>"
