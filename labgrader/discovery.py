"""
Locate and read the student's HTML file.
"""

from pathlib import Path

from .config import HTML_SUFFIX


def find_html_file(root: Path, preferred: str, ignore_dirs: list[str]) -> Path | None:
    """
    Find the markup file to grade.

    Prefers ``root/preferred``. Otherwise walks the tree depth-first with
    entries sorted by name, checking a directory's files before its
    subdirectories, and returns the first ``.html`` file.

    Args:
        root: Directory to search.
        preferred: Filename checked first, directly under root.
        ignore_dirs: Directory names that are never entered.

    Returns:
        Path to the markup file, or None if there is none.
    """
    preferred_path = root / preferred
    if preferred_path.is_file():
        return preferred_path

    skipped = set(ignore_dirs)
    stack = [root]

    while stack:
        directory = stack.pop()
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError:
            continue

        subdirs: list[Path] = []
        for entry in entries:
            if entry.is_dir():
                if entry.name not in skipped:
                    subdirs.append(entry)
            elif entry.is_file() and entry.name.lower().endswith(HTML_SUFFIX):
                return entry

        # Reversed so the alphabetically first subdirectory is popped next
        stack.extend(reversed(subdirs))

    return None


def safe_read(file_path: Path) -> str | None:
    """Read a text file, returning None if it cannot be read.

    Bytes that are not valid UTF-8 become U+FFFD instead of failing the read.
    """
    try:
        return file_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
