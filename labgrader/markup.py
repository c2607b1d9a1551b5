"""
Surface-level tag and attribute matching for student markup.

These helpers use regular expressions, not an HTML parser. Nested
structure is approximated: "a div containing an h1" means a div opening
followed somewhere later by an h1 opening, which can match across
unrelated siblings. That looseness is part of the grading behavior.
"""

import re

COMMENT_PATTERN = re.compile(r"<!--[\s\S]*?-->")

INTERNAL_LINK_PATTERN = re.compile(r"""<a\b[^>]*\bhref\s*=\s*["']#[^"']+["']""", re.IGNORECASE)
EXTERNAL_LINK_PATTERN = re.compile(r"""<a\b[^>]*\bhref\s*=\s*["']https?://[^"']+["']""", re.IGNORECASE)
TARGET_BLANK_PATTERN = re.compile(r"""<a\b[^>]*\btarget\s*=\s*["']_blank["']""", re.IGNORECASE)
LABEL_FOR_PATTERN = re.compile(r"""<label\b[^>]*\bfor\s*=\s*["']([^"']+)["'][^>]*>""", re.IGNORECASE)
FIELD_ID_PATTERN = re.compile(r"""<(?:input|textarea)\b[^>]*\bid\s*=\s*["']([^"']+)["'][^>]*>""", re.IGNORECASE)
REQUIRED_PATTERN = re.compile(r"\brequired\b", re.IGNORECASE)
DIV_BEFORE_H1_PATTERN = re.compile(r"<div\b[^>]*>[\s\S]*?<h1\b", re.IGNORECASE)


def strip_html_comments(html: str) -> str:
    """
    Remove every ``<!-- ... -->`` region, including multi-line ones.

    An unterminated ``<!--`` has no closing marker to match and is left
    in place.
    """
    return COMMENT_PATTERN.sub("", html)


def _tag_pattern(tag_name: str) -> re.Pattern[str]:
    return re.compile(rf"<\s*{re.escape(tag_name)}\b", re.IGNORECASE)


def has_tag(html: str, tag_name: str) -> bool:
    return _tag_pattern(tag_name).search(html) is not None


def count_tag(html: str, tag_name: str) -> int:
    return len(_tag_pattern(tag_name).findall(html))


def attr_exists_on_tag(html: str, tag_name: str, attr_name: str) -> bool:
    """True if some ``tag_name`` opening carries ``attr_name`` with a quoted value."""
    pattern = rf"""<\s*{re.escape(tag_name)}\b[^>]*\b{re.escape(attr_name)}\s*=\s*["'][^"']*["']"""
    return re.search(pattern, html, re.IGNORECASE) is not None


def has_attr_value_on_tag(html: str, tag_name: str, attr_name: str, attr_value: str) -> bool:
    """True if some ``tag_name`` opening has ``attr_name`` quoted as exactly ``attr_value``."""
    pattern = (
        rf"""<\s*{re.escape(tag_name)}\b[^>]*\b{re.escape(attr_name)}\s*=\s*"""
        rf"""["']{re.escape(str(attr_value))}["']"""
    )
    return re.search(pattern, html, re.IGNORECASE) is not None


def any_required_attribute(html: str) -> bool:
    return REQUIRED_PATTERN.search(html) is not None


def has_internal_link(html: str) -> bool:
    return INTERNAL_LINK_PATTERN.search(html) is not None


def has_external_link(html: str) -> bool:
    return EXTERNAL_LINK_PATTERN.search(html) is not None


def has_target_blank_on_anchor(html: str) -> bool:
    return TARGET_BLANK_PATTERN.search(html) is not None


def has_submit_button(html: str) -> bool:
    return has_attr_value_on_tag(html, "button", "type", "submit") or has_attr_value_on_tag(
        html, "input", "type", "submit"
    )


def has_for_id_match(html: str) -> bool:
    """
    Check that at least one label points at a field.

    Collects every label ``for`` value and every input/textarea ``id``
    value and succeeds if the two sets share a member. Labels and fields
    are not paired by position.
    """
    label_targets = set(LABEL_FOR_PATTERN.findall(html))
    if not label_targets:
        return False

    field_ids = set(FIELD_ID_PATTERN.findall(html))
    return not label_targets.isdisjoint(field_ids)


def header_wrapped_light(html: str) -> bool:
    """A ``<header>`` tag, or any ``<div>`` opening followed later by an ``<h1>``."""
    if has_tag(html, "header"):
        return True
    return DIV_BEFORE_H1_PATTERN.search(html) is not None
