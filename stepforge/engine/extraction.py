"""Pull quoted literals out of natural-language step text.

Every extractor is total: when the sentence carries no matching literal the
documented fallback is returned instead. Only the first qualifying
occurrence is considered and matching ignores case.
"""
from __future__ import annotations

import re

_ELEMENT_RE = re.compile(r'click\s+"([^"]+)"', re.IGNORECASE)
_VALUE_RE = re.compile(r'"([^"]+)"')
_FIELD_RE = re.compile(r'(?:in|into)\s+"([^"]+)"', re.IGNORECASE)
_EXPECTED_TEXT_RE = re.compile(r'see\s+"([^"]+)"', re.IGNORECASE)
_EXPECTED_CONTENT_RE = re.compile(r'contain\s+"([^"]+)"', re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


def _first(pattern: re.Pattern[str], text: str, fallback: str) -> str:
    m = pattern.search(text)
    return m.group(1) if m else fallback


def extract_element(text: str) -> str:
    """``click "X"`` → X, else ``button``."""
    return _first(_ELEMENT_RE, text, "button")


def extract_value(text: str) -> str:
    """First double-quoted literal anywhere, else ``test value``."""
    return _first(_VALUE_RE, text, "test value")


def extract_field(text: str) -> str:
    """``in "X"`` / ``into "X"`` → X, else ``input``."""
    return _first(_FIELD_RE, text, "input")


def extract_expected_text(text: str) -> str:
    """``see "X"`` → X, else ``text``."""
    return _first(_EXPECTED_TEXT_RE, text, "text")


def extract_expected_content(text: str) -> str:
    """``contain "X"`` → X, else ``content``."""
    return _first(_EXPECTED_CONTENT_RE, text, "content")


def to_test_id(literal: str, suffix: str = "") -> str:
    """Selector attribute value for a literal: lower-case, whitespace → hyphen, then suffix.

    Must stay in sync with the markup convention of the application under
    test (``"Save Project"`` + ``-btn`` → ``save-project-btn``).
    """
    return _WHITESPACE_RE.sub("-", literal.lower()) + suffix
