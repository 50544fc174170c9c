"""Markup cleanup for chat message text.

Normalization is best-effort: unbalanced markers are left alone and the
rules never raise.
"""

import re

# Applied in order; later rules assume earlier ones ran.
_CLEANUP_RULES = [
    (re.compile(r"```\w*\n?"), ""),  # fenced code block delimiters
    (re.compile(r"`([^`]+)`"), r"\1"),  # inline code
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),  # bold
    (re.compile(r"\*([^*]+)\*"), r"\1"),  # italic
    (re.compile(r"\n{3,}"), "\n\n"),
]

# Paragraph breaks survive as a blank line; every other whitespace run
# becomes one space.
_WHITESPACE_RUN = re.compile(r"\s+")

_FENCE_LANGUAGE = re.compile(r"```(\w+)")


def _collapse_whitespace(match):
    return "\n\n" if match.group(0).count("\n") >= 2 else " "


def _clean_once(text):
    text = text.replace("\r\n", "\n")
    for pattern, replacement in _CLEANUP_RULES:
        text = pattern.sub(replacement, text)
    return _WHITESPACE_RUN.sub(_collapse_whitespace, text.strip())


def clean_text(text):
    """Strip markdown artifacts and collapse whitespace.

    Nested markers such as doubled backticks only lose one layer per pass, so the
    rules are reapplied until the text stops changing. Every pass either
    shortens the text or leaves it as is, which bounds the loop.

    Returns an empty string for empty or None input.
    """
    if not text:
        return ""
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def first_code_language(text):
    """Return the language tag of the first fenced code block, or ''."""
    if not text:
        return ""
    match = _FENCE_LANGUAGE.search(text)
    return match.group(1) if match else ""
