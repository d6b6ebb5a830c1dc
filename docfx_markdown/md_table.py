"""Utility for generating Markdown tables."""

import re

_WHITESPACE_RE = re.compile(r"\s*\n\s*")


def md_cell(text: str | None) -> str:
    """Make ``text`` fit on one table row."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text.strip()).replace("|", "\\|")


def md_table(headers: list[str], rows: list[list[str]]) -> list[str]:
    """Generate the lines of a left-aligned Markdown table."""
    if not rows:
        return []
    out = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join([":--- "] * len(headers)) + "|",
    ]
    out.extend("| " + " | ".join(r) + " |" for r in rows)
    return out
