"""Front matter blocks and values safe to embed in them."""

import re

DEFAULT_DESCRIPTION_LENGTH = 150
ELLIPSIS = "..."

_TAG_RE = re.compile(r"<[^>]*>")
_MD_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_WHITESPACE_RUN_RE = re.compile(r"\s*\n\s*")


def frontmatter_safe(
    text: str | None, max_length: int = DEFAULT_DESCRIPTION_LENGTH
) -> str | None:
    """Squash rendered text into a double-quoted YAML scalar body.

    Tags are removed, Markdown links keep only their text, newlines become
    spaces and the result is cut to ``max_length`` characters before
    backslashes, quotes and colons are escaped.
    """
    if text is None:
        return None
    text = _TAG_RE.sub("", text)
    text = _MD_LINK_RE.sub(r"\1", text)
    text = _WHITESPACE_RUN_RE.sub(" ", text).strip()
    if len(text) > max_length:
        text = text[:max_length].rstrip() + ELLIPSIS
    return text.replace("\\", "\\\\").replace('"', '\\"').replace(":", "\\x3A")


def front_matter(fields: list[tuple[str, str | None]]) -> list[str]:
    """Lines of a ``---`` delimited block; fields whose value is None are left out."""
    lines = ["---"]
    lines.extend(f"{key}: {value}" for key, value in fields if value is not None)
    lines.append("---")
    return lines
