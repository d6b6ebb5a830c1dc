"""Escaping helpers for Markdown link text, link targets and file names."""


def html_escape(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for display text."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def file_escape(target: str) -> str:
    """Make a link target safe: generic brackets become backticks, spaces %20."""
    return target.replace("<", "`").replace(">", "`").replace(" ", "%20")


def sanitized_file_name(name: str) -> str:
    """File name (without extension) for a type page."""
    return name.replace("<", "`").replace(">", "`")


def code_literal(uid: str) -> str:
    """Inline-code rendering of an unresolved uid, ``{T}`` shown as ``<T>``."""
    return "`" + uid.replace("{", "<").replace("}", ">") + "`"
