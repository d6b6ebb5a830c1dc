"""Loading of DocFX ManagedReference YAML files."""

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from docfx_markdown.errors import DocGenError

YAML_MIME_PREFIX = "### YamlMime:"

# Unquoted "name.vb: =" values confuse PyYAML.
_VB_EQUALS_RE = re.compile(r"^(\s*[\w\.]+\.vb:\s+)(=$)", re.MULTILINE)


def strip_yaml_mime_header(text: str) -> str:
    """Remove the DocFX ``### YamlMime:`` header line, if present."""
    lines = text.splitlines()
    if lines and lines[0].startswith(YAML_MIME_PREFIX):
        return "\n".join(lines[1:]).lstrip("\n")
    return text


def load_metadata_file(path: Path) -> dict[str, Any]:
    """Read and parse one metadata file; an empty file yields an empty mapping."""
    raw = strip_yaml_mime_header(path.read_text(encoding="utf-8"))
    raw = _VB_EQUALS_RE.sub(r"\1'='", raw)
    try:
        doc = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {path}: {e}"
        raise DocGenError(msg) from e
    if not isinstance(doc, dict):
        return {}
    return doc


def iter_items(doc: dict[str, Any]) -> Iterable[dict[str, Any]]:
    """Yield the mapping records of ``doc["items"]``."""
    for it in doc.get("items") or []:
        if isinstance(it, dict):
            yield it
