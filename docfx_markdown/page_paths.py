"""Where pages live, shared by link targets and output files."""

from pathlib import Path

from docfx_markdown.entity import Entity
from docfx_markdown.entity_kind import kind_subdir
from docfx_markdown.escaping import sanitized_file_name
from docfx_markdown.grouping_policy import GroupingPolicy

INDEX_FILE_NAME = "index.md"


def type_page_segments(item: Entity, grouping: GroupingPolicy) -> list[str]:
    """Path segments of a type page, relative to the output root, without extension."""
    segments = [item.namespace] if item.namespace else []
    if grouping.is_grouped(item.namespace):
        segments.append(kind_subdir(item.kind))
    segments.append(item.name)
    return segments


def namespace_page_segments(name: str) -> list[str]:
    """Path segments of a namespace page: ``{ns}/{ns}``."""
    return [name, name]


def _output_file(out_root: Path, segments: list[str]) -> Path:
    *dirs, name = segments
    p = out_root.joinpath(*dirs, sanitized_file_name(name) + ".md")
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def type_page_file(out_root: Path, item: Entity, grouping: GroupingPolicy) -> Path:
    """Output file for a type page; parent directories are created."""
    return _output_file(out_root, type_page_segments(item, grouping))


def namespace_page_file(out_root: Path, name: str) -> Path:
    """Output file for a namespace page; parent directories are created."""
    return _output_file(out_root, namespace_page_segments(name))


def index_page_file(out_root: Path) -> Path:
    """Output file for the index page."""
    return out_root / INDEX_FILE_NAME
