"""Logic for rendering the top-level API index page."""

from docfx_markdown.entity_kind import EntityKind
from docfx_markdown.entity_store import EntityStore
from docfx_markdown.frontmatter import front_matter
from docfx_markdown.link_mode import LinkMode
from docfx_markdown.linker import Linker

TOOL_NAME = "docfx-markdown"


def render_index_page(
    store: EntityStore,
    linker: Linker,
    *,
    index_slug: str,
    version: str,
) -> str:
    """Render the index listing every namespace, with an attribution footer."""
    parts = front_matter(
        [
            ("title", "Index"),
            ("sidebar_label", "Index"),
            ("sidebar_position", "0"),
            ("slug", index_slug),
        ]
    )
    parts += ["# API Index", "## Namespaces"]
    namespaces = sorted(
        (ns for ns in store.of_kind(EntityKind.NAMESPACE) if ns.comment_id is not None),
        key=lambda ns: ns.name,
    )
    parts.extend(f"* {linker.link(ns.uid, LinkMode.INDEX)}" for ns in namespaces)
    parts += ["", "---", f"Generated using {TOOL_NAME} v{version}."]
    return "\n".join(parts) + "\n"
