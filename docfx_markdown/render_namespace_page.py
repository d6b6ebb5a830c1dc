"""Logic for rendering namespace overview pages."""

from docfx_markdown.entity import Entity
from docfx_markdown.entity_kind import NAMESPACE_SECTIONS
from docfx_markdown.escaping import html_escape
from docfx_markdown.frontmatter import front_matter
from docfx_markdown.page_context import PageContext


def render_namespace_page(namespace: Entity, ctx: PageContext) -> str:
    """Render a namespace landing page listing its types by kind."""
    name = namespace.name
    parts = front_matter(
        [
            ("title", f"Namespace {name}"),
            ("sidebar_label", name),
        ]
    )
    parts.append(f"# Namespace {html_escape(name)}")

    for kind, header in NAMESPACE_SECTIONS:
        # Types without a comment id get no page of their own.
        matches = [
            t for t in ctx.store.by_namespace(name, kind) if t.comment_id is not None
        ]
        if not matches:
            continue
        parts.append(f"## {header}")
        for t in sorted(matches, key=lambda x: (x.name.lower(), x.name)):
            parts.append(f"### {ctx.link(t.uid, name_only=True)}")
            summ = ctx.text(t.summary)
            if summ:
                parts.append(summ)
            parts.append("")

    return "\n".join(parts).rstrip() + "\n"
