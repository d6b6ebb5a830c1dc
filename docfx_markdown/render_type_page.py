"""Logic for rendering type detail pages."""

from collections.abc import Callable

from docfx_markdown.entity import Entity, SourceLocation
from docfx_markdown.entity_kind import EntityKind
from docfx_markdown.escaping import html_escape
from docfx_markdown.frontmatter import (
    DEFAULT_DESCRIPTION_LENGTH,
    front_matter,
    frontmatter_safe,
)
from docfx_markdown.inherited_members import inherited_members
from docfx_markdown.md_codeblock import md_codeblock
from docfx_markdown.md_table import md_cell, md_table
from docfx_markdown.page_context import PageContext

DECLARATION_LANG = "csharp"
# Relationship lists longer than this are wrapped in a collapsible block.
COLLAPSE_THRESHOLD = 8

MemberRenderer = Callable[[Entity, PageContext, Entity | None], list[str]]


def render_type_page(
    item: Entity,
    ctx: PageContext,
    *,
    description_length: int = DEFAULT_DESCRIPTION_LENGTH,
) -> str:
    """Render a type page (class, struct, etc.) in Markdown."""
    summary = ctx.text(item.summary)
    description = frontmatter_safe(summary, description_length)
    parts = front_matter(
        [
            ("title", f"{item.kind.value} {item.name}"),
            ("sidebar_label", item.name),
            ("description", f'"{description}"' if description else None),
        ]
    )
    parts.append(f"# {item.kind.value} {html_escape(item.name)}")
    if summary:
        parts.append(summary)
    parts.append("")

    if item.assemblies:
        parts.append(f"###### **Assembly**: {item.assemblies[0]}.dll")
    parts.extend(_render_declaration(item))

    parts.extend(_render_type_inheritance(item, ctx))
    parts.extend(_render_relation("Derived", item.derived_uids, ctx))
    parts.extend(_render_relation("Implements", item.implements, ctx))

    store = ctx.store
    parts.extend(
        _render_section(
            "Properties",
            store.children_of(item.uid, EntityKind.PROPERTY),
            ctx,
            _render_member_intro,
        )
    )
    parts.extend(
        _render_inherited_section(
            "Inherited Properties", item, EntityKind.PROPERTY, ctx, _render_member_intro
        )
    )
    parts.extend(
        _render_section(
            "Fields",
            store.children_of(item.uid, EntityKind.FIELD),
            ctx,
            _render_member_intro,
        )
    )
    parts.extend(
        _render_section(
            "Methods",
            store.children_of(item.uid, EntityKind.METHOD),
            ctx,
            _render_method,
        )
    )
    parts.extend(
        _render_inherited_section(
            "Inherited Methods", item, EntityKind.METHOD, ctx, _render_method
        )
    )
    parts.extend(
        _render_section(
            "Events",
            store.children_of(item.uid, EntityKind.EVENT),
            ctx,
            _render_event,
        )
    )

    parts.extend(_render_type_implements(item, ctx))
    parts.extend(_render_type_extension_methods(item, ctx))

    return "\n".join(parts).rstrip() + "\n"


def source_link(source: SourceLocation | None) -> str | None:
    """Return the "View Source" heading line for ``source``."""
    if source is None:
        return None
    return (
        f"###### [View Source]({source.repo_url}/blob/{source.branch}/"
        f"{source.path}#L{source.start_line + 1})"
    )


def _render_declaration(item: Entity) -> list[str]:
    """Render the source link and the declaration block."""
    parts = []
    link = source_link(item.source)
    if link:
        parts.append(link)
    if item.declaration is not None:
        parts.append(
            md_codeblock(DECLARATION_LANG, item.declaration, title="Declaration")
        )
    parts.append("")
    return parts


def _render_type_inheritance(item: Entity, ctx: PageContext) -> list[str]:
    """Render the inheritance chain, unless it is only the root type."""
    if len(item.inheritance) <= 1:
        return []
    chain = " -> ".join(ctx.link(uid) for uid in item.inheritance)
    return [f"**Inheritance:** {chain}", ""]


def _render_relation(label: str, uids: tuple[str, ...], ctx: PageContext) -> list[str]:
    """Render a comma separated relationship list, collapsed when long."""
    if not uids:
        return []
    collapsed = len(uids) > COLLAPSE_THRESHOLD
    parts = [f"**{label}:**  "]
    if collapsed:
        parts += ["", "<details>", "<summary>Expand</summary>", ""]
    parts.append(", ".join(ctx.link(uid) for uid in uids))
    if collapsed:
        parts += ["", "</details>"]
    parts.append("")
    return parts


def _render_section(
    title: str,
    members: list[Entity],
    ctx: PageContext,
    render_member: MemberRenderer,
    inherited_from: Entity | None = None,
) -> list[str]:
    """Render a member section; nothing when there are no members."""
    if not members:
        return []
    parts = [f"## {title}"]
    for member in members:
        parts.extend(render_member(member, ctx, inherited_from))
    return parts


def _render_inherited_section(
    title: str,
    item: Entity,
    kind: EntityKind,
    ctx: PageContext,
    render_member: MemberRenderer,
) -> list[str]:
    """Render members surfaced from the immediate base type."""
    base, members = inherited_members(item, ctx.store, kind)
    return _render_section(title, members, ctx, render_member, base)


def _render_member_intro(
    member: Entity,
    ctx: PageContext,
    inherited_from: Entity | None = None,
) -> list[str]:
    """Render a member heading, summary and declaration."""
    parts = [f"### {html_escape(member.name)}"]
    if inherited_from is not None:
        parts.append(f"*Inherited from {ctx.link(inherited_from.uid)}*")
        parts.append("")
    summary = ctx.text(member.summary)
    if summary:
        parts.append(summary)
        parts.append("")
    parts.extend(_render_declaration(member))
    return parts


def _render_method(
    method: Entity,
    ctx: PageContext,
    inherited_from: Entity | None = None,
) -> list[str]:
    """Render a method with its returns, parameters, type parameters and exceptions."""
    parts = _render_member_intro(method, ctx, inherited_from)
    parts.extend(_render_member_returns(method, ctx))
    parts.extend(_render_member_params(method, ctx))
    parts.extend(_render_member_type_params(method, ctx))
    parts.extend(_render_member_exceptions(method, ctx))
    return parts


def _render_event(
    event: Entity,
    ctx: PageContext,
    inherited_from: Entity | None = None,
) -> list[str]:
    """Render an event and its handler type."""
    parts = _render_member_intro(event, ctx, inherited_from)
    if event.return_type:
        parts.append("##### Event Type")
        parts.append("")
        parts.append(
            _typed_description(event.return_type, event.return_description, ctx)
        )
        parts.append("")
    return parts


def _typed_description(type_ref: str, description: str | None, ctx: PageContext) -> str:
    link = ctx.link(type_ref).strip()
    desc = ctx.text(description)
    return f"{link}: {desc}" if desc else link


def _render_member_returns(method: Entity, ctx: PageContext) -> list[str]:
    """Render the return value section."""
    if not method.return_type or not method.return_type.strip():
        return []
    return [
        "##### Returns",
        "",
        _typed_description(method.return_type, method.return_description, ctx),
        "",
    ]


def _render_member_params(method: Entity, ctx: PageContext) -> list[str]:
    """Render the parameters table; the Description column only when used."""
    params = method.parameters
    if not params:
        return []
    parts = ["##### Parameters", ""]
    if any(p.description and p.description.strip() for p in params):
        rows = [
            [ctx.link(p.type_ref), f"*{p.id}*", md_cell(ctx.text(p.description))]
            for p in params
        ]
        parts.extend(md_table(["Type", "Name", "Description"], rows))
    else:
        rows = [[ctx.link(p.type_ref), f"*{p.id}*"] for p in params]
        parts.extend(md_table(["Type", "Name"], rows))
    parts.append("")
    return parts


def _render_member_type_params(method: Entity, ctx: PageContext) -> list[str]:
    """Render type parameters as a table when described, else as a list."""
    type_params = method.type_parameters
    if not type_params:
        return []
    parts = ["##### Type Parameters", ""]
    if any(tp.description and tp.description.strip() for tp in type_params):
        rows = [
            [ctx.link(tp.id), md_cell(ctx.text(tp.description))] for tp in type_params
        ]
        parts.extend(md_table(["Name", "Description"], rows))
    else:
        parts.extend(f"* {ctx.link(tp.id)}" for tp in type_params)
    parts.append("")
    return parts


def _render_member_exceptions(method: Entity, ctx: PageContext) -> list[str]:
    """Render thrown exceptions."""
    if not method.exceptions:
        return []
    parts = ["##### Exceptions", ""]
    for exc in method.exceptions:
        # Trailing spaces force a line break before the description.
        parts.append(f"{ctx.link(exc.type_ref)}  ")
        desc = ctx.text(exc.description)
        if desc:
            parts.append(desc)
        parts.append("")
    return parts


def _render_type_implements(item: Entity, ctx: PageContext) -> list[str]:
    """Render the bulleted list of implemented interfaces."""
    if not item.implements:
        return []
    parts = ["## Implements", ""]
    parts.extend(f"* {ctx.link(uid)}" for uid in item.implements)
    parts.append("")
    return parts


def _render_type_extension_methods(item: Entity, ctx: PageContext) -> list[str]:
    """Render extension methods, linked when the declaring method is known."""
    if not item.extension_methods:
        return []
    parts = ["## Extension Methods"]
    for signature in item.extension_methods:
        method = ctx.store.find_extension_method(signature)
        if method is None:
            text = html_escape(signature).replace("{", "&#123;").replace("}", "&#125;")
            parts.append(f"* {text}")
        else:
            parts.append(f"* {ctx.link(method.uid)}")
    parts.append("")
    return parts
