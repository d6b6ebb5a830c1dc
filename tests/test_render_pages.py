"""Tests for type, namespace and index page rendering."""

from docfx_markdown.entity import (
    Entity,
    Parameter,
    SourceLocation,
    ThrownException,
    TypeParameter,
)
from docfx_markdown.entity_kind import EntityKind
from docfx_markdown.entity_store import EntityStore
from docfx_markdown.grouping_policy import GroupingPolicy
from docfx_markdown.link_mode import LinkMode
from docfx_markdown.linker import Linker
from docfx_markdown.page_context import PageContext
from docfx_markdown.render_index_page import render_index_page
from docfx_markdown.render_namespace_page import render_namespace_page
from docfx_markdown.render_type_page import render_type_page, source_link
from docfx_markdown.text_renderer import TextRenderer

NAMESPACE = Entity("Foo", EntityKind.NAMESPACE, "Foo", "Foo", comment_id="N:Foo")
BAR = Entity(
    "Foo.Bar",
    EntityKind.CLASS,
    "Bar",
    "Foo.Bar",
    "Foo",
    "Foo",
    child_uids=("Foo.Bar.Size", "Foo.Bar.Run(System.Int32)"),
    summary="A bar.",
    declaration="public class Bar",
    source=SourceLocation("https://github.com/example/foo", "main", "src/Bar.cs", 9),
    assemblies=("Foo",),
    inheritance=("System.Object",),
    comment_id="T:Foo.Bar",
)
SIZE = Entity(
    "Foo.Bar.Size",
    EntityKind.PROPERTY,
    "Size",
    "Foo.Bar.Size",
    "Foo",
    "Foo.Bar",
    summary="How big it is.",
    declaration="public int Size { get; }",
)
RUN = Entity(
    "Foo.Bar.Run(System.Int32)",
    EntityKind.METHOD,
    "Run(int)",
    "Foo.Bar.Run(int)",
    "Foo",
    "Foo.Bar",
    declaration="public bool Run(int times)",
    return_type="System.Boolean",
    return_description="Whether it ran.",
    parameters=(Parameter("times", "System.Int32", "How often."),),
    exceptions=(ThrownException("System.ArgumentException", "Bad input."),),
)
STOP = Entity(
    "Foo.Baz.Stop(System.Int32)",
    EntityKind.METHOD,
    "Stop(int)",
    "Foo.Baz.Stop(int)",
    "Foo",
    "Foo.Baz",
    declaration="public void Stop<T>(int code)",
    parameters=(Parameter("code", "System.Int32"),),
    type_parameters=(TypeParameter("T"),),
)
BAZ = Entity(
    "Foo.Baz",
    EntityKind.CLASS,
    "Baz",
    "Foo.Baz",
    "Foo",
    "Foo",
    child_uids=("Foo.Baz.Stop(System.Int32)",),
    declaration="public class Baz : Bar",
    inheritance=("System.Object", "Foo.Bar"),
    extension_methods=("System.Object.Foo.Ext.Describe", "Foo.Gone.Thing{T}"),
    comment_id="T:Foo.Baz",
)
EXT = Entity("Foo.Ext", EntityKind.CLASS, "Ext", "Foo.Ext", "Foo", "Foo")
DESCRIBE = Entity(
    "Foo.Ext.Describe(System.Object)",
    EntityKind.METHOD,
    "Describe(object)",
    "Foo.Ext.Describe(object)",
    "Foo",
    "Foo.Ext",
    parameters=(Parameter("self", "System.Object"),),
)
COLOR = Entity(
    "Foo.Color",
    EntityKind.ENUM,
    "Color",
    "Foo.Color",
    "Foo",
    "Foo",
    summary="Hue.",
    comment_id="T:Foo.Color",
)


def _context(entities: list[Entity], mode: LinkMode = LinkMode.NORMAL) -> PageContext:
    store = EntityStore(entities)
    linker = Linker(store, GroupingPolicy.disabled())
    return PageContext(store, linker, TextRenderer(linker), mode)


ALL = [NAMESPACE, BAR, SIZE, RUN, STOP, BAZ, EXT, DESCRIBE, COLOR]


def test_type_page_header_and_declaration() -> None:
    """The page opens with front matter, title, assembly and declaration."""
    md = render_type_page(BAR, _context(ALL))
    lines = md.splitlines()
    assert lines[:5] == [
        "---",
        "title: Class Bar",
        "sidebar_label: Bar",
        'description: "A bar."',
        "---",
    ]
    assert "# Class Bar" in lines
    assert "###### **Assembly**: Foo.dll" in lines
    assert (
        "###### [View Source](https://github.com/example/foo/blob/main/src/Bar.cs#L10)"
        in lines
    )
    assert '```csharp title="Declaration"\npublic class Bar\n```' in md
    assert "**Inheritance:**" not in md
    assert md.endswith("\n")
    assert not md.endswith("\n\n")


def test_type_page_without_members_has_no_member_sections() -> None:
    """A bare class renders no Properties, Fields or Methods headings."""
    md = render_type_page(EXT, _context([NAMESPACE, EXT]))
    assert "# Class Ext" in md
    assert "## Properties" not in md
    assert "## Fields" not in md
    assert "## Methods" not in md
    assert "description:" not in md


def test_method_with_described_parameter_uses_three_columns() -> None:
    """Parameter descriptions add a Description column."""
    md = render_type_page(BAR, _context(ALL))
    assert "## Properties" in md
    assert "### Size" in md
    assert "## Methods" in md
    assert "### Run(int)" in md
    assert "| Type | Name | Description |" in md
    assert "| `System.Int32` | *times* | How often. |" in md
    assert "##### Returns\n\n`System.Boolean`: Whether it ran." in md
    assert "##### Exceptions\n\n`System.ArgumentException`  \nBad input." in md


def test_method_without_parameter_descriptions_uses_two_columns() -> None:
    """Without descriptions the table has only Type and Name."""
    md = render_type_page(BAZ, _context(ALL))
    # Run(int) inherited from Bar has a described parameter; look at Stop only.
    own = md[md.index("## Methods") : md.index("## Inherited Methods")]
    assert "| Type | Name |" in own
    assert "| Type | Name | Description |" not in own
    assert "| `System.Int32` | *code* |" in own
    assert "##### Type Parameters\n\n* `T`" in own


def test_inheritance_and_inherited_members() -> None:
    """The chain is shown and the base type's members are surfaced."""
    md = render_type_page(BAZ, _context(ALL))
    assert "**Inheritance:** `System.Object` -> [Foo.Bar](../Foo/Bar)" in md
    assert "## Inherited Properties" in md
    assert "## Inherited Methods" in md
    assert "*Inherited from [Foo.Bar](../Foo/Bar)*" in md
    assert md.index("## Methods") < md.index("## Inherited Methods")


def test_extension_methods() -> None:
    """Known extension methods are linked, unknown ones printed escaped."""
    md = render_type_page(BAZ, _context(ALL))
    assert "## Extension Methods" in md
    assert "* [Foo.Ext.Describe(object)](../Foo/Ext#describeobject)" in md
    assert "* Foo.Gone.Thing&#123;T&#125;" in md


def test_long_relationship_lists_are_collapsed() -> None:
    """More than eight derived types are wrapped in a details block."""
    eight = tuple(f"Foo.D{i}" for i in range(8))
    few = Entity("Foo.A", EntityKind.CLASS, "A", "Foo.A", "Foo", derived_uids=eight)
    many = Entity(
        "Foo.A", EntityKind.CLASS, "A", "Foo.A", "Foo", derived_uids=(*eight, "Foo.D8")
    )
    assert "<details>" not in render_type_page(few, _context([few]))
    md = render_type_page(many, _context([many]))
    assert "**Derived:**  " in md
    assert "<details>\n<summary>Expand</summary>" in md
    assert "`Foo.D8`" in md


def test_grouped_type_page_links_two_levels_up() -> None:
    """Links on grouped pages climb out of the kind directory too."""
    md = render_type_page(BAZ, _context(ALL, LinkMode.GROUPED_TYPE))
    assert "[Foo.Bar](../../Foo/Bar)" in md


def test_type_page_rendering_is_idempotent() -> None:
    """Rendering twice yields identical Markdown."""
    ctx = _context(ALL)
    assert render_type_page(BAZ, ctx) == render_type_page(BAZ, ctx)


def test_source_link() -> None:
    """Source lines are one-based in links."""
    assert source_link(None) is None
    loc = SourceLocation("https://example.com/r", "dev", "a/B.cs", 0)
    assert source_link(loc) == (
        "###### [View Source](https://example.com/r/blob/dev/a/B.cs#L1)"
    )


def test_namespace_page_lists_types_by_kind() -> None:
    """Types are grouped by kind, sorted by name and linked by short name."""
    md = render_namespace_page(NAMESPACE, _context(ALL))
    assert md.startswith("---\ntitle: Namespace Foo\nsidebar_label: Foo\n---\n")
    assert "# Namespace Foo" in md
    assert "## Structs" not in md
    assert md.index("## Classes") < md.index("## Enums")
    assert md.index("### [Bar](../Foo/Bar)") < md.index("### [Baz](../Foo/Baz)")
    assert "### [Color](../Foo/Color)\nHue." in md


def test_index_page() -> None:
    """The index lists namespaces relative to the output root."""
    other = Entity("Abc", EntityKind.NAMESPACE, "Abc", "Abc", comment_id="N:Abc")
    store = EntityStore([NAMESPACE, other])
    linker = Linker(store, GroupingPolicy.disabled())
    md = render_index_page(store, linker, index_slug="/api", version="1.2.3")
    assert md.splitlines()[:6] == [
        "---",
        "title: Index",
        "sidebar_label: Index",
        "sidebar_position: 0",
        "slug: /api",
        "---",
    ]
    assert "## Namespaces\n* [Abc](./Abc/Abc.md)\n* [Foo](./Foo/Foo.md)\n" in md
    assert md.endswith("---\nGenerated using docfx-markdown v1.2.3.\n")


def test_namespace_page_skips_types_without_comment_id() -> None:
    """Types that get no page of their own are not listed."""
    md = render_namespace_page(NAMESPACE, _context(ALL))
    assert "[Bar](../Foo/Bar)" in md
    assert "Ext" not in md


def test_index_page_skips_namespaces_without_comment_id() -> None:
    """Namespaces without a comment id have no page to link to."""
    hidden = Entity("Hidden", EntityKind.NAMESPACE, "Hidden", "Hidden")
    store = EntityStore([NAMESPACE, hidden])
    linker = Linker(store, GroupingPolicy.disabled())
    md = render_index_page(store, linker, index_slug="/api", version="1.2.3")
    assert "* [Foo](./Foo/Foo.md)" in md
    assert "Hidden" not in md
