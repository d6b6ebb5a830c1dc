"""Resolution of symbolic references into relative Markdown links."""

from docfx_markdown.entity import Entity
from docfx_markdown.entity_kind import EntityKind, is_type_kind
from docfx_markdown.entity_store import EntityStore
from docfx_markdown.escaping import code_literal, file_escape, html_escape
from docfx_markdown.grouping_policy import GroupingPolicy
from docfx_markdown.link_mode import LinkMode
from docfx_markdown.member_anchor import member_anchor
from docfx_markdown.page_paths import namespace_page_segments, type_page_segments

SINGLE_ARITY_MARKER = "`1"


def collapse_single_generic(uid: str) -> str | None:
    """Rewrite ``Foo{Bar}`` to ``Foo`1``; None unless there is one type argument.

    Only the outermost brace pair is considered. References with several
    top-level type arguments are left unresolved on purpose.
    """
    start = uid.find("{")
    end = uid.rfind("}")
    if start == -1 or end < start:
        return None
    depth = 0
    for ch in uid[start + 1 : end]:
        if ch in "{(":
            depth += 1
        elif ch in "})":
            depth -= 1
        elif ch == "," and depth == 0:
            return None
    return uid[:start] + SINGLE_ARITY_MARKER + uid[end + 1 :]


class Linker:
    """Turns uids into Markdown links relative to the calling page."""

    def __init__(
        self,
        store: EntityStore,
        grouping: GroupingPolicy,
        *,
        rewrite_namespace_interlinks: bool = False,
    ) -> None:
        """Bind the linker to a loaded store and a precomputed grouping policy."""
        self.store = store
        self.grouping = grouping
        self.rewrite_namespace_interlinks = rewrite_namespace_interlinks

    def resolve(self, uid: str) -> Entity | None:
        """Find the entity referenced by ``uid``, trying the single-generic form."""
        reference = self.store.get(uid)
        if reference is None:
            collapsed = collapse_single_generic(uid)
            if collapsed is not None:
                reference = self.store.get(collapsed)
        return reference

    def link(self, uid: str, mode: LinkMode, *, name_only: bool = False) -> str:
        """Render ``uid`` as a link, or as inline code when it cannot be resolved."""
        reference = self.resolve(uid)
        if reference is None:
            return code_literal(uid)
        target = self.target_of(reference, mode)
        if target is None:
            return code_literal(uid)
        name = reference.name if name_only else reference.full_name
        return f"[{html_escape(name)}]({target})"

    def target_of(self, entity: Entity, mode: LinkMode) -> str | None:
        """Relative link target of ``entity``'s page, None if it has no page."""
        if is_type_kind(entity.kind):
            return self._page_target(type_page_segments(entity, self.grouping), mode)

        if entity.kind is EntityKind.NAMESPACE:
            if self.rewrite_namespace_interlinks and mode is not LinkMode.INDEX:
                return file_escape(mode.prefix + entity.name)
            return self._page_target(namespace_page_segments(entity.name), mode)

        parent = self.store.get(entity.parent_uid) if entity.parent_uid else None
        if parent is None or not is_type_kind(parent.kind):
            return None
        page = self._page_target(type_page_segments(parent, self.grouping), mode)
        return page + "#" + file_escape(member_anchor(entity.name))

    @staticmethod
    def _page_target(segments: list[str], mode: LinkMode) -> str:
        return file_escape(mode.prefix + "/".join(segments) + mode.extension)
