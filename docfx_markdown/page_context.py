"""What a page renderer needs to resolve links and summaries."""

from dataclasses import dataclass

from docfx_markdown.entity_store import EntityStore
from docfx_markdown.link_mode import LinkMode
from docfx_markdown.linker import Linker
from docfx_markdown.text_renderer import TextRenderer


@dataclass(frozen=True)
class PageContext:
    """Store, linker and summary renderer bound to the page being written."""

    store: EntityStore
    linker: Linker
    renderer: TextRenderer
    mode: LinkMode

    def link(self, uid: str, *, name_only: bool = False) -> str:
        """Link to ``uid`` relative to this page."""
        return self.linker.link(uid, self.mode, name_only=name_only)

    def text(self, summary: str | None) -> str | None:
        """Render a summary for this page, trimmed."""
        return self.renderer.render_trimmed(summary, self.mode)
