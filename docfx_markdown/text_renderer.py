"""Conversion of DocFX summary markup into Markdown.

The conversion is an ordered list of rules, each a plain ``(text, context) ->
text`` function. Order matters: links and code produced by an early rule are
parked in the context (``RenderContext.hold``) and only put back once every
rule has run, so later rules (tag stripping, brace quoting, newline rewriting)
never see them.
"""

import html
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from urllib.parse import unquote

from docfx_markdown.link_mode import LinkMode
from docfx_markdown.linker import Linker
from docfx_markdown.md_codeblock import md_codeblock

HOLD_OPEN = "\ue000"  # private-use placeholder delimiters
HOLD_CLOSE = "\ue001"
_HOLD_RE = re.compile(f"{HOLD_OPEN}(\\d+){HOLD_CLOSE}")

_PARAGRAPH_RE = re.compile(r"\s*</?p(?:\s[^>]*)?>\s*", re.IGNORECASE)
_EXAMPLE_RE = re.compile(r"<example>(.*?)</example>", re.DOTALL | re.IGNORECASE)
_XREF_RE = re.compile(r'<xref\s+href="([^"]+)"[^>]*?(?:/>|>.*?</xref>)', re.DOTALL)
_LANGWORD_RE = re.compile(
    r'<xref\s+uid="langword_[^"]*"\s+name="([^"]*)"[^>]*?(?:/>|>.*?</xref>)',
    re.DOTALL,
)
_CODE_BLOCK_RE = re.compile(
    r'<pre><code(?:\s+class="lang-([A-Za-z0-9]+)")?>(.*?)</code></pre>', re.DOTALL
)
_INLINE_CODE_RE = re.compile(r"<code>(.+?)</code>")
_LINK_RE = re.compile(r'<a\s+[^>]*?href="([^"]*)"[^>]*>(.*?)</a>', re.DOTALL)
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG_RE = re.compile(r"</?[A-Za-z][A-Za-z0-9:-]*(?:\s[^<>]*)?/?>")
_DICT_RE = re.compile(
    rf"(?<![`\w])\{{[^{{}}\n`{HOLD_OPEN}{HOLD_CLOSE}]*:"
    rf"[^{{}}\n`{HOLD_OPEN}{HOLD_CLOSE}]*\}}"
)
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_SINGLE_NEWLINE_RE = re.compile(r"(?<!\n)\n(?!\n)")

EXAMPLE_LANG = "csharp"


@dataclass(frozen=True)
class TextOptions:
    """Knobs of the summary conversion."""

    line_break_substitution: str = "\n\n"
    force_hard_line_breaks: bool = False
    hard_line_break_sequence: str = "  \n"
    unescape_code_block_entities: bool = False
    collapse_blank_lines: bool = True


@dataclass
class RenderContext:
    """Per-call state shared by the rules of one conversion."""

    linker: Linker
    mode: LinkMode
    options: TextOptions
    held: list[str] = field(default_factory=list)

    def hold(self, markdown: str) -> str:
        """Park finished Markdown and return a placeholder for it."""
        self.held.append(markdown)
        return f"{HOLD_OPEN}{len(self.held) - 1}{HOLD_CLOSE}"

    def restore(self, text: str) -> str:
        """Put every parked fragment back in place."""
        return _HOLD_RE.sub(lambda m: self.held[int(m.group(1))], text)


def _code_body(body: str, ctx: RenderContext) -> str:
    body = body.strip()
    if ctx.options.unescape_code_block_entities:
        body = html.unescape(body)
    return body


def render_paragraphs(text: str, ctx: RenderContext) -> str:
    """``<p>`` markers become blank lines."""
    return _PARAGRAPH_RE.sub("\n\n", text)


def render_examples(text: str, ctx: RenderContext) -> str:
    """``<example>`` blocks become a code fence titled Example."""

    def repl(m: re.Match) -> str:
        inner = m.group(1)
        code = _CODE_BLOCK_RE.search(inner)
        if code:
            lang, body = code.group(1) or EXAMPLE_LANG, code.group(2)
        else:
            lang, body = EXAMPLE_LANG, _TAG_RE.sub("", inner)
        block = md_codeblock(lang, _code_body(body, ctx), title="Example")
        return "\n\n" + ctx.hold(block) + "\n\n"

    return _EXAMPLE_RE.sub(repl, text)


def render_xrefs(text: str, ctx: RenderContext) -> str:
    """``<xref href="uid">`` tags become links through the linker."""

    def repl(m: re.Match) -> str:
        href = html.unescape(m.group(1))
        uid = unquote(re.split(r"[?#]", href, maxsplit=1)[0])
        return ctx.hold(ctx.linker.link(uid, ctx.mode))

    return _XREF_RE.sub(repl, text)


def render_langwords(text: str, ctx: RenderContext) -> str:
    """Language keyword references become inline code."""
    return _LANGWORD_RE.sub(lambda m: ctx.hold(f"`{m.group(1)}`"), text)


def render_code_blocks(text: str, ctx: RenderContext) -> str:
    """``<pre><code class="lang-x">`` blocks become fenced code."""

    def repl(m: re.Match) -> str:
        block = md_codeblock(m.group(1) or "", _code_body(m.group(2), ctx))
        return "\n" + ctx.hold(block) + "\n"

    return _CODE_BLOCK_RE.sub(repl, text)


def render_inline_code(text: str, ctx: RenderContext) -> str:
    """``<code>`` spans become inline code."""
    return _INLINE_CODE_RE.sub(lambda m: ctx.hold(f"`{m.group(1)}`"), text)


def render_hyperlinks(text: str, ctx: RenderContext) -> str:
    """``<a href>`` anchors become Markdown links."""
    return _LINK_RE.sub(lambda m: f"[{m.group(2)}]({m.group(1)})", text)


def render_line_breaks(text: str, ctx: RenderContext) -> str:
    """``<br>`` becomes the configured newline substitution."""
    return _BR_RE.sub(lambda _: ctx.options.line_break_substitution, text)


def strip_residual_tags(text: str, ctx: RenderContext) -> str:
    """Drop any tag left over and escape stray angle brackets."""
    text = _TAG_RE.sub("", text)
    return text.replace("<", "&lt;").replace(">", "&gt;")


def quote_dict_literals(text: str, ctx: RenderContext) -> str:
    """``{key: value}`` runs become inline code."""
    return _DICT_RE.sub(lambda m: ctx.hold(f"`{m.group(0)}`"), text)


def collapse_blank_lines(text: str, ctx: RenderContext) -> str:
    """Three or more newlines become exactly two."""
    if not ctx.options.collapse_blank_lines:
        return text
    return _BLANK_RUN_RE.sub("\n\n", text)


def force_hard_line_breaks(text: str, ctx: RenderContext) -> str:
    """Single newlines become the configured hard line break."""
    if not ctx.options.force_hard_line_breaks:
        return text
    return _SINGLE_NEWLINE_RE.sub(
        lambda _: ctx.options.hard_line_break_sequence, text
    )


Rule = Callable[[str, RenderContext], str]

RULES: tuple[Rule, ...] = (
    render_paragraphs,
    render_examples,
    render_xrefs,
    render_langwords,
    render_code_blocks,
    render_inline_code,
    render_hyperlinks,
    render_line_breaks,
    strip_residual_tags,
    quote_dict_literals,
    collapse_blank_lines,
    force_hard_line_breaks,
)


class TextRenderer:
    """Renders raw summaries into Markdown for a given page."""

    def __init__(self, linker: Linker, options: TextOptions | None = None) -> None:
        """Use ``linker`` for cross-references and ``options`` for newline handling."""
        self.linker = linker
        self.options = options or TextOptions()

    def render(self, summary: str | None, mode: LinkMode) -> str | None:
        """Convert ``summary``; None stays None."""
        if summary is None:
            return None
        ctx = RenderContext(linker=self.linker, mode=mode, options=self.options)
        # Placeholder delimiters in the input would be mistaken for held text.
        text = summary.replace(HOLD_OPEN, "").replace(HOLD_CLOSE, "")
        for rule in RULES:
            text = rule(text, ctx)
        return ctx.restore(text)

    def render_trimmed(self, summary: str | None, mode: LinkMode) -> str | None:
        """Like render, with surrounding whitespace removed."""
        rendered = self.render(summary, mode)
        return rendered.strip() if rendered is not None else None
