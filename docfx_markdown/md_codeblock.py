"""Utility for generating Markdown code blocks."""


def md_codeblock(lang: str, code: str, *, title: str | None = None) -> str:
    """Generate a fenced code block, optionally with a Docusaurus title."""
    info = lang if title is None else f'{lang} title="{title}"'
    return f"```{info}\n{code.rstrip()}\n```"
