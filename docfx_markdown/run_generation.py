"""Orchestration logic for converting DocFX YAML to Docusaurus Markdown."""

import logging
import shutil
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from docfx_markdown.entity import Entity
from docfx_markdown.entity_kind import EntityKind, is_type_kind
from docfx_markdown.entity_store import EntityStore
from docfx_markdown.errors import DocGenError
from docfx_markdown.generator_config import GeneratorConfig
from docfx_markdown.grouping_policy import GroupingPolicy
from docfx_markdown.link_mode import LinkMode
from docfx_markdown.linker import Linker
from docfx_markdown.load_entities import find_metadata_files, load_entities
from docfx_markdown.page_context import PageContext
from docfx_markdown.page_paths import (
    index_page_file,
    namespace_page_file,
    type_page_file,
)
from docfx_markdown.render_index_page import render_index_page
from docfx_markdown.render_namespace_page import render_namespace_page
from docfx_markdown.render_type_page import render_type_page
from docfx_markdown.text_renderer import TextRenderer

logger = logging.getLogger(__name__)

DIST_NAME = "docfx-markdown"


def tool_version() -> str:
    """Version of the installed distribution, for the index attribution."""
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0"


class PageWriter:
    """Renders and writes single pages; safe to share between worker threads."""

    def __init__(
        self,
        store: EntityStore,
        grouping: GroupingPolicy,
        config: GeneratorConfig,
    ) -> None:
        self.store = store
        self.grouping = grouping
        self.config = config
        self.out_root = config.output_path
        self.linker = Linker(
            store,
            grouping,
            rewrite_namespace_interlinks=config.rewrite_namespace_interlinks,
        )
        self.renderer = TextRenderer(self.linker, config.text_options())

    def context(self, mode: LinkMode) -> PageContext:
        """Page context for links written relative to ``mode``."""
        return PageContext(self.store, self.linker, self.renderer, mode)

    def write_type_page(self, item: Entity) -> Path:
        """Render ``item`` to its type page."""
        mode = LinkMode.for_type_page(self.grouping.is_grouped(item.namespace))
        md = render_type_page(
            item,
            self.context(mode),
            description_length=self.config.description_length,
        )
        out_file = type_page_file(self.out_root, item, self.grouping)
        out_file.write_text(md, encoding="utf-8")
        return out_file

    def write_namespace_page(self, namespace: Entity) -> Path:
        """Render ``namespace`` to ``{ns}/{ns}.md``."""
        md = render_namespace_page(namespace, self.context(LinkMode.NORMAL))
        out_file = namespace_page_file(self.out_root, namespace.name)
        out_file.write_text(md, encoding="utf-8")
        return out_file

    def write_index_page(self, version_string: str) -> Path:
        """Render the API index at the output root."""
        md = render_index_page(
            self.store,
            self.linker,
            index_slug=self.config.index_slug,
            version=version_string,
        )
        out_file = index_page_file(self.out_root)
        out_file.write_text(md, encoding="utf-8")
        return out_file

    def write_page(self, item: Entity) -> Path:
        """Dispatch ``item`` to the namespace or type page writer."""
        if item.kind is EntityKind.NAMESPACE:
            return self.write_namespace_page(item)
        return self.write_type_page(item)


def pages_to_write(store: EntityStore) -> list[Entity]:
    """Namespaces and types that get a page of their own.

    Entities without a comment id are skipped; for anything but a namespace
    (the global namespace has none) a warning is logged.
    """
    pages = []
    for item in store.all():
        if item.comment_id is None:
            if item.kind is not EntityKind.NAMESPACE:
                logger.warning("Missing commentId for %s", item.uid)
            continue
        if item.kind is EntityKind.NAMESPACE or is_type_kind(item.kind):
            pages.append(item)
    return pages


def reset_output_dir(out_root: Path) -> None:
    """Delete ``out_root`` if present and recreate it empty."""
    if out_root.exists():
        shutil.rmtree(out_root)
    out_root.mkdir(parents=True)


def write_pages(
    writer: PageWriter, items: list[Entity], workers: int | None = None
) -> int:
    """Write one page per item on a thread pool.

    The first failure cancels every page not yet started and is re-raised.
    """
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(writer.write_page, item) for item in items]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in pending:
            future.cancel()
        for future in done:
            exc = future.exception()
            if exc is not None:
                raise exc
    return len(futures)


def run_generation(config: GeneratorConfig, workers: int | None = None) -> int:
    """Execute the full generation pipeline; return the number of pages written."""
    in_dir = config.input_path
    if not in_dir.is_dir():
        msg = f"Input directory does not exist: {in_dir}"
        raise DocGenError(msg)
    yml_files = find_metadata_files(in_dir)
    if not yml_files:
        msg = f"No .yml files found under: {in_dir}"
        raise DocGenError(msg)

    out_root = config.output_path
    reset_output_dir(out_root)

    started = time.perf_counter()
    store = load_entities(yml_files, workers=workers)
    logger.info("Read all YAML in %.0fms", (time.perf_counter() - started) * 1000)

    grouping = GroupingPolicy.from_entities(
        store.all(),
        enabled=config.types_grouping.enabled,
        min_count=config.types_grouping.min_count,
    )
    writer = PageWriter(store, grouping, config)

    logger.info("Generating and writing markdown...")
    started = time.perf_counter()
    written = write_pages(writer, pages_to_write(store), workers=workers)
    writer.write_index_page(tool_version())
    written += 1
    logger.info("Markdown finished in %.0fms", (time.perf_counter() - started) * 1000)

    print(f"Generated {written} Markdown pages into: {out_root.resolve()}")
    return written

