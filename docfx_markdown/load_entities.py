"""Parallel ingestion of a metadata directory into an EntityStore."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from docfx_markdown.entity import Entity
from docfx_markdown.entity_from_item import entity_from_item
from docfx_markdown.entity_store import EntityStore
from docfx_markdown.load_metadata_file import iter_items, load_metadata_file

logger = logging.getLogger(__name__)

TOC_FILE_NAME = "toc.yml"
REQUIRED_KEYS = ("uid", "type")


def find_metadata_files(input_dir: Path) -> list[Path]:
    """List the metadata files of ``input_dir`` in a stable order, skipping the TOC."""
    return sorted(p for p in input_dir.glob("*.yml") if p.name != TOC_FILE_NAME)


def _describe(it: dict[str, Any]) -> str:
    for key in ("uid", "id", "name", "fullName"):
        if it.get(key):
            return repr(str(it[key]))
    return "(no uid, id or name)"


def load_partition(path: Path) -> tuple[str, list[Entity]]:
    """Load the entities declared in a single file."""
    logger.debug("Reading %s", path)
    doc = load_metadata_file(path)
    entities = []
    for it in iter_items(doc):
        missing = [key for key in REQUIRED_KEYS if not it.get(key)]
        if missing:
            logger.warning(
                "Skipping entry %s in %s: missing %s",
                _describe(it),
                path,
                ", ".join(missing),
            )
            continue
        entity = entity_from_item(it)
        if entity is not None:
            entities.append(entity)
    return str(path), entities


def load_entities(files: list[Path], workers: int | None = None) -> EntityStore:
    """Read ``files`` concurrently and merge them into one store.

    Every worker fills its own partition; the merge happens once, on the
    calling thread, and raises DuplicateUidError on a uid collision.
    """
    with ThreadPoolExecutor(max_workers=workers) as executor:
        partitions = list(executor.map(load_partition, files))
    store = EntityStore.from_partitions(partitions)
    logger.info("Loaded %d entities from %d files", len(store), len(files))
    return store
