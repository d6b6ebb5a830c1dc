"""Tests for reading DocFX metadata files into entities."""

from pathlib import Path

import logging

import pytest

from docfx_markdown.entity_from_item import entity_from_item
from docfx_markdown.entity_kind import EntityKind
from docfx_markdown.errors import DocGenError, DuplicateUidError
from docfx_markdown.load_entities import find_metadata_files, load_entities
from docfx_markdown.load_metadata_file import (
    iter_items,
    load_metadata_file,
    strip_yaml_mime_header,
)

CLASS_YML = """\
### YamlMime:ManagedReference
items:
- uid: Foo.Bar
  commentId: T:Foo.Bar
  id: Bar
  parent: Foo
  children:
  - Foo.Bar.Run(System.Int32)
  name: Bar
  nameWithType: Bar
  fullName: Foo.Bar
  type: Class
  source:
    remote:
      path: src/Bar.cs
      branch: main
      repo: https://github.com/example/foo
    startLine: 9
  assemblies:
  - Foo
  namespace: Foo
  summary: A bar.
  syntax:
    content: public class Bar
  inheritance:
  - System.Object
  implements:
  - System.IDisposable
- uid: Foo.Bar.Run(System.Int32)
  commentId: M:Foo.Bar.Run(System.Int32)
  parent: Foo.Bar
  name: Run(int)
  fullName: Foo.Bar.Run(int)
  type: Method
  namespace: Foo
  syntax:
    content: public bool Run(int times)
    parameters:
    - id: times
      type: System.Int32
      description: How often.
    return:
      type: System.Boolean
      description: Whether it ran.
  exceptions:
  - type: System.ArgumentException
    description: Bad input.
- uid: Foo.Bar.#ctor
  commentId: M:Foo.Bar.#ctor
  parent: Foo.Bar
  name: Bar()
  type: Constructor
  namespace: Foo
references:
- uid: System.Object
  name: object
"""

NAMESPACE_YML = """\
### YamlMime:ManagedReference
items:
- uid: Foo
  commentId: N:Foo
  id: Foo
  children:
  - Foo.Bar
  name: Foo
  fullName: Foo
  type: Namespace
"""


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_strip_yaml_mime_header() -> None:
    """Test stripping the YamlMime header."""
    content = "### YamlMime:ManagedReference\nitems:\n  - uid: Foo"
    assert strip_yaml_mime_header(content) == "items:\n  - uid: Foo"
    assert strip_yaml_mime_header("items: []") == "items: []"


def test_load_metadata_file_quotes_bare_vb_equals(tmp_path: Path) -> None:
    """A bare '=' value emitted for VB names still parses."""
    text = "items:\n- uid: Foo.op_Equality\n  name.vb: =\n"
    doc = load_metadata_file(_write(tmp_path / "Foo.yml", text))
    assert doc["items"][0]["name.vb"] == "="


def test_load_metadata_file_empty(tmp_path: Path) -> None:
    """An empty file yields no items."""
    doc = load_metadata_file(_write(tmp_path / "Empty.yml", ""))
    assert doc == {}
    assert list(iter_items(doc)) == []


def test_load_metadata_file_rejects_broken_yaml(tmp_path: Path) -> None:
    """Malformed YAML is reported with the offending file."""
    path = _write(tmp_path / "Broken.yml", "items: [\n- uid: Foo\n")
    with pytest.raises(DocGenError, match="Broken.yml"):
        load_metadata_file(path)


def test_entity_from_item_reads_type_fields(tmp_path: Path) -> None:
    """Type records keep their source, syntax and relationships."""
    doc = load_metadata_file(_write(tmp_path / "Foo.Bar.yml", CLASS_YML))
    bar = entity_from_item(next(iter(iter_items(doc))))

    assert bar.kind is EntityKind.CLASS
    assert bar.namespace == "Foo"
    assert bar.parent_uid == "Foo"
    assert bar.child_uids == ("Foo.Bar.Run(System.Int32)",)
    assert bar.declaration == "public class Bar"
    assert bar.inheritance == ("System.Object",)
    assert bar.implements == ("System.IDisposable",)
    assert bar.assemblies == ("Foo",)
    assert bar.comment_id == "T:Foo.Bar"
    assert bar.source.repo_url == "https://github.com/example/foo"
    assert bar.source.path == "src/Bar.cs"
    assert bar.source.start_line == 9


def test_entity_from_item_reads_method_fields(tmp_path: Path) -> None:
    """Methods keep their parameters, return value and exceptions."""
    doc = load_metadata_file(_write(tmp_path / "Foo.Bar.yml", CLASS_YML))
    run = entity_from_item(list(iter_items(doc))[1])

    assert run.kind is EntityKind.METHOD
    assert run.parameters[0].id == "times"
    assert run.parameters[0].type_ref == "System.Int32"
    assert run.parameters[0].description == "How often."
    assert run.return_type == "System.Boolean"
    assert run.return_description == "Whether it ran."
    assert run.exceptions[0].type_ref == "System.ArgumentException"
    assert run.summary is None


def test_unsupported_kinds_are_skipped() -> None:
    """Constructors and other kinds outside the closed set are not loaded."""
    item = {"uid": "Foo.Bar.#ctor", "type": "Constructor", "name": "Bar()"}
    assert entity_from_item(item) is None


def test_uid_lists_accept_mappings() -> None:
    """Newer DocFX emits relationship entries as {uid: ...} mappings."""
    item = {
        "uid": "Foo.Baz",
        "type": "Class",
        "name": "Baz",
        "inheritance": [{"uid": "System.Object"}, {"uid": "Foo.Bar"}],
    }
    assert entity_from_item(item).inheritance == ("System.Object", "Foo.Bar")


def test_find_metadata_files_skips_toc(tmp_path: Path) -> None:
    """The table of contents is not metadata."""
    _write(tmp_path / "toc.yml", "items: []")
    _write(tmp_path / "Foo.yml", NAMESPACE_YML)
    _write(tmp_path / "Foo.Bar.yml", CLASS_YML)
    _write(tmp_path / "notes.txt", "ignored")

    names = [p.name for p in find_metadata_files(tmp_path)]
    assert names == ["Foo.Bar.yml", "Foo.yml"]


def test_load_entities_merges_files(tmp_path: Path) -> None:
    """All supported entities of all files end up in one store."""
    files = [
        _write(tmp_path / "Foo.yml", NAMESPACE_YML),
        _write(tmp_path / "Foo.Bar.yml", CLASS_YML),
    ]
    store = load_entities(files, workers=2)

    assert len(store) == 3
    assert store.get("Foo").kind is EntityKind.NAMESPACE
    assert store.get("Foo.Bar.#ctor") is None
    assert store.get("System.Object") is None


def test_load_entities_rejects_duplicates_across_files(tmp_path: Path) -> None:
    """The same uid in two files is fatal."""
    files = [
        _write(tmp_path / "A.yml", NAMESPACE_YML),
        _write(tmp_path / "B.yml", NAMESPACE_YML),
    ]
    with pytest.raises(DuplicateUidError) as excinfo:
        load_entities(files)
    assert excinfo.value.uid == "Foo"


def test_entries_missing_uid_or_type_are_skipped_with_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Entries without a uid or a type are dropped and reported."""
    text = (
        "items:\n"
        "- type: Class\n  name: NoUid\n  commentId: T:NoUid\n"
        "- uid: Foo.NoType\n  name: NoType\n"
        "- uid: Foo.Bar.#ctor\n  type: Constructor\n  name: Bar()\n"
        "- uid: Foo\n  type: Namespace\n  name: Foo\n"
    )
    path = _write(tmp_path / "Mixed.yml", text)

    with caplog.at_level(logging.DEBUG):
        store = load_entities([path])

    assert [e.uid for e in store.all()] == ["Foo"]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert "'NoUid'" in warnings[0].getMessage()
    assert "Mixed.yml" in warnings[0].getMessage()
    assert "missing uid" in warnings[0].getMessage()
    assert "'Foo.NoType'" in warnings[1].getMessage()
    assert "missing type" in warnings[1].getMessage()
    assert not any("#ctor" in r.getMessage() for r in warnings)
