"""Data models for documented symbols loaded from DocFX metadata."""

from dataclasses import dataclass

from docfx_markdown.entity_kind import EntityKind


@dataclass(frozen=True)
class SourceLocation:
    """Where a symbol is declared in its source repository."""

    repo_url: str
    branch: str
    path: str
    start_line: int  # zero-based, as emitted by DocFX


@dataclass(frozen=True)
class Parameter:
    """A method or delegate parameter."""

    id: str
    type_ref: str
    description: str | None = None


@dataclass(frozen=True)
class TypeParameter:
    """A generic type parameter."""

    id: str
    description: str | None = None


@dataclass(frozen=True)
class ThrownException:
    """An exception documented as thrown by a member."""

    type_ref: str
    description: str | None = None


@dataclass(frozen=True)
class Entity:
    """Represents a documented item (namespace, type or member)."""

    uid: str
    kind: EntityKind
    name: str
    full_name: str
    namespace: str = ""
    parent_uid: str | None = None
    child_uids: tuple[str, ...] = ()
    summary: str | None = None  # raw, unrendered markup
    declaration: str | None = None
    source: SourceLocation | None = None
    assemblies: tuple[str, ...] = ()
    inheritance: tuple[str, ...] = ()  # root-most first, immediate base last
    derived_uids: tuple[str, ...] = ()
    implements: tuple[str, ...] = ()
    extension_methods: tuple[str, ...] = ()
    return_type: str | None = None
    return_description: str | None = None
    parameters: tuple[Parameter, ...] = ()
    type_parameters: tuple[TypeParameter, ...] = ()
    exceptions: tuple[ThrownException, ...] = ()
    comment_id: str | None = None
