"""Conversion of raw DocFX item mappings into Entity records."""

import logging
from typing import Any

from docfx_markdown.entity import (
    Entity,
    Parameter,
    SourceLocation,
    ThrownException,
    TypeParameter,
)
from docfx_markdown.entity_kind import EntityKind

logger = logging.getLogger(__name__)


def _opt_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def _uid_list(values: object) -> tuple[str, ...]:
    # Newer DocFX versions emit {uid: ...} mappings instead of bare strings.
    if not isinstance(values, list):
        return ()
    return tuple(
        str(v.get("uid") if isinstance(v, dict) else v) for v in values if v
    )


def _source(raw: object) -> SourceLocation | None:
    if not isinstance(raw, dict):
        return None
    remote = raw.get("remote")
    if not isinstance(remote, dict) or not remote.get("repo"):
        return None
    return SourceLocation(
        repo_url=str(remote["repo"]),
        branch=str(remote.get("branch") or ""),
        path=str(remote.get("path") or raw.get("path") or ""),
        start_line=int(raw.get("startLine") or 0),
    )


def _parameters(raw: object) -> tuple[Parameter, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(
        Parameter(
            id=str(p.get("id") or ""),
            type_ref=str(p.get("type") or ""),
            description=_opt_str(p.get("description")),
        )
        for p in raw
        if isinstance(p, dict)
    )


def _type_parameters(raw: object) -> tuple[TypeParameter, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(
        TypeParameter(
            id=str(tp.get("id") or ""),
            description=_opt_str(tp.get("description")),
        )
        for tp in raw
        if isinstance(tp, dict)
    )


def _exceptions(raw: object) -> tuple[ThrownException, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(
        ThrownException(
            type_ref=str(e.get("type") or ""),
            description=_opt_str(e.get("description")),
        )
        for e in raw
        if isinstance(e, dict)
    )


def entity_from_item(it: dict[str, Any]) -> Entity | None:
    """Build an Entity from one DocFX item, or None for unsupported kinds."""
    uid = str(it["uid"])
    kind = EntityKind.parse(_opt_str(it.get("type")))
    if kind is None:
        logger.debug("Skipping %s of unsupported type %r", uid, it.get("type"))
        return None

    name = it.get("name") or it.get("fullName") or uid
    full_name = it.get("fullName") or it.get("name") or uid
    syntax = it.get("syntax") if isinstance(it.get("syntax"), dict) else {}
    ret = syntax.get("return") if isinstance(syntax.get("return"), dict) else {}
    parent = it.get("parent")

    return Entity(
        uid=uid,
        kind=kind,
        name=str(name),
        full_name=str(full_name),
        namespace=str(it.get("namespace") or ""),
        parent_uid=str(parent) if parent else None,
        child_uids=_uid_list(it.get("children")),
        summary=_opt_str(it.get("summary")),
        declaration=_opt_str(syntax.get("content")),
        source=_source(it.get("source")),
        assemblies=_uid_list(it.get("assemblies")),
        inheritance=_uid_list(it.get("inheritance")),
        derived_uids=_uid_list(it.get("derivedClasses")),
        implements=_uid_list(it.get("implements")),
        extension_methods=_uid_list(it.get("extensionMethods")),
        return_type=_opt_str(ret.get("type")),
        return_description=_opt_str(ret.get("description")),
        parameters=_parameters(syntax.get("parameters")),
        type_parameters=_type_parameters(syntax.get("typeParameters")),
        exceptions=_exceptions(it.get("exceptions")),
        comment_id=_opt_str(it.get("commentId")),
    )
