"""Lookup of members a type inherits from its immediate base."""

from docfx_markdown.entity import Entity
from docfx_markdown.entity_kind import EntityKind
from docfx_markdown.entity_store import EntityStore

UNIVERSAL_ROOT_UID = "System.Object"


def base_type_of(item: Entity, store: EntityStore) -> Entity | None:
    """Return the immediate base type, unless it is the root type or unknown."""
    # DocFX lists the chain from the root down to the immediate base.
    if not item.inheritance:
        return None
    base_uid = item.inheritance[-1]
    if base_uid == UNIVERSAL_ROOT_UID:
        return None
    return store.get(base_uid)


def inherited_members(
    item: Entity, store: EntityStore, kind: EntityKind
) -> tuple[Entity | None, list[Entity]]:
    """Return the base type and its direct members of ``kind``.

    Only one level is looked at and members the type overrides are not
    filtered out.
    """
    base = base_type_of(item, store)
    if base is None:
        return None, []
    members = []
    for uid in base.child_uids:
        member = store.get(uid)
        if member is not None and member.kind is kind:
            members.append(member)
    return base, members
