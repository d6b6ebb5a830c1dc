"""Indexed, read-only collection of every entity loaded for a run."""

from collections import defaultdict
from collections.abc import Iterable

from docfx_markdown.entity import Entity
from docfx_markdown.entity_kind import EntityKind
from docfx_markdown.errors import DuplicateUidError


def extension_signature(method: Entity) -> str | None:
    """Build the ``{firstParameterType}.{fullName}`` key DocFX uses for extensions.

    The argument list is dropped from the full name, so overloads that share a
    first parameter type collapse onto the same key.
    """
    if not method.parameters:
        return None
    full_name = method.full_name
    paren = full_name.find("(")
    if paren != -1:
        full_name = full_name[:paren]
    return f"{method.parameters[0].type_ref}.{full_name}"


class EntityStore:
    """Holds all entities, indexed by uid, parent and namespace."""

    def __init__(self, entities: Iterable[Entity]) -> None:
        """Index ``entities``; a repeated uid raises DuplicateUidError."""
        self._by_uid: dict[str, Entity] = {}
        self._by_parent: dict[tuple[str, EntityKind], list[Entity]] = defaultdict(
            list
        )
        self._by_namespace: dict[tuple[str, EntityKind], list[Entity]] = (
            defaultdict(list)
        )
        self._by_kind: dict[EntityKind, list[Entity]] = defaultdict(list)
        self._extensions: dict[str, Entity] = {}

        for entity in entities:
            if entity.uid in self._by_uid:
                raise DuplicateUidError(entity.uid, "input", "input")
            self._add(entity)

    @classmethod
    def from_partitions(
        cls, partitions: Iterable[tuple[str, list[Entity]]]
    ) -> "EntityStore":
        """Merge per-file partitions, reporting both origins of a duplicate uid."""
        origins: dict[str, str] = {}
        merged: list[Entity] = []
        for origin, entities in partitions:
            for entity in entities:
                first = origins.get(entity.uid)
                if first is not None:
                    raise DuplicateUidError(entity.uid, first, origin)
                origins[entity.uid] = origin
                merged.append(entity)
        return cls(merged)

    def _add(self, entity: Entity) -> None:
        self._by_uid[entity.uid] = entity
        self._by_kind[entity.kind].append(entity)
        self._by_namespace[(entity.namespace, entity.kind)].append(entity)
        if entity.parent_uid:
            self._by_parent[(entity.parent_uid, entity.kind)].append(entity)
        if entity.kind is EntityKind.METHOD:
            signature = extension_signature(entity)
            if signature is not None:
                self._extensions.setdefault(signature, entity)

    def __len__(self) -> int:
        return len(self._by_uid)

    def __contains__(self, uid: object) -> bool:
        return uid in self._by_uid

    def get(self, uid: str) -> Entity | None:
        """Return the entity with ``uid``, or None when it is unknown."""
        return self._by_uid.get(uid)

    def all(self) -> list[Entity]:
        """Return every entity in load order."""
        return list(self._by_uid.values())

    def of_kind(self, kind: EntityKind) -> list[Entity]:
        """Return every entity of ``kind`` in load order."""
        return list(self._by_kind.get(kind, ()))

    def children_of(self, uid: str, kind: EntityKind) -> list[Entity]:
        """Return entities whose parent is ``uid`` and whose kind is ``kind``."""
        return list(self._by_parent.get((uid, kind), ()))

    def by_namespace(self, namespace: str, kind: EntityKind) -> list[Entity]:
        """Return entities of ``kind`` declared in ``namespace``."""
        return list(self._by_namespace.get((namespace, kind), ()))

    def find_extension_method(self, signature: str) -> Entity | None:
        """Return the first method whose extension signature equals ``signature``."""
        return self._extensions.get(signature)
