"""The closed set of entity kinds found in DocFX metadata."""

from enum import Enum

from docfx_markdown.errors import UnsupportedKindError


class EntityKind(str, Enum):
    """Kind of a documented symbol, named after the DocFX ``type`` field."""

    NAMESPACE = "Namespace"
    CLASS = "Class"
    INTERFACE = "Interface"
    STRUCT = "Struct"
    ENUM = "Enum"
    DELEGATE = "Delegate"
    PROPERTY = "Property"
    FIELD = "Field"
    METHOD = "Method"
    EVENT = "Event"

    @classmethod
    def parse(cls, value: str | None) -> "EntityKind | None":
        """Return the kind named by ``value``, or None when it is not supported."""
        if not value:
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None


TYPE_KINDS = frozenset(
    {
        EntityKind.CLASS,
        EntityKind.INTERFACE,
        EntityKind.STRUCT,
        EntityKind.ENUM,
        EntityKind.DELEGATE,
    }
)

# Page sections on namespace pages, in display order.
NAMESPACE_SECTIONS: tuple[tuple[EntityKind, str], ...] = (
    (EntityKind.CLASS, "Classes"),
    (EntityKind.STRUCT, "Structs"),
    (EntityKind.INTERFACE, "Interfaces"),
    (EntityKind.ENUM, "Enums"),
    (EntityKind.DELEGATE, "Delegates"),
)

_KIND_SUBDIRS = dict(NAMESPACE_SECTIONS)


def is_type_kind(kind: EntityKind) -> bool:
    """Check if the kind represents a type (class, struct, etc.)."""
    return kind in TYPE_KINDS


def kind_subdir(kind: EntityKind) -> str:
    """Return the directory name used for ``kind`` when grouping is active."""
    try:
        return _KIND_SUBDIRS[kind]
    except KeyError:
        msg = f"No grouping directory for entity kind {kind!r}"
        raise UnsupportedKindError(msg) from None
