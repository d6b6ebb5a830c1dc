"""Per-namespace decision on nesting type pages under kind directories."""

from collections import Counter
from collections.abc import Iterable

from docfx_markdown.entity import Entity
from docfx_markdown.entity_kind import is_type_kind


class GroupingPolicy:
    """Decides whether a namespace's type pages live in Classes/, Enums/, etc.

    Type counts are computed once at construction and never change, so link
    paths and write paths always agree.
    """

    def __init__(
        self, type_counts: dict[str, int], *, enabled: bool, min_count: int
    ) -> None:
        self._type_counts = dict(type_counts)
        self.enabled = enabled
        self.min_count = min_count

    @classmethod
    def from_entities(
        cls, entities: Iterable[Entity], *, enabled: bool, min_count: int
    ) -> "GroupingPolicy":
        """Count type-kind entities per namespace."""
        counts: Counter[str] = Counter()
        if enabled:
            counts.update(e.namespace for e in entities if is_type_kind(e.kind))
        return cls(counts, enabled=enabled, min_count=min_count)

    @classmethod
    def disabled(cls) -> "GroupingPolicy":
        """A policy that never groups."""
        return cls({}, enabled=False, min_count=0)

    def type_count(self, namespace: str) -> int:
        """Return the number of types counted for ``namespace``."""
        return self._type_counts.get(namespace, 0)

    def is_grouped(self, namespace: str) -> bool:
        """Check if types of ``namespace`` go into kind subdirectories."""
        return self.enabled and self.type_count(namespace) >= self.min_count
