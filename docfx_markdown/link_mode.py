"""Where a link is written from, which fixes its relative prefix."""

from enum import Enum


class LinkMode(Enum):
    """The kind of page a link is rendered on."""

    GROUPED_TYPE = "../../"  # {ns}/{KindDir}/{Type}.md
    NORMAL = "../"  # {ns}/{Type}.md and {ns}/{ns}.md
    INDEX = "./"  # index.md at the output root

    @property
    def prefix(self) -> str:
        """Relative path from the page back to the output root."""
        return self.value

    @property
    def extension(self) -> str:
        """File extension appended to link targets."""
        return ".md" if self is LinkMode.INDEX else ""

    @classmethod
    def for_type_page(cls, grouped: bool) -> "LinkMode":
        """Return the mode for a type page, grouped or not."""
        return cls.GROUPED_TYPE if grouped else cls.NORMAL
