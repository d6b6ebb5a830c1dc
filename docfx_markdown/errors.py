"""Exceptions raised by the Markdown generator."""


class DocGenError(Exception):
    """Base class for fatal generator errors."""


class ConfigError(DocGenError):
    """Raised when the configuration is missing or malformed."""


class DuplicateUidError(DocGenError):
    """Raised when two input records share the same uid."""

    def __init__(self, uid: str, first_origin: str, second_origin: str) -> None:
        """Record the colliding uid and where both copies came from."""
        super().__init__(
            f"Duplicate uid {uid!r} in {first_origin} and {second_origin}"
        )
        self.uid = uid
        self.first_origin = first_origin
        self.second_origin = second_origin


class UnsupportedKindError(DocGenError):
    """Raised when an entity kind reaches code that cannot handle it."""
