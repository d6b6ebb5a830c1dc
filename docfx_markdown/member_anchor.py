"""Utility for generating member heading anchors."""

_STRIPPED = str.maketrans("", "", "()?")


def member_anchor(name: str) -> str:
    """Anchor for a member heading: lowercased, without parentheses or ``?``.

    Overloads with the same name share an anchor.
    """
    return name.lower().translate(_STRIPPED)
