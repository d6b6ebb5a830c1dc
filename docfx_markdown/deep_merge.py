"""Logic for deep merging configuration dictionaries."""

import copy
from typing import Any


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries without touching either input.

    - Nested mappings are merged recursively.
    - Everything else in ``update`` (scalars, lists, None) replaces ``base``.
    """
    result = copy.deepcopy(base)
    for key, value in update.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result
