"""Typed view of the generator configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docfx_markdown.errors import ConfigError
from docfx_markdown.text_renderer import TextOptions


# Older key names still accepted in config files, mapped to the current ones.
KEY_ALIASES: dict[str, str] = {
    "yamlPath": "inputPath",
    "brNewline": "lineBreakSubstitution",
    "forceNewline": "forceHardLineBreaks",
    "forcedNewline": "hardLineBreakSequence",
    "rewriteInterlinks": "rewriteNamespaceInterlinks",
    "unescapeCodeBlocks": "unescapeCodeBlockEntities",
}


def canonical_keys(raw: dict[str, Any]) -> dict[str, Any]:
    """Rename aliased top-level keys; giving both names of a setting is an error."""
    result = {}
    for key, value in raw.items():
        name = KEY_ALIASES.get(key, key)
        if name in result:
            msg = f"Setting {name} given twice (as {key} and {name})"
            raise ConfigError(msg)
        result[name] = value
    return result


@dataclass(frozen=True)
class TypesGrouping:
    """Settings for nesting type pages under kind directories."""

    enabled: bool = False
    min_count: int = 12


@dataclass(frozen=True)
class GeneratorConfig:
    """Validated generator settings."""

    input_path: Path
    output_path: Path
    index_slug: str = "/api"
    types_grouping: TypesGrouping = TypesGrouping()
    line_break_substitution: str = "\n\n"
    force_hard_line_breaks: bool = False
    hard_line_break_sequence: str = "  \n"
    rewrite_namespace_interlinks: bool = False
    unescape_code_block_entities: bool = False
    collapse_blank_lines: bool = True
    description_length: int = 150

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> "GeneratorConfig":
        """Build the config from a merged YAML mapping (camelCase keys)."""
        raw = canonical_keys(raw)
        grouping = raw.get("typesGrouping") or {}
        if not isinstance(grouping, dict):
            raise ConfigError("typesGrouping must be a mapping")
        return cls(
            input_path=Path(_require_str(raw, "inputPath")),
            output_path=Path(_require_str(raw, "outputPath")),
            index_slug=_str(raw, "indexSlug"),
            types_grouping=TypesGrouping(
                enabled=_bool(grouping, "enabled", "typesGrouping.enabled"),
                min_count=_non_negative_int(
                    grouping, "minCount", "typesGrouping.minCount"
                ),
            ),
            line_break_substitution=_str(raw, "lineBreakSubstitution"),
            force_hard_line_breaks=_bool(raw, "forceHardLineBreaks"),
            hard_line_break_sequence=_str(raw, "hardLineBreakSequence"),
            rewrite_namespace_interlinks=_bool(raw, "rewriteNamespaceInterlinks"),
            unescape_code_block_entities=_bool(raw, "unescapeCodeBlockEntities"),
            collapse_blank_lines=_bool(raw, "collapseBlankLines"),
            description_length=_non_negative_int(raw, "descriptionLength"),
        )

    def text_options(self) -> TextOptions:
        """Options for the summary renderer."""
        return TextOptions(
            line_break_substitution=self.line_break_substitution,
            force_hard_line_breaks=self.force_hard_line_breaks,
            hard_line_break_sequence=self.hard_line_break_sequence,
            unescape_code_block_entities=self.unescape_code_block_entities,
            collapse_blank_lines=self.collapse_blank_lines,
        )


def _require_str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        msg = f"Missing required setting: {key}"
        raise ConfigError(msg)
    return value


def _str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        msg = f"{key} must be a string, got {value!r}"
        raise ConfigError(msg)
    return value


def _bool(raw: dict[str, Any], key: str, label: str | None = None) -> bool:
    value = raw.get(key)
    if not isinstance(value, bool):
        msg = f"{label or key} must be true or false, got {value!r}"
        raise ConfigError(msg)
    return value


def _non_negative_int(raw: dict[str, Any], key: str, label: str | None = None) -> int:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = f"{label or key} must be a non-negative integer, got {value!r}"
        raise ConfigError(msg)
    return value
