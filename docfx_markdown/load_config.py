"""Logic for loading and merging configuration files."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from docfx_markdown.deep_merge import deep_merge
from docfx_markdown.errors import ConfigError
from docfx_markdown.generator_config import GeneratorConfig, canonical_keys

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "./config.yaml"
CONFIG_ENV_VAR = "DFMG_CONFIG"
YAML_PATH_ENV_VAR = "DFMG_YAML_PATH"
OUTPUT_PATH_ENV_VAR = "DFMG_OUTPUT_PATH"

DEFAULT_CONFIG: dict[str, Any] = {
    "inputPath": None,
    "outputPath": None,
    "indexSlug": "/api",
    "typesGrouping": {
        "enabled": False,
        "minCount": 12,
    },
    "lineBreakSubstitution": "\n\n",
    "forceHardLineBreaks": False,
    "hardLineBreakSequence": "  \n",
    "rewriteNamespaceInterlinks": False,
    "unescapeCodeBlockEntities": False,
    "collapseBlankLines": True,
    "descriptionLength": 150,
}


def load_config(
    path: str | None = None, env: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    ``path`` falls back to ``$DFMG_CONFIG`` and then ``./config.yaml``. Only
    the last one may be absent; an explicitly named file must exist.
    """
    env = os.environ if env is None else env
    explicit = path or env.get(CONFIG_ENV_VAR) or None
    p = Path(explicit or DEFAULT_CONFIG_PATH)

    config = deep_merge(DEFAULT_CONFIG, {})
    if p.exists():
        try:
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in config file {p}: {e}"
            raise ConfigError(msg) from e
        if not isinstance(user_config, dict):
            msg = f"Config file {p} must contain a mapping"
            raise ConfigError(msg)
        config = deep_merge(config, canonical_keys(user_config))
        logger.debug("Loaded config from %s", p)
    elif explicit:
        msg = f"Config file not found: {p}"
        raise ConfigError(msg)

    return apply_env_overrides(config, env)


def apply_env_overrides(
    config: dict[str, Any], env: Mapping[str, str]
) -> dict[str, Any]:
    """Let non-empty ``DFMG_YAML_PATH``/``DFMG_OUTPUT_PATH`` replace the paths."""
    overrides = {}
    if env.get(YAML_PATH_ENV_VAR):
        overrides["inputPath"] = env[YAML_PATH_ENV_VAR]
        logger.info("Input path overridden by env: %s", overrides["inputPath"])
    if env.get(OUTPUT_PATH_ENV_VAR):
        overrides["outputPath"] = env[OUTPUT_PATH_ENV_VAR]
        logger.info("Output path overridden by env: %s", overrides["outputPath"])
    return deep_merge(config, overrides)


def load_generator_config(
    path: str | None = None,
    env: Mapping[str, str] | None = None,
    overrides: dict[str, Any] | None = None,
) -> GeneratorConfig:
    """Load, merge and validate the configuration.

    ``overrides`` (camelCase keys, e.g. from the command line) win over both
    the file and the environment.
    """
    config = load_config(path, env)
    if overrides:
        config = deep_merge(config, canonical_keys(overrides))
    return GeneratorConfig.from_mapping(config)
