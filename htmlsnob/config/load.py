"""Helpers for loading `.htmlsnob.toml` / `.htmlsnob.yaml` configuration files.

Both formats are parsed in memory into the same TOML-shaped mapping, so the
resolver only understands one schema.
"""

from __future__ import annotations

import logging
from pathlib import Path
import tomllib
from typing import Final

import yaml

from htmlsnob.config.resolve import resolve_ruleset
from htmlsnob.config.ruleset import RuleSet
from htmlsnob.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES: Final[tuple[str, ...]] = (
    ".htmlsnob.toml",
    "htmlsnob.toml",
    ".htmlsnob.yaml",
    ".htmlsnob.yml",
)

YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yaml", ".yml"})


def load_config_value(path: str | Path) -> dict[str, object]:
    config_path = Path(path)
    source = str(config_path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError("configuration file not found", source=source) from None
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"failed to read configuration file: {exc}", source=source) from exc

    if config_path.suffix.lower() in YAML_SUFFIXES:
        return parse_yaml_config(text, source=source)
    return parse_toml_config(text, source=source)


def parse_toml_config(text: str, *, source: str | None = None) -> dict[str, object]:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML: {exc}", source=source) from exc


def parse_yaml_config(text: str, *, source: str | None = None) -> dict[str, object]:
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML: {exc}", source=source) from exc
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"top level must be a mapping, got {type(value).__name__}", source=source)
    return value


def find_config_file(directory: str | Path) -> Path | None:
    root = Path(directory)
    for name in CONFIG_FILE_NAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_ruleset(config_path: str | Path | None = None, *, search_dir: str | Path | None = None) -> RuleSet:
    """Resolve a RuleSet from an explicit file, a discovered file, or the defaults."""
    path = Path(config_path) if config_path is not None else None
    if path is None and search_dir is not None:
        path = find_config_file(search_dir)
    if path is None:
        logger.debug("No configuration file, using defaults")
        return resolve_ruleset(None)

    logger.debug("Loading configuration from %s", path)
    return resolve_ruleset(load_config_value(path), source=str(path))
