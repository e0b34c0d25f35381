"""Rule set and configuration resolution."""

from htmlsnob.config.load import (
    CONFIG_FILE_NAMES,
    find_config_file,
    load_config_value,
    load_ruleset,
    parse_toml_config,
    parse_yaml_config,
)
from htmlsnob.config.resolve import resolve_ruleset
from htmlsnob.config.ruleset import (
    DEFAULT_VOID_ELEMENTS,
    RuleSet,
    RuleSetting,
    default_ruleset,
)
from htmlsnob.errors import ConfigError

__all__ = [
    "CONFIG_FILE_NAMES",
    "DEFAULT_VOID_ELEMENTS",
    "ConfigError",
    "RuleSet",
    "RuleSetting",
    "default_ruleset",
    "find_config_file",
    "load_config_value",
    "load_ruleset",
    "parse_toml_config",
    "parse_yaml_config",
    "resolve_ruleset",
]
