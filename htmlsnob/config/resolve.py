"""Overlay a parsed configuration value onto the default RuleSet."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from types import MappingProxyType
from typing import Final, cast

from htmlsnob.config.ruleset import RuleSet, RuleSetting, default_ruleset
from htmlsnob.diagnostics import SEVERITIES, Severity
from htmlsnob.errors import ConfigError
from htmlsnob.lexer import Delimiter, Dialect

logger = logging.getLogger(__name__)

OPTION_KEYS: Final[frozenset[str]] = frozenset(
    {
        "void_elements",
        "extra_void_elements",
        "raw_text_elements",
        "template_tolerance",
        "dialects",
        "delimiters",
    }
)

RULE_KEYS: Final[frozenset[str]] = frozenset({"enabled", "severity", "message", "except_tags"})


def resolve_ruleset(value: Mapping[str, object] | None, *, source: str | None = None) -> RuleSet:
    """Build a RuleSet from a TOML-shaped mapping.

    `None` and `{}` give the defaults. Unknown keys are skipped so older builds
    accept newer config files; values of the wrong shape raise ConfigError.
    """
    base = default_ruleset()
    if value is None:
        return base
    if not isinstance(value, Mapping):
        raise ConfigError(f"configuration must be a table, got {_type_name(value)}", source=source)
    if not value:
        return base

    rules = dict(base.rules)
    for key, entry in value.items():
        if key in rules:
            rules[key] = _resolve_rule(str(key), entry, rules[key], source)
        elif key not in OPTION_KEYS:
            logger.debug("Ignoring unknown configuration key %r", key)

    void_elements = base.void_elements
    if "void_elements" in value:
        void_elements = _tag_names(value["void_elements"], "void_elements", source)
    if "extra_void_elements" in value:
        void_elements = void_elements | _tag_names(value["extra_void_elements"], "extra_void_elements", source)

    raw_text_elements = base.raw_text_elements
    if "raw_text_elements" in value:
        raw_text_elements = _tag_names(value["raw_text_elements"], "raw_text_elements", source)

    template_tolerance = base.template_tolerance
    if "template_tolerance" in value:
        template_tolerance = _bool(value["template_tolerance"], "template_tolerance", source)

    dialects = base.dialects
    if "dialects" in value:
        dialects = _dialects(value["dialects"], source)

    extra_delimiters = base.extra_delimiters
    if "delimiters" in value:
        extra_delimiters = _delimiters(value["delimiters"], source)

    return RuleSet(
        rules=MappingProxyType(rules),
        void_elements=void_elements,
        raw_text_elements=raw_text_elements,
        template_tolerance=template_tolerance,
        dialects=dialects,
        extra_delimiters=extra_delimiters,
    )


def _resolve_rule(code: str, entry: object, current: RuleSetting, source: str | None) -> RuleSetting:
    # `rule = false` is shorthand for `[rule] enabled = false`.
    if isinstance(entry, bool):
        return RuleSetting(
            enabled=entry,
            severity=current.severity,
            message=current.message,
            except_tags=current.except_tags,
        )
    if not isinstance(entry, Mapping):
        raise ConfigError(f"rule settings must be a table, got {_type_name(entry)}", key=code, source=source)

    for key in entry:
        if key not in RULE_KEYS:
            logger.debug("Ignoring unknown key %r in rule %r", key, code)

    enabled = current.enabled
    if "enabled" in entry:
        enabled = _bool(entry["enabled"], f"{code}.enabled", source)

    severity = current.severity
    if "severity" in entry:
        severity = _severity(entry["severity"], f"{code}.severity", source)

    message = current.message
    if "message" in entry:
        raw_message = entry["message"]
        if not isinstance(raw_message, str):
            raise ConfigError(f"expected a string, got {_type_name(raw_message)}", key=f"{code}.message", source=source)
        message = raw_message

    except_tags = current.except_tags
    if "except_tags" in entry:
        except_tags = _tag_names(entry["except_tags"], f"{code}.except_tags", source)

    return RuleSetting(enabled=enabled, severity=severity, message=message, except_tags=except_tags)


def _bool(value: object, key: str, source: str | None) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"expected true or false, got {_type_name(value)}", key=key, source=source)
    return value


def _severity(value: object, key: str, source: str | None) -> Severity:
    if not isinstance(value, str) or value.lower() not in SEVERITIES:
        raise ConfigError(f"severity must be one of {', '.join(SEVERITIES)}, got {value!r}", key=key, source=source)
    return cast(Severity, value.lower())


def _strings(value: object, key: str, source: str | None) -> list[str]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"expected a list of strings, got {_type_name(value)}", key=key, source=source)
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"expected a list of strings, found {_type_name(item)}", key=key, source=source)
    return list(value)


def _tag_names(value: object, key: str, source: str | None) -> frozenset[str]:
    return frozenset(name.lower() for name in _strings(value, key, source))


def _dialects(value: object, source: str | None) -> tuple[Dialect, ...]:
    dialects: list[Dialect] = []
    for name in _strings(value, "dialects", source):
        try:
            dialect = Dialect(name.lower())
        except ValueError:
            known = ", ".join(sorted(Dialect))
            raise ConfigError(f"unknown dialect {name!r} (known: {known})", key="dialects", source=source) from None
        if dialect not in dialects:
            dialects.append(dialect)
    return tuple(dialects)


def _delimiters(value: object, source: str | None) -> tuple[Delimiter, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"expected a list of delimiters, got {_type_name(value)}", key="delimiters", source=source)

    delimiters: list[Delimiter] = []
    for entry in value:
        if isinstance(entry, Mapping):
            open_, close, quoting = entry.get("open"), entry.get("close"), entry.get("quoting", False)
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            open_, close = entry
            quoting = False
        else:
            raise ConfigError(
                "each delimiter must be a table with `open` and `close` or a two-item list",
                key="delimiters",
                source=source,
            )
        if not isinstance(open_, str) or not open_ or not isinstance(close, str) or not close:
            raise ConfigError("delimiter `open` and `close` must be non-empty strings", key="delimiters", source=source)
        delimiters.append(Delimiter(open_, close, quoting=_bool(quoting, "delimiters.quoting", source)))
    return tuple(delimiters)


def _type_name(value: object) -> str:
    return type(value).__name__
