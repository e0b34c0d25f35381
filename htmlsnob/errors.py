"""Exception classes for htmlsnob.

Lint findings are never exceptions; these cover failures of the tool itself.
"""

from __future__ import annotations


class HtmlsnobError(Exception):
    """Base exception for all htmlsnob errors."""


class ConfigError(HtmlsnobError):
    """A configuration value or file could not be turned into a RuleSet."""

    def __init__(self, message: str, *, key: str | None = None, source: str | None = None) -> None:
        self.message = message
        self.key = key
        self.source = source

        location = ""
        if source:
            location = f"{source}: "
        if key:
            location += f"`{key}`: "
        super().__init__(f"{location}{message}")
