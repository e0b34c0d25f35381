"""Tag-balance matching."""

from htmlsnob.matcher.balance import (
    IGNORE_ABOVE_MARKER,
    IGNORE_BELOW_MARKER,
    OpenTagRecord,
    TagBalanceMatcher,
    match_tokens,
)

__all__ = [
    "IGNORE_ABOVE_MARKER",
    "IGNORE_BELOW_MARKER",
    "OpenTagRecord",
    "TagBalanceMatcher",
    "match_tokens",
]
