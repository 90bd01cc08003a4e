"""Documentation link checker."""

from tern2dts.links.checker import (
    LinkChecker,
    LinkReport,
    find_invalid_urls,
    group_anchors,
    iter_urls,
    missing_anchors,
)

__all__ = [
    "LinkChecker",
    "LinkReport",
    "find_invalid_urls",
    "group_anchors",
    "iter_urls",
    "missing_anchors",
]
