"""Exceptions raised inside the compaction pipeline.

None of these escape :func:`html_compactor.services.compactor.compact`;
they are turned into warnings at that boundary.
"""

from __future__ import annotations


class CompactionError(Exception):
    """Base class for failures inside a compaction step."""


class MarkupParseError(CompactionError):
    """The markup could not be parsed into a tree."""
