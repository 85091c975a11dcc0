"""Prefix-based line classification for the preview mode."""

from dataclasses import dataclass
from enum import Enum


class LineCategory(Enum):
    """Semantic category of a single preview line."""
    HEADING = "heading"
    LIST_ITEM = "list_item"
    PLAIN = "plain"


@dataclass(frozen=True)
class ClassifiedLine:
    category: LineCategory
    text: str  # Text to render, with the markup prefix removed
    level: int = 0  # Heading level 1-4; 0 for non-headings


# Longer heading prefixes come first: "## x" must not be taken for "# ".
_PREFIXES: tuple[tuple[str, LineCategory, int], ...] = (
    ("#### ", LineCategory.HEADING, 4),
    ("### ", LineCategory.HEADING, 3),
    ("## ", LineCategory.HEADING, 2),
    ("# ", LineCategory.HEADING, 1),
    ("- ", LineCategory.LIST_ITEM, 0),
)


def classify(line: str) -> ClassifiedLine:
    """Classify a line by its markup prefix.

    Only the prefixes ``#### ``, ``### ``, ``## ``, ``# `` and ``- `` are
    recognized, in that order. Anything else, including inline markup,
    is plain text and is returned unchanged.
    """
    for prefix, category, level in _PREFIXES:
        if line.startswith(prefix):
            return ClassifiedLine(category, line[len(prefix):], level)
    return ClassifiedLine(LineCategory.PLAIN, line)
