"""
Overlap correlation between diff hunks and symbol definitions.

A tag is changed when its implicit range ``[line, end]`` intersects the
new-side range ``[new_start, new_end]`` of at least one hunk of the
same file.
"""

from typing import Iterable, List
import logging

from .diff_parser import group_by_file
from .domain import Hunk, Tag
from .symbol_index import EndLine, SymbolIndex

logger = logging.getLogger(__name__)


class OverlapCorrelator:
    """
    Decide which tags were modified by a set of hunks.

    Example:
        correlator = OverlapCorrelator(SymbolIndex(tags))
        for tag in correlator.changed_tags(hunks):
            print(tag.name)
    """

    def __init__(self, index: SymbolIndex):
        self.index = index

    @staticmethod
    def overlaps(start: int, end: EndLine, hunk: Hunk) -> bool:
        """True if ``[start, end]`` intersects the hunk's new range."""
        return not (hunk.new_start > end or hunk.new_end < start)

    def changed_tags(self, hunks: Iterable[Hunk]) -> List[Tag]:
        """
        Tags overlapping at least one hunk of their file.

        Args:
            hunks: Parsed hunks of the commit

        Returns:
            Changed tags in global line order, each at most once
        """
        hunks_by_file = group_by_file(list(hunks))
        changed: List[Tag] = []
        for tag, start, end in self.index.spans():
            for hunk in hunks_by_file.get(tag.file, ()):
                if self.overlaps(start, end, hunk):
                    changed.append(tag)
                    break
        logger.debug(f"{len(changed)} of {len(self.index)} tags overlap the diff")
        return changed


def correlate(tags: Iterable[Tag], hunks: Iterable[Hunk]) -> List[Tag]:
    """Convenience wrapper: index ``tags`` and return the changed ones."""
    return OverlapCorrelator(SymbolIndex(tags)).changed_tags(hunks)
