"""
Diff domain objects for defevents.

A commit's unified diff is reduced to a list of hunks, one per
contiguous changed region of a file, each carrying the added and
removed lines with their positions in the new and old file versions.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Tuple


@dataclass(frozen=True)
class Line:
    """
    A single added or removed line.

    Attributes:
        num: 1-based position in the new (added) or old (removed) file
        text: Line content without the leading +/- marker
    """

    num: int
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {'num': self.num, 'text': self.text}


@dataclass
class Hunk:
    """
    One region of change in one file.

    ``old_end``/``new_end`` are derived from the hunk header counts
    (``start + count - 1``), so a side with zero lines has an end one
    below its start.

    Attributes:
        filename: Path of the file (from the ``a/`` side of the diff header)
        old_start: First line of the region in the old version
        old_end: Last line of the region in the old version
        new_start: First line of the region in the new version
        new_end: Last line of the region in the new version
        old_lines: Removed lines, in diff order
        new_lines: Added lines, in diff order
    """

    filename: str
    old_start: int
    old_end: int
    new_start: int
    new_end: int
    old_lines: List[Line] = field(default_factory=list)
    new_lines: List[Line] = field(default_factory=list)

    @property
    def old_range(self) -> Tuple[int, int]:
        return (self.old_start, self.old_end)

    @property
    def new_range(self) -> Tuple[int, int]:
        return (self.new_start, self.new_end)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'filename': self.filename,
            'old_start': self.old_start,
            'old_end': self.old_end,
            'old_lines': [line.to_dict() for line in self.old_lines],
            'new_start': self.new_start,
            'new_end': self.new_end,
            'new_lines': [line.to_dict() for line in self.new_lines],
        }

    def __str__(self) -> str:
        old_start, old_end = self.old_range
        new_start, new_end = self.new_range
        return f"{self.filename} -{old_start},{old_end} +{new_start},{new_end}"
