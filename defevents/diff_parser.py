"""
Unified diff parsing for defevents.

Turns the text of ``git show --unified=1`` into an ordered list of
hunks. The parser is a small state machine fed one line at a time:

    filename     current file (from the ``a/`` side of ``diff --git``)
    old_cursor   line number the next removed line gets
    new_cursor   line number the next added line gets
    hunk         the hunk lines are currently appended to

Parsing is lenient: anything it does not recognize is skipped, so
commit message lines, mode changes and binary notices never raise.

Note: a hunk's new cursor starts at the hunk's *new end*, not its new
start, so added line numbers are offset for hunks that do not begin
with an addition. Correlation only uses the header ranges.
"""

from collections import OrderedDict
from typing import Dict, List, Optional
import re

from .domain import Hunk, Line

FILE_HEADER_RE = re.compile(r'^diff --git a/(\S+) b/\S+')
HUNK_HEADER_RE = re.compile(r'^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@')
METADATA_PREFIXES = ('diff --git', 'index ', '---', '+++')


class UnifiedDiffParser:
    """
    Incremental unified diff parser.

    Example:
        parser = UnifiedDiffParser()
        for hunk in parser.parse(diff_text):
            print(hunk.filename, hunk.new_range)
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Forget all state and parsed hunks."""
        self.filename: Optional[str] = None
        self.old_cursor: Optional[int] = None
        self.new_cursor: Optional[int] = None
        self.hunk: Optional[Hunk] = None
        self.hunks: List[Hunk] = []

    def parse(self, text: str) -> List[Hunk]:
        """
        Parse a complete diff.

        Args:
            text: Unified diff text, possibly preceded by commit header lines

        Returns:
            Hunks ordered by file appearance, then hunk appearance
        """
        self.reset()
        for line in text.split('\n'):
            self.feed(line)
        return self.hunks

    def feed(self, line: str) -> None:
        """Apply a single diff line to the parser state."""
        if line.endswith('\r'):
            line = line[:-1]

        file_header = FILE_HEADER_RE.match(line)
        if file_header:
            self.filename = file_header.group(1)
            self.old_cursor = self.new_cursor = None
            self.hunk = None
            return

        # Ignore everything until the first file header
        if self.filename is None:
            return

        if line.startswith(METADATA_PREFIXES):
            return

        hunk_header = HUNK_HEADER_RE.match(line)
        if hunk_header:
            self._open_hunk(hunk_header)
            return

        # Content before any hunk header
        if self.hunk is None:
            return

        if line.startswith('+'):
            self.hunk.new_lines.append(Line(num=self.new_cursor, text=line[1:]))
            self.new_cursor += 1
        elif line.startswith('-'):
            self.hunk.old_lines.append(Line(num=self.old_cursor, text=line[1:]))
            self.old_cursor += 1
        else:
            self.old_cursor += 1
            self.new_cursor += 1

    def _open_hunk(self, match: re.Match) -> None:
        old_start = int(match.group(1))
        old_count = int(match.group(2)) if match.group(2) is not None else 1
        new_start = int(match.group(3))
        new_count = int(match.group(4)) if match.group(4) is not None else 1

        old_end = old_start + old_count - 1
        new_end = new_start + new_count - 1

        self.old_cursor, self.new_cursor = old_start, new_end
        self.hunk = Hunk(
            filename=self.filename,
            old_start=old_start,
            old_end=old_end,
            new_start=new_start,
            new_end=new_end,
        )
        self.hunks.append(self.hunk)


def parse_unified_diff(text: str) -> List[Hunk]:
    """Parse diff text into hunks."""
    return UnifiedDiffParser().parse(text)


def group_by_file(hunks: List[Hunk]) -> Dict[str, List[Hunk]]:
    """Group hunks by filename, keeping file appearance order."""
    grouped: Dict[str, List[Hunk]] = OrderedDict()
    for hunk in hunks:
        grouped.setdefault(hunk.filename, []).append(hunk)
    return grouped


def changed_files(hunks: List[Hunk]) -> List[str]:
    """Unique filenames touched by the hunks, in appearance order."""
    return list(group_by_file(hunks).keys())
