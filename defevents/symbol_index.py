"""
Symbol index for defevents.

Holds every tag of a run in one array sorted by line, plus per-file
lists of positions into that array. A tag's definition is assumed to
run until the line before the next tag in the *global* order; the last
tag extends to the end of the file. Tags on the same line share an end.
"""

from typing import Dict, Iterable, Iterator, List, Tuple, Union
import math

from .domain import Tag

EndLine = Union[int, float]


class SymbolIndex:
    """
    Tags sorted by line with their implicit end lines.

    Example:
        index = SymbolIndex(tags)
        for tag, start, end in index.spans():
            print(tag.name, start, end)
    """

    def __init__(self, tags: Iterable[Tag]):
        # sorted() is stable: tags on the same line keep their input order
        self._tags: Tuple[Tag, ...] = tuple(sorted(tags, key=lambda t: t.line))
        self._ends: List[EndLine] = self._implicit_ends(self._tags)
        self._by_file: Dict[str, List[int]] = {}
        for position, tag in enumerate(self._tags):
            self._by_file.setdefault(tag.file, []).append(position)

    @staticmethod
    def _implicit_ends(tags: Tuple[Tag, ...]) -> List[EndLine]:
        ends: List[EndLine] = [math.inf] * len(tags)
        bound: EndLine = math.inf
        i = len(tags) - 1
        while i >= 0:
            first = i
            while first > 0 and tags[first - 1].line == tags[i].line:
                first -= 1
            for k in range(first, i + 1):
                ends[k] = bound
            bound = tags[i].line - 1
            i = first - 1
        return ends

    @property
    def tags(self) -> Tuple[Tag, ...]:
        return self._tags

    def end_line(self, position: int) -> EndLine:
        """Implicit end line of the tag at ``position`` in the sorted order."""
        return self._ends[position]

    def spans(self) -> Iterator[Tuple[Tag, int, EndLine]]:
        """Yield ``(tag, start, end)`` in global sort order."""
        for position, tag in enumerate(self._tags):
            yield tag, tag.line, self._ends[position]

    def for_file(self, path: str) -> List[Tag]:
        """Tags defined in ``path``, sorted by line."""
        return [self._tags[p] for p in self._by_file.get(path, [])]

    def files(self) -> List[str]:
        return list(self._by_file.keys())

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._tags)
