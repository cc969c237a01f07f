"""Tests for the symbol index."""

import math

from defevents.domain import Tag
from defevents.symbol_index import SymbolIndex


def _tag(name, line, file="a.go"):
    return Tag(file=file, name=name, kind="func", line=line)


class TestSorting:
    """Tests for global line ordering."""

    def test_sorted_by_line(self):
        """Tags are sorted by line regardless of input order."""
        index = SymbolIndex([_tag("C", 30), _tag("A", 1), _tag("B", 15)])
        assert [t.name for t in index] == ["A", "B", "C"]

    def test_stable_for_equal_lines(self):
        """Tags on the same line keep their input order."""
        index = SymbolIndex([_tag("Z", 7), _tag("First", 5), _tag("Second", 5), _tag("Third", 5)])
        assert [t.name for t in index.tags] == ["First", "Second", "Third", "Z"]

    def test_sort_spans_all_files(self):
        """Tags of different files are interleaved in one global order."""
        index = SymbolIndex([
            _tag("B1", 20, file="b.go"),
            _tag("A1", 10, file="a.go"),
            _tag("A2", 30, file="a.go"),
        ])
        assert [t.name for t in index] == ["A1", "B1", "A2"]

    def test_empty(self):
        index = SymbolIndex([])
        assert len(index) == 0
        assert list(index.spans()) == []
        assert index.for_file("a.go") == []


class TestImplicitEnd:
    """Tests for implicit end lines."""

    def test_end_is_next_line_minus_one(self):
        """Each tag ends one line before the next tag."""
        index = SymbolIndex([_tag("Foo", 9), _tag("Bar", 15), _tag("Baz", 40)])

        assert index.end_line(0) == 14
        assert index.end_line(1) == 39

    def test_last_tag_is_open_ended(self):
        """The last tag extends to infinity."""
        index = SymbolIndex([_tag("Foo", 9), _tag("Bar", 15)])
        assert index.end_line(1) == math.inf

    def test_single_tag(self):
        index = SymbolIndex([_tag("Only", 3)])
        assert index.end_line(0) == math.inf

    def test_equal_lines_share_end(self):
        """Tags on the same line get the same implicit end."""
        index = SymbolIndex([_tag("A", 5), _tag("B", 5), _tag("C", 9)])

        assert index.end_line(0) == 8
        assert index.end_line(1) == 8
        assert index.end_line(2) == math.inf

    def test_equal_lines_at_end_are_open_ended(self):
        index = SymbolIndex([_tag("A", 1), _tag("B", 5), _tag("C", 5)])

        assert index.end_line(0) == 4
        assert index.end_line(1) == math.inf
        assert index.end_line(2) == math.inf

    def test_end_bounded_by_other_file(self):
        """The next tag in global order bounds the end, even in another file."""
        index = SymbolIndex([_tag("A", 10, file="a.go"), _tag("B", 20, file="b.go")])
        spans = {tag.name: (start, end) for tag, start, end in index.spans()}

        assert spans["A"] == (10, 19)
        assert spans["B"] == (20, math.inf)

    def test_distinct_lines_property(self):
        """For distinct lines the end of tag i is always tags[i+1].line - 1."""
        lines = [3, 97, 12, 55, 8, 41, 70]
        index = SymbolIndex([_tag(f"T{n}", n) for n in lines])
        tags = index.tags

        for i in range(len(tags) - 1):
            assert index.end_line(i) == tags[i + 1].line - 1
        assert index.end_line(len(tags) - 1) == math.inf


class TestPerFileLookup:
    """Tests for per-file access."""

    def test_for_file(self):
        index = SymbolIndex([
            _tag("A2", 30, file="a.go"),
            _tag("B1", 20, file="b.go"),
            _tag("A1", 10, file="a.go"),
        ])

        assert [t.name for t in index.for_file("a.go")] == ["A1", "A2"]
        assert [t.name for t in index.for_file("b.go")] == ["B1"]
        assert index.for_file("missing.go") == []

    def test_files(self):
        index = SymbolIndex([_tag("A", 1, file="a.go"), _tag("B", 2, file="b.go")])
        assert sorted(index.files()) == ["a.go", "b.go"]

    def test_for_file_returns_indexed_tags(self):
        """Per-file lists point into the sorted array rather than copies."""
        tag = _tag("A", 1)
        index = SymbolIndex([tag])
        assert index.for_file("a.go")[0] is index.tags[0]
