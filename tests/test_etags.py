"""Tests for the TAGS format parser."""

import pytest

from defevents.exit_codes import TagFormatError
from defevents.infra.etags import ETag, EtagsParser, def_format_data

TAGS_OUTPUT = (
    "\x0c\n"
    "main.go,120\n"
    "func ParseConfig(\x7fParseConfig\x0112,201\n"
    "type Server struct\x7fServer\x0130,455\n"
    "func (s *Server) Start(\x7fStart\x0140,612\n"
    "\x0c\n"
    "util/strings.go,80\n"
    "func Trim(\x7fTrim\x013,20\n"
    "func Trim(\x7fTrim\x0190,1400\n"
)


class TestEtagsParser:
    """Tests for line parsing."""

    def test_parse_entries(self):
        parser = EtagsParser()
        entries = parser.parse(TAGS_OUTPUT)

        assert len(entries) == 5
        assert parser.files == ["main.go", "util/strings.go"]
        assert entries[0] == ETag(
            file="main.go",
            definition="func ParseConfig(",
            name="ParseConfig",
            line=12,
            byte_offset=201,
        )
        assert entries[3].file == "util/strings.go"

    def test_crlf_and_blank_lines(self):
        parser = EtagsParser()
        parser.parse("\r\nmain.go,10\r\nfunc A(\x7fA\x011,0\r\n\n")

        assert [(e.file, e.name, e.line) for e in parser.tags] == [("main.go", "A", 1)]

    def test_comment_lines_skipped(self):
        parser = EtagsParser()
        parser.parse("!_TAG_FILE_FORMAT\t2\nmain.go,10\nfunc A(\x7fA\x011,0\n")
        assert len(parser.tags) == 1

    def test_file_name_with_comma(self):
        parser = EtagsParser()
        parser.parse("a,b.go,10\nfunc A(\x7fA\x011,0\n")
        assert parser.tags[0].file == "a,b.go"

    @pytest.mark.parametrize("line", [
        "func A(\x7fA1,0",           # no position separator
        "func A(\x7fA\x0110",         # no column separator
        "func A(\x7fA\x01x,0",        # bad line number
        "func A(\x7fA\x011,zz",       # bad byte offset
        "main.go",                     # file line without size
        "main.go,big",                 # file line with bad size
    ])
    def test_malformed(self, line):
        with pytest.raises(TagFormatError):
            EtagsParser().parse_line(line)


class TestDefFormatData:
    """Tests for definition splitting."""

    def test_keyword_and_signature(self):
        data = def_format_data(ETag("a.go", "func ParseConfig(path string)", "ParseConfig", 1, 0))

        assert data.keyword == "func"
        assert data.kind == "func"
        assert data.type == "(path string)"
        assert data.separator == ""

    def test_colon_separator(self):
        data = def_format_data(ETag("a.ts", "let timeout: number", "timeout", 1, 0))

        assert data.keyword == "let"
        assert data.separator == ":"
        assert data.type == "number"

    def test_name_not_in_definition(self):
        assert def_format_data(ETag("a.go", "func x(", "Other", 1, 0)) is None


class TestConversion:
    """Tests for conversion to tags."""

    def test_to_tags(self):
        parser = EtagsParser()
        parser.parse(TAGS_OUTPUT)
        tags = parser.to_tags()

        assert tags[0].name == "ParseConfig"
        assert tags[0].kind == "func"
        assert tags[0].signature == "("
        assert tags[0].line == 12
        assert tags[1].kind == "type"
        assert tags[1].signature == " struct"
        assert tags[2].kind == "func (s *Server)"

    def test_to_tags_drops_unmatched(self):
        parser = EtagsParser()
        parser.parse("a.go,10\nfunc x(\x7fOther\x011,0\nfunc A(\x7fA\x012,0\n")
        assert [t.name for t in parser.to_tags()] == ["A"]

    def test_parse_replaces_previous_run(self):
        """Parsing again starts from an empty result."""
        parser = EtagsParser()
        parser.parse(TAGS_OUTPUT)
        entries = parser.parse("other.go,10\nfunc Only(\x7fOnly\x015,0\n")

        assert [(e.file, e.name) for e in entries] == [("other.go", "Only")]
        assert parser.files == ["other.go"]
        assert [t.name for t in parser.to_tags()] == ["Only"]
