"""
Emacs-style TAGS file parsing.

Format (as written by ``ctags -e``)::

    \\x0c
    path/to/file.go,1234
    func ParseConfig(\\x7fParseConfig\\x0142,1021

A file header line names the file the following symbol lines belong
to. Each symbol line carries the definition text, the tag name, the
1-based line and the byte offset of the definition.
"""

from dataclasses import dataclass
from typing import List, Optional
import logging

from ..domain import Tag
from ..exit_codes import TagFormatError

logger = logging.getLogger(__name__)

SEP_TAG = "\x7f"
SEP_POS = "\x01"
SEP_COL = ","


@dataclass(frozen=True)
class ETag:
    """A raw TAGS entry."""
    file: str
    definition: str
    name: str
    line: int
    byte_offset: int


@dataclass(frozen=True)
class DefFormatData:
    """Display pieces of a definition: ``<keyword> <name><separator> <type>``."""
    name: str
    keyword: str
    type: str
    kind: str
    separator: str = ""


def def_format_data(tag: ETag) -> Optional[DefFormatData]:
    """
    Split a definition around its name.

    The text before the name is the keyword (used as kind), the text after
    it is the type/signature. A leading ``:`` is split off as separator.

    Returns:
        DefFormatData, or None if the name does not occur in the definition
    """
    name_idx = tag.definition.find(tag.name)
    if name_idx < 0:
        logger.warning(f"Name {tag.name!r} not found in definition {tag.definition!r}")
        return None
    keyword = tag.definition[:name_idx].strip()
    typ = tag.definition[name_idx + len(tag.name):]
    sep = ""
    if typ.startswith(":"):
        sep, typ = typ[:1], typ[1:].strip()
    return DefFormatData(name=tag.name, keyword=keyword, type=typ, kind=keyword, separator=sep)


class EtagsParser:
    """
    Parser for TAGS output.

    Example:
        parser = EtagsParser()
        parser.parse(output)
        tags = parser.to_tags()
    """

    def __init__(self):
        self.tags: List[ETag] = []
        self.files: List[str] = []
        self._cur_file = ""

    def parse(self, text: str) -> List[ETag]:
        """Parse a whole TAGS document, replacing the results of any earlier run."""
        self.tags = []
        self.files = []
        self._cur_file = ""
        for line in text.split("\n"):
            self.parse_line(line.rstrip("\r"))
        return self.tags

    def parse_line(self, line: str) -> None:
        """
        Parse one line of TAGS output.

        Raises:
            TagFormatError: If a file or symbol line is malformed
        """
        if not line.strip() or line.startswith("!"):
            return

        name_idx = line.find(SEP_TAG)
        if name_idx < 0:
            self._parse_file_line(line)
            return

        pos_idx = line.find(SEP_POS, name_idx)
        if pos_idx < 0:
            raise TagFormatError(f"tags line parsing error: could not find {SEP_POS!r}, line was {line!r}")
        col_idx = line.find(SEP_COL, pos_idx)
        if col_idx < 0:
            raise TagFormatError(f"tags line parsing error: could not find {SEP_COL!r}, line was {line!r}")

        try:
            line_no = int(line[pos_idx + 1:col_idx])
        except ValueError:
            raise TagFormatError(f"tags line parsing error: could not parse line number, line was {line!r}")
        try:
            byte_offset = int(line[col_idx + 1:])
        except ValueError:
            raise TagFormatError(f"tags line parsing error: could not parse byte offset, line was {line!r}")

        self.tags.append(ETag(
            file=self._cur_file,
            definition=line[:name_idx],
            name=line[name_idx + 1:pos_idx],
            line=line_no,
            byte_offset=byte_offset,
        ))

    def _parse_file_line(self, line: str) -> None:
        parts = line.rsplit(",", 1)
        if len(parts) != 2:
            raise TagFormatError(f"tags line parsing error: unrecognized format, line was {line!r}")
        try:
            int(parts[1])
        except ValueError:
            raise TagFormatError(f"tags line parsing error: invalid size, line was {line!r}")
        self._cur_file = parts[0]
        self.files.append(parts[0])

    def to_tags(self) -> List[Tag]:
        """Convert entries to Tags; entries whose name is not in the definition are dropped."""
        tags = []
        for etag in self.tags:
            data = def_format_data(etag)
            if data is None:
                continue
            tags.append(Tag(
                file=etag.file,
                name=etag.name,
                kind=data.kind,
                signature=data.type,
                line=etag.line,
            ))
        return tags
