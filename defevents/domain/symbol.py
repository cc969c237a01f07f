"""
Symbol domain objects for defevents.

Tags are symbol definitions reported by the tag extraction tool.
References are identifier-like tokens found in added lines; they are
lexical candidates only and are never resolved to a definition.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any


@dataclass(frozen=True)
class Tag:
    """
    A symbol definition at a specific line of a specific file.

    Attributes:
        file: Path of the defining file, relative to the repository root
        name: Symbol name (e.g., "ParseConfig")
        kind: Symbol kind as reported by ctags (e.g., "func", "type")
        signature: Parameter list or type text following the name, may be empty
        line: 1-based line of the definition
    """

    file: str
    name: str
    kind: str = ""
    signature: str = ""
    line: int = 0

    @property
    def display(self) -> str:
        """Human-readable form, e.g. ``func ParseConfig(path string)``."""
        return f"{self.kind} {self.name}{self.signature}".strip()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'file': self.file,
            'name': self.name,
            'kind': self.kind,
            'signature': self.signature,
            'line': self.line,
        }

    def __str__(self) -> str:
        return f"{self.file}:{self.line} {self.display}"


class ReferenceKind(str, Enum):
    """How a reference was recognized."""
    CALL = "call"        # identifier( ... )
    MARKUP = "markup"    # <Component ...>


@dataclass(frozen=True)
class Reference:
    """
    One occurrence of a candidate reference in an added line.

    Attributes:
        name: Referenced identifier
        kind: Call-like or markup (component) usage
        file: File containing the added line
        line: Line number recorded for the added line
        text: The added line itself
    """

    name: str
    kind: ReferenceKind
    file: str
    line: int
    text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'kind': self.kind.value,
            'file': self.file,
            'line': self.line,
            'text': self.text,
        }
