"""
Lexical reference scanning for defevents.

Finds identifier-like tokens in added lines that look like uses of
other symbols:

- call-like: ``name(`` anywhere in the line (all matches)
- markup: ``<Name`` component usages (first match per line only)

This is a heuristic. Tokens are not resolved against the symbol table
and duplicates are reported as they occur.
"""

from typing import FrozenSet, Iterable, List, Optional, Pattern, Tuple
import re
import logging

from .domain import Hunk, Reference, ReferenceKind
from .exit_codes import ConfigError

logger = logging.getLogger(__name__)

CALL_PATTERN = re.compile(r'(\w*)\(')
MARKUP_PATTERN = re.compile(r'<([A-Z]\w*)')

DEFAULT_IGNORE: FrozenSet[str] = frozenset([
    # builtin types
    'bool', 'byte', 'rune', 'string', 'String', 'error', 'Error',
    'int', 'int8', 'int16', 'int32', 'int64',
    'uint', 'uint8', 'uint16', 'uint32', 'uint64', 'uintptr',
    'float32', 'float64', 'complex64', 'complex128',
    'float', 'double', 'char', 'long', 'short', 'void',
    'str', 'list', 'dict', 'set', 'tuple', 'object', 'Object',
    'Array', 'Number', 'Boolean', 'Promise', 'Map', 'Set',
    # control keywords
    'if', 'else', 'for', 'while', 'do', 'switch', 'case', 'select',
    'return', 'func', 'function', 'def', 'go', 'defer', 'catch',
    'try', 'except', 'with', 'elif', 'and', 'or', 'not', 'in',
    'typeof', 'sizeof', 'await', 'async', 'yield', 'lambda',
    'assert', 'print',
    # builtin functions
    'make', 'new', 'len', 'cap', 'append', 'copy', 'delete', 'close',
    'panic', 'recover', 'println', 'complex', 'real', 'imag',
    'require', 'super', 'isinstance', 'range', 'type',
    # placeholders
    'TODO', 'FIXME', 'XXX', '_',
])


def _token_list(value, key: str) -> List[str]:
    """
    Normalize a configured token list.

    Scalars from environment overrides or YAML/TOML files are split on
    commas and whitespace.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [token for token in re.split(r"[,\s]+", value) if token]
    if isinstance(value, (list, tuple, set, frozenset)) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigError(f"{key} must be a list of strings, got {value!r}")


class ReferenceScanner:
    """
    Scan added lines for candidate references.

    Example:
        scanner = ReferenceScanner()
        for ref in scanner.scan(hunks):
            print(ref.kind.value, ref.name)
    """

    def __init__(
        self,
        ignore: FrozenSet[str] = DEFAULT_IGNORE,
        call_pattern: Pattern = CALL_PATTERN,
        markup_pattern: Optional[Pattern] = MARKUP_PATTERN,
    ):
        """
        Initialize ReferenceScanner.

        Args:
            ignore: Tokens never reported as references
            call_pattern: Pattern whose first group captures a called identifier
            markup_pattern: Pattern whose first group captures a component
                name, or None to skip markup scanning
        """
        self.ignore = frozenset(ignore)
        self.call_pattern = call_pattern
        self.markup_pattern = markup_pattern

    @classmethod
    def from_config(cls, config: dict) -> 'ReferenceScanner':
        section = config.get('references', {})
        extra = _token_list(section.get('ignore_extra'), 'references.ignore_extra')
        markup = MARKUP_PATTERN if section.get('markup', True) else None
        return cls(ignore=DEFAULT_IGNORE | frozenset(extra), markup_pattern=markup)

    def _keep(self, token: str) -> bool:
        return bool(token) and token not in self.ignore

    def scan_line(self, text: str) -> List[Tuple[str, ReferenceKind]]:
        """
        Candidate references in one line.

        Returns:
            (name, kind) pairs: call-like matches in order, then at most
            one markup match
        """
        found = [
            (token, ReferenceKind.CALL)
            for token in self.call_pattern.findall(text)
            if self._keep(token)
        ]
        if self.markup_pattern is not None:
            match = self.markup_pattern.search(text)
            if match and self._keep(match.group(1)):
                found.append((match.group(1), ReferenceKind.MARKUP))
        return found

    def scan(self, hunks: Iterable[Hunk]) -> List[Reference]:
        """Scan the added lines of every hunk; removed and context lines are skipped."""
        references: List[Reference] = []
        for hunk in hunks:
            for line in hunk.new_lines:
                for name, kind in self.scan_line(line.text):
                    references.append(Reference(
                        name=name,
                        kind=kind,
                        file=hunk.filename,
                        line=line.num,
                        text=line.text,
                    ))
        logger.debug(f"Found {len(references)} candidate references")
        return references
