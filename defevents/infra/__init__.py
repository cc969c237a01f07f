"""
Infrastructure layer for defevents.

Contains abstractions for external systems:
- GitClient: Git command execution (diff, commit metadata, remote)
- CtagsClient: Symbol extraction through ctags
- EtagsParser: Parser for the Emacs TAGS format

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .ctags_client import CtagsClient, parse_json_tags
from .etags import EtagsParser, ETag, DefFormatData, def_format_data

__all__ = [
    'GitClient',
    'CtagsClient',
    'parse_json_tags',
    'EtagsParser',
    'ETag',
    'DefFormatData',
    'def_format_data',
]
