"""
Domain layer for defevents.

Contains pure domain objects with no I/O or side effects:
- Line, Hunk: Parsed unified diff regions
- Tag, Reference: Symbol definitions and candidate references
- CommitMetadata: Author, time and location of the analyzed commit
- ChangeEvent, SubscriptionUpdate, EventBatch: Output records

These objects provide serialization methods for JSON output.
"""

from .diff import Line, Hunk
from .symbol import Tag, Reference, ReferenceKind
from .commit import CommitMetadata, remote_display_url
from .event import ChangeEvent, EventType, SubscriptionUpdate, EventBatch

__all__ = [
    'Line',
    'Hunk',
    'Tag',
    'Reference',
    'ReferenceKind',
    'CommitMetadata',
    'remote_display_url',
    'ChangeEvent',
    'EventType',
    'SubscriptionUpdate',
    'EventBatch',
]
