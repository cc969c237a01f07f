"""
defevents - Change events for the definitions touched by a commit.

defevents correlates the unified diff of a single commit with the symbol
definitions reported by ctags and emits a normalized, deterministically
identified stream of change events for downstream activity feeds.

Quick Start:
    from defevents import ChangeEventService

    service = ChangeEventService()
    batch = service.collect("/path/to/repo", rev="HEAD")
    for event in batch.events:
        print(event.type.value, event.title)

Pipeline:
    UnifiedDiffParser - diff text -> hunks with old/new line ranges
    SymbolIndex       - tags sorted by line with implicit end lines
    OverlapCorrelator - tags whose range overlaps a hunk
    ReferenceScanner  - call-like and markup tokens in added lines
    EventAssembler    - events and subscription updates

Domain Objects:
    Hunk, Line - parsed diff
    Tag, Reference - definitions and candidate references
    CommitMetadata - author, time, branch and remote of the commit
    ChangeEvent, SubscriptionUpdate, EventBatch - output records
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    Line,
    Hunk,
    Tag,
    Reference,
    ReferenceKind,
    CommitMetadata,
    ChangeEvent,
    EventType,
    SubscriptionUpdate,
    EventBatch,
)

# Core pipeline
from .diff_parser import UnifiedDiffParser, parse_unified_diff
from .symbol_index import SymbolIndex
from .correlate import OverlapCorrelator, correlate
from .references import ReferenceScanner, DEFAULT_IGNORE
from .assembler import EventAssembler

# Services
from .services import ChangeEventService

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "Line",
    "Hunk",
    "Tag",
    "Reference",
    "ReferenceKind",
    "CommitMetadata",
    "ChangeEvent",
    "EventType",
    "SubscriptionUpdate",
    "EventBatch",
    # Core pipeline
    "UnifiedDiffParser",
    "parse_unified_diff",
    "SymbolIndex",
    "OverlapCorrelator",
    "correlate",
    "ReferenceScanner",
    "DEFAULT_IGNORE",
    "EventAssembler",
    # Services
    "ChangeEventService",
    # Configuration
    "load_config",
    "save_config",
]
