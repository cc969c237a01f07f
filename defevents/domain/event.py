"""
Event domain objects for defevents.

Change events describe a symbol being modified or referenced by a
commit. Their IDs are derived only from the event kind, the subject,
the file and the commit URL, so re-running on the same commit yields
the same IDs and downstream consumers can deduplicate.

Subscription updates are fan-out edges: an actor (the commit author)
to the symbol names they touched.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any, List, Tuple
import json


class EventType(str, Enum):
    """What happened to the subject of an event."""
    MODIFIED = "modified"
    REFERENCED = "referenced"


@dataclass(frozen=True, eq=False)
class ChangeEvent:
    """
    A single change event.

    Attributes:
        id: Stable identifier "<kind>:<subject>:<file>:<commit url>"
        title: One-line human-readable summary
        body: Longer human-readable description
        url: Commit URL
        type: Modified or referenced
        time: Commit time
    """

    id: str
    title: str
    body: str
    url: str
    type: EventType
    time: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'title': self.title,
            'body': self.body,
            'url': self.url,
            'type': self.type.value,
            'time': self.time.isoformat(),
        }

    def to_jsonl(self) -> str:
        """Convert to single-line JSON for streaming output."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def __str__(self) -> str:
        return f"{self.type.value}: {self.title}"

    def __hash__(self) -> int:
        """Hash based on stable ID for use in sets."""
        return hash(self.id)

    def __eq__(self, other) -> bool:
        """Equality based on stable ID."""
        if not isinstance(other, ChangeEvent):
            return False
        return self.id == other.id


@dataclass(frozen=True)
class SubscriptionUpdate:
    """Fan-out edge from an actor to the symbol names they affected."""

    src: str
    dsts: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {'src': self.src, 'dsts': list(self.dsts)}


@dataclass
class EventBatch:
    """Everything produced for one commit, ready for serialization."""

    events: List[ChangeEvent] = field(default_factory=list)
    subscriptions: List[SubscriptionUpdate] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'events': [e.to_dict() for e in self.events],
            'subscriptions': [s.to_dict() for s in self.subscriptions],
        }

    def __len__(self) -> int:
        return len(self.events)
