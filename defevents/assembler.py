"""
Event assembly for defevents.

Turns changed tags and references into change events and subscription
updates for one commit. Output is a pure function of the input: the
same tags, references and commit metadata always produce the same
event IDs and subscription edges.
"""

from typing import Iterable, List

from .domain import (
    ChangeEvent,
    CommitMetadata,
    EventBatch,
    EventType,
    Reference,
    ReferenceKind,
    SubscriptionUpdate,
    Tag,
)


def event_id(kind: str, subject: str, file: str, commit_url: str) -> str:
    """Stable event identifier."""
    return f"{kind}:{subject}:{file}:{commit_url}"


class EventAssembler:
    """
    Build events for a single commit.

    Example:
        assembler = EventAssembler(metadata)
        batch = assembler.assemble(changed_tags, references)
        print(json.dumps(batch.to_dict()))
    """

    def __init__(self, metadata: CommitMetadata):
        self.metadata = metadata

    def _where(self, file: str) -> str:
        meta = self.metadata
        return f"in {file} on branch {meta.branch} of {meta.remote_display_url}"

    def modified(self, tag: Tag) -> ChangeEvent:
        meta = self.metadata
        return ChangeEvent(
            id=event_id(EventType.MODIFIED.value, tag.name, tag.file, meta.commit_url),
            title=f"{meta.author_name} modified {tag.display}",
            body=f"{meta.author_name} modified {tag.display} {self._where(tag.file)}",
            url=meta.commit_url,
            type=EventType.MODIFIED,
            time=meta.timestamp,
        )

    def referenced(self, ref: Reference) -> ChangeEvent:
        meta = self.metadata
        kind = EventType.REFERENCED.value
        if ref.kind == ReferenceKind.MARKUP:
            kind = f"{kind}(markup)"
            usage = f"<{ref.name}>"
        else:
            usage = ref.name
        return ChangeEvent(
            id=event_id(kind, ref.name, ref.file, meta.commit_url),
            title=f"{meta.author_name} referenced {usage}",
            body=f"{meta.author_name} started using {usage} {self._where(ref.file)}",
            url=meta.commit_url,
            type=EventType.REFERENCED,
            time=meta.timestamp,
        )

    def subscriptions(self, subject: str) -> List[SubscriptionUpdate]:
        """The author, by first name and by full name, subscribes to ``subject``."""
        meta = self.metadata
        return [
            SubscriptionUpdate(src=meta.author_first_name, dsts=(subject,)),
            SubscriptionUpdate(src=meta.author_name, dsts=(subject,)),
        ]

    def assemble(
        self,
        tags: Iterable[Tag],
        references: Iterable[Reference] = (),
    ) -> EventBatch:
        """
        Build the event batch.

        Args:
            tags: Changed tags, one modified event each
            references: Reference occurrences, one referenced event each

        Returns:
            EventBatch with events for tags first, then references, and two
            subscription updates per event
        """
        batch = EventBatch()
        for tag in tags:
            batch.events.append(self.modified(tag))
            batch.subscriptions.extend(self.subscriptions(tag.name))
        for ref in references:
            batch.events.append(self.referenced(ref))
            batch.subscriptions.extend(self.subscriptions(ref.name))
        return batch
