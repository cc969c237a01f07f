"""
Service layer for defevents.

Contains the orchestration of domain logic and infrastructure:
- ChangeEventService: Commit -> change events and subscription updates

Services are the primary API for commands to use.
"""

from .event_service import ChangeEventService

__all__ = [
    'ChangeEventService',
]
