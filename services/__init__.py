"""
SIMS Dashboard Services Package
Ranking, scoring, event management, form editing and access guards
"""

from .access import UserRole, can_edit_events
from .event_management import (
    EventManagementService, EventNotFoundError, EventStoreError, ValidationError,
)
from .form_editor import NestedFormEditor
from .ranking import LiveTicker, tick
from .scoring import ScoringService

__all__ = [
    'UserRole', 'can_edit_events',
    'EventManagementService', 'EventNotFoundError', 'EventStoreError', 'ValidationError',
    'NestedFormEditor', 'LiveTicker', 'tick', 'ScoringService',
]
