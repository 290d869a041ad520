"""
SIMS Dashboard - Event Management Service
Add, edit and delete event definitions of the selected series
"""

import copy
import logging
from numbers import Number
from typing import Dict, List, Optional

import pandas as pd

from store import EventRecordStore
from store.schema import (
    EventDefinition, GuidelineSection, next_event_id,
    with_event_added, with_event_deleted, with_event_updated,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "category", "participants", "officer")


class EventStoreError(Exception):
    """Base class for event store errors"""


class ValidationError(EventStoreError, ValueError):
    """Raised when a new event is missing required fields"""

    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__(f"Please fill all required fields: {', '.join(self.fields)}")


class EventNotFoundError(EventStoreError, LookupError):
    """Raised in strict mode when no event has the requested id"""

    def __init__(self, event_id):
        self.event_id = event_id
        super().__init__(f"Event {event_id} not found")


def section_total_points(section: GuidelineSection) -> float:
    """Sum of a section's numeric criteria points; text and blanks count as 0"""
    return sum(
        criterion["points"] for criterion in section.get("criteria") or []
        if isinstance(criterion.get("points"), Number) and not isinstance(criterion["points"], bool)
    )


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class EventManagementService:
    """Copy-on-write event mutations against the selected series"""

    def __init__(self, store: EventRecordStore):
        self.store = store
        self._last_issued_id = 0

    def get_events(self) -> List[EventDefinition]:
        return self.store.series()["events"]

    def get_event(self, event_id: int) -> Optional[EventDefinition]:
        for event in self.get_events():
            if event.get("id") == event_id:
                return event
        return None

    def get_categories(self) -> List[str]:
        """Unique categories in order of first appearance"""
        return list(dict.fromkeys(event["category"] for event in self.get_events()))

    def group_events_by_category(self) -> Dict[str, List[EventDefinition]]:
        grouped = {}
        for event in self.get_events():
            grouped.setdefault(event["category"], []).append(event)
        return grouped

    def get_events_frame(self) -> pd.DataFrame:
        """Events as a table for display"""
        columns = ["id", "category", "name", "officer", "participants", "judges", "sections"]
        rows = [{
            "id": event.get("id"),
            "category": event.get("category", ""),
            "name": event.get("name", ""),
            "officer": event.get("officer", ""),
            "participants": event.get("participants", ""),
            "judges": len(event.get("judges") or []),
            "sections": len(event.get("details") or []),
        } for event in self.get_events()]
        return pd.DataFrame(rows, columns=columns)

    def add_event(self, new_event: EventDefinition) -> EventDefinition:
        """
        Validate, assign a fresh id and append to the selected series.

        The store keeps its own copy of the event and the caller gets
        another one.
        """
        missing = [field for field in REQUIRED_FIELDS if _is_blank(new_event.get(field))]
        if missing:
            raise ValidationError(missing)

        series = self.store.selected_series
        snapshot = self.store.snapshot
        event_id = next_event_id(snapshot[series]["events"], floor=self._last_issued_id)

        payload = copy.deepcopy({key: value for key, value in new_event.items() if key != "id"})
        self.store.commit(with_event_added(snapshot, series, payload, event_id))
        self._last_issued_id = event_id

        logger.info("Event %d '%s' added to %s", event_id, payload["name"], series)
        return copy.deepcopy(self.get_event(event_id))

    def create_event(self, name: str, category: str, participants: str, officer: str,
                     judges: Optional[List[str]] = None, description: str = "",
                     mechanics: str = "", criteria: Optional[List[dict]] = None,
                     competition_points=None) -> EventDefinition:
        """Build an event from the add-event form and add it"""
        section = {
            "title": "Mechanics & Criteria",
            "description": mechanics,
            "criteria": [c for c in criteria or [] if str(c.get("name") or "").strip()],
            "competition_points": competition_points,
        }
        return self.add_event({
            "name": name,
            "category": category,
            "participants": participants,
            "officer": officer,
            "judges": [j for j in judges or [] if str(j).strip()],
            "description": description,
            "details": [section],
        })

    def update_event(self, event: EventDefinition, strict: bool = False) -> bool:
        """Replace the event with the same id; returns False when none matched"""
        series = self.store.selected_series
        if self.get_event(event.get("id")) is None:
            if strict:
                raise EventNotFoundError(event.get("id"))
            logger.info("Update skipped, no event %s in %s", event.get("id"), series)
            return False

        self.store.commit(with_event_updated(self.store.snapshot, series, copy.deepcopy(event)))
        logger.info("Event %s updated in %s", event["id"], series)
        return True

    def delete_event(self, event_id: int, strict: bool = False) -> bool:
        """Remove the event with this id; returns False when none matched"""
        series = self.store.selected_series
        if self.get_event(event_id) is None:
            if strict:
                raise EventNotFoundError(event_id)
            logger.info("Delete skipped, no event %s in %s", event_id, series)
            return False

        self.store.commit(with_event_deleted(self.store.snapshot, series, event_id))
        logger.info("Event %s deleted from %s", event_id, series)
        return True
