"""
Event Timeline

Date-ordered storage for one calendar's events.

Events are kept in a list sorted by date (insertion order breaks ties), with
a parallel list of dates for bisect lookups and an id index for direct
retrieval.
"""

from bisect import bisect_left, bisect_right
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional

from .calendar_event import CalendarEvent
from .calendar_exceptions import InvalidEventException


class EventTimeline:
    """
    Storage and retrieval system for calendar events.

    The event sequence is non-decreasing by date after every insertion.
    """

    def __init__(self, events: Iterable[CalendarEvent] = ()):
        self._events: List[CalendarEvent] = []
        self._dates: List[date] = []
        self._events_by_id: Dict[str, CalendarEvent] = {}

        self.add_events(events)

    def add_event(self, event: CalendarEvent) -> None:
        """
        Insert an event at its date position.

        Raises:
            InvalidEventException: If an event with the same id is stored
        """
        if event.event_id in self._events_by_id:
            raise InvalidEventException("duplicate event id", event_id=event.event_id)

        position = bisect_right(self._dates, event.event_date)
        self._events.insert(position, event)
        self._dates.insert(position, event.event_date)
        self._events_by_id[event.event_id] = event

    def add_events(self, events: Iterable[CalendarEvent]) -> int:
        """Insert several events, returning how many were added"""
        count = 0
        for event in events:
            self.add_event(event)
            count += 1
        return count

    def replace_event(self, event: CalendarEvent) -> CalendarEvent:
        """
        Swap the stored event with the same id for a new value.

        The replacement must keep the original date so ordering holds.

        Returns:
            The previous value

        Raises:
            InvalidEventException: Unknown id or changed date
        """
        previous = self._events_by_id.get(event.event_id)
        if previous is None:
            raise InvalidEventException("event not found", event_id=event.event_id)
        if previous.event_date != event.event_date:
            raise InvalidEventException("replacement cannot move an event to another date",
                                        event_id=event.event_id)

        position = self._index_of(previous)
        self._events[position] = event
        self._events_by_id[event.event_id] = event
        return previous

    def _index_of(self, event: CalendarEvent) -> int:
        start = bisect_left(self._dates, event.event_date)
        end = bisect_right(self._dates, event.event_date)
        for position in range(start, end):
            if self._events[position].event_id == event.event_id:
                return position
        raise InvalidEventException("event index out of sync", event_id=event.event_id)

    # ==================== Queries ====================

    def get_event_by_id(self, event_id: str) -> Optional[CalendarEvent]:
        return self._events_by_id.get(event_id)

    def has_event(self, event_id: str) -> bool:
        return event_id in self._events_by_id

    def get_events_by_date(self, target_date: date) -> List[CalendarEvent]:
        start = bisect_left(self._dates, target_date)
        end = bisect_right(self._dates, target_date)
        return self._events[start:end]

    def get_events_in_range(self, start_date: date, end_date: date) -> List[CalendarEvent]:
        """Events between two dates (inclusive); empty if start is after end"""
        if start_date > end_date:
            return []
        start = bisect_left(self._dates, start_date)
        end = bisect_right(self._dates, end_date)
        return self._events[start:end]

    def get_events_from(self, start_date: date) -> List[CalendarEvent]:
        """Events on or after start_date"""
        return self._events[bisect_left(self._dates, start_date):]

    def get_all_events(self) -> List[CalendarEvent]:
        return list(self._events)

    def get_games(self) -> List[CalendarEvent]:
        return [event for event in self._events if event.is_game_day]

    def get_dates_with_events(self) -> List[date]:
        return sorted(set(self._dates))

    def get_events_count(self) -> int:
        return len(self._events)

    def is_sorted(self) -> bool:
        return all(earlier <= later for earlier, later in zip(self._dates, self._dates[1:]))

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[CalendarEvent]:
        return iter(tuple(self._events))

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._events_by_id
