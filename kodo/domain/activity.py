"""
Activity domain object for kodo.

An activity is something the developer spent time on:
- added by hand (kodo add, dashboard add)
- derived from git history (kodo commits, dashboard sync)

Activities are plain records, identified by a positive integer id
that is unique within one store.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Any, Optional
import json


DATE_FORMAT = "%Y-%m-%d"


def today_str(today: Optional[date] = None) -> str:
    """Return today's local date as YYYY-MM-DD."""
    return (today or date.today()).strftime(DATE_FORMAT)


@dataclass
class Activity:
    """
    A tracked activity.

    Attributes:
        id: Unique positive id within the store
        name: Display name (non-empty)
        duration_minutes: Time spent, in whole minutes
        date: Calendar date string (YYYY-MM-DD)
    """

    id: int
    name: str
    duration_minutes: int
    date: str

    @classmethod
    def create(cls, id: int, name: str, duration_minutes: int,
               on: Optional[date] = None) -> 'Activity':
        """Create an activity dated today (or on the given date)."""
        return cls(id=id, name=name, duration_minutes=duration_minutes,
                   date=today_str(on))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Activity':
        """
        Build an activity from a stored record.

        Field order is irrelevant. Raises ValueError for missing
        fields or fields of the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Activity record must be an object, got {type(data).__name__}")

        try:
            activity_id = data['id']
            name = data['name']
            minutes = data['duration_minutes']
            day = data['date']
        except KeyError as e:
            raise ValueError(f"Activity record missing field {e.args[0]!r}") from e

        # bool is an int subclass; reject it explicitly
        for field_name, value in (('id', activity_id), ('duration_minutes', minutes)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Activity field {field_name!r} must be an integer")
        if not isinstance(name, str) or not isinstance(day, str):
            raise ValueError("Activity fields 'name' and 'date' must be strings")

        return cls(id=activity_id, name=name, duration_minutes=minutes, date=day)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'name': self.name,
            'duration_minutes': self.duration_minutes,
            'date': self.date,
        }

    def to_jsonl(self) -> str:
        """Convert to single-line JSON for streaming output."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def __str__(self) -> str:
        return f"#{self.id} {self.name} ({self.duration_minutes} min, {self.date})"
