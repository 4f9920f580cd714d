"""
Domain layer for kodo.

Contains pure domain objects with no I/O or side effects:
- Activity: A tracked task with a duration and a date

These objects provide serialization methods for the JSON
store and for JSONL output.
"""

from .activity import Activity, today_str

__all__ = [
    'Activity',
    'today_str',
]
