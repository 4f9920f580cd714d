"""
Activity service for kodo.

The mutation layer shared by the batch CLI and the dashboard:
id assignment, add/delete/edit, duration filtering and totals.

Two persistence styles are offered:
- save(): strict, raises StoreError (CLI commands)
- mutating(): best-effort, logs and reports failure (dashboard)
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterator, List, Optional

from ..domain.activity import Activity
from ..exit_codes import StoreError
from ..infra.file_store import ActivityStore

logger = logging.getLogger(__name__)


@dataclass
class SaveOutcome:
    """Result of a best-effort save."""
    ok: bool = True
    error: Optional[str] = None


@dataclass
class Summary:
    """Totals over a list of activities."""
    count: int = 0
    total_minutes: int = 0

    @property
    def average_minutes(self) -> float:
        return self.total_minutes / self.count if self.count else 0.0


def next_id(activities: List[Activity]) -> int:
    """Return max(existing ids) + 1, or 1 for an empty list."""
    return max((a.id for a in activities), default=0) + 1


def in_range(activity: Activity, min_minutes: Optional[int] = None,
             max_minutes: Optional[int] = None) -> bool:
    """Inclusive duration bounds check; None imposes no constraint."""
    if min_minutes is not None and activity.duration_minutes < min_minutes:
        return False
    if max_minutes is not None and activity.duration_minutes > max_minutes:
        return False
    return True


def summarize(activities: List[Activity]) -> Summary:
    return Summary(
        count=len(activities),
        total_minutes=sum(a.duration_minutes for a in activities),
    )


class ActivityService:
    """
    Service for mutating and querying the activity store.

    Example:
        service = ActivityService(store)
        activity = service.add("Refactor", 45)
        service.save()
    """

    def __init__(self, store: ActivityStore,
                 today: Optional[Callable[[], date]] = None):
        """
        Initialize ActivityService.

        Args:
            store: Loaded ActivityStore (owned by the caller)
            today: Clock for new activity dates (defaults to date.today)
        """
        self.store = store
        self.today = today or date.today

    @property
    def activities(self) -> List[Activity]:
        return self.store.activities

    def get(self, activity_id: int) -> Optional[Activity]:
        """Find an activity by id."""
        for activity in self.activities:
            if activity.id == activity_id:
                return activity
        return None

    def add(self, name: str, minutes: int) -> Activity:
        """
        Append a new activity with the next id and today's date.

        Args:
            name: Activity name
            minutes: Duration in minutes

        Returns:
            The created activity
        """
        activity = Activity.create(next_id(self.activities), name, minutes, on=self.today())
        self.activities.append(activity)
        logger.debug(f"Added activity {activity.id}: {activity.name}")
        return activity

    def delete(self, activity_id: int) -> bool:
        """
        Remove the activity with the given id.

        Returns:
            True if an activity was removed
        """
        before = len(self.activities)
        self.activities[:] = [a for a in self.activities if a.id != activity_id]
        removed = len(self.activities) != before
        if removed:
            logger.debug(f"Deleted activity {activity_id}")
        return removed

    def edit(self, activity_id: int, name: Optional[str] = None,
             minutes: Optional[int] = None) -> Optional[Activity]:
        """
        Update the name and/or duration of an activity.

        Returns:
            The updated activity, or None if the id is unknown
        """
        activity = self.get(activity_id)
        if activity is None:
            return None
        if name is not None:
            activity.name = name
        if minutes is not None:
            activity.duration_minutes = minutes
        logger.debug(f"Edited activity {activity_id}")
        return activity

    def filter(self, min_minutes: Optional[int] = None,
               max_minutes: Optional[int] = None) -> List[Activity]:
        """Activities whose duration lies within the inclusive bounds."""
        return [a for a in self.activities if in_range(a, min_minutes, max_minutes)]

    def merge(self, incoming: List[Activity]) -> List[Activity]:
        """
        Append activities not already present by (name, date).

        Incoming ids are discarded; each merged record gets a fresh id.

        Returns:
            The activities that were added
        """
        seen = {(a.name, a.date) for a in self.activities}
        added = []
        for activity in incoming:
            key = (activity.name, activity.date)
            if key in seen:
                continue
            merged = Activity(
                id=next_id(self.activities),
                name=activity.name,
                duration_minutes=activity.duration_minutes,
                date=activity.date,
            )
            self.activities.append(merged)
            seen.add(key)
            added.append(merged)
        return added

    def save(self) -> None:
        """Persist the whole store; raises StoreError."""
        self.store.save()

    def save_quietly(self) -> SaveOutcome:
        """Persist the whole store, logging instead of raising on failure."""
        try:
            self.store.save()
        except StoreError as e:
            logger.warning(f"Changes kept in memory only: {e}")
            return SaveOutcome(ok=False, error=str(e))
        return SaveOutcome()

    @contextmanager
    def mutating(self) -> Iterator[SaveOutcome]:
        """
        Apply a mutation, then save whatever state results.

        The save runs even when the mutation raises. Save failures are
        logged and recorded on the yielded outcome, never raised.

        Example:
            with service.mutating() as outcome:
                service.delete(3)
            if not outcome.ok:
                show(outcome.error)
        """
        outcome = SaveOutcome()
        try:
            yield outcome
        finally:
            result = self.save_quietly()
            outcome.ok = result.ok
            outcome.error = result.error
