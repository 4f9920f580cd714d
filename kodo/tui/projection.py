"""
Projection of activities into the list the dashboard displays.

Pure functions: no I/O, no hidden state. Sorting is stable, so ties keep
their input order and the same inputs always give the same view.
"""

from typing import Iterable, List, Optional

from ..domain.activity import Activity
from ..services.activity_service import in_range
from .state import CommitOverlay, Overlay, SortMode

_SORT_KEYS = {
    SortMode.BY_DATE: (lambda a: a.date, True),
    SortMode.BY_DURATION: (lambda a: a.duration_minutes, True),
    SortMode.BY_NAME: (lambda a: a.name, False),
}


def sort_activities(activities: Iterable[Activity], sort_mode: SortMode) -> List[Activity]:
    """Stable sort: date descending, duration descending, or name ascending."""
    key, reverse = _SORT_KEYS[sort_mode]
    # sorted() stays stable with reverse=True
    return sorted(activities, key=key, reverse=reverse)


def project(
    activities: Iterable[Activity],
    filter_min: Optional[int] = None,
    filter_max: Optional[int] = None,
    sort_mode: SortMode = SortMode.BY_DATE,
) -> List[Activity]:
    """
    Filter by inclusive duration bounds, then sort.

    Args:
        activities: Source activities (not modified)
        filter_min: Lower bound in minutes, or None
        filter_max: Upper bound in minutes, or None
        sort_mode: Display order

    Returns:
        New list of the matching activities in display order
    """
    kept = [a for a in activities if in_range(a, filter_min, filter_max)]
    return sort_activities(kept, sort_mode)


def project_view(
    local: Iterable[Activity],
    overlay: Overlay,
    filter_min: Optional[int] = None,
    filter_max: Optional[int] = None,
    sort_mode: SortMode = SortMode.BY_DATE,
) -> List[Activity]:
    """The view for one frame; the commit overlay is shown as fetched."""
    if isinstance(overlay, CommitOverlay):
        return list(overlay.activities)
    return project(local, filter_min, filter_max, sort_mode)
