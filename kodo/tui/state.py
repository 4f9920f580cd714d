"""
Session state for the activity dashboard.

Input modes and overlays are small tagged unions: one frozen dataclass
per state, each carrying only what its next transition needs. None of
this is ever persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from ..domain.activity import Activity


# Input modes

@dataclass(frozen=True)
class Normal:
    """Browsing; single keys are commands."""


@dataclass(frozen=True)
class EnteringName:
    """Typing the name of a new activity."""


@dataclass(frozen=True)
class EnteringDuration:
    """Typing the duration for the name already entered."""
    pending_name: str


@dataclass(frozen=True)
class EnteringFilterMin:
    """Typing the lower duration bound."""


@dataclass(frozen=True)
class EnteringFilterMax:
    """Typing the upper duration bound."""
    pending_min: Optional[int]


@dataclass(frozen=True)
class EditingName:
    """Typing a replacement name for an existing activity."""
    activity_id: int


@dataclass(frozen=True)
class EditingDuration:
    """Typing a replacement duration; the new name (if any) waits here."""
    activity_id: int
    pending_name: Optional[str] = None


InputMode = Union[
    Normal,
    EnteringName,
    EnteringDuration,
    EnteringFilterMin,
    EnteringFilterMax,
    EditingName,
    EditingDuration,
]


# Overlays

@dataclass(frozen=True)
class LocalOverlay:
    """Show the persisted store."""


@dataclass(frozen=True)
class CommitOverlay:
    """Show a snapshot of commit-derived activities taken at sync time."""
    activities: Tuple[Activity, ...] = ()


Overlay = Union[LocalOverlay, CommitOverlay]


class SortMode(Enum):
    """Display order of the local view."""
    BY_DATE = "date"
    BY_DURATION = "duration"
    BY_NAME = "name"

    def next(self) -> 'SortMode':
        """Cycle date -> duration -> name -> date."""
        members = list(SortMode)
        return members[(members.index(self) + 1) % len(members)]

    @property
    def label(self) -> str:
        return {
            SortMode.BY_DATE: "date (newest first)",
            SortMode.BY_DURATION: "duration (longest first)",
            SortMode.BY_NAME: "name (A-Z)",
        }[self]


@dataclass
class SessionState:
    """All dashboard-local UI state."""
    mode: InputMode = field(default_factory=Normal)
    buffer: str = ""
    selected: int = 0
    filter_min: Optional[int] = None
    filter_max: Optional[int] = None
    sort_mode: SortMode = SortMode.BY_DATE
    show_stats: bool = False
    overlay: Overlay = field(default_factory=LocalOverlay)
    notice: Optional[str] = None

    @property
    def in_commit_view(self) -> bool:
        return isinstance(self.overlay, CommitOverlay)
