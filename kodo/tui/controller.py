"""
Dashboard controller: session state plus the input-mode state machine.

The controller knows nothing about terminals. The host feeds it one key
at a time through handle_key() and asks it to paint a frame through
render(surface); both are cheap enough to run every poll interval.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Optional, Protocol, Tuple

from ..domain.activity import Activity
from ..services.activity_service import ActivityService, summarize
from .projection import project_view
from .state import (
    CommitOverlay,
    EditingDuration,
    EditingName,
    EnteringDuration,
    EnteringFilterMax,
    EnteringFilterMin,
    EnteringName,
    InputMode,
    LocalOverlay,
    Normal,
    SessionState,
)

logger = logging.getLogger(__name__)

# Key names for non-printable keys, as delivered by the host
UP = "up"
DOWN = "down"
ENTER = "enter"
ESCAPE = "escape"
BACKSPACE = "backspace"


class CommitSource(Protocol):
    def fetch(self, repository: str, max_count: int) -> List[Activity]:
        ...


class Surface(Protocol):
    """What the controller needs from the renderer."""

    def split_body(self, with_stats: bool) -> None:
        ...

    def draw_table(self, region: str, activities: List[Activity], selected: int) -> None:
        ...

    def draw_stats(self, region: str, activities: List[Activity]) -> None:
        ...

    def draw_text(self, region: str, text: str) -> None:
        ...


@dataclass(frozen=True)
class KeyMap:
    """Normal-mode key bindings; each action accepts one or more keys."""
    quit: Tuple[str, ...] = ("q",)
    add: Tuple[str, ...] = ("a",)
    delete: Tuple[str, ...] = ("d",)
    edit: Tuple[str, ...] = ("e",)
    filter: Tuple[str, ...] = ("f",)
    reset: Tuple[str, ...] = ("r",)
    sort: Tuple[str, ...] = ("s",)
    stats: Tuple[str, ...] = ("t",)
    sync: Tuple[str, ...] = ("g",)
    up: Tuple[str, ...] = (UP, "k")
    down: Tuple[str, ...] = (DOWN, "j")

    @classmethod
    def from_config(cls, keys: Optional[Mapping[str, Any]]) -> 'KeyMap':
        """Build from the ``dashboard.keys`` config section; unknown actions are ignored."""
        overrides = {}
        known = {f.name for f in fields(cls)}
        for action, value in (keys or {}).items():
            if action not in known:
                logger.warning(f"Unknown dashboard key action: {action}")
                continue
            if isinstance(value, str):
                value = [value]
            overrides[action] = tuple(str(v) for v in value)
        return cls(**overrides)

    def action_for(self, key: str) -> Optional[str]:
        for f in fields(self):
            if key in getattr(self, f.name):
                return f.name
        return None

    def label(self, action: str) -> str:
        return getattr(self, action)[0]


def parse_int(text: str) -> Optional[int]:
    """Parse a typed integer; None when blank or malformed."""
    try:
        return int(text.strip())
    except ValueError:
        return None


def parse_minutes(text: str) -> int:
    """Parse a typed duration or bound; anything unusable counts as 0."""
    value = parse_int(text)
    return value if value is not None and value > 0 else 0


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class DashboardController:
    """
    Owns session state and turns key presses into state changes and
    store mutations.

    Example:
        controller = DashboardController(service, CommitService(), repository=".")
        controller.handle_key("a")
        for ch in "Refactor":
            controller.handle_key(ch)
        controller.handle_key("enter")
    """

    def __init__(
        self,
        service: ActivityService,
        commit_source: CommitSource,
        repository: str = ".",
        commit_limit: int = 50,
        keymap: Optional[KeyMap] = None,
    ):
        """
        Initialize the controller.

        Args:
            service: Activity service wrapping the loaded store
            commit_source: Source for the commit overlay
            repository: Repository passed to the commit source
            commit_limit: Maximum commits fetched per sync
            keymap: Normal-mode key bindings
        """
        self.service = service
        self.commit_source = commit_source
        self.repository = repository
        self.commit_limit = commit_limit
        self.keys = keymap or KeyMap()
        self.state = SessionState()
        self.running = True

        self._normal_actions = {
            'quit': self._quit,
            'add': self._start_add,
            'delete': self._delete_selected,
            'edit': self._start_edit,
            'filter': self._start_filter,
            'reset': self._reset,
            'sort': self._cycle_sort,
            'stats': self._toggle_stats,
            'sync': self._sync_commits,
            'up': self._move_up,
            'down': self._move_down,
        }
        self._confirm_actions = {
            EnteringName: self._confirm_name,
            EnteringDuration: self._confirm_duration,
            EnteringFilterMin: self._confirm_filter_min,
            EnteringFilterMax: self._confirm_filter_max,
            EditingName: self._confirm_edit_name,
            EditingDuration: self._confirm_edit_duration,
        }

    # Projection

    def view(self) -> List[Activity]:
        """The activities shown this frame."""
        state = self.state
        return project_view(
            self.service.activities,
            state.overlay,
            state.filter_min,
            state.filter_max,
            state.sort_mode,
        )

    def selected_activity(self) -> Optional[Activity]:
        view = self.view()
        if not view:
            return None
        return view[self.state.selected]

    def _clamp_selection(self) -> None:
        length = len(self.view())
        self.state.selected = max(0, min(self.state.selected, length - 1))

    # Input

    def handle_key(self, key: str) -> bool:
        """
        Dispatch one key press.

        Returns:
            False once the quit key was pressed in Normal mode
        """
        self.state.notice = None
        mode = self.state.mode

        if isinstance(mode, Normal):
            action = self.keys.action_for(key)
            if action:
                self._normal_actions[action]()
        elif key == ESCAPE:
            self._to_normal()
        elif key == BACKSPACE:
            self.state.buffer = self.state.buffer[:-1]
        elif key == ENTER:
            self._confirm_actions[type(mode)](mode)
        elif is_printable(key):
            self.state.buffer += key

        self._clamp_selection()
        return self.running

    def _to_normal(self) -> None:
        self.state.buffer = ""
        self.state.mode = Normal()

    def _enter(self, mode: InputMode) -> None:
        self.state.buffer = ""
        self.state.mode = mode

    def _persist(self, mutation, *args, **kwargs):
        with self.service.mutating() as outcome:
            result = mutation(*args, **kwargs)
        if not outcome.ok:
            self.state.notice = f"Save failed: {outcome.error}"
        return result

    # Normal mode actions

    def _quit(self) -> None:
        self.running = False

    def _start_add(self) -> None:
        self._enter(EnteringName())

    def _start_filter(self) -> None:
        self._enter(EnteringFilterMin())

    def _start_edit(self) -> None:
        if self.state.in_commit_view:
            return
        activity = self.selected_activity()
        if activity is not None:
            self._enter(EditingName(activity.id))

    def _delete_selected(self) -> None:
        if self.state.in_commit_view:
            return
        activity = self.selected_activity()
        if activity is None:
            return
        self._persist(self.service.delete, activity.id)

    def _reset(self) -> None:
        if self.state.in_commit_view:
            self.state.overlay = LocalOverlay()
        else:
            self.state.filter_min = None
            self.state.filter_max = None

    def _cycle_sort(self) -> None:
        self.state.sort_mode = self.state.sort_mode.next()

    def _toggle_stats(self) -> None:
        self.state.show_stats = not self.state.show_stats

    def _sync_commits(self) -> None:
        activities = self.commit_source.fetch(self.repository, self.commit_limit)
        self.state.overlay = CommitOverlay(tuple(activities))
        self.state.selected = 0
        self.state.notice = f"{len(activities)} commits from {self.repository}"

    def _move_up(self) -> None:
        if self.state.selected > 0:
            self.state.selected -= 1

    def _move_down(self) -> None:
        if self.state.selected + 1 < len(self.view()):
            self.state.selected += 1

    # Confirmations

    def _confirm_name(self, mode: EnteringName) -> None:
        name = self.state.buffer.strip()
        if name:
            self._enter(EnteringDuration(name))

    def _confirm_duration(self, mode: EnteringDuration) -> None:
        minutes = parse_minutes(self.state.buffer)
        if minutes > 0:
            self._persist(self.service.add, mode.pending_name, minutes)
        self._to_normal()

    def _confirm_filter_min(self, mode: EnteringFilterMin) -> None:
        minimum = parse_minutes(self.state.buffer) or None
        self.state.filter_min = minimum
        self._enter(EnteringFilterMax(minimum))

    def _confirm_filter_max(self, mode: EnteringFilterMax) -> None:
        self.state.filter_max = parse_minutes(self.state.buffer) or None
        self._to_normal()

    def _confirm_edit_name(self, mode: EditingName) -> None:
        name = self.state.buffer.strip() or None
        self._enter(EditingDuration(mode.activity_id, name))

    def _confirm_edit_duration(self, mode: EditingDuration) -> None:
        minutes = parse_int(self.state.buffer)
        if minutes is not None and minutes < 0:
            minutes = None
        self._persist(self.service.edit, mode.activity_id,
                      name=mode.pending_name, minutes=minutes)
        self._to_normal()

    # Rendering

    def header_text(self) -> str:
        k = self.keys.label
        help_line = (
            f" Kodo Dashboard - '{k('quit')}' quit | '{k('add')}' add | '{k('delete')}' delete"
            f" | '{k('edit')}' edit | '{k('filter')}' filter | '{k('reset')}' reset"
            f" | '{k('sort')}' sort | '{k('stats')}' stats | '{k('sync')}' commits "
        )

        state = self.state
        if isinstance(state.overlay, CommitOverlay):
            source = f"commits from {self.repository} ('{k('reset')}' to return)"
        else:
            source = f"local ({len(self.service.activities)} stored)"
        bounds = describe_bounds(state.filter_min, state.filter_max)
        return f"{help_line}\n Source: {source} | Sort: {state.sort_mode.label} | Filter: {bounds}"

    def footer_text(self, view: List[Activity]) -> str:
        state = self.state
        mode = state.mode
        buf = state.buffer

        if isinstance(mode, EnteringName):
            text = f"Enter activity name: {buf}"
        elif isinstance(mode, EnteringDuration):
            text = f"Enter duration (minutes) for '{mode.pending_name}': {buf}"
        elif isinstance(mode, EnteringFilterMin):
            text = f"Minimum duration in minutes (blank for none): {buf}"
        elif isinstance(mode, EnteringFilterMax):
            floor = f", minimum {mode.pending_min}" if mode.pending_min is not None else ""
            text = f"Maximum duration in minutes (blank for none{floor}): {buf}"
        elif isinstance(mode, (EditingName, EditingDuration)):
            activity = self.service.get(mode.activity_id)
            if activity is None:
                text = "Activity not found."
            elif isinstance(mode, EditingName):
                text = f"Editing name for '{activity.name}', leave empty to keep: {buf}"
            else:
                text = f"Editing duration for '{activity.name}', leave empty to keep: {buf}"
        else:
            summary = summarize(view)
            text = f"Total activities: {summary.count} | Total time: {summary.total_minutes} min"

        if state.notice:
            text = f"{text}\n{state.notice}"
        return text

    def render(self, surface: Surface) -> None:
        """Paint one frame: header, table (and stats), footer."""
        view = self.view()
        self._clamp_selection()

        surface.split_body(self.state.show_stats)
        surface.draw_text("header", self.header_text())
        surface.draw_table("table", view, self.state.selected)
        if self.state.show_stats:
            surface.draw_stats("stats", view)
        surface.draw_text("footer", self.footer_text(view))


def describe_bounds(filter_min: Optional[int], filter_max: Optional[int]) -> str:
    if filter_min is None and filter_max is None:
        return "none"
    if filter_max is None:
        return f">= {filter_min} min"
    if filter_min is None:
        return f"<= {filter_max} min"
    return f"{filter_min}-{filter_max} min"
