"""Tests for the dashboard projection (filter + stable sort)."""

import itertools
import random

from kodo.domain import Activity
from kodo.tui.projection import project, project_view, sort_activities
from kodo.tui.state import CommitOverlay, LocalOverlay, SortMode


def make(id, minutes, name="task", day="2024-01-01"):
    return Activity(id=id, name=name, duration_minutes=minutes, date=day)


SAMPLE = [
    make(1, 30, "Refactor", "2024-01-03"),
    make(2, 45, "Docs", "2024-01-05"),
    make(3, 90, "Review", "2024-01-01"),
    make(4, 45, "Bugfix", "2024-01-05"),
]


class TestFiltering:
    def test_scenario_30_to_60_by_duration(self):
        view = project([make(1, 30), make(2, 45), make(3, 90)], 30, 60, SortMode.BY_DURATION)
        assert [a.duration_minutes for a in view] == [45, 30]

    def test_every_kept_item_satisfies_bounds_and_every_dropped_violates_one(self):
        rng = random.Random(7)
        activities = [make(i, rng.randint(0, 200)) for i in range(60)]
        bounds = [None, 0, 1, 30, 45, 120, 200]
        for lo, hi in itertools.product(bounds, bounds):
            view = project(activities, lo, hi)
            kept_ids = {a.id for a in view}
            for a in activities:
                ok = (lo is None or a.duration_minutes >= lo) and (hi is None or a.duration_minutes <= hi)
                assert (a.id in kept_ids) == ok

    def test_no_bounds_keeps_everything(self):
        assert len(project(SAMPLE)) == len(SAMPLE)

    def test_does_not_modify_input(self):
        source = list(SAMPLE)
        project(source, 40, None, SortMode.BY_NAME)
        assert source == SAMPLE


class TestSorting:
    def test_by_date_descending_stable(self):
        view = sort_activities(SAMPLE, SortMode.BY_DATE)
        # ids 2 and 4 share a date and keep their input order
        assert [a.id for a in view] == [2, 4, 1, 3]

    def test_by_duration_descending_stable(self):
        view = sort_activities(SAMPLE, SortMode.BY_DURATION)
        assert [a.id for a in view] == [3, 2, 4, 1]

    def test_by_name_ascending(self):
        view = sort_activities(SAMPLE, SortMode.BY_NAME)
        assert [a.name for a in view] == ["Bugfix", "Docs", "Refactor", "Review"]

    def test_sorting_is_idempotent(self):
        for mode in SortMode:
            once = sort_activities(SAMPLE, mode)
            assert sort_activities(once, mode) == once

    def test_deterministic(self):
        for mode in SortMode:
            assert project(SAMPLE, 10, 100, mode) == project(SAMPLE, 10, 100, mode)

    def test_sort_mode_cycle(self):
        assert SortMode.BY_DATE.next() is SortMode.BY_DURATION
        assert SortMode.BY_DURATION.next() is SortMode.BY_NAME
        assert SortMode.BY_NAME.next() is SortMode.BY_DATE


class TestOverlay:
    def test_commit_overlay_bypasses_filter_and_sort(self):
        commits = (make(1, 1, "z"), make(2, 500, "a"))
        view = project_view(SAMPLE, CommitOverlay(commits), 10, 20, SortMode.BY_NAME)
        assert view == list(commits)

    def test_local_overlay_projects_store(self):
        view = project_view(SAMPLE, LocalOverlay(), 40, 50, SortMode.BY_DATE)
        assert [a.id for a in view] == [2, 4]
