"""Drives the textual dashboard through textual's test pilot."""

import asyncio
import json
import logging
from datetime import date

from textual.screen import Screen

from kodo.domain import Activity
from kodo.infra.file_store import ActivityStore
from kodo.services.activity_service import ActivityService
from kodo.tui.app import KodoApp, log_to_textual, translate_key
from kodo.tui.controller import DashboardController
from kodo.tui.state import EnteringName


class NoCommits:
    def fetch(self, repository, max_count):
        return []


def make_app(tmp_path, *rows):
    store = ActivityStore(tmp_path / "activities.json")
    store.activities = [Activity(*row) for row in rows]
    service = ActivityService(store, today=lambda: date(2024, 5, 17))
    controller = DashboardController(service, NoCommits())
    return KodoApp(controller, poll_interval=0.05), store


def test_add_activity_through_keys(tmp_path):
    app, store = make_app(tmp_path)

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.press("a", "D", "o", "c", "s", "enter", "3", "0", "enter")
            await pilot.pause()
            assert app.controller.state.buffer == ""
            await pilot.press("q")

    asyncio.run(scenario())

    assert json.loads(store.path.read_text()) == [
        {'id': 1, 'name': "Docs", 'duration_minutes': 30, 'date': "2024-05-17"}
    ]
    assert app.controller.running is False


def test_command_palette_key_is_inert(tmp_path):
    app, _ = make_app(tmp_path, (1, "a", 10, "2024-01-02"))

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.press("ctrl+p")
            await pilot.pause(0.2)
            assert app.is_running
            assert app.screen is app.screen_stack[0]
            await pilot.press("q")

    asyncio.run(scenario())
    assert app.controller.running is False


def test_frames_keep_painting_under_another_screen(tmp_path):
    app, _ = make_app(tmp_path, (1, "a", 10, "2024-01-02"))

    async def scenario():
        async with app.run_test() as pilot:
            await app.push_screen(Screen())
            await pilot.pause(0.2)
            assert app.is_running
            app.pop_screen()
            await pilot.pause()
            await pilot.press("q")

    asyncio.run(scenario())
    assert app.controller.running is False


def test_ctrl_q_does_not_end_text_entry(tmp_path):
    app, _ = make_app(tmp_path)

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.press("a", "x", "ctrl+q")
            await pilot.pause()
            assert app.is_running
            assert isinstance(app.controller.state.mode, EnteringName)
            assert app.controller.state.buffer == "x"
            await pilot.press("escape", "q")

    asyncio.run(scenario())
    assert app.controller.running is False


def test_stats_toggle_and_navigation(tmp_path):
    app, store = make_app(tmp_path, (1, "a", 10, "2024-01-02"), (2, "b", 20, "2024-01-01"))

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.press("t", "down")
            await pilot.pause()
            assert app.controller.state.show_stats is True
            assert app.controller.state.selected == 1
            assert app.query_one("#stats").display is True
            await pilot.press("t")
            await pilot.pause()
            assert app.query_one("#stats").display is False
            await pilot.press("q")

    asyncio.run(scenario())


class TestTranslateKey:
    def test_special_keys_pass_through(self):
        for key in ("up", "down", "enter", "escape", "backspace"):
            assert translate_key(key, None, False) == key

    def test_printable_uses_character(self):
        assert translate_key("space", " ", True) == " "
        assert translate_key("A", "A", True) == "A"

    def test_other_keys_dropped(self):
        assert translate_key("f5", None, False) is None
        assert translate_key("ctrl+x", "\x18", False) is None


def test_log_to_textual_restores_handlers(tmp_path):
    root = logging.getLogger()
    before = root.handlers[:]
    log_file = tmp_path / "dashboard.log"
    with log_to_textual(str(log_file)):
        assert root.handlers != before
        logging.getLogger("kodo.test").warning("inside dashboard")
    assert root.handlers == before
    assert "inside dashboard" in log_file.read_text()
