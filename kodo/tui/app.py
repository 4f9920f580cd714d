"""
Textual host for the activity dashboard.

App.run() owns the terminal: it enters raw mode and the alternate
screen, and restores both on every exit path. The app only forwards key
presses to the controller and repaints on a short interval.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.logging import TextualHandler
from textual.widgets import Static

from .controller import BACKSPACE, DOWN, ENTER, ESCAPE, UP, DashboardController
from .widgets import TextualSurface

SPECIAL_KEYS = {UP, DOWN, ENTER, ESCAPE, BACKSPACE}


def translate_key(key: str, character: Optional[str], is_printable: bool) -> Optional[str]:
    """Map a textual key event onto the controller's key names."""
    if key in SPECIAL_KEYS:
        return key
    if is_printable and character:
        return character
    return None


class KodoApp(App):
    """Immediate-mode activity dashboard."""

    TITLE = "kodo - Developer Activity Dashboard"
    ENABLE_COMMAND_PALETTE = False

    # Only the controller's quit key may end the session
    BINDINGS = [
        Binding("ctrl+q", "ignore", show=False, priority=True),
        Binding("ctrl+c", "ignore", show=False, priority=True),
    ]

    CSS = """
    Screen {
        layout: vertical;
    }

    #header {
        height: 4;
        border: round cyan;
        color: cyan;
        text-style: bold;
    }

    #body {
        height: 1fr;
    }

    #table {
        height: 2fr;
    }

    #stats {
        height: 1fr;
    }

    #footer {
        height: 4;
        border: round $panel;
        padding: 0 1;
    }
    """

    def __init__(self, controller: DashboardController, poll_interval: float = 0.1):
        """
        Initialize app.

        Args:
            controller: Dashboard controller holding all session state
            poll_interval: Seconds between repaints when no key arrives
        """
        super().__init__()
        self.controller = controller
        self.poll_interval = poll_interval
        self.frame_surface: Optional[TextualSurface] = None

    def compose(self) -> ComposeResult:
        yield Static(id="header")
        with Vertical(id="body"):
            yield Static(id="table")
            yield Static(id="stats")
        yield Static(id="footer")

    def on_mount(self) -> None:
        self.frame_surface = TextualSurface(self)
        self.render_frame()
        self.set_interval(self.poll_interval, self.render_frame)

    def render_frame(self) -> None:
        """Project, then paint header, body and footer."""
        if self.frame_surface is not None:
            self.controller.render(self.frame_surface)

    def action_ignore(self) -> None:
        pass

    def on_key(self, event: events.Key) -> None:
        key = translate_key(event.key, event.character, event.is_printable)
        if key is None:
            return

        event.stop()
        event.prevent_default()

        if not self.controller.handle_key(key):
            self.frame_surface = None
            self.exit()
            return
        self.render_frame()


@contextmanager
def log_to_textual(log_file: Optional[str] = None) -> Iterator[None]:
    """
    Route root logging into textual's devtools log while the app owns
    the terminal; the previous handlers come back afterwards.
    """
    root = logging.getLogger()
    saved = root.handlers[:]
    handlers = [TextualHandler()]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handlers.append(file_handler)

    root.handlers = handlers
    try:
        yield
    finally:
        root.handlers = saved
        for handler in handlers:
            handler.close()


def run_dashboard(controller: DashboardController, poll_interval: float = 0.1,
                  log_file: Optional[str] = None) -> None:
    """
    Run the dashboard until the quit key is pressed.

    Args:
        controller: Controller wrapping the loaded store
        poll_interval: Seconds between repaints
        log_file: Optional file that also receives log records
    """
    with log_to_textual(log_file):
        KodoApp(controller, poll_interval=poll_interval).run()
