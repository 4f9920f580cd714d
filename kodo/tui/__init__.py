"""
TUI (Text User Interface) for kodo - the interactive activity dashboard.
"""

from .app import KodoApp, run_dashboard
from .controller import DashboardController, KeyMap

__all__ = [
    'KodoApp',
    'run_dashboard',
    'DashboardController',
    'KeyMap',
]
