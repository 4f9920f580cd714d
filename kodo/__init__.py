"""
kodo - A personal developer activity tracker.

kodo keeps a JSON list of named, timed activities, edited from the
command line or from an interactive terminal dashboard, and can
estimate activities from git history.

Quick Start:
    from kodo import ActivityStore, ActivityService

    store = ActivityStore("activities.json")
    store.load()
    service = ActivityService(store)
    service.add("Refactor", 45)
    service.save()

Domain Objects:
    Activity - id, name, duration_minutes, date

Services:
    ActivityService - Mutations, filtering, persistence
    CommitService - Activities estimated from git commits
"""

__version__ = "0.3.0"

# Domain objects
from .domain import Activity

# Infrastructure
from .infra import ActivityStore, GitClient

# Services
from .services import ActivityService, CommitService

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "Activity",
    # Infrastructure
    "ActivityStore",
    "GitClient",
    # Services
    "ActivityService",
    "CommitService",
    # Configuration
    "load_config",
    "save_config",
]
