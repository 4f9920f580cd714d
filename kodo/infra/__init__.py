"""
Infrastructure layer for kodo.

Contains abstractions for external systems:
- GitClient: Git command execution
- ActivityStore: JSON file persistence for activities

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient, GitCommit
from .file_store import ActivityStore

__all__ = [
    'GitClient',
    'GitCommit',
    'ActivityStore',
]
