"""
Service layer for kodo.

Contains business logic that orchestrates domain objects and infrastructure:
- ActivityService: Id assignment, mutations, filtering, persistence
- CommitService: Activities derived from git history

Services are the primary API for commands and the dashboard to use.
"""

from .activity_service import ActivityService, SaveOutcome, Summary, next_id, in_range, summarize
from .commit_service import CommitService, commits_to_activities

__all__ = [
    'ActivityService',
    'SaveOutcome',
    'Summary',
    'next_id',
    'in_range',
    'summarize',
    'CommitService',
    'commits_to_activities',
]
