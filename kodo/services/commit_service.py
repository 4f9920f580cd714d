"""
Commit service for kodo.

Derives activity records from git history. Each commit becomes one
activity whose duration is estimated from the gap to the commit
before it.
"""

import logging
from typing import List, Optional

from ..domain.activity import Activity, DATE_FORMAT
from ..infra.git_client import GitClient, GitCommit

logger = logging.getLogger(__name__)

# Minutes assigned to the oldest commit of a batch, and the floor for gaps
FALLBACK_MINUTES = 1


def commits_to_activities(commits: List[GitCommit]) -> List[Activity]:
    """
    Convert commits to activities, newest first.

    Duration of entry i is max(1, minutes between commit i and i+1);
    the oldest commit in the batch gets FALLBACK_MINUTES. Ids are 1..n
    in display order and are not store ids.

    Args:
        commits: Commits in any order

    Returns:
        List of Activity objects
    """
    ordered = sorted(commits, key=lambda c: c.timestamp, reverse=True)

    activities = []
    for i, commit in enumerate(ordered):
        if i + 1 < len(ordered):
            gap = (commit.timestamp - ordered[i + 1].timestamp) // 60
            minutes = max(gap, FALLBACK_MINUTES)
        else:
            minutes = FALLBACK_MINUTES

        activities.append(Activity(
            id=i + 1,
            name=commit.message,
            duration_minutes=minutes,
            date=commit.date.strftime(DATE_FORMAT),
        ))

    return activities


class CommitService:
    """
    Commit source for the dashboard overlay and the sync command.

    Example:
        service = CommitService()
        for activity in service.fetch(".", max_count=20):
            print(activity.name, activity.duration_minutes)
    """

    def __init__(self, git_client: Optional[GitClient] = None):
        """
        Initialize CommitService.

        Args:
            git_client: GitClient instance (creates new if None)
        """
        self.git = git_client or GitClient()

    def fetch(self, repository: str, max_count: int) -> List[Activity]:
        """
        Fetch up to max_count commits from HEAD as activities.

        Never raises: an unreadable repository yields an empty list.
        """
        try:
            if not self.git.is_git_repo(repository):
                logger.warning(f"Not a git repository: {repository}")
                return []
            commits = self.git.log(repository, limit=max_count)
        except Exception as e:
            logger.warning(f"Could not read commits from {repository}: {e}")
            return []

        if not commits:
            logger.info(f"No commits found in {repository}")
        return commits_to_activities(commits)
