"""
Git client infrastructure for kodo.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import shlex
import subprocess
from dataclasses import dataclass
from typing import Optional, List, Tuple
from pathlib import Path
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

# Field separator for git log output; unlikely to appear in a subject line
_SEP = "\x1f"


@dataclass
class GitCommit:
    """A git commit with metadata."""
    hash: str
    timestamp: int
    author: str
    message: str

    @property
    def date(self) -> datetime:
        """Commit time as a naive local datetime."""
        return datetime.fromtimestamp(self.timestamp)


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient()
        for commit in client.log("/path/to/repo", limit=10):
            print(commit.message)
    """

    def __init__(self, timeout: int = 30):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: 30)
        """
        self.timeout = timeout

    def _run(
        self,
        cmd: str,
        cwd: str,
    ) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Args:
            cmd: Command to run
            cwd: Working directory

        Returns:
            Tuple of (stdout, returncode)
        """
        try:
            result = subprocess.run(
                cmd,
                shell=True,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )

            if result.returncode != 0 and result.stderr:
                logger.debug(f"Git command exited {result.returncode}: {cmd} - {result.stderr.strip()}")

            output = result.stdout
            return output.strip() if output else None, result.returncode

        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {cmd}")
            return None, -1
        except Exception as e:
            logger.error(f"Git command failed: {cmd} - {e}")
            return None, -1

    def is_git_repo(self, path: str) -> bool:
        """Check if path is inside a git work tree."""
        if not Path(path).is_dir():
            return False
        output, code = self._run("git rev-parse --is-inside-work-tree", cwd=path)
        return code == 0 and output == "true"

    def log(self, path: str, limit: int = 50) -> List[GitCommit]:
        """
        Get the commit log reachable from HEAD.

        Args:
            path: Path to git repository
            limit: Maximum commits to return

        Returns:
            List of GitCommit objects, newest first
        """
        if limit <= 0:
            return []
        if not Path(path).is_dir():
            logger.warning(f"Not a directory: {path}")
            return []

        fmt = shlex.quote(_SEP.join(["%H", "%ct", "%an", "%s"]))
        output, code = self._run(f"git log --format={fmt} -n {int(limit)}", cwd=path)
        if code != 0 or not output:
            return []

        commits = []
        for line in output.split('\n'):
            parts = line.split(_SEP, 3)
            if len(parts) < 4:
                continue

            commit_hash, timestamp, author, message = parts
            try:
                ts = int(timestamp.strip())
            except ValueError:
                continue

            commits.append(GitCommit(
                hash=commit_hash.strip(),
                timestamp=ts,
                author=author.strip(),
                message=message.strip() or "no message",
            ))

        # git log already walks newest first; sort anyway for merge histories
        commits.sort(key=lambda c: c.timestamp, reverse=True)
        return commits
