"""
File store infrastructure for kodo.

Persists the activity list as a JSON array with:
- Atomic writes (write to temp, then rename)
- Pretty formatting for human readability
- Automatic parent directory creation
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, List
import logging

from ..domain.activity import Activity
from ..exit_codes import StoreError

logger = logging.getLogger(__name__)


class ActivityStore:
    """
    JSON array persistence for activities, with atomic whole-file writes.

    The store owns the in-memory list; callers mutate ``activities``
    (usually through ActivityService) and then call ``save()``.

    Example:
        store = ActivityStore(Path("activities.json"))
        store.load()
        store.activities.append(activity)
        store.save()
    """

    def __init__(self, path: Path):
        """
        Initialize ActivityStore.

        Args:
            path: Path to the JSON file
        """
        self.path = Path(path).expanduser()
        self.activities: List[Activity] = []

    def exists(self) -> bool:
        """Check whether the backing file exists."""
        return self.path.exists()

    def _write_atomic(self, data: Any) -> None:
        """Write data atomically using temp file and rename."""
        if not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)

        # Write to temp file in same directory
        fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp"
        )

        try:
            with os.fdopen(fd, 'w') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write('\n')  # Trailing newline

            # Atomic rename
            os.replace(temp_path, self.path)

        except Exception:
            # Clean up temp file on error
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    def load(self) -> List[Activity]:
        """
        Read the whole file into memory.

        A missing or blank file is an empty store.

        Returns:
            The loaded activities

        Raises:
            StoreError: File unreadable, not JSON, or records malformed
        """
        if not self.path.exists():
            self.activities = []
            return self.activities

        try:
            with open(self.path, 'r') as f:
                contents = f.read()
        except OSError as e:
            raise StoreError(f"Failed to read activities from {self.path}: {e}") from e

        if not contents.strip():
            self.activities = []
            return self.activities

        try:
            records = json.loads(contents)
        except json.JSONDecodeError as e:
            raise StoreError(f"Failed to parse JSON in {self.path}: {e}") from e

        if not isinstance(records, list):
            raise StoreError(f"Expected a JSON array in {self.path}")

        try:
            self.activities = [Activity.from_dict(record) for record in records]
        except ValueError as e:
            raise StoreError(f"Malformed activity in {self.path}: {e}") from e

        logger.debug(f"Loaded {len(self.activities)} activities from {self.path}")
        return self.activities

    def save(self) -> None:
        """
        Overwrite the file with the current in-memory list.

        Raises:
            StoreError: The file could not be written
        """
        try:
            self._write_atomic([activity.to_dict() for activity in self.activities])
        except OSError as e:
            raise StoreError(f"Failed to save activities to {self.path}: {e}") from e

    def __len__(self) -> int:
        return len(self.activities)

    def __iter__(self):
        return iter(self.activities)
