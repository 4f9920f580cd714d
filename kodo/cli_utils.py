"""
Common CLI utilities and decorators for consistent command behavior.
"""

import logging
import sys
from functools import wraps
from pathlib import Path
from typing import Iterable, Tuple

import click

from .domain.activity import Activity
from .exit_codes import INTERRUPTED, CommandError, get_exit_code_for_exception
from .infra.file_store import ActivityStore
from .services.activity_service import ActivityService

logger = logging.getLogger(__name__)


def standard_command(func):
    """
    Decorator that provides standard CLI error handling:
    - CommandError subclasses exit with their own code
    - Ctrl+C exits with INTERRUPTED
    - Anything else exits with the code mapped from its type
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo("Interrupted by user", err=True)
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(e.exit_code)
        except Exception as e:
            logger.debug("Command failed", exc_info=True)
            click.echo(f"Command failed: {e}", err=True)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def open_store(ctx: click.Context, create: bool = True) -> Tuple[ActivityStore, ActivityService]:
    """
    Load the activity file named by the global --file option.

    A missing file is created holding an empty list when ``create`` is set.

    Raises:
        StoreError: The file exists but cannot be read or parsed
    """
    path = Path(ctx.obj['data_file'])
    store = ActivityStore(path)

    if not store.exists():
        if create:
            logger.info(f"{path} not found. Creating a new one...")
            store.save()
    else:
        store.load()
        if not store.activities:
            logger.info("No activities found. Initializing empty list.")

    return store, ActivityService(store)


def output_jsonl(activities: Iterable[Activity]) -> None:
    """Print one JSON object per line."""
    for activity in activities:
        click.echo(activity.to_jsonl())
