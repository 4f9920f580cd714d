"""
Interactive dashboard command.
"""

import click
from typing import Optional

from ..cli_utils import open_store, standard_command
from ..services.commit_service import CommitService
from ..tui.app import run_dashboard
from ..tui.controller import DashboardController, KeyMap


@click.command('dashboard')
@click.option('--repo', '-r', type=click.Path(file_okay=False), help='Repository for the commit view')
@click.option('--max', '-n', 'max_count', type=click.IntRange(min=1), help='Maximum commits per sync')
@click.pass_context
@standard_command
def dashboard_handler(ctx, repo: Optional[str], max_count: Optional[int]):
    """Open the interactive activity dashboard.

    \b
    Keys (defaults, see dashboard.keys in the config):
        q quit      a add       d delete    e edit
        f filter    r reset     s sort      t stats
        g commits   up/down or k/j to move
    """
    config = ctx.obj['config']
    dashboard = config['dashboard']

    _, service = open_store(ctx)
    controller = DashboardController(
        service,
        CommitService(),
        repository=repo or config.get('repository', '.'),
        commit_limit=max_count or dashboard['commit_limit'],
        keymap=KeyMap.from_config(dashboard.get('keys')),
    )

    run_dashboard(
        controller,
        poll_interval=float(dashboard.get('poll_interval', 0.1)),
        log_file=config['logging'].get('file') or None,
    )
