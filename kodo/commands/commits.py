"""
Commands that read git history: commits (preview) and sync (import).
"""

import click
from typing import Optional

from ..cli_utils import open_store, output_jsonl, standard_command
from ..render import render_commit_activities
from ..services.commit_service import CommitService


def _resolve(ctx, repo: Optional[str], max_count: Optional[int]):
    config = ctx.obj['config']
    repository = repo or config.get('repository', '.')
    limit = max_count if max_count is not None else config['dashboard']['commit_limit']
    return repository, limit


@click.command('commits')
@click.option('--repo', '-r', type=click.Path(file_okay=False), help='Repository (default: config "repository")')
@click.option('--max', '-n', 'max_count', type=click.IntRange(min=1), help='Maximum commits to read')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSONL')
@click.pass_context
@standard_command
def commits_handler(ctx, repo: Optional[str], max_count: Optional[int], output_json: bool):
    """Show activities estimated from recent commits.

    Each commit's duration is the gap to the commit before it.
    """
    repository, limit = _resolve(ctx, repo, max_count)
    activities = CommitService().fetch(repository, limit)
    if output_json:
        output_jsonl(activities)
    else:
        render_commit_activities(activities, repository)


@click.command('sync')
@click.option('--repo', '-r', type=click.Path(file_okay=False), help='Repository (default: config "repository")')
@click.option('--max', '-n', 'max_count', type=click.IntRange(min=1), help='Maximum commits to read')
@click.pass_context
@standard_command
def sync_handler(ctx, repo: Optional[str], max_count: Optional[int]):
    """Import commit-derived activities into the activity file.

    Commits whose name and date already appear in the file are skipped.
    """
    repository, limit = _resolve(ctx, repo, max_count)
    _, service = open_store(ctx)

    added = service.merge(CommitService().fetch(repository, limit))
    if added:
        service.save()
    click.echo(f"Synced {len(added)} new activities from {repository}")
