"""
Batch commands over the activity file: add, delete, edit, list, filter.
"""

import click
from typing import Optional

from ..cli_utils import open_store, output_jsonl, standard_command
from ..render import render_activity_list, render_filtered


@click.command('add')
@click.argument('name')
@click.argument('minutes', type=click.IntRange(min=0))
@click.pass_context
@standard_command
def add_handler(ctx, name: str, minutes: int):
    """Record a new activity dated today.

    \b
    Examples:
        kodo add "Refactor parser" 45
        kodo --file ~/work.json add Review 20
    """
    if not name.strip():
        raise click.BadParameter("name must not be empty", param_hint="NAME")

    _, service = open_store(ctx)
    activity = service.add(name.strip(), minutes)
    service.save()
    click.echo(f"Activity {activity.id} added successfully!")


@click.command('delete')
@click.argument('activity_id', metavar='ID', type=int)
@click.pass_context
@standard_command
def delete_handler(ctx, activity_id: int):
    """Delete the activity with the given ID."""
    _, service = open_store(ctx)
    if not service.delete(activity_id):
        click.echo(f"No activity found with ID {activity_id}")
        return

    service.save()
    click.echo(f"Activity {activity_id} deleted successfully!")


@click.command('edit')
@click.argument('activity_id', metavar='ID', type=int)
@click.option('--name', help='New activity name')
@click.option('--minutes', type=click.IntRange(min=0), help='New duration in minutes')
@click.pass_context
@standard_command
def edit_handler(ctx, activity_id: int, name: Optional[str], minutes: Optional[int]):
    """Change the name and/or duration of an activity.

    \b
    Examples:
        kodo edit 3 --minutes 50
        kodo edit 3 --name "Code review"
    """
    if name is not None and not name.strip():
        raise click.BadParameter("name must not be empty", param_hint="--name")

    _, service = open_store(ctx)
    name = name.strip() if name is not None else None
    if service.edit(activity_id, name=name, minutes=minutes) is None:
        click.echo(f"No activity found with ID {activity_id}")
        return

    service.save()
    click.echo(f"Activity {activity_id} updated successfully!")


@click.command('list')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSONL')
@click.pass_context
@standard_command
def list_handler(ctx, output_json: bool):
    """List all activities, longest first."""
    _, service = open_store(ctx)
    if output_json:
        output_jsonl(service.activities)
    else:
        render_activity_list(service.activities)


@click.command('filter')
@click.option('--min', 'min_minutes', type=int, help='Minimum duration (inclusive)')
@click.option('--max', 'max_minutes', type=int, help='Maximum duration (inclusive)')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSONL')
@click.pass_context
@standard_command
def filter_handler(ctx, min_minutes: Optional[int], max_minutes: Optional[int], output_json: bool):
    """Show activities whose duration lies within the bounds.

    \b
    Examples:
        kodo filter --min 30
        kodo filter --min 30 --max 60 --json
    """
    _, service = open_store(ctx)
    matched = service.filter(min_minutes, max_minutes)
    if output_json:
        output_jsonl(matched)
    else:
        render_filtered(matched)
