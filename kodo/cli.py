#!/usr/bin/env python3

import os

import click

from kodo.config import configure_logging, load_config
from kodo.exit_codes import ConfigError

# Individual commands
from kodo.commands.activity import (
    add_handler,
    delete_handler,
    edit_handler,
    filter_handler,
    list_handler,
)
from kodo.commands.commits import commits_handler, sync_handler
from kodo.commands.dashboard import dashboard_handler


@click.group()
@click.option('--file', '-f', 'data_file', type=click.Path(dir_okay=False),
              help='Activity file (default: config "data_file", activities.json)')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file (overrides KODO_CONFIG)')
@click.version_option(package_name='kodo')
@click.pass_context
def cli(ctx, data_file, config_path):
    """kodo - Personal developer activity tracker.

    Record what you worked on and for how long, browse it in an
    interactive dashboard, and estimate time from git history.
    """
    if config_path:
        os.environ['KODO_CONFIG'] = config_path

    try:
        config = load_config(strict=bool(config_path))
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    configure_logging(config)

    ctx.ensure_object(dict)
    ctx.obj['config'] = config
    ctx.obj['data_file'] = os.path.expanduser(data_file or config['data_file'])


# Batch commands
cli.add_command(add_handler, name='add')
cli.add_command(delete_handler, name='delete')
cli.add_command(edit_handler, name='edit')
cli.add_command(list_handler, name='list')
cli.add_command(filter_handler, name='filter')

# Git history
cli.add_command(commits_handler, name='commits')
cli.add_command(sync_handler, name='sync')

# Interactive
cli.add_command(dashboard_handler, name='dashboard')


def main():
    cli()

if __name__ == "__main__":
    main()
