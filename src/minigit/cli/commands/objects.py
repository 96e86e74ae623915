"""
Object commands: hash-object and cat-file.
"""

from pathlib import Path

import click

from minigit.cli import cli, common_options, fail, open_repository
from minigit.errors import MiniGitError


@cli.command('hash-object')
@common_options
@click.argument('file_path', type=click.Path(path_type=Path))
@click.pass_context
def hash_object(ctx, file_path, repo_path, config_path, log_level):
    """
    Store FILE_PATH as a blob and print its id.

    Examples:

        minigit hash-object README.md
    """
    repo = open_repository(repo_path, config_path, log_level)

    try:
        oid = repo.hash_object(file_path)
    except (MiniGitError, OSError) as e:
        fail(ctx, f"Error hashing object {file_path}", e)
    else:
        click.echo(oid)


@cli.command('cat-file')
@common_options
@click.argument('object_id')
@click.option(
    '-t', '--type', 'show_type',
    is_flag=True,
    help='Print the object kind instead of its payload',
)
@click.pass_context
def cat_file(ctx, object_id, show_type, repo_path, config_path, log_level):
    """
    Print the payload of object OBJECT_ID.

    The payload is written as raw bytes with no trailing newline added.

    Examples:

        minigit cat-file 45b983be36b73c0788dc9cbcb76cbb80fc7bb057

        minigit cat-file -t 45b983be36b73c0788dc9cbcb76cbb80fc7bb057
    """
    repo = open_repository(repo_path, config_path, log_level)

    try:
        obj = repo.cat_file(object_id)
    except (MiniGitError, OSError) as e:
        fail(ctx, f"Error reading object {object_id}", e)
    else:
        if show_type:
            click.echo(obj.kind)
        else:
            click.echo(obj.payload, nl=False)
