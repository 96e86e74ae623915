"""
Snapshot commands: tree and commit.
"""

from pathlib import Path

import click

from minigit.cli import cli, common_options, fail, open_repository
from minigit.errors import EmptyTreeError, MiniGitError


@cli.command()
@common_options
@click.argument('path', type=click.Path(path_type=Path))
@click.pass_context
def tree(ctx, path, repo_path, config_path, log_level):
    """
    Snapshot directory PATH into a tree object and print its id.

    Files are stored as blobs and subdirectories as nested trees. Symbolic
    links, .mini-git and .git are skipped; empty directories are pruned.

    Examples:

        minigit tree src
    """
    repo = open_repository(repo_path, config_path, log_level)

    try:
        oid = repo.write_tree(path)
    except EmptyTreeError as e:
        fail(ctx, "Nothing to snapshot", e)
    except (MiniGitError, OSError) as e:
        fail(ctx, "Error writing tree", e)
    else:
        click.echo(oid)


@cli.command()
@common_options
@click.argument('message')
@click.pass_context
def commit(ctx, message, repo_path, config_path, log_level):
    """
    Snapshot the repository root and record it with MESSAGE.

    Examples:

        minigit commit "initial snapshot"
    """
    repo = open_repository(repo_path, config_path, log_level)

    try:
        oid = repo.commit(message)
    except EmptyTreeError as e:
        fail(ctx, "Nothing to commit", e)
    except (MiniGitError, OSError) as e:
        fail(ctx, "Error writing commit", e)
    else:
        click.echo(oid)
