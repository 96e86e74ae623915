"""
Init command for creating a repository.
"""

import click
from rich.console import Console
from rich.markup import escape

from minigit.cli import cli, common_options, fail, open_repository


console = Console(highlight=False)


@cli.command()
@common_options
@click.pass_context
def init(ctx, repo_path, config_path, log_level):
    """
    Create an empty repository.

    Creates the .mini-git directory under the repository root. Fails if it
    already exists.

    Examples:

        # Initialize the current directory
        minigit init

        # Initialize another directory
        minigit init --repo /data/project
    """
    repo = open_repository(repo_path, config_path, log_level)

    try:
        git_dir = repo.initialize()
    except FileExistsError as e:
        fail(ctx, "Repository already exists", e)
    except OSError as e:
        fail(ctx, "Cannot initialize repository", e)
    else:
        console.print(
            f"[bold green]Initialized empty minigit repository in[/bold green] "
            f"{escape(str(git_dir.resolve()))}",
            soft_wrap=True,
        )
