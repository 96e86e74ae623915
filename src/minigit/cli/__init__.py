"""
Command-line interface for the minigit package.

Provides commands for repository initialization, object hashing and
inspection, and tree and commit snapshots.
"""

from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console
from rich.markup import escape

from minigit import __version__
from minigit.config import RepositoryConfig
from minigit.logger import configure_logging, get_default_logger
from minigit.repository import Repository


# Human-readable messages and errors go to stderr; stdout carries only ids and payloads
err_console = Console(stderr=True, highlight=False)


# Common options that can be reused across commands
def common_options(func):
    """Decorator to add common CLI options."""
    func = click.option(
        '--repo',
        'repo_path',
        type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
        default=Path('.'),
        help='Repository root directory (default: .)',
    )(func)
    func = click.option(
        '--config',
        'config_path',
        type=click.Path(exists=False, dir_okay=False, path_type=Path),
        default=None,
        help='Path to config file (default: <repo>/.mini-git/config.yaml)',
    )(func)
    func = click.option(
        '--log-level',
        type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
        default=None,
        help='Logging level (default: from config, else WARNING)',
    )(func)
    return func


def open_repository(repo_path: Path, config_path: Optional[Path], log_level: Optional[str]) -> Repository:
    """
    Build a Repository for a command and configure logging from its config.

    An explicit --log-level wins over the configured level.
    """
    config = RepositoryConfig(repo_path, config_path)
    try:
        configure_logging(
            level=log_level or config.log_level,
            log_file=config.log_file,
        )
        # Tree options are read before any object is written.
        config.sort_entries
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    return Repository(repo_path, config)


def fail(ctx: click.Context, message: str, error: Exception) -> None:
    """Report an error on stderr and exit with status 1."""
    err_console.print(
        f"[bold red]Error:[/bold red] {escape(message)}: {escape(str(error))}",
        soft_wrap=True,
    )
    get_default_logger().error(f"{message}: {error}")
    ctx.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name='minigit')
@click.pass_context
def cli(ctx):
    """
    minigit: a minimal content-addressable object store.

    Hashes files into immutable blob objects, snapshots directories into
    tree objects, and wraps snapshots in commit objects.
    """
    ctx.ensure_object(dict)


@cli.command()
def version():
    """Display version information."""
    click.echo(f"minigit v{__version__}")


def main():
    """Main entry point for the CLI."""
    # Import commands to register them
    from minigit.cli import commands  # noqa: F401

    cli()


if __name__ == '__main__':
    main()
