"""CLI commands; importing this package registers them on the cli group."""

from minigit.cli.commands import objects, repo, snapshot

__all__ = ["objects", "repo", "snapshot"]
