"""
Exclusion rules for tree encoding.

A path is skipped when any of its segments names a repository metadata
directory, or when the path itself is a symbolic link. There are no glob
patterns and no ignore file.
"""

from pathlib import Path
from typing import Union

from minigit.store import REPO_DIR_NAME


EXCLUDED_NAMES = frozenset({REPO_DIR_NAME, ".git"})


def is_excluded(path: Union[str, Path]) -> bool:
    """
    Check whether a path lies inside repository metadata.

    Every segment of the path is checked, including those of the directory
    a walk started from.

    Args:
        path: Candidate filesystem path

    Returns:
        True if any segment is an excluded name

    Example:
        >>> is_excluded("src/.mini-git/objects")
        True
        >>> is_excluded("src/main.py")
        False
    """
    return any(part in EXCLUDED_NAMES for part in Path(path).parts)


def should_skip(path: Union[str, Path]) -> bool:
    """Return True if the tree encoder must not visit path."""
    path = Path(path)
    return is_excluded(path) or path.is_symlink()
