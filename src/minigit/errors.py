"""
Exception types raised by the object store and encoders.

Filesystem errors (PermissionError, FileNotFoundError, OSError) are not
wrapped; they propagate unchanged from the operating system.
"""

from pathlib import Path
from typing import Union


class MiniGitError(Exception):
    """Base class for all minigit errors."""


class ObjectNotFoundError(MiniGitError):
    """No object file exists for the requested id."""

    def __init__(self, oid: str):
        self.oid = oid
        super().__init__(f"Object not found: {oid}")


class MalformedObjectError(MiniGitError):
    """Stored bytes do not follow the '<kind> <size>\\0<payload>' layout."""


class InvalidObjectIdError(MiniGitError, ValueError):
    """An id string cannot be mapped to a storage location."""

    def __init__(self, oid: str, reason: str):
        self.oid = oid
        super().__init__(f"Invalid object id {oid!r}: {reason}")


class EmptyTreeError(MiniGitError):
    """A directory holds nothing to snapshot after filtering and pruning."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        super().__init__(f"No objects found in {self.directory}")
