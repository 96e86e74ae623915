"""
Commit encoding.

A commit wraps the tree of the repository root and a free-text message:

    tree <id>
    <blank line>
    <message>

There is no parent reference and no author or timestamp metadata. The
message is stored verbatim with the filesystem encoding, so undecodable
command-line bytes round-trip. A NUL byte inside it would corrupt read-back.
"""

import os
from pathlib import Path
from typing import Tuple, Union

from minigit.errors import MalformedObjectError
from minigit.logger import get_default_logger
from minigit.store import ObjectStore
from minigit.tree import TreeEncoder


logger = get_default_logger()


def build_commit_payload(tree_id: str, message: str) -> bytes:
    """
    Serialize a commit payload.

    Example:
        >>> build_commit_payload("ab" * 20, "hello")
        b'tree abab...abab\\n\\nhello'
    """
    return f"tree {tree_id}\n\n".encode("ascii") + os.fsencode(message)


def commit(
    store: ObjectStore,
    message: str,
    repository_root: Union[str, Path],
    sort_entries: bool = True,
) -> str:
    """
    Snapshot the repository root and store a commit object for it.

    Args:
        store: Object store bound to the repository
        message: Commit message, stored verbatim
        repository_root: Directory to snapshot
        sort_entries: Tree ordering policy passed to the tree encoder

    Returns:
        Id of the commit object

    Raises:
        EmptyTreeError: If the repository has nothing to snapshot
        OSError: If any file cannot be read or written
    """
    encoder = TreeEncoder(store, sort_entries=sort_entries)
    tree_id = encoder.write_tree(repository_root)

    oid = store.put("commit", build_commit_payload(tree_id, message))
    logger.info(f"Committed tree {tree_id} as {oid}")
    return oid


def parse_commit(payload: bytes) -> Tuple[str, str]:
    """
    Split a commit payload into its tree id and message.

    Raises:
        MalformedObjectError: If the payload lacks the tree line or blank line
    """
    header, sep, message = payload.partition(b"\n\n")
    if not sep or not header.startswith(b"tree "):
        raise MalformedObjectError("Commit payload must start with 'tree <id>' and a blank line")

    try:
        tree_id = header[len(b"tree "):].decode("ascii")
    except UnicodeDecodeError as e:
        raise MalformedObjectError(f"Commit tree id is not ASCII: {header!r}") from e

    return tree_id, os.fsdecode(message)


def read_commit(store: ObjectStore, oid: str) -> Tuple[str, str]:
    """Load a commit object and return its (tree_id, message)."""
    obj = store.get(oid)
    if obj.kind != "commit":
        raise MalformedObjectError(f"Expected commit object, got {obj.kind}: {oid}")
    return parse_commit(obj.payload)
