"""
Recursive directory-to-tree encoding.

Each directory becomes one tree object whose payload lists its children as
newline-terminated "<type> <id> <name>" lines. Files become blobs,
subdirectories become nested trees, and directories with nothing to snapshot
are pruned from their parent.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from minigit.errors import EmptyTreeError, MalformedObjectError
from minigit.ids import is_full_object_id
from minigit.logger import get_default_logger
from minigit.pathfilter import should_skip
from minigit.store import ObjectStore


logger = get_default_logger()


ENTRY_TYPES = ("blob", "tree")


@dataclass(frozen=True)
class TreeEntry:
    """One named child reference inside a tree object."""

    name: str
    entry_type: str
    child_id: str

    def serialize(self) -> bytes:
        """Render the entry as a single newline-terminated line."""
        prefix = f"{self.entry_type} {self.child_id} ".encode("ascii")
        return prefix + os.fsencode(self.name) + b"\n"

    @classmethod
    def parse(cls, line: str) -> "TreeEntry":
        """
        Parse a single tree line (without its trailing newline).

        Names may contain spaces; only the first two separators are significant.

        Raises:
            MalformedObjectError: If the line does not have three fields
        """
        parts = line.split(" ", 2)
        if len(parts) != 3:
            raise MalformedObjectError(f"Malformed tree entry: {line!r}")

        entry_type, child_id, name = parts
        if entry_type not in ENTRY_TYPES:
            raise MalformedObjectError(f"Unknown tree entry type {entry_type!r} in {line!r}")
        if not is_full_object_id(child_id):
            raise MalformedObjectError(f"Invalid child id {child_id!r} in {line!r}")

        return cls(name=name, entry_type=entry_type, child_id=child_id)


def serialize_entries(entries: List[TreeEntry]) -> bytes:
    """Concatenate serialized entries in the order given."""
    return b"".join(entry.serialize() for entry in entries)


class TreeEncoder:
    """
    Snapshots a directory hierarchy into tree objects.

    Attributes:
        store: Object store that receives blobs and trees
        sort_entries: Whether children are ordered by name (True) or left in
            directory listing order (False)
    """

    def __init__(self, store: ObjectStore, sort_entries: bool = True):
        self.store = store
        self.sort_entries = sort_entries

    def write_tree(self, directory: Union[str, Path]) -> str:
        """
        Recursively encode a directory and store it as a tree object.

        Args:
            directory: Directory to snapshot

        Returns:
            Id of the tree object for directory

        Raises:
            EmptyTreeError: If directory has nothing to snapshot
            OSError: If any entry cannot be listed or read; the walk is aborted
        """
        directory = Path(directory)
        logger.info(f"Writing tree for {directory}")
        oid = self._write_tree(directory)
        logger.info(f"Tree for {directory}: {oid}")
        return oid

    def _write_tree(self, directory: Path) -> str:
        entries: List[TreeEntry] = []

        for child in self._list_directory(directory):
            if should_skip(child):
                logger.debug(f"Skipping {child}")
                continue

            if child.is_file():
                blob_id = self.store.hash_file(child)
                entries.append(TreeEntry(name=child.name, entry_type="blob", child_id=blob_id))

            elif child.is_dir():
                try:
                    subtree_id = self._write_tree(child)
                except EmptyTreeError:
                    logger.debug(f"Pruning empty directory {child}")
                    continue
                entries.append(TreeEntry(name=child.name, entry_type="tree", child_id=subtree_id))

            else:
                logger.debug(f"Skipping special file {child}")

        if not entries:
            raise EmptyTreeError(directory)

        oid = self.store.put("tree", serialize_entries(entries))
        logger.debug(f"Wrote tree {oid} for {directory} ({len(entries)} entries)")
        return oid

    def _list_directory(self, directory: Path) -> List[Path]:
        children = list(directory.iterdir())
        if self.sort_entries:
            children.sort(key=lambda p: p.name)
        return children


def write_tree(
    store: ObjectStore,
    directory: Union[str, Path],
    sort_entries: bool = True,
) -> str:
    """
    Encode a directory as a tree object.

    Convenience function that creates a TreeEncoder and runs it once.

    Example:
        >>> store = ObjectStore(Path("."))
        >>> write_tree(store, Path("src"))
        '3f1c...'
    """
    return TreeEncoder(store, sort_entries=sort_entries).write_tree(directory)


def parse_tree(payload: bytes) -> List[TreeEntry]:
    """
    Decode a tree payload into its entries.

    Raises:
        MalformedObjectError: If any line is malformed or the payload does not
            end with a newline
    """
    text = os.fsdecode(payload)
    if text and not text.endswith("\n"):
        raise MalformedObjectError("Tree payload must end with a newline")

    # split on "\n" only; names may hold other line-break characters
    return [TreeEntry.parse(line) for line in text.split("\n")[:-1]]


def read_tree(store: ObjectStore, oid: str) -> List[TreeEntry]:
    """
    Load a tree object and decode its entries.

    Raises:
        MalformedObjectError: If the object is not a tree
        ObjectNotFoundError: If the object does not exist
    """
    obj = store.get(oid)
    if obj.kind != "tree":
        raise MalformedObjectError(f"Expected tree object, got {obj.kind}: {oid}")
    return parse_tree(obj.payload)
