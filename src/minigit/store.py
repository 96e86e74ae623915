"""
Content-addressable object store.

Objects live under <repository_root>/.mini-git/objects, one file per object,
fanned out by the first two hex characters of the id. Each file holds the
canonical header followed by the payload. Objects are immutable: writing an
id that already exists is a no-op.
"""

from pathlib import Path
from typing import NamedTuple, Union

from minigit.errors import MalformedObjectError, ObjectNotFoundError
from minigit.ids import (
    OBJECT_KINDS,
    compute_object_id,
    format_header,
    split_object_id,
)
from minigit.logger import get_default_logger


logger = get_default_logger()


# Repository metadata directory, relative to the repository root
REPO_DIR_NAME = ".mini-git"

OBJECTS_DIR_NAME = "objects"


class StoredObject(NamedTuple):
    """An object read back from the store."""

    kind: str
    payload: bytes


class ObjectStore:
    """
    Persists and retrieves immutable objects keyed by content id.

    The store is bound to an explicit repository root; it never consults the
    process working directory.
    """

    def __init__(self, repository_root: Union[str, Path]):
        """
        Initialize the object store.

        Args:
            repository_root: Directory containing the .mini-git marker
        """
        self.repository_root = Path(repository_root)
        self.objects_dir = self.repository_root / REPO_DIR_NAME / OBJECTS_DIR_NAME

    def object_path(self, oid: str) -> Path:
        """
        Derive the storage location of an object.

        Raises:
            InvalidObjectIdError: If the id cannot name a location
        """
        fanout, name = split_object_id(oid)
        return self.objects_dir / fanout / name

    def exists(self, oid: str) -> bool:
        """Return True if an object file is present for oid."""
        return self.object_path(oid).is_file()

    def put(self, kind: str, payload: bytes) -> str:
        """
        Store an object if it is not already present.

        Args:
            kind: Object kind ("blob", "tree", "commit")
            payload: Raw payload bytes

        Returns:
            The object id (40 lowercase hex characters)

        Raises:
            ValueError: If kind is not a known object kind
            OSError: If the object cannot be written

        Example:
            >>> store = ObjectStore(Path("."))
            >>> store.put("blob", b"hi\\n")
            '45b983be36b73c0788dc9cbcb76cbb80fc7bb057'
        """
        if kind not in OBJECT_KINDS:
            raise ValueError(f"Invalid object kind: {kind}. Must be one of {list(OBJECT_KINDS)}")

        oid = compute_object_id(kind, payload)
        path = self.object_path(oid)

        if path.exists():
            logger.debug(f"Object {oid} already stored, skipping write")
            return oid

        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            # Exclusive create: a concurrent writer of the same id wins
            with open(path, "xb") as f:
                f.write(format_header(kind, len(payload)))
                f.write(payload)
        except FileExistsError:
            logger.debug(f"Object {oid} appeared during write, keeping existing file")
            return oid

        logger.debug(f"Stored {kind} {oid} ({len(payload)} bytes)")
        return oid

    def get(self, oid: str) -> StoredObject:
        """
        Read an object back from the store.

        Args:
            oid: Object id

        Returns:
            StoredObject with the kind and payload

        Raises:
            InvalidObjectIdError: If the id cannot name a location
            ObjectNotFoundError: If no object file exists for the id
            MalformedObjectError: If the stored bytes have no header separator
        """
        path = self.object_path(oid)

        if not path.is_file():
            raise ObjectNotFoundError(oid)

        with open(path, "rb") as f:
            raw = f.read()

        header, sep, payload = raw.partition(b"\x00")
        if not sep:
            raise MalformedObjectError(
                f"Malformed object file: missing null byte separator in {path}"
            )

        kind = header.split(b" ", 1)[0].decode("ascii", errors="replace")
        logger.debug(f"Read {kind} {oid} ({len(payload)} bytes)")

        return StoredObject(kind=kind, payload=payload)

    def hash_file(self, file_path: Union[str, Path]) -> str:
        """
        Store the full contents of a file as a blob.

        Args:
            file_path: Path to a regular file

        Returns:
            The blob id

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
        """
        data = Path(file_path).read_bytes()
        return self.put("blob", data)
