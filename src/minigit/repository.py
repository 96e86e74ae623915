"""
Repository layout and operations.

A repository is a directory holding a .mini-git marker:

    <root>/.mini-git/
        objects/<id[:2]>/<id[2:]>
        config.yaml            (optional)
"""

from pathlib import Path
from typing import Optional, Union

from minigit.commit import commit
from minigit.config import RepositoryConfig
from minigit.logger import get_default_logger
from minigit.store import OBJECTS_DIR_NAME, REPO_DIR_NAME, ObjectStore, StoredObject
from minigit.tree import TreeEncoder


logger = get_default_logger()


class Repository:
    """
    A minigit repository rooted at an explicit directory.
    """

    def __init__(self, root: Union[str, Path], config: Optional[RepositoryConfig] = None):
        """
        Initialize repository handle.

        Args:
            root: Repository root directory
            config: Optional RepositoryConfig (loaded from the root if None)
        """
        self.root = Path(root)
        self.git_dir = self.root / REPO_DIR_NAME
        self.objects_dir = self.git_dir / OBJECTS_DIR_NAME
        self.config = config if config else RepositoryConfig(self.root)
        self.store = ObjectStore(self.root)

    def is_initialized(self) -> bool:
        return self.git_dir.is_dir()

    def initialize(self) -> Path:
        """
        Create the repository marker and object directory.

        Returns:
            Path to the created marker directory

        Raises:
            FileExistsError: If the marker already exists
            FileNotFoundError: If the root directory does not exist
        """
        self.git_dir.mkdir()
        self.objects_dir.mkdir()
        logger.info(f"Initialized repository in {self.git_dir}")
        return self.git_dir

    def hash_object(self, file_path: Union[str, Path]) -> str:
        """Store a file's contents as a blob and return its id."""
        return self.store.hash_file(file_path)

    def cat_file(self, oid: str) -> StoredObject:
        """Read an object by id."""
        return self.store.get(oid)

    def write_tree(self, directory: Union[str, Path]) -> str:
        """Snapshot a directory using the configured ordering policy."""
        encoder = TreeEncoder(self.store, sort_entries=self.config.sort_entries)
        return encoder.write_tree(directory)

    def commit(self, message: str) -> str:
        """Snapshot the repository root and wrap it in a commit."""
        return commit(
            self.store,
            message,
            self.root,
            sort_entries=self.config.sort_entries,
        )
