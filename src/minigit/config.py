"""
Configuration loading for minigit repositories.

Reads an optional YAML file from <repository_root>/.mini-git/config.yaml and
merges it over built-in defaults.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from minigit.store import REPO_DIR_NAME


CONFIG_FILE_NAME = "config.yaml"

# Default configuration values (used when no config file exists)
DEFAULT_CONFIG = {
    "tree": {
        "sort_entries": True,
    },
    "logging": {
        "level": "WARNING",
        "file": None,
    },
}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary
        override: Override dictionary (takes precedence)

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_file(file_path: Path) -> Dict[str, Any]:
    """
    Load a YAML file and return its contents as a dictionary.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the top level of the file is not a mapping
        yaml.YAMLError: If file is not valid YAML
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a mapping: {file_path}")

    return config


def default_config_path(repository_root: Union[str, Path]) -> Path:
    """Location of the repository config file."""
    return Path(repository_root) / REPO_DIR_NAME / CONFIG_FILE_NAME


def load_config(
    repository_root: Union[str, Path],
    config_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Load repository configuration with fallback to defaults.

    Args:
        repository_root: Repository root directory
        config_path: Explicit config file (default: .mini-git/config.yaml)

    Returns:
        Configuration dictionary

    Example:
        >>> config = load_config(Path("."))
        >>> config["tree"]["sort_entries"]
        True
    """
    if config_path is None:
        config_path = default_config_path(repository_root)

    try:
        user_config = load_yaml_file(Path(config_path))
    except FileNotFoundError:
        return copy.deepcopy(DEFAULT_CONFIG)

    return deep_merge(copy.deepcopy(DEFAULT_CONFIG), user_config)


class RepositoryConfig:
    """
    Configuration manager for a repository.

    Loads lazily on first access.
    """

    def __init__(
        self,
        repository_root: Union[str, Path],
        config_path: Optional[Path] = None,
    ):
        self.repository_root = Path(repository_root)
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[Dict[str, Any]] = None

    @property
    def data(self) -> Dict[str, Any]:
        """Get the merged configuration (lazy load)."""
        if self._config is None:
            self._config = load_config(self.repository_root, self.config_path)
        return self._config

    @property
    def sort_entries(self) -> bool:
        value = self.get("tree", "sort_entries", default=True)
        if not isinstance(value, bool):
            raise ValueError(f"tree.sort_entries must be true or false, got {value!r}")
        return value

    @property
    def log_level(self) -> str:
        return str(self.get("logging", "level", default="WARNING"))

    @property
    def log_file(self) -> Optional[Path]:
        value = self.get("logging", "file")
        return Path(value) if value else None

    def reload(self) -> None:
        """Reload configuration from disk."""
        self._config = None

    def get(self, *keys: str, default: Any = None) -> Any:
        """
        Get a nested configuration value by key path.

        Example:
            >>> config = RepositoryConfig(Path("."))
            >>> config.get("tree", "sort_entries")
            True
        """
        value = self.data
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value
