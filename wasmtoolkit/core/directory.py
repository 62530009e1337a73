"""
Directory layout of the wasmtoolkit artifact cache.

Directory Structure:
    Global Cache (~/.wasmtoolkit/ or %LOCALAPPDATA%\\wasmtoolkit\\):
        - <tool>-<key>/  : One extracted release per tool name and URL
        - downloads/     : Archives while they are being fetched
        - lock/          : Per-entry lock files for concurrent processes

The location can be overridden with the WASMTOOLKIT_CACHE_DIR environment
variable.
"""

import os
from pathlib import Path
from typing import Optional

from wasmtoolkit.core.exceptions import CacheError

CACHE_DIR_ENV = "WASMTOOLKIT_CACHE_DIR"


class DirectoryError(CacheError):
    """Raised when a cache directory cannot be created or written."""

    pass


def get_global_cache_dir() -> Path:
    """
    Get the platform-specific global cache directory path.

    Returns:
        Path: The global cache directory path.
            - $WASMTOOLKIT_CACHE_DIR if set
            - Windows: %LOCALAPPDATA%\\wasmtoolkit
            - Linux/macOS: ~/.wasmtoolkit/

    Example:
        >>> cache_dir = get_global_cache_dir()
        >>> print(cache_dir)
        /home/user/.wasmtoolkit  # on Linux
    """
    override = os.environ.get(CACHE_DIR_ENV)
    if override:
        return Path(override).expanduser()

    if os.name == "nt":
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            return Path(local_app_data) / "wasmtoolkit"
        return Path.home() / "AppData" / "Local" / "wasmtoolkit"
    return Path.home() / ".wasmtoolkit"


def verify_directory_writable(path: Path) -> bool:
    """
    Verify that a directory exists and is writable.

    Returns:
        bool: True if directory exists and is writable, False otherwise.
    """
    if not path.is_dir():
        return False

    try:
        test_file = path / ".write_test"
        test_file.touch()
        test_file.unlink()
        return True
    except OSError:
        return False


def ensure_cache_structure(root: Optional[Path] = None) -> Path:
    """
    Create the cache directory structure if it doesn't exist.

    Args:
        root: Cache root (default: get_global_cache_dir())

    Returns:
        Path to the cache root

    Raises:
        DirectoryError: If the directories cannot be created or written
    """
    root = Path(root) if root is not None else get_global_cache_dir()

    try:
        (root / "downloads").mkdir(parents=True, exist_ok=True)
        (root / "lock").mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryError(f"Failed to create cache directory {root}: {e}") from e

    if not verify_directory_writable(root):
        raise DirectoryError(f"Cache directory is not writable: {root}")

    return root


__all__ = [
    "CACHE_DIR_ENV",
    "DirectoryError",
    "get_global_cache_dir",
    "verify_directory_writable",
    "ensure_cache_structure",
]
