"""
Cross-process locking for cache entries.

Two wasmtoolkit processes installing the same tool at the same time would
both download the archive and race to rename it into place. A per-entry
file lock serializes installation: the first process downloads, the others
wait and then find the finished entry.

Usage:
    from wasmtoolkit.core.locking import LockManager

    lock_manager = LockManager(cache_root / "lock")
    with lock_manager.entry_lock("wasm-opt-3f2a..."):
        # Safely populate the cache entry
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from wasmtoolkit.core.exceptions import CacheLockTimeout

logger = logging.getLogger(__name__)


class LockManager:
    """
    Manages file locks for artifact cache entries.

    Uses the `filelock` library for cross-platform, cross-process locking
    that is released automatically if the holding process dies.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Path):
        self.lock_dir = Path(lock_dir)
        self.lock_dir.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def entry_lock(self, entry_key: str, timeout: int = 300):
        """
        Acquire the lock for one cache entry.

        Args:
            entry_key: Cache entry directory name
            timeout: Maximum wait time in seconds (default: 300)

        Raises:
            CacheLockTimeout: If lock can't be acquired within timeout
        """
        lock_path = self.lock_dir / f"{entry_key}.lock"
        lock = FileLock(lock_path, timeout=timeout)

        try:
            lock.acquire()
        except Timeout as e:
            logger.error(
                f"Could not acquire cache lock for {entry_key} after {timeout}s"
            )
            raise CacheLockTimeout(
                f"Could not acquire cache lock for {entry_key} after {timeout}s. "
                "Another wasmtoolkit process may be installing the same tool."
            ) from e

        logger.debug(f"Acquired cache lock: {lock_path}")
        try:
            yield
        finally:
            lock.release()
            logger.debug(f"Released cache lock: {lock_path}")


__all__ = ["LockManager"]
