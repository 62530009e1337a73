"""
Unit tests for cache entry locking.
"""

import pytest
from filelock import FileLock

from wasmtoolkit.core.exceptions import CacheLockTimeout
from wasmtoolkit.core.locking import LockManager


class TestEntryLock:
    """Tests for LockManager.entry_lock()."""

    def test_creates_lock_dir(self, temp_dir):
        """Test the lock directory is created."""
        manager = LockManager(temp_dir / "lock")

        assert manager.lock_dir.is_dir()

    def test_acquire_and_release(self, temp_dir):
        """Test the lock can be taken again after release."""
        manager = LockManager(temp_dir)

        with manager.entry_lock("wasm-opt-1"):
            pass
        with manager.entry_lock("wasm-opt-1", timeout=0):
            pass

    def test_timeout(self, temp_dir):
        """Test a held lock times out with CacheLockTimeout."""
        manager = LockManager(temp_dir)
        holder = FileLock(temp_dir / "wasm-opt-1.lock")

        with holder:
            with pytest.raises(CacheLockTimeout, match="wasm-opt-1"):
                with manager.entry_lock("wasm-opt-1", timeout=0):
                    pass

    def test_released_on_error(self, temp_dir):
        """Test the lock is released when the body raises."""
        manager = LockManager(temp_dir)

        with pytest.raises(RuntimeError):
            with manager.entry_lock("wasm-opt-1"):
                raise RuntimeError("boom")

        with manager.entry_lock("wasm-opt-1", timeout=0):
            pass
