"""
On-disk artifact cache for precompiled tool releases.

Each entry is a directory holding the executables extracted from one
release archive. Entries are keyed by tool name plus a hash of the archive
URL (which embeds the pinned version and platform token), so a version bump
produces a fresh entry instead of mutating an existing one. Entries are
never modified or deleted by the resolution path.

Usage:
    from wasmtoolkit.core.cache import Cache

    cache = Cache()
    download = cache.download(False, "wasm-opt", ["wasm-opt"], url)
    if download is None:
        download = cache.download(True, "wasm-opt", ["wasm-opt"], url)
    wasm_opt = download.binary("wasm-opt")
"""

import hashlib
import logging
import tempfile
from pathlib import Path
from typing import Callable, Optional, Sequence

from wasmtoolkit.core.directory import ensure_cache_structure, get_global_cache_dir
from wasmtoolkit.core.download import DownloadProgress, download_file, format_progress
from wasmtoolkit.core.exceptions import AssetNotPublishedError, BinaryNotFoundError
from wasmtoolkit.core.filesystem import executable_name, extract_binaries, safe_rmtree
from wasmtoolkit.core.locking import LockManager

logger = logging.getLogger(__name__)


def _log_progress(name: str) -> Callable[[DownloadProgress], None]:
    def report(progress: DownloadProgress) -> None:
        logger.info(f"  {name}: {format_progress(progress)}")

    return report


class Download:
    """A populated cache entry."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def binary(self, name: str) -> Path:
        """
        Get the path of an executable stored in this entry.

        Args:
            name: Executable name without platform suffix

        Returns:
            Path to the executable

        Raises:
            BinaryNotFoundError: If the entry doesn't contain the executable
        """
        path = self.root / executable_name(name)
        if not path.is_file():
            raise BinaryNotFoundError(name, self.root)
        return path

    def __repr__(self) -> str:
        return f"Download({str(self.root)!r})"


class Cache:
    """
    Persistent store of downloaded tool releases.

    Attributes:
        root: Cache root directory
    """

    def __init__(self, root: Optional[Path] = None):
        """
        Initialize cache.

        Args:
            root: Cache root directory (default: global cache directory)
        """
        self.root = Path(root) if root is not None else get_global_cache_dir()

    def entry_dir(self, name: str, url: str) -> Path:
        """Get the directory for the entry of ``name`` downloaded from ``url``."""
        key = hashlib.sha256(url.encode("utf-8")).hexdigest()[:16]
        return self.root / f"{name}-{key}"

    def download(
        self,
        permit_install: bool,
        name: str,
        binaries: Sequence[str],
        url: str,
    ) -> Optional[Download]:
        """
        Look up, and optionally populate, the entry for a release archive.

        With ``permit_install`` false this never touches the network: it
        returns the entry if it is already present and None otherwise.

        Args:
            permit_install: Whether a missing entry may be downloaded
            name: Tool name (first half of the entry key)
            binaries: Executable names to extract from the archive
            url: Release archive URL

        Returns:
            Download for the entry, or None if it is absent and installation
            is not permitted, or if the host has not published the asset

        Raises:
            DownloadError: If fetching the archive fails
            ArchiveExtractionError: If unpacking the archive fails
            BinaryNotFoundError: If the archive lacks one of ``binaries``
            CacheLockTimeout: If another process holds the entry too long
        """
        destination = self.entry_dir(name, url)

        if destination.is_dir():
            logger.debug(f"Cache hit for {name}: {destination}")
            return Download(destination)

        if not permit_install:
            logger.debug(f"Cache miss for {name}, installation not permitted")
            return None

        ensure_cache_structure(self.root)
        lock_manager = LockManager(self.root / "lock")

        with lock_manager.entry_lock(destination.name):
            # Another process may have finished while we waited for the lock
            if destination.is_dir():
                logger.debug(f"Entry populated by another process: {destination}")
                return Download(destination)

            try:
                self._install(name, binaries, url, destination)
            except AssetNotPublishedError:
                logger.warning(f"No release asset published for {name} at {url}")
                return None

        return Download(destination)

    def _install(
        self, name: str, binaries: Sequence[str], url: str, destination: Path
    ) -> None:
        """Fetch and unpack an archive, then rename the result into place."""
        # Archive name is per entry: entries sharing a URL hold different locks
        asset = url.rsplit("/", 1)[-1]
        archive_path = self.root / "downloads" / f"{destination.name}-{asset}"
        staging = Path(
            tempfile.mkdtemp(prefix=f".{destination.name}.", dir=self.root)
        )

        try:
            download_file(url, archive_path, progress_callback=_log_progress(name))
            extracted = extract_binaries(archive_path, staging, binaries)
            logger.debug(
                f"Extracted {', '.join(p.name for p in extracted) or 'nothing'} "
                f"for {name}"
            )
            for binary in binaries:
                if not (staging / executable_name(binary)).is_file():
                    raise BinaryNotFoundError(binary, destination)
            staging.rename(destination)
        finally:
            archive_path.unlink(missing_ok=True)
            if staging.exists():
                safe_rmtree(staging, require_prefix=self.root)

        logger.info(f"Installed {name} into {destination}")

    def entries(self) -> list[Path]:
        """List populated cache entries."""
        if not self.root.is_dir():
            return []
        return sorted(
            p
            for p in self.root.iterdir()
            if p.is_dir()
            and not p.name.startswith(".")
            and p.name not in ("downloads", "lock")
        )


__all__ = ["Cache", "Download"]
