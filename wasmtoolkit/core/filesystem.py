"""
Cross-platform file system utilities for wasmtoolkit.

This module provides the file operations shared by the cache and the
executor:
- Executable lookup on PATH
- Selective archive extraction (tar.gz, tgz, zip) with traversal checks
- Safe file operations (executable bits, safe deletion)
"""

import os
import shutil
import stat
import tarfile
import zipfile
from pathlib import Path
from typing import Iterable, Optional, Union

from wasmtoolkit.core.exceptions import WasmToolkitError

IS_WINDOWS = os.name == "nt"


# ============================================================================
# Errors
# ============================================================================


class FilesystemError(WasmToolkitError):
    """Base exception for filesystem operations."""

    pass


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


class UnsupportedArchiveFormat(ArchiveExtractionError):
    """Archive format is not supported."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def executable_name(name: str) -> str:
    """
    Get the on-disk file name of an executable for the running platform.

    Example:
        >>> executable_name('wasm-opt')  # on Windows
        'wasm-opt.exe'
    """
    if IS_WINDOWS and not name.lower().endswith(".exe"):
        return f"{name}.exe"
    return name


def find_executable(
    name: str, search_paths: Optional[list[Path]] = None
) -> Optional[Path]:
    """
    Find an executable in the system PATH or provided search paths.

    Args:
        name: Executable name (e.g., 'wasm-opt')
        search_paths: Optional list of directories to search

    Returns:
        Absolute path to the first match, or None if not found

    Example:
        >>> find_executable('wasm-opt')
        PosixPath('/usr/local/bin/wasm-opt')
    """
    extensions = [""] if not IS_WINDOWS else ["", ".exe", ".bat", ".cmd"]

    if search_paths is None:
        path_env = os.environ.get("PATH", "")
        search_paths = [Path(p) for p in path_env.split(os.pathsep) if p]

    for directory in search_paths:
        for ext in extensions:
            exe_path = Path(directory) / f"{name}{ext}"
            if exe_path.is_file() and os.access(exe_path, os.X_OK):
                return exe_path.absolute()

    return None


def make_executable(path: Union[str, Path]) -> None:
    """Add execute permission bits to a file (no-op on Windows)."""
    if IS_WINDOWS:
        return
    path = Path(path)
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not member_path.is_relative_to(destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def _member_matches(member_name: str, names: set[str]) -> bool:
    base = member_name.replace("\\", "/").rsplit("/", 1)[-1]
    if base.lower().endswith(".exe"):
        base = base[: -len(".exe")]
    return base in names


def extract_binaries(
    archive_path: Union[str, Path],
    destination: Union[str, Path],
    names: Iterable[str],
) -> list[Path]:
    """
    Extract the named executables from an archive into a flat directory.

    Release archives nest their binaries under a versioned top-level
    directory (e.g. ``binaryen-version_78/wasm-opt``). Only regular file
    members whose base name, minus any ``.exe`` suffix, is in ``names`` are
    written, directly under ``destination``.

    Supported formats:
    - .tar.gz, .tgz
    - .zip

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract into
        names: Executable names to extract

    Returns:
        Paths of the extracted files

    Raises:
        UnsupportedArchiveFormat: If archive format is not recognized
        ArchiveExtractionError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths
    """
    archive_path = Path(archive_path)
    destination = Path(destination)
    wanted = set(names)

    if not archive_path.exists():
        raise ArchiveExtractionError(f"Archive not found: {archive_path}")

    destination.mkdir(parents=True, exist_ok=True)
    archive_name = archive_path.name.lower()

    try:
        if archive_name.endswith((".tar.gz", ".tgz")):
            extracted = _extract_tar_members(archive_path, destination, wanted)
        elif archive_name.endswith(".zip"):
            extracted = _extract_zip_members(archive_path, destination, wanted)
        else:
            raise UnsupportedArchiveFormat(
                f"Unsupported archive format: {archive_path.name}. "
                "Supported: .tar.gz, .tgz, .zip"
            )
    except (InsecureArchiveError, UnsupportedArchiveFormat):
        raise
    except Exception as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e

    for path in extracted:
        make_executable(path)

    return extracted


def _extract_tar_members(
    archive_path: Path, destination: Path, wanted: set[str]
) -> list[Path]:
    """Extract matching regular files from a gzip'd tarball."""
    extracted = []
    with tarfile.open(archive_path, "r:gz") as tar:
        for member in tar.getmembers():
            _validate_archive_path(member.name, destination)
            if not member.isfile() or not _member_matches(member.name, wanted):
                continue
            source = tar.extractfile(member)
            if source is None:
                continue
            target = destination / member.name.rsplit("/", 1)[-1]
            with source, open(target, "wb") as out:
                shutil.copyfileobj(source, out)
            extracted.append(target)
    return extracted


def _extract_zip_members(
    archive_path: Path, destination: Path, wanted: set[str]
) -> list[Path]:
    """Extract matching regular files from a ZIP archive."""
    extracted = []
    with zipfile.ZipFile(archive_path, "r") as zf:
        for info in zf.infolist():
            _validate_archive_path(info.filename, destination)
            if info.is_dir() or not _member_matches(info.filename, wanted):
                continue
            base = info.filename.replace("\\", "/").rsplit("/", 1)[-1]
            target = destination / base
            with zf.open(info) as source, open(target, "wb") as out:
                shutil.copyfileobj(source, out)
            extracted.append(target)
    return extracted


# ============================================================================
# Safe File Operations
# ============================================================================


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not path.is_relative_to(require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


__all__ = [
    "IS_WINDOWS",
    "FilesystemError",
    "ArchiveExtractionError",
    "UnsupportedArchiveFormat",
    "InsecureArchiveError",
    "executable_name",
    "find_executable",
    "make_executable",
    "extract_binaries",
    "safe_rmtree",
]
