"""
Pytest configuration and shared fixtures for wasmtoolkit tests.
"""

import io
import os
import stat
import tarfile
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def cache_root(temp_dir: Path, monkeypatch) -> Path:
    """Point the global cache at a temporary directory."""
    root = temp_dir / "cache"
    monkeypatch.setenv("WASMTOOLKIT_CACHE_DIR", str(root))
    return root


@pytest.fixture
def empty_path(temp_dir: Path, monkeypatch) -> Path:
    """Replace PATH with a single empty directory."""
    bin_dir = temp_dir / "empty-bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))
    return bin_dir


@pytest.fixture
def make_tarball(temp_dir: Path) -> Callable[..., bytes]:
    """
    Build a gzip'd tarball in memory.

    Usage: make_tarball({"binaryen-version_78/wasm-opt": b"#!/bin/sh\\n"})
    """

    def _make(files: dict) -> bytes:
        buffer = io.BytesIO()
        with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
            for name, content in files.items():
                info = tarfile.TarInfo(name)
                info.size = len(content)
                info.mode = 0o644
                tar.addfile(info, io.BytesIO(content))
        return buffer.getvalue()

    return _make


@pytest.fixture
def make_script(temp_dir: Path) -> Callable[[str, str], Path]:
    """
    Create an executable POSIX shell script.

    Usage: make_script("wasm-opt", 'cp "$1" "$3"')
    """

    def _make(name: str, body: str, directory: Path = None) -> Path:
        directory = directory or (temp_dir / "bin")
        directory.mkdir(parents=True, exist_ok=True)
        script = directory / name
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP)
        return script

    return _make
