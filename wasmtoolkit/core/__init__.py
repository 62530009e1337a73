"""
Core functionality for wasmtoolkit.

This package contains the foundational modules the tool layer depends on:
platform identification, filesystem helpers, downloads, the artifact cache
and subprocess execution.
"""

from .platform import (
    PlatformTarget,
    HostInfo,
    detect_host,
    identify_target,
    get_supported_targets,
)

from .cache import (
    Cache,
    Download,
)

from .directory import (
    get_global_cache_dir,
    ensure_cache_structure,
)

from .process import run_tool

from .exceptions import (
    WasmToolkitError,
    ConfigError,
    CacheError,
    DownloadError,
    AssetNotPublishedError,
    BinaryNotFoundError,
    CacheLockTimeout,
    ToolError,
    UnknownToolError,
    ToolUnavailableError,
    ToolExecutionError,
)

__all__ = [
    "PlatformTarget",
    "HostInfo",
    "detect_host",
    "identify_target",
    "get_supported_targets",
    "Cache",
    "Download",
    "get_global_cache_dir",
    "ensure_cache_structure",
    "run_tool",
    "WasmToolkitError",
    "ConfigError",
    "CacheError",
    "DownloadError",
    "AssetNotPublishedError",
    "BinaryNotFoundError",
    "CacheLockTimeout",
    "ToolError",
    "UnknownToolError",
    "ToolUnavailableError",
    "ToolExecutionError",
]
