"""
Centralized exception hierarchy for wasmtoolkit.

Only real failures live here. A tool that is simply absent from PATH, a
host platform without precompiled releases, or a download that policy does
not allow are reported as resolution outcomes, never raised.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class WasmToolkitError(Exception):
    """Base exception for all wasmtoolkit errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(WasmToolkitError):
    """Raised when a configuration file cannot be parsed or is invalid."""

    pass


# ============================================================================
# Cache Exceptions
# ============================================================================


class CacheError(WasmToolkitError):
    """Base exception for artifact cache errors."""

    pass


class DownloadError(CacheError):
    """Raised when a release archive cannot be fetched."""

    pass


class AssetNotPublishedError(DownloadError):
    """Raised when the release host has no asset at the requested URL (HTTP 404)."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Release asset not published: {url}")


class BinaryNotFoundError(CacheError):
    """Raised when a cache entry does not contain the requested executable."""

    def __init__(self, binary_name: str, entry_dir):
        self.binary_name = binary_name
        self.entry_dir = entry_dir
        super().__init__(
            f"Binary '{binary_name}' does not exist in cache entry: {entry_dir}"
        )


class CacheLockTimeout(CacheError):
    """Raised when a cache entry lock cannot be acquired within timeout."""

    pass


# ============================================================================
# Tool Exceptions
# ============================================================================


class ToolError(WasmToolkitError):
    """Base exception for tool resolution and execution errors."""

    pass


class UnknownToolError(ToolError):
    """Raised when a tool name does not match any known tool."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ToolUnavailableError(ToolError):
    """Raised when a required tool could not be located or installed."""

    def __init__(self, tool_name: str, reason: str):
        self.tool_name = tool_name
        self.reason = reason
        super().__init__(f"{tool_name} is not available: {reason}")


class ToolExecutionError(ToolError):
    """Raised when a tool subprocess fails to start or exits non-zero."""

    def __init__(self, tool_name: str, returncode=None, stderr: str = ""):
        self.tool_name = tool_name
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            msg = f"Failed to run {tool_name}"
        else:
            msg = f"Running {tool_name} failed with exit code {returncode}"
        if stderr:
            msg += f": {stderr.strip()}"
        super().__init__(msg)
