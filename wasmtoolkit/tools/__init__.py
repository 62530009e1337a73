"""
Tool layer for wasmtoolkit.

Known tools, their resolution to executables, and the actions that run them.
"""

from .registry import Tool, ToolSpec, tool_names

from .resolver import (
    Found,
    PlatformNotSupported,
    CannotInstall,
    ResolutionOutcome,
    LocalResolver,
    RemoteFetcher,
    ToolResolver,
    resolve,
)

from .actions import ActionReport
from .wasm_opt import optimize
from .wasm_dis import disassemble
from .generate import generate

__all__ = [
    "Tool",
    "ToolSpec",
    "tool_names",
    "Found",
    "PlatformNotSupported",
    "CannotInstall",
    "ResolutionOutcome",
    "LocalResolver",
    "RemoteFetcher",
    "ToolResolver",
    "resolve",
    "ActionReport",
    "optimize",
    "disassemble",
    "generate",
]
