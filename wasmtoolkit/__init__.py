"""
wasmtoolkit - locate, install and run WebAssembly build tools.

Tools such as Binaryen's wasm-opt are looked up on PATH first and otherwise
downloaded as precompiled releases into a shared on-disk cache.
"""

from wasmtoolkit.tools import (
    CannotInstall,
    Found,
    PlatformNotSupported,
    Tool,
    ToolResolver,
    resolve,
)

__version__ = "0.1.0"

__all__ = [
    "CannotInstall",
    "Found",
    "PlatformNotSupported",
    "Tool",
    "ToolResolver",
    "resolve",
    "__version__",
]
