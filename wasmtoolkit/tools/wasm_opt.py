"""
Optimize compiled WebAssembly with Binaryen's ``wasm-opt``.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from wasmtoolkit.core.cache import Cache
from wasmtoolkit.tools.actions import ActionReport, make_resolver, resolve_or_skip
from wasmtoolkit.tools.executor import run_in_directory
from wasmtoolkit.tools.registry import Tool
from wasmtoolkit.tools.resolver import Found, ToolResolver

logger = logging.getLogger(__name__)

DEFAULT_ARGS = ("-O",)


def optimize(
    out_dir: Path,
    args: Sequence[str] = DEFAULT_ARGS,
    install_permitted: bool = True,
    cache: Optional[Cache] = None,
    resolver: Optional[ToolResolver] = None,
) -> ActionReport:
    """
    Run ``wasm-opt`` in place over every ``.wasm`` file in ``out_dir``.

    Each file is optimized into ``<name>.wasm-opt.wasm`` and renamed over the
    original. If ``wasm-opt`` cannot be found or installed the step is
    skipped, not failed.

    Args:
        out_dir: Directory containing compiled ``.wasm`` files
        args: Extra ``wasm-opt`` arguments (default: ``-O``)
        install_permitted: Whether ``wasm-opt`` may be downloaded
        cache: Artifact cache (ignored if ``resolver`` is given)
        resolver: Tool resolver to use

    Returns:
        ActionReport listing the optimized files

    Raises:
        ToolExecutionError: If ``wasm-opt`` fails on a file
        DownloadError: If installing ``wasm-opt`` fails
    """
    tool = Tool.WASM_OPT
    outcome = resolve_or_skip(tool, install_permitted, make_resolver(cache, resolver))
    report = ActionReport(tool=tool, outcome=outcome)
    if not isinstance(outcome, Found):
        return report

    logger.info(f"Optimizing wasm binaries with `{tool}`...")
    report.outputs = run_in_directory(
        outcome.path, Path(out_dir), tool.executable, args
    )
    return report


__all__ = ["DEFAULT_ARGS", "optimize"]
