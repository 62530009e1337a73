"""
Disassemble WebAssembly binaries to text format with Binaryen's ``wasm-dis``.
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

TEXT_SUFFIX = ".wat"


def disassemble(
    out_dir: Path,
    args: Sequence[str] = (),
    install_permitted: bool = True,
    cache: Optional[Cache] = None,
    resolver: Optional[ToolResolver] = None,
) -> ActionReport:
    """
    Write a ``.wat`` file next to every ``.wasm`` file in ``out_dir``.

    Skipped, not failed, when ``wasm-dis`` is unavailable.

    Returns:
        ActionReport listing the written ``.wat`` files
    """
    tool = Tool.WASM_DIS
    outcome = resolve_or_skip(tool, install_permitted, make_resolver(cache, resolver))
    report = ActionReport(tool=tool, outcome=outcome)
    if not isinstance(outcome, Found):
        return report

    logger.info(f"Disassembling wasm binaries with `{tool}`...")
    report.outputs = run_in_directory(
        outcome.path,
        Path(out_dir),
        tool.executable,
        args,
        output_suffix=TEXT_SUFFIX,
    )
    return report


__all__ = ["TEXT_SUFFIX", "disassemble"]
