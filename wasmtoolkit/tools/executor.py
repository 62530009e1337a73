"""
Run resolved tools over input files.

Tools that rewrite a file write to a sibling temporary path first. The
temporary file is renamed over the final path with a single
``Path.replace`` only after the tool exits successfully, so the final path
never holds partial output and a failed run leaves the original file
untouched.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Sequence

from wasmtoolkit.core.process import run_tool

logger = logging.getLogger(__name__)


@dataclass
class Invocation:
    """
    One subprocess invocation of a tool.

    Attributes:
        executable: Resolved tool path
        args: Arguments after the executable, in order
        source: Input file, for file transforms
        temp_output: Temporary output path, for file transforms
    """

    executable: Path
    args: list[str] = field(default_factory=list)
    source: Optional[Path] = None
    temp_output: Optional[Path] = None

    def command(self) -> list[str]:
        return [str(self.executable), *self.args]


def iter_inputs(
    directory: Path, extension: str, exclude_suffixes: Sequence[str] = ()
) -> Iterator[Path]:
    """
    Yield regular files in ``directory`` whose extension is ``extension``.

    The listing is taken before the first file is yielded, so files created
    while processing are not picked up.

    Args:
        directory: Directory to scan (not recursive)
        extension: Extension without the dot (e.g. 'wasm')
        exclude_suffixes: File name endings to skip (e.g. stale temp files)
    """
    suffix = f".{extension.lstrip('.')}"
    candidates = sorted(Path(directory).iterdir())

    for path in candidates:
        if not path.is_file() or path.suffix != suffix:
            continue
        if any(path.name.endswith(s) for s in exclude_suffixes):
            logger.debug(f"Skipping leftover temporary file {path}")
            continue
        yield path


def build_output_invocation(
    executable: Path,
    source: Path,
    temp_output: Path,
    extra_args: Sequence[str] = (),
    output_flag: str = "-o",
) -> Invocation:
    """Build ``<tool> <source> -o <temp_output> <extra_args...>``."""
    return Invocation(
        executable=Path(executable),
        args=[str(source), output_flag, str(temp_output), *extra_args],
        source=Path(source),
        temp_output=Path(temp_output),
    )


def _run_to(invocation: Invocation, final_path: Path, tool_name: str) -> Path:
    temp_output = invocation.temp_output
    try:
        run_tool(invocation.command(), tool_name)
    except BaseException:
        if temp_output is not None:
            temp_output.unlink(missing_ok=True)
        raise

    temp_output.replace(final_path)
    return final_path


def transform_in_place(
    executable: Path,
    source: Path,
    tool_name: str,
    extra_args: Sequence[str] = (),
    temp_marker: Optional[str] = None,
) -> Path:
    """
    Rewrite ``source`` with the tool's output.

    The tool writes to ``source`` with its suffix replaced by
    ``temp_marker`` (default ``.<tool_name><suffix>``, e.g.
    ``app.wasm-opt.wasm``), which then replaces ``source``.

    Returns:
        ``source``

    Raises:
        ToolExecutionError: If the tool fails; ``source`` is unchanged
    """
    source = Path(source)
    marker = temp_marker or f".{tool_name}{source.suffix}"
    temp_output = source.with_suffix(marker)

    invocation = build_output_invocation(executable, source, temp_output, extra_args)
    return _run_to(invocation, source, tool_name)


def transform_to_sibling(
    executable: Path,
    source: Path,
    output_suffix: str,
    tool_name: str,
    extra_args: Sequence[str] = (),
) -> Path:
    """
    Write the tool's output for ``source`` next to it with ``output_suffix``.

    Example: ``app.wasm`` with output_suffix ``.wat`` produces ``app.wat``,
    written via ``app.wat.tmp``.

    Returns:
        Path of the output file

    Raises:
        ToolExecutionError: If the tool fails; no output file is left behind
    """
    source = Path(source)
    output = source.with_suffix(output_suffix)
    temp_output = output.with_name(output.name + ".tmp")

    invocation = build_output_invocation(executable, source, temp_output, extra_args)
    return _run_to(invocation, output, tool_name)


def run_in_directory(
    executable: Path,
    directory: Path,
    tool_name: str,
    extra_args: Sequence[str] = (),
    extension: str = "wasm",
    output_suffix: Optional[str] = None,
) -> list[Path]:
    """
    Run the tool over every matching file in ``directory``, one at a time.

    Args:
        executable: Resolved tool path
        directory: Directory holding the inputs
        tool_name: Name used for temp markers and failure attribution
        extra_args: Caller-supplied arguments appended to each invocation
        extension: Input extension; other files are left untouched
        output_suffix: If set, write sibling outputs instead of rewriting inputs

    Returns:
        Paths of the files written

    Raises:
        ToolExecutionError: On the first failing file
    """
    written = []
    stale = (f".{tool_name}.{extension.lstrip('.')}",)

    for path in iter_inputs(directory, extension, exclude_suffixes=stale):
        if output_suffix is None:
            logger.debug(f"Running {tool_name} on {path}")
            written.append(transform_in_place(executable, path, tool_name, extra_args))
        else:
            logger.debug(f"Running {tool_name} on {path} -> {output_suffix}")
            written.append(
                transform_to_sibling(
                    executable, path, output_suffix, tool_name, extra_args
                )
            )

    return written


def run_once(
    executable: Path,
    args: Sequence[str],
    tool_name: str,
    cwd: Optional[Path] = None,
) -> None:
    """Run a tool once with ``args``, for tools that don't transform files."""
    invocation = Invocation(executable=Path(executable), args=list(args))
    run_tool(invocation.command(), tool_name, cwd=cwd)


__all__ = [
    "Invocation",
    "iter_inputs",
    "build_output_invocation",
    "transform_in_place",
    "transform_to_sibling",
    "run_in_directory",
    "run_once",
]
