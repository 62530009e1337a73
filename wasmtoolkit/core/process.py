"""
Subprocess execution for external tools.

Every tool invocation goes through run_tool(): one blocking child process,
success only on exit status zero, failures raised with the tool's name.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from wasmtoolkit.core.exceptions import ToolExecutionError

logger = logging.getLogger(__name__)


def run_tool(
    command: Sequence[Union[str, Path]],
    tool_name: str,
    cwd: Optional[Path] = None,
) -> subprocess.CompletedProcess:
    """
    Run a tool and wait for it to finish.

    Args:
        command: Executable path followed by its arguments
        tool_name: Name used to attribute failures
        cwd: Working directory (default: current directory)

    Returns:
        The completed process, with captured stdout/stderr

    Raises:
        ToolExecutionError: If the process cannot be started or exits non-zero
    """
    argv = [str(part) for part in command]
    logger.debug(f"Running {tool_name}: {' '.join(argv)}")

    try:
        result = subprocess.run(
            argv, cwd=cwd, capture_output=True, text=True, check=False
        )
    except OSError as e:
        raise ToolExecutionError(tool_name, stderr=str(e)) from e

    if result.returncode != 0:
        raise ToolExecutionError(tool_name, result.returncode, result.stderr or "")

    if result.stderr:
        logger.debug(f"{tool_name} stderr: {result.stderr.strip()}")

    return result


__all__ = ["run_tool"]
