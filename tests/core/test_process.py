"""
Unit tests for subprocess execution.
"""

from unittest.mock import Mock, patch

import pytest

from wasmtoolkit.core.exceptions import ToolExecutionError
from wasmtoolkit.core.process import run_tool


class TestRunTool:
    """Tests for run_tool()."""

    @patch("subprocess.run")
    def test_success(self, mock_run):
        """Test a zero exit status returns the completed process."""
        mock_run.return_value = Mock(returncode=0, stdout="ok", stderr="")

        result = run_tool(["/bin/wasm-opt", "a.wasm"], "wasm-opt")

        assert result.stdout == "ok"
        argv = mock_run.call_args[0][0]
        assert argv == ["/bin/wasm-opt", "a.wasm"]

    @patch("subprocess.run")
    def test_paths_are_stringified(self, mock_run, temp_dir):
        """Test Path arguments are converted to strings."""
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        run_tool([temp_dir / "wasm-opt", temp_dir / "a.wasm"], "wasm-opt")

        assert mock_run.call_args[0][0] == [
            str(temp_dir / "wasm-opt"),
            str(temp_dir / "a.wasm"),
        ]

    @patch("subprocess.run")
    def test_nonzero_exit(self, mock_run):
        """Test a non-zero exit raises with the tool name attached."""
        mock_run.return_value = Mock(returncode=3, stdout="", stderr="bad input\n")

        with pytest.raises(ToolExecutionError) as exc_info:
            run_tool(["wasm-opt"], "wasm-opt")

        error = exc_info.value
        assert error.tool_name == "wasm-opt"
        assert error.returncode == 3
        assert "bad input" in str(error)

    @patch("subprocess.run", side_effect=FileNotFoundError("no such file"))
    def test_spawn_failure(self, mock_run):
        """Test a spawn error raises ToolExecutionError."""
        with pytest.raises(ToolExecutionError, match="Failed to run wasm-opt") as exc_info:
            run_tool(["/missing/wasm-opt"], "wasm-opt")

        assert exc_info.value.returncode is None
