"""
wasmtoolkit CLI argument parser.

This module implements the command-line interface for wasmtoolkit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from wasmtoolkit.tools.generate import DEFAULT_TEMPLATE
from wasmtoolkit.tools.registry import tool_names

try:
    from importlib.metadata import version

    __version__ = version("wasmtoolkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """wasmtoolkit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="wasmtoolkit",
            description="wasmtoolkit - locate, install and run WebAssembly build tools",
            epilog='Use "wasmtoolkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"wasmtoolkit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./wasmtoolkit.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=None,
            help="Project root directory (default: current directory)",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="PATH",
            help="Artifact cache directory (default: ~/.wasmtoolkit)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_resolve_command(subparsers)
        self._add_opt_command(subparsers)
        self._add_dis_command(subparsers)
        self._add_new_command(subparsers)
        self._add_cache_command(subparsers)

        return parser

    @staticmethod
    def _add_no_install(parser):
        parser.add_argument(
            "--no-install",
            action="store_true",
            help="Never download tools; skip steps whose tool is not installed",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Locate (and if needed install) a tool",
            description="Print the path of a tool, installing it if permitted",
        )
        parser.add_argument("tool", choices=tool_names(), metavar="TOOL")
        self._add_no_install(parser)

    def _add_opt_command(self, subparsers):
        """Add 'opt' subcommand."""
        parser = subparsers.add_parser(
            "opt",
            help="Optimize .wasm files in place with wasm-opt",
            description="Run wasm-opt over every .wasm file in a directory",
        )
        parser.add_argument("directory", type=Path, metavar="DIR")
        self._add_no_install(parser)
        parser.add_argument(
            "tool_args",
            nargs=argparse.REMAINDER,
            metavar="-- ARGS",
            help="Arguments passed to wasm-opt (default from config: -O)",
        )

    def _add_dis_command(self, subparsers):
        """Add 'dis' subcommand."""
        parser = subparsers.add_parser(
            "dis",
            help="Disassemble .wasm files to .wat with wasm-dis",
            description="Write a .wat file next to every .wasm file in a directory",
        )
        parser.add_argument("directory", type=Path, metavar="DIR")
        self._add_no_install(parser)

    def _add_new_command(self, subparsers):
        """Add 'new' subcommand."""
        parser = subparsers.add_parser(
            "new",
            help="Create a new project with cargo-generate",
            description="Generate a new project from a git template",
        )
        parser.add_argument("name", metavar="NAME")
        parser.add_argument(
            "--template",
            default=DEFAULT_TEMPLATE,
            metavar="URL",
            help=f"Template git URL (default: {DEFAULT_TEMPLATE})",
        )
        self._add_no_install(parser)

    def _add_cache_command(self, subparsers):
        """Add 'cache' subcommand."""
        parser = subparsers.add_parser(
            "cache",
            help="Show the artifact cache",
            description="Print the artifact cache location and its entries",
        )
        parser.add_argument(
            "--list", action="store_true", help="List installed cache entries"
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "resolve": "wasmtoolkit.cli.commands.resolve",
            "opt": "wasmtoolkit.cli.commands.opt",
            "dis": "wasmtoolkit.cli.commands.dis",
            "new": "wasmtoolkit.cli.commands.new",
            "cache": "wasmtoolkit.cli.commands.cache",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
