"""
Entry point for running wasmtoolkit as a module.

Usage: python -m wasmtoolkit [command] [options]
"""

from wasmtoolkit.cli.parser import main

if __name__ == "__main__":
    main()
