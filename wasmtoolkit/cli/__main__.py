"""
Entry point for running the wasmtoolkit CLI as a module.

Usage: python -m wasmtoolkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
