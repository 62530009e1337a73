"""
wasmtoolkit CLI command implementations.

Each module exposes ``run(args) -> int``.
"""
