#!/usr/bin/env python3
"""
flagbits - command-line entry point.

Thin wrapper around flagbits.cli:
- demo map / demo slice: the bundled example programs
- decode: turn an integer into named flags
- shell: interactive flag editing
- config: show or change settings

To run: python main.py demo map
"""

from flagbits.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
