"""
flagbits - named bit flags backed by a single unsigned integer.

    from flagbits import FlagSet
    fs = FlagSet.from_names(["read", "write", "exec"])
    fs.set_by_name("write")
    fs.get_active_flags()   # {'write': 2}
"""
from __future__ import annotations

from flagbits.core.errors import (
    DuplicateFlagError,
    FlagError,
    FlagOverflowError,
    InvalidFlagValueError,
    UnknownFlagBitError,
    UnknownFlagError,
)
from flagbits.core.flags import FlagSet
from flagbits.core.widths import UINT, UINT8, UINT16, UINT32, UINT64, UINTPTR, Width

__version__ = "0.1.0"

__all__ = [
    'FlagSet',
    'Width',
    'UINT8',
    'UINT16',
    'UINT32',
    'UINT64',
    'UINT',
    'UINTPTR',
    'FlagError',
    'UnknownFlagError',
    'UnknownFlagBitError',
    'InvalidFlagValueError',
    'FlagOverflowError',
    'DuplicateFlagError',
]
