"""
Error classes raised by flag sets.
"""
from __future__ import annotations

class FlagError(Exception):
    """Base for flag set errors."""

class UnknownFlagError(FlagError, KeyError):
    def __init__(self, name: str):
        super().__init__(f"unknown flag: {name}")
        self.name = name

    def __str__(self):
        # KeyError would quote the message
        return str(self.args[0])

class UnknownFlagBitError(FlagError, ValueError):
    def __init__(self, bit: int, value: int):
        super().__init__(f"invalid flag bit: {bit:08b}")
        self.bit = bit
        self.value = value

class InvalidFlagValueError(FlagError, ValueError):
    def __init__(self, name: str | None, value: object, detail: str):
        label = f"flag '{name}'" if name is not None else "value"
        super().__init__(f"Invalid {label} {value!r}: {detail}")
        self.name = name
        self.value = value
        self.detail = detail

class FlagOverflowError(FlagError, ValueError):
    def __init__(self, count: int, width: int):
        super().__init__(f"{count} flags do not fit in {width} bits")
        self.count = count
        self.width = width

class DuplicateFlagError(FlagError, ValueError):
    def __init__(self, name: str):
        super().__init__(f"duplicate flag: {name}")
        self.name = name
