from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

from .errors import (
    DuplicateFlagError,
    FlagOverflowError,
    InvalidFlagValueError,
    UnknownFlagBitError,
    UnknownFlagError,
)
from .logging import logger
from .widths import UINT64, Width

class FlagSet:
    """Named bit flags accumulated in one unsigned integer.

    Each name maps to a bit of `width`. The mapping is copied and frozen on
    construction; only the accumulated value changes afterwards.
    """

    def __init__(self, flag_map: Mapping[str, int], width: Width = UINT64, strict: bool = False):
        self._width = width
        self._value = 0
        flags: Dict[str, int] = {}
        for name, value in flag_map.items():
            if not width.contains(value):
                raise InvalidFlagValueError(name, value, f"not an unsigned {width.bits}-bit value")
            flags[name] = value
        self._flag_map = MappingProxyType(flags)
        # reverse index: single bit -> first name defining it
        self._by_bit: Dict[int, str] = {}
        for name, value in flags.items():
            is_single = value != 0 and value & (value - 1) == 0
            if strict:
                if not is_single:
                    raise InvalidFlagValueError(name, value, "must be a single bit")
                if value in self._by_bit:
                    raise InvalidFlagValueError(name, value, f"bit already used by '{self._by_bit[value]}'")
            if is_single:
                self._by_bit.setdefault(value, name)
        logger.debug("FlagSetCreated", flags=len(flags), width=width, strict=strict)

    @classmethod
    def from_map(cls, flag_map: Mapping[str, int], width: Width = UINT64, strict: bool = False) -> "FlagSet":
        return cls(flag_map, width=width, strict=strict)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "FlagSet":
        """Assign 1, 2, 4, ... to `names` in order on a 64-bit set."""
        names = list(names)
        if len(names) > UINT64.bits:
            raise FlagOverflowError(len(names), UINT64.bits)
        flag_map: Dict[str, int] = {}
        for offset, name in enumerate(names):
            if name in flag_map:
                raise DuplicateFlagError(name)
            flag_map[name] = 1 << offset
        return cls(flag_map, width=UINT64)

    @property
    def width(self) -> Width:
        return self._width

    @property
    def flag_map(self) -> Mapping[str, int]:
        return self._flag_map

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._flag_map)

    def _lookup(self, name: str) -> int:
        try:
            return self._flag_map[name]
        except KeyError:
            raise UnknownFlagError(name) from None

    def _check_value(self, value: int):
        if not self._width.contains(value):
            raise InvalidFlagValueError(None, value, f"not an unsigned {self._width.bits}-bit value")

    # --- Read ---
    def get_value(self) -> int:
        return self._value

    def has_by_name(self, name: str) -> bool:
        return self._value & self._lookup(name) != 0

    def has_by_value(self, value: int) -> bool:
        """Raw intersection test; bits without a name are not an error."""
        self._check_value(value)
        return self._value & value != 0

    def has_any_by_name(self, *names: str) -> bool:
        bits = [self._lookup(n) for n in names]
        return any(self._value & b != 0 for b in bits)

    def has_all_by_name(self, *names: str) -> bool:
        bits = [self._lookup(n) for n in names]
        return all(self._value & b != 0 for b in bits)

    def get_active_flags(self) -> Dict[str, int]:
        return {name: value for name, value in self._flag_map.items() if self._value & value != 0}

    def to_binary(self, full_width: bool = False) -> str:
        digits = self._width.bits if full_width else 8
        return format(self._value, f"0{digits}b")

    # --- Write ---
    def set_by_name(self, name: str):
        self._value |= self._lookup(name)

    def clear_by_name(self, name: str):
        self._value &= ~self._lookup(name)

    def toggle_by_name(self, name: str):
        self._value ^= self._lookup(name)

    def set_by_value(self, value: int):
        """Set every flag whose bit is present in `value`.

        All bits are resolved before any is applied: if one bit has no flag,
        UnknownFlagBitError is raised and the current value is left as is.
        """
        self._check_value(value)
        resolved = 0
        for bit in self._width.single_bits():
            if value & bit == 0:
                continue
            if bit not in self._by_bit:
                raise UnknownFlagBitError(bit, value)
            resolved |= bit
        self._value |= resolved

    # --- Dunder ---
    def __str__(self):
        return self.to_binary()

    def __repr__(self):
        active = ",".join(self.get_active_flags())
        return f"FlagSet(width={self._width}, value={self._value:#x}, active=[{active}])"

    def __int__(self):
        return self._value

    def __contains__(self, name: object) -> bool:
        return name in self._flag_map

    def __len__(self):
        return len(self._flag_map)
