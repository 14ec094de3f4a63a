"""Unsigned integer widths backing a flag set.

Python integers are unbounded, so a flag set carries its width explicitly:
  Width.mask          all bits representable in the width
  Width.contains(v)   whether v is a valid unsigned value of the width
  Width.single_bits() every single-bit value, least significant first
"""
from __future__ import annotations
import sys
from dataclasses import dataclass
from typing import Dict, Iterator

@dataclass(frozen=True)
class Width:
    name: str
    bits: int

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    def contains(self, value: object) -> bool:
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return 0 <= value <= self.mask

    def single_bits(self) -> Iterator[int]:
        bit = 1
        while bit & self.mask:
            yield bit
            bit <<= 1

    def __str__(self):
        return self.name

_PLATFORM_BITS = sys.maxsize.bit_length() + 1

UINT8 = Width("uint8", 8)
UINT16 = Width("uint16", 16)
UINT32 = Width("uint32", 32)
UINT64 = Width("uint64", 64)
UINT = Width("uint", _PLATFORM_BITS)
UINTPTR = Width("uintptr", _PLATFORM_BITS)

WIDTHS: Dict[str, Width] = {w.name: w for w in (UINT8, UINT16, UINT32, UINT64, UINT, UINTPTR)}

def by_name(name: str) -> Width:
    """Resolve 'uint16', 'u16' or '16' to a width."""
    key = name.strip().lower()
    if key in WIDTHS:
        return WIDTHS[key]
    if key.startswith("uint"):
        key = key[4:]
    elif key.startswith("u"):
        key = key[1:]
    for w in (UINT8, UINT16, UINT32, UINT64):
        if key == str(w.bits):
            return w
    raise ValueError(f"Unknown width '{name}'")

__all__ = ['Width','UINT8','UINT16','UINT32','UINT64','UINT','UINTPTR','WIDTHS','by_name']
