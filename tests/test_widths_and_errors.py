import sys
import pytest

from flagbits.core import widths
from flagbits.core.widths import UINT8, UINT16, UINT32, UINT64, UINT, UINTPTR, by_name
from flagbits.core.errors import (
    FlagError, UnknownFlagError, UnknownFlagBitError, InvalidFlagValueError, FlagOverflowError,
)

def test_masks():
    assert UINT8.mask == 0xFF
    assert UINT16.mask == 0xFFFF
    assert UINT32.mask == 0xFFFFFFFF
    assert UINT64.mask == (1 << 64) - 1

def test_platform_width():
    assert UINT.bits == UINTPTR.bits == sys.maxsize.bit_length() + 1

def test_single_bits_cover_width():
    bits = list(UINT8.single_bits())
    assert bits == [1, 2, 4, 8, 16, 32, 64, 128]
    assert len(list(UINT64.single_bits())) == 64

def test_contains():
    assert UINT8.contains(0)
    assert UINT8.contains(255)
    assert not UINT8.contains(256)
    assert not UINT8.contains(-1)
    assert not UINT8.contains(True)
    assert not UINT8.contains(1.0)

@pytest.mark.parametrize("name,expected", [
    ("uint8", UINT8), ("u16", UINT16), ("32", UINT32), ("UINT64", UINT64), ("uint", UINT),
])
def test_by_name(name, expected):
    assert by_name(name) is expected

def test_by_name_unknown():
    with pytest.raises(ValueError):
        by_name("u12")
    assert "uintptr" in widths.WIDTHS

def test_unknown_flag_error():
    err = UnknownFlagError("nope")
    assert str(err) == "unknown flag: nope"
    assert isinstance(err, FlagError) and isinstance(err, KeyError)

def test_unknown_flag_bit_error():
    err = UnknownFlagBitError(8, 12)
    assert str(err) == "invalid flag bit: 00001000"
    assert (err.bit, err.value) == (8, 12)
    assert isinstance(err, ValueError)

def test_value_errors():
    err = InvalidFlagValueError("a", 3, "must be a single bit")
    assert "flag 'a'" in str(err)
    assert isinstance(FlagOverflowError(65, 64), FlagError)
