import pytest

from flagbits import (
    FlagSet, UINT8, UINT16, UINT64,
    DuplicateFlagError, FlagOverflowError, InvalidFlagValueError, UnknownFlagBitError,
)

def test_from_map_keeps_all_flags():
    fs = FlagSet.from_map({"flag1": 1, "flag2": 2, "flag3": 4})
    assert len(fs) == 3
    assert fs.width is UINT64

def test_from_names_assigns_ascending_bits():
    fs = FlagSet.from_names(["flag1", "flag2", "flag3"])
    assert dict(fs.flag_map) == {"flag1": 1, "flag2": 2, "flag3": 4}
    assert fs.width is UINT64

def test_from_names_accepts_sixty_four():
    names = [f"f{i}" for i in range(64)]
    fs = FlagSet.from_names(names)
    assert fs.flag_map["f63"] == 1 << 63
    fs.set_by_name("f63")
    assert fs.get_value() == 1 << 63

def test_from_names_overflow():
    with pytest.raises(FlagOverflowError) as exc:
        FlagSet.from_names(f"f{i}" for i in range(65))
    assert exc.value.count == 65
    assert exc.value.width == 64

def test_from_names_duplicate():
    with pytest.raises(DuplicateFlagError) as exc:
        FlagSet.from_names(["a", "b", "a"])
    assert exc.value.name == "a"

def test_map_is_copied_and_read_only():
    source = {"a": 1, "b": 2}
    fs = FlagSet.from_map(source)
    source["c"] = 4
    source["a"] = 8
    assert dict(fs.flag_map) == {"a": 1, "b": 2}
    with pytest.raises(TypeError):
        fs.flag_map["d"] = 16

def test_value_must_fit_width():
    with pytest.raises(InvalidFlagValueError) as exc:
        FlagSet.from_map({"a": 1, "big": 1 << 8}, width=UINT8)
    assert exc.value.name == "big"
    with pytest.raises(InvalidFlagValueError):
        FlagSet.from_map({"neg": -1})
    with pytest.raises(InvalidFlagValueError):
        FlagSet.from_map({"flag": True})

def test_permissive_accepts_malformed_values():
    fs = FlagSet.from_map({"a": 1, "both": 6, "none": 0})
    fs.set_by_name("both")
    assert fs.get_value() == 6
    assert fs.get_active_flags() == {"both": 6}
    fs.set_by_name("none")
    assert fs.get_value() == 6

def test_permissive_multi_bit_values_never_decode():
    fs = FlagSet.from_map({"a": 1, "both": 6})
    with pytest.raises(UnknownFlagBitError) as exc:
        fs.set_by_value(2)
    assert exc.value.bit == 2
    assert fs.get_value() == 0

def test_permissive_shared_bit():
    fs = FlagSet.from_map({"a": 1, "alias": 1})
    fs.set_by_value(1)
    assert fs.get_active_flags() == {"a": 1, "alias": 1}

@pytest.mark.parametrize("value", [0, 3, 6])
def test_strict_rejects_non_single_bits(value):
    with pytest.raises(InvalidFlagValueError) as exc:
        FlagSet.from_map({"ok": 1, "bad": value}, strict=True)
    assert exc.value.name == "bad"
    assert "single bit" in exc.value.detail

def test_strict_rejects_shared_bits():
    with pytest.raises(InvalidFlagValueError) as exc:
        FlagSet.from_map({"a": 2, "b": 2}, strict=True)
    assert "'a'" in exc.value.detail

def test_strict_accepts_well_formed_map():
    fs = FlagSet.from_map({"lo": 1, "hi": 1 << 15}, width=UINT16, strict=True)
    fs.set_by_value(1 << 15 | 1)
    assert fs.has_all_by_name("lo", "hi")
