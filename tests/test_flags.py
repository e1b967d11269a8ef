import pytest

from jclassparse.flags import (
    AccessFlags,
    ClassAccessFlags,
    FieldAccessFlags,
    MethodAccessFlags,
    parse_flags,
)


def test_shared_bit_aliases():
    flags = parse_flags(AccessFlags, 0x0020)
    assert int(flags) == 0x0020
    assert AccessFlags.SUPER in flags
    assert AccessFlags.SYNCHRONIZED in flags
    assert AccessFlags.OPEN in flags
    assert AccessFlags.VOLATILE not in flags

    flags = parse_flags(AccessFlags, 0x0040)
    assert AccessFlags.VOLATILE in flags
    assert AccessFlags.BRIDGE in flags
    assert int(flags) == 0x0040

    flags = parse_flags(AccessFlags, 0x8000)
    assert AccessFlags.MANDATED in flags
    assert AccessFlags.MODULE in flags
    assert int(flags) == 0x8000


def test_known_bits_kept():
    flags = parse_flags(ClassAccessFlags, 0x0001 | 0x8000)
    assert flags == ClassAccessFlags.PUBLIC | ClassAccessFlags.MODULE
    assert ClassAccessFlags.MODULE in flags


def test_unknown_bits_truncated_for_fields():
    flags = parse_flags(FieldAccessFlags, 0x0020 | 0x0001)
    assert flags == FieldAccessFlags.PUBLIC
    assert int(flags) & 0x0020 == 0


def test_unknown_bits_truncated_for_class():
    flags = parse_flags(ClassAccessFlags, 0x0002)
    assert int(flags) == 0


@pytest.mark.parametrize(
    "flag_type", [AccessFlags, FieldAccessFlags, MethodAccessFlags, ClassAccessFlags]
)
def test_all_bits_keeps_every_member(flag_type):
    flags = parse_flags(flag_type, 0xFFFF)
    for member in flag_type.__members__.values():
        assert member in flags
    assert int(flags) & ~0xFFFF == 0


@pytest.mark.parametrize(
    "flag_type", [AccessFlags, FieldAccessFlags, MethodAccessFlags, ClassAccessFlags]
)
@pytest.mark.parametrize("value", [0, 0x0001, 0x1234, 0xFFFF])
def test_result_is_subset_of_input(flag_type, value):
    flags = parse_flags(flag_type, value)
    assert int(flags) & ~value == 0
    assert parse_flags(flag_type, int(flags)) == flags


def test_method_synchronized_shares_super_bit():
    flags = parse_flags(MethodAccessFlags, 0x0020)
    assert flags == MethodAccessFlags.SYNCHRONIZED
    assert int(flags) == int(ClassAccessFlags.SUPER)