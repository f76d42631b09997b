from __future__ import annotations

import pytest

from qrsymbol import tables
from qrsymbol.bits import to_bit_string
from qrsymbol.errors import InvalidModeError, UnsupportedVersionError
from qrsymbol.model import CodewordBlockGroup, ErrorCorrection, Mode, SymbolType


def _bits(array) -> str:
    return "".join("1" if bit else "0" for bit in array)


def test_normal_format_strings() -> None:
    assert _bits(tables.format_string(SymbolType.NORMAL, 1, ErrorCorrection.L, 0)) == "111011111000100"
    assert _bits(tables.format_string(SymbolType.NORMAL, 1, ErrorCorrection.M, 0)) == "101010000010010"
    assert _bits(tables.format_string(SymbolType.NORMAL, 1, ErrorCorrection.H, 7)) == "000100000111011"
    assert len(tables.NORMAL_FORMAT_STRINGS) == 32


def test_micro_format_strings() -> None:
    assert _bits(tables.format_string(SymbolType.MICRO, 1, ErrorCorrection.NONE, 0)) == "100010001000101"
    assert _bits(tables.format_string(SymbolType.MICRO, 2, ErrorCorrection.L, 0)) == "101010110101110"
    assert len(tables.MICRO_FORMAT_STRINGS) == 32
    with pytest.raises(UnsupportedVersionError):
        tables.format_string(SymbolType.MICRO, 2, ErrorCorrection.Q, 0)


def test_version_strings() -> None:
    assert _bits(tables.VERSION_STRINGS[7]) == "000111110010010100"
    assert _bits(tables.VERSION_STRINGS[40]) == "101000110001101001"
    assert sorted(tables.VERSION_STRINGS) == list(range(7, 41))


def test_alignment_locations() -> None:
    assert len(tables.ALIGNMENT_LOCATIONS) == 40
    assert tables.alignment_locations(1) == ()
    assert tables.alignment_locations(2) == (6, 18)
    assert tables.alignment_locations(7) == (6, 22, 38)
    assert tables.alignment_locations(40) == (6, 30, 58, 86, 114, 142, 170)
    for version in range(2, 41):
        # last centre sits 7 modules in from the far edge
        assert tables.alignment_locations(version)[-1] == 17 + 4 * version - 7


def test_capacity_lookup() -> None:
    assert tables.capacity(SymbolType.NORMAL, 40, ErrorCorrection.L).byte == 2953
    assert tables.capacity(SymbolType.NORMAL, 1, ErrorCorrection.H).numeric == 17
    assert tables.capacity(SymbolType.NORMAL, 1, ErrorCorrection.L).byte == 17
    assert tables.capacity(SymbolType.MICRO, 1, ErrorCorrection.NONE).numeric == 5
    assert tables.capacity(SymbolType.MICRO, 2, ErrorCorrection.L).byte == 0
    with pytest.raises(UnsupportedVersionError):
        tables.capacity(SymbolType.NORMAL, 1, ErrorCorrection.NONE)
    with pytest.raises(UnsupportedVersionError):
        tables.capacity(SymbolType.NORMAL, 41, ErrorCorrection.L)


def test_block_groups() -> None:
    assert tables.block_groups(SymbolType.NORMAL, 5, ErrorCorrection.Q) == (
        CodewordBlockGroup(2, 33, 15),
        CodewordBlockGroup(2, 34, 16),
    )
    assert tables.block_groups(SymbolType.MICRO, 1, ErrorCorrection.NONE) == (CodewordBlockGroup(1, 5, 3),)
    assert tables.block_groups(SymbolType.NORMAL, 1, ErrorCorrection.M)[0].error_words == 10


def test_total_codewords_do_not_depend_on_level() -> None:
    for version in range(1, 41):
        totals = {
            sum(g.blocks * g.total_words for g in tables.block_groups(SymbolType.NORMAL, version, ecc))
            for ecc in (ErrorCorrection.L, ErrorCorrection.M, ErrorCorrection.Q, ErrorCorrection.H)
        }
        assert len(totals) == 1


def test_character_count_bits() -> None:
    assert tables.character_count_bits(SymbolType.NORMAL, 9, Mode.BYTE) == 8
    assert tables.character_count_bits(SymbolType.NORMAL, 10, Mode.BYTE) == 16
    assert tables.character_count_bits(SymbolType.NORMAL, 27, Mode.NUMERIC) == 14
    assert tables.character_count_bits(SymbolType.MICRO, 1, Mode.NUMERIC) == 3
    with pytest.raises(InvalidModeError):
        tables.character_count_bits(SymbolType.MICRO, 2, Mode.BYTE)


def test_mode_indicators() -> None:
    assert tables.mode_indicator(SymbolType.NORMAL, 1, Mode.BYTE) == (0b0100, 4)
    assert tables.mode_indicator(SymbolType.MICRO, 1, Mode.NUMERIC) == (0, 0)
    assert tables.mode_indicator(SymbolType.MICRO, 4, Mode.BYTE) == (2, 3)
    assert tables.mode_indicator(SymbolType.MICRO, 3, Mode.TERMINATOR) == (0, 7)
    with pytest.raises(InvalidModeError):
        tables.mode_indicator(SymbolType.MICRO, 2, Mode.BYTE)


def test_mask_candidates() -> None:
    assert [m.id for m in tables.mask_candidates(SymbolType.NORMAL)] == list(range(8))
    micro = tables.mask_candidates(SymbolType.MICRO)
    assert [(m.id, m.micro_id) for m in micro] == [(1, 0), (4, 1), (6, 2), (7, 3)]


def test_alphanumeric_table() -> None:
    assert len(tables.ALPHANUMERIC) == 45
    assert tables.ALPHANUMERIC["A"] == 10
    assert tables.ALPHANUMERIC[":"] == 44
    assert "a" not in tables.ALPHANUMERIC


def test_bit_string_groups_octets() -> None:
    assert to_bit_string([1, 0, 1, 0, 0, 0, 0, 0, 1, 1]) == "10100000 11"
