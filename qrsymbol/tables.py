"""Published ISO/IEC 18004 structure tables.

Capacities and error correction block layouts are read from the CSV files
in ``data/``; format and version information strings are generated with
their BCH codes. All lookups are flat, keyed by (symbol, version, ...)
tuples, and read-only once the module is imported.
"""

import os
from types import MappingProxyType
from typing import NamedTuple, Optional

import numpy as np
import pandas as pd

from .bits import dec2bin
from .errors import InvalidModeError, UnsupportedVersionError
from .galois import DATA_DIR
from .model import (
    Capacity,
    CodewordBlockGroup,
    ErrorCorrection,
    Mode,
    SymbolType,
    data_modes,
    error_correction_levels,
)

ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
ALPHANUMERIC = MappingProxyType({c: i for i, c in enumerate(ALPHANUMERIC_CHARSET)})
DIGITS = frozenset("0123456789")

PAD_CODEWORDS = (0xEC, 0x11)


#%% Capacity and block structure

def _read(name):
    return pd.read_csv(os.path.join(DATA_DIR, name), dtype={"symbol": str, "ecc": str}, keep_default_na=False)


def _load_capacities():
    capacities = {}
    for row in _read("capacity.csv").itertuples(index=False):
        key = (SymbolType(row.symbol), int(row.version), ErrorCorrection[row.ecc])
        capacities[key] = Capacity(
            int(row.data_words), int(row.numeric), int(row.alphanumeric), int(row.byte), int(row.kanji)
        )
    return MappingProxyType(capacities)


def _load_block_groups():
    groups = {}
    for row in _read("ecc_blocks.csv").itertuples(index=False):
        key = (SymbolType(row.symbol), int(row.version), ErrorCorrection[row.ecc])
        group = CodewordBlockGroup(int(row.blocks), int(row.total_words), int(row.data_words))
        groups[key] = groups.get(key, ()) + (group,)
    return MappingProxyType(groups)


CAPACITIES = _load_capacities()
BLOCK_GROUPS = _load_block_groups()


def capacity(symbol, version, ecc):
    try:
        return CAPACITIES[(symbol, version, ecc)]
    except KeyError:
        raise UnsupportedVersionError(f"no {symbol.value} symbol version {version} at level {ecc.name}") from None


def block_groups(symbol, version, ecc):
    try:
        return BLOCK_GROUPS[(symbol, version, ecc)]
    except KeyError:
        raise UnsupportedVersionError(f"no {symbol.value} symbol version {version} at level {ecc.name}") from None


#%% Alignment pattern centres, Normal versions 1-40

ALIGNMENT_LOCATIONS = (
    (),
    (6, 18),
    (6, 22),
    (6, 26),
    (6, 30),
    (6, 34),
    (6, 22, 38),
    (6, 24, 42),
    (6, 26, 46),
    (6, 28, 50),
    (6, 30, 54),
    (6, 32, 58),
    (6, 34, 62),
    (6, 26, 46, 66),
    (6, 26, 48, 70),
    (6, 26, 50, 74),
    (6, 30, 54, 78),
    (6, 30, 56, 82),
    (6, 30, 58, 86),
    (6, 34, 62, 90),
    (6, 28, 50, 72, 94),
    (6, 26, 50, 74, 98),
    (6, 30, 54, 78, 102),
    (6, 28, 54, 80, 106),
    (6, 32, 58, 84, 110),
    (6, 30, 58, 86, 114),
    (6, 34, 62, 90, 118),
    (6, 26, 50, 74, 98, 122),
    (6, 30, 54, 78, 102, 126),
    (6, 26, 52, 78, 104, 130),
    (6, 30, 56, 82, 108, 134),
    (6, 34, 60, 86, 112, 138),
    (6, 30, 58, 86, 114, 142),
    (6, 34, 62, 90, 118, 146),
    (6, 30, 54, 78, 102, 126, 150),
    (6, 24, 50, 76, 102, 128, 154),
    (6, 28, 54, 80, 106, 132, 158),
    (6, 32, 58, 84, 110, 136, 162),
    (6, 26, 54, 82, 110, 138, 166),
    (6, 30, 58, 86, 114, 142, 170),
)


def alignment_locations(version):
    return ALIGNMENT_LOCATIONS[version - 1]


#%% Mode indicators and character count widths

NORMAL_MODE_INDICATORS = MappingProxyType({
    Mode.ECI: 0b0111,
    Mode.NUMERIC: 0b0001,
    Mode.ALPHANUMERIC: 0b0010,
    Mode.BYTE: 0b0100,
    Mode.KANJI: 0b1000,
    Mode.STRUCTURED_APPEND: 0b0011,
    Mode.FNC1_FIRST: 0b0101,
    Mode.FNC1_SECOND: 0b1001,
    Mode.TERMINATOR: 0b0000,
})

MICRO_MODE_INDICATORS = MappingProxyType({
    Mode.NUMERIC: 0,
    Mode.ALPHANUMERIC: 1,
    Mode.BYTE: 2,
    Mode.KANJI: 3,
})


def mode_indicator(symbol, version, mode):
    """(value, width) of the mode indicator field."""
    if symbol is SymbolType.NORMAL:
        if mode not in NORMAL_MODE_INDICATORS:
            raise InvalidModeError(f"{mode.value} has no mode indicator")
        return NORMAL_MODE_INDICATORS[mode], 4
    if mode is Mode.TERMINATOR:
        return 0, 2 * version + 1
    if mode not in data_modes(symbol, version):
        raise InvalidModeError(f"{mode.value} mode is not available in QR M{version}")
    return MICRO_MODE_INDICATORS[mode], version - 1


def _count_widths():
    widths = {
        (SymbolType.MICRO, 1, Mode.NUMERIC): 3,
        (SymbolType.MICRO, 2, Mode.NUMERIC): 4,
        (SymbolType.MICRO, 2, Mode.ALPHANUMERIC): 3,
        (SymbolType.MICRO, 3, Mode.NUMERIC): 5,
        (SymbolType.MICRO, 3, Mode.ALPHANUMERIC): 4,
        (SymbolType.MICRO, 3, Mode.BYTE): 4,
        (SymbolType.MICRO, 3, Mode.KANJI): 3,
        (SymbolType.MICRO, 4, Mode.NUMERIC): 6,
        (SymbolType.MICRO, 4, Mode.ALPHANUMERIC): 5,
        (SymbolType.MICRO, 4, Mode.BYTE): 5,
        (SymbolType.MICRO, 4, Mode.KANJI): 4,
    }
    for versions, (numeric, alphanumeric, byte, kanji) in (
        (range(1, 10), (10, 9, 8, 8)),
        (range(10, 27), (12, 11, 16, 10)),
        (range(27, 41), (14, 13, 16, 12)),
    ):
        for version in versions:
            widths[(SymbolType.NORMAL, version, Mode.NUMERIC)] = numeric
            widths[(SymbolType.NORMAL, version, Mode.ALPHANUMERIC)] = alphanumeric
            widths[(SymbolType.NORMAL, version, Mode.BYTE)] = byte
            widths[(SymbolType.NORMAL, version, Mode.KANJI)] = kanji
    return MappingProxyType(widths)


CHARACTER_COUNT_BITS = _count_widths()


def character_count_bits(symbol, version, mode):
    try:
        return CHARACTER_COUNT_BITS[(symbol, version, mode)]
    except KeyError:
        raise InvalidModeError(f"{mode.value} mode has no character count in {symbol.value} version {version}") from None


#%% Format and version information

FORMAT_GENERATOR = dec2bin(0b10100110111, 11)
VERSION_GENERATOR = dec2bin(0b1111100100101, 13)
NORMAL_FORMAT_MASK = 0b101010000010010
MICRO_FORMAT_MASK = 0b100010001000101

NORMAL_ECC_BITS = MappingProxyType({
    ErrorCorrection.L: 0b01,
    ErrorCorrection.M: 0b00,
    ErrorCorrection.Q: 0b11,
    ErrorCorrection.H: 0b10,
})

MICRO_SYMBOL_NUMBERS = MappingProxyType({
    (1, ErrorCorrection.NONE): 0,
    (2, ErrorCorrection.L): 1,
    (2, ErrorCorrection.M): 2,
    (3, ErrorCorrection.L): 3,
    (3, ErrorCorrection.M): 4,
    (4, ErrorCorrection.L): 5,
    (4, ErrorCorrection.M): 6,
    (4, ErrorCorrection.Q): 7,
})


def bch_encode(data, data_bits, generator, mask=0):
    """Systematic BCH codeword of `data`, XORed with `mask`."""
    msg_bits = np.zeros(data_bits + len(generator) - 1, dtype=np.bool_)
    msg_bits[:data_bits] = dec2bin(data, data_bits)
    bch_bits = msg_bits.copy()
    for _ in range(data_bits):
        if bch_bits[0]:
            bch_bits[:len(generator)] = np.logical_xor(bch_bits[:len(generator)], generator)
        bch_bits = np.delete(bch_bits, 0)
    msg_bits[data_bits:] = bch_bits
    format_bits = np.logical_xor(msg_bits, dec2bin(mask, len(msg_bits)))
    format_bits.flags.writeable = False
    return format_bits


NORMAL_FORMAT_STRINGS = MappingProxyType({
    (ecc, mask): bch_encode(bits << 3 | mask, 5, FORMAT_GENERATOR, NORMAL_FORMAT_MASK)
    for ecc, bits in NORMAL_ECC_BITS.items()
    for mask in range(8)
})

MICRO_FORMAT_STRINGS = MappingProxyType({
    (version, ecc, mask): bch_encode(number << 2 | mask, 5, FORMAT_GENERATOR, MICRO_FORMAT_MASK)
    for (version, ecc), number in MICRO_SYMBOL_NUMBERS.items()
    for mask in range(4)
})

VERSION_STRINGS = MappingProxyType({
    version: bch_encode(version, 6, VERSION_GENERATOR)
    for version in range(7, 41)
})


def format_string(symbol, version, ecc, mask):
    if symbol is SymbolType.NORMAL:
        key = (ecc, mask)
        strings = NORMAL_FORMAT_STRINGS
    else:
        key = (version, ecc, mask)
        strings = MICRO_FORMAT_STRINGS
    if key not in strings:
        raise UnsupportedVersionError(f"no format information for {symbol.value} {key}")
    return strings[key]


#%% Data masks

class MaskCandidate(NamedTuple):
    id: int
    micro_id: Optional[int]


MASKS = (
    MaskCandidate(0, None),
    MaskCandidate(1, 0),
    MaskCandidate(2, None),
    MaskCandidate(3, None),
    MaskCandidate(4, 1),
    MaskCandidate(5, None),
    MaskCandidate(6, 2),
    MaskCandidate(7, 3),
)


def mask_candidates(symbol):
    if symbol is SymbolType.MICRO:
        return tuple(m for m in MASKS if m.micro_id is not None)
    return MASKS


def check_tables():
    """Every selectable (symbol, version, level) has capacity and block rows that agree."""
    for symbol in SymbolType:
        for version in (range(1, 5) if symbol is SymbolType.MICRO else range(1, 41)):
            for ecc in error_correction_levels(symbol, version):
                data_words = sum(g.blocks * g.data_words for g in block_groups(symbol, version, ecc))
                if data_words != capacity(symbol, version, ecc).data_words:
                    raise RuntimeError(f"inconsistent tables for {symbol.value} {version}-{ecc.name}")


check_tables()
