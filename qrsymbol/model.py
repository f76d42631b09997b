from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NamedTuple

from .errors import InvalidModeError, UnsupportedVersionError


class SymbolType(Enum):
    MICRO = "micro"
    NORMAL = "normal"


class ErrorCorrection(IntEnum):
    NONE = 0
    L = 1
    M = 2
    Q = 3
    H = 4

    @property
    def description(self) -> str:
        return _ECC_DESCRIPTIONS[self]


_ECC_DESCRIPTIONS = {
    ErrorCorrection.NONE: "Error-Detection Only",
    ErrorCorrection.L: "L (7%)",
    ErrorCorrection.M: "M (15%)",
    ErrorCorrection.Q: "Q (25%)",
    ErrorCorrection.H: "H (30%)",
}


class Mode(Enum):
    ECI = "eci"
    NUMERIC = "numeric"
    ALPHANUMERIC = "alphanumeric"
    BYTE = "byte"
    KANJI = "kanji"
    STRUCTURED_APPEND = "structured_append"
    FNC1_FIRST = "fnc1_first"
    FNC1_SECOND = "fnc1_second"
    TERMINATOR = "terminator"


class Module(IntEnum):
    LIGHT = 0
    DARK = 1


VERSIONS = {
    SymbolType.MICRO: range(1, 5),
    SymbolType.NORMAL: range(1, 41),
}

# tightest first
DATA_MODES = (Mode.NUMERIC, Mode.ALPHANUMERIC, Mode.BYTE, Mode.KANJI)

_NORMAL_LEVELS = (ErrorCorrection.L, ErrorCorrection.M, ErrorCorrection.Q, ErrorCorrection.H)
_MICRO_LEVELS = {
    1: (ErrorCorrection.NONE,),
    2: (ErrorCorrection.L, ErrorCorrection.M),
    3: (ErrorCorrection.L, ErrorCorrection.M),
    4: (ErrorCorrection.L, ErrorCorrection.M, ErrorCorrection.Q),
}
_MICRO_MODES = {
    1: (Mode.NUMERIC,),
    2: (Mode.NUMERIC, Mode.ALPHANUMERIC),
    3: DATA_MODES,
    4: DATA_MODES,
}


def check_version(symbol: SymbolType, version: int) -> None:
    if version not in VERSIONS[symbol]:
        raise UnsupportedVersionError(
            f"{symbol.value} symbols have versions {VERSIONS[symbol][0]}-{VERSIONS[symbol][-1]}, got {version}"
        )


def error_correction_levels(symbol: SymbolType, version: int) -> tuple[ErrorCorrection, ...]:
    check_version(symbol, version)
    if symbol is SymbolType.MICRO:
        return _MICRO_LEVELS[version]
    return _NORMAL_LEVELS


def data_modes(symbol: SymbolType, version: int) -> tuple[Mode, ...]:
    check_version(symbol, version)
    if symbol is SymbolType.MICRO:
        return _MICRO_MODES[version]
    return DATA_MODES


class Capacity(NamedTuple):
    data_words: int
    numeric: int
    alphanumeric: int
    byte: int
    kanji: int

    def for_mode(self, mode: Mode) -> int:
        if mode is Mode.NUMERIC:
            return self.numeric
        if mode is Mode.ALPHANUMERIC:
            return self.alphanumeric
        if mode is Mode.BYTE:
            return self.byte
        if mode is Mode.KANJI:
            return self.kanji
        raise InvalidModeError(f"{mode.value} mode carries no payload")


class CodewordBlockGroup(NamedTuple):
    blocks: int
    total_words: int
    data_words: int

    @property
    def error_words(self) -> int:
        return self.total_words - self.data_words


@dataclass(frozen=True)
class SymbolParameters:
    symbol: SymbolType
    version: int
    error_correction: ErrorCorrection
    mode: Mode

    def __post_init__(self) -> None:
        if self.error_correction not in error_correction_levels(self.symbol, self.version):
            raise UnsupportedVersionError(
                f"{self.description} is not a valid symbol: unsupported error correction level"
            )
        if self.mode not in data_modes(self.symbol, self.version):
            raise InvalidModeError(f"{self.mode.value} mode is not available in {self.description}")

    @property
    def is_micro(self) -> bool:
        return self.symbol is SymbolType.MICRO

    @property
    def dimension(self) -> int:
        if self.is_micro:
            return 9 + 2 * self.version
        return 17 + 4 * self.version

    @property
    def nibble_short(self) -> bool:
        """M1 and M3 end on a 4-bit data codeword."""
        return self.is_micro and self.version in (1, 3)

    @property
    def description(self) -> str:
        if self.is_micro:
            if self.version == 1:
                return "QR M1"
            return f"QR M{self.version}-{self.error_correction.name}"
        return f"QR {self.version}-{self.error_correction.name}"
