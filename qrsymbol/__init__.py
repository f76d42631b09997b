from .errors import (
    CapacityExceededError,
    CharacterCountOutOfRangeError,
    InvalidModeError,
    QRError,
    UnsupportedVersionError,
)
from .model import ErrorCorrection, Mode, Module, SymbolParameters, SymbolType
from .symbol import EncodedSymbol, build_symbol, encode

__all__ = [
    "CapacityExceededError",
    "CharacterCountOutOfRangeError",
    "EncodedSymbol",
    "ErrorCorrection",
    "InvalidModeError",
    "Mode",
    "Module",
    "QRError",
    "SymbolParameters",
    "SymbolType",
    "UnsupportedVersionError",
    "build_symbol",
    "encode",
]
