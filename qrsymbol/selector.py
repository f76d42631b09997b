import logging

from . import tables
from .errors import CapacityExceededError
from .model import (
    ErrorCorrection,
    Mode,
    SymbolParameters,
    SymbolType,
    VERSIONS,
    data_modes,
    error_correction_levels,
)

logger = logging.getLogger(__name__)


def split_payload(payload):
    """(text, data) views of a payload.

    Text is scanned for the Numeric/AlphaNumeric sets, data is what Byte mode
    writes: the raw bytes, or the UTF-8 encoding of text.
    """
    if isinstance(payload, (bytes, bytearray, memoryview)):
        data = bytes(payload)
        return data.decode("latin-1"), data
    return payload, payload.encode("utf-8")


def tightest_mode(text):
    if all(c in tables.DIGITS for c in text):
        return Mode.NUMERIC
    if all(c in tables.ALPHANUMERIC for c in text):
        return Mode.ALPHANUMERIC
    return Mode.BYTE


def payload_length(mode, text, data):
    """Character count in the unit `mode` counts: bytes for Byte, characters otherwise."""
    if mode is Mode.BYTE:
        return len(data)
    return len(text)


def candidate_symbols(allow_micro):
    # ascending size
    if allow_micro:
        for version in VERSIONS[SymbolType.MICRO]:
            yield SymbolType.MICRO, version
    for version in VERSIONS[SymbolType.NORMAL]:
        yield SymbolType.NORMAL, version


def choose_parameters(payload, min_error_correction=ErrorCorrection.M, allow_micro=False):
    text, data = split_payload(payload)
    mode = tightest_mode(text)
    length = payload_length(mode, text, data)

    for symbol, version in candidate_symbols(allow_micro):
        if mode not in data_modes(symbol, version):
            continue
        # strongest level first, never below the requested minimum
        for ecc in reversed(error_correction_levels(symbol, version)):
            if ecc < min_error_correction:
                continue
            if tables.capacity(symbol, version, ecc).for_mode(mode) >= length:
                params = SymbolParameters(symbol, version, ecc, mode)
                logger.debug(
                    "selected %s mode=%s for %d %s",
                    params.description,
                    mode.value,
                    length,
                    "bytes" if mode is Mode.BYTE else "characters",
                )
                return params

    raise CapacityExceededError(
        f"{length} {mode.value} characters do not fit any symbol at error correction "
        f"{min_error_correction.name} or better"
    )
