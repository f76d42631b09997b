import logging

from . import tables
from .bits import BitSequence
from .errors import CapacityExceededError, CharacterCountOutOfRangeError, InvalidModeError
from .model import Mode

logger = logging.getLogger(__name__)


def data_capacity_bits(params):
    capacity = tables.capacity(params.symbol, params.version, params.error_correction).data_words * 8
    if params.nibble_short:
        capacity -= 4
    return capacity


def encode_mode(bits, params, mode):
    value, width = tables.mode_indicator(params.symbol, params.version, mode)
    bits.append(value, width)


def encode_character_count(bits, params, count):
    width = tables.character_count_bits(params.symbol, params.version, params.mode)
    max_count = (1 << width) - 1
    if not 1 <= count <= max_count:
        raise CharacterCountOutOfRangeError(
            f"{params.description} character counts must be in the range 1 <= n <= {max_count}, got {count}"
        )
    bits.append(count, width)


def encode_numeric(bits, text):
    full = len(text) - len(text) % 3
    for i in range(0, full, 3):
        bits.append(int(text[i:i + 3]), 10)
    rest = text[full:]
    if len(rest) == 2:
        bits.append(int(rest), 7)
    elif len(rest) == 1:
        bits.append(int(rest), 4)


def encode_alphanumeric(bits, text):
    values = [tables.ALPHANUMERIC[c] for c in text]
    for i in range(0, len(values) - 1, 2):
        bits.append(values[i] * 45 + values[i + 1], 11)
    if len(values) % 2:
        bits.append(values[-1], 6)


def encode_bytes(bits, data):
    for byte in data:
        bits.append(byte, 8)


def encode_payload(params, text, data):
    """Mode indicator, count, payload, terminator and padding, exactly filling the data capacity."""
    bits = BitSequence()
    mode = params.mode

    if mode is Mode.NUMERIC and not set(text) <= tables.DIGITS:
        raise InvalidModeError("numeric mode only encodes the digits 0-9")
    if mode is Mode.ALPHANUMERIC and not set(text) <= set(tables.ALPHANUMERIC_CHARSET):
        raise InvalidModeError(f"alphanumeric mode only encodes {tables.ALPHANUMERIC_CHARSET!r}")

    encode_mode(bits, params, mode)
    if mode is Mode.NUMERIC:
        encode_character_count(bits, params, len(text))
        encode_numeric(bits, text)
    elif mode is Mode.ALPHANUMERIC:
        encode_character_count(bits, params, len(text))
        encode_alphanumeric(bits, text)
    elif mode is Mode.BYTE:
        encode_character_count(bits, params, len(data))
        encode_bytes(bits, data)
    else:
        raise InvalidModeError(f"{mode.value} payloads cannot be encoded")

    capacity = data_capacity_bits(params)
    if len(bits) > capacity:
        raise CapacityExceededError(f"{len(bits)} bits exceed the {capacity} bit capacity of {params.description}")

    # terminator, truncated when the symbol is nearly full
    _, width = tables.mode_indicator(params.symbol, params.version, Mode.TERMINATOR)
    bits.zeros(min(width, capacity - len(bits)))

    if len(bits) < capacity and len(bits) % 8:
        bits.zeros(min(8 - len(bits) % 8, capacity - len(bits)))

    toggle = 0
    while len(bits) < capacity - 4:
        bits.append(tables.PAD_CODEWORDS[toggle], 8)
        toggle ^= 1

    # M1 and M3 end on a 4-bit codeword
    bits.zeros(capacity - len(bits))

    logger.debug("%s bitstream (%d bits): %s", params.description, len(bits), bits)
    return bits
