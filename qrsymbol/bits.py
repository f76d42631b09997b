import numpy as np


def dec2bin(n, width):
    """MSB-first bits of `n`, `width` long."""
    res = np.zeros(width, dtype=np.bool_)
    for i in range(width):
        res[width - 1 - i] = (n >> i) & 1
    return res


def bin2dec(bits):
    res = 0
    for bit in bits:
        res = (res << 1) | int(bool(bit))
    return res


def to_bit_string(bits):
    chars = "".join("1" if bit else "0" for bit in bits)
    return " ".join(chars[i:i + 8] for i in range(0, len(chars), 8))


class BitSequence:
    """Appendable bit buffer, MSB first within every appended field."""

    def __init__(self):
        self._chunks = []
        self._length = 0

    def __len__(self):
        return self._length

    def __str__(self):
        return to_bit_string(self.to_array())

    def append(self, value, width):
        if width:
            self.extend(dec2bin(value, width))

    def extend(self, bits):
        chunk = np.asarray(bits, dtype=np.bool_)
        if chunk.size:
            self._chunks.append(chunk)
            self._length += chunk.size

    def zeros(self, count):
        if count > 0:
            self.extend(np.zeros(count, dtype=np.bool_))

    def to_array(self):
        if not self._chunks:
            return np.zeros(0, dtype=np.bool_)
        return np.concatenate(self._chunks)

    def to_bytes(self):
        # a trailing partial byte is padded with zero bits
        return np.packbits(self.to_array())
