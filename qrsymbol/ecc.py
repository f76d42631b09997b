import logging

import numpy as np

from . import tables
from .galois import EXP, GENERATOR_POLYNOMIALS, LOG

logger = logging.getLogger(__name__)


def remainder(data_words, error_words):
    """Reed-Solomon error words: data block times x^n, divided by the degree-n generator."""
    g = GENERATOR_POLYNOMIALS[error_words]
    mc = np.zeros(len(data_words) + error_words, dtype=np.int64)
    mc[:len(data_words)] = data_words
    for start in range(len(data_words)):
        if mc[start] != 0:
            first = LOG[mc[start]]
            mc[start:start + len(g)] ^= EXP[(g + first) % 255]
    return mc[len(data_words):].astype(np.uint8)


def interleave(blocks):
    """Round-robin over the blocks; shorter blocks drop out once exhausted."""
    sequence = []
    for i in range(max(len(block) for block in blocks)):
        for block in blocks:
            if i < len(block):
                sequence.append(block[i])
    return sequence


def split_blocks(params, codewords):
    data_blocks = []
    error_blocks = []
    index = 0
    for group in tables.block_groups(params.symbol, params.version, params.error_correction):
        for _ in range(group.blocks):
            block = codewords[index:index + group.data_words]
            index += group.data_words
            data_blocks.append(block)
            error_blocks.append(remainder(block, group.error_words))
    return data_blocks, error_blocks


def add_error_correction(params, bitstream):
    """Final bit sequence to place: interleaved data words, then interleaved error words."""
    codewords = bitstream.to_bytes()
    data_blocks, error_blocks = split_blocks(params, codewords)
    logger.debug(
        "%s: %d data blocks of %s words, %d error words each",
        params.description,
        len(data_blocks),
        sorted({len(b) for b in data_blocks}),
        len(error_blocks[0]),
    )

    sequence = np.array(interleave(data_blocks) + interleave(error_blocks), dtype=np.uint8)
    bits = np.unpackbits(sequence).astype(np.bool_)

    if params.nibble_short:
        # only the high nibble of the last data word is placed
        data_bits = len(codewords) * 8
        bits = np.delete(bits, np.s_[data_bits - 4:data_bits])
    return bits
