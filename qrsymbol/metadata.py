import numpy as np

from . import tables

TOP_LEFT_ROWS = [0, 1, 2, 3, 4, 5, 7, 8]
TOP_LEFT_COLS = [7, 5, 4, 3, 2, 1, 0]


def add_format_information(grid, mask_id):
    params = grid.params
    dim = grid.dimension
    format_bits = tables.format_string(params.symbol, params.version, params.error_correction, mask_id)

    if params.is_micro:
        grid.modules[8, 1:9] = format_bits[0:8]
        grid.modules[1:8, 8] = np.flip(format_bits[8:15])
        return

    # around the top-left finder pattern, skipping the timing lines
    grid.modules[TOP_LEFT_ROWS, 8] = format_bits[14:6:-1]
    grid.modules[8, TOP_LEFT_COLS] = format_bits[6::-1]
    # copies next to the top-right and bottom-left finder patterns
    grid.modules[8, dim - 8:] = format_bits[7:15]
    grid.modules[dim - 7:, 8] = format_bits[6::-1]


def add_version_information(grid):
    params = grid.params
    if params.is_micro or params.version < 7:
        return
    dim = grid.dimension
    # least significant bit first, three per row of the top-right block
    block = np.flip(tables.VERSION_STRINGS[params.version]).reshape(6, 3)
    grid.modules[0:6, dim - 11:dim - 8] = block
    grid.modules[dim - 11:dim - 8, 0:6] = block.T
