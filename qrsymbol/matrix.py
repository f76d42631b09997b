import numpy as np

from . import tables
from .errors import CapacityExceededError
from .masking import mask_pattern

FINDER = np.ones([7, 7], dtype=np.bool_)
FINDER[1:-1, 1:-1] = np.zeros([5, 5], dtype=np.bool_)
FINDER[2:-2, 2:-2] = np.ones([3, 3], dtype=np.bool_)
FINDER.flags.writeable = False

ALIGNMENT = np.ones([5, 5], dtype=np.bool_)
ALIGNMENT[1:-1, 1:-1] = np.zeros([3, 3], dtype=np.bool_)
ALIGNMENT[2, 2] = True
ALIGNMENT.flags.writeable = False


class ModuleGrid:
    """Module states plus the co-indexed reservation grid, both indexed [row, col].

    Reserved cells hold function patterns and format/version areas; only
    free cells receive data bits and mask toggles.
    """

    def __init__(self, params):
        self.params = params
        self.dimension = params.dimension
        self.modules = np.zeros((self.dimension, self.dimension), dtype=np.bool_)
        self.reserved = np.zeros((self.dimension, self.dimension), dtype=np.bool_)

    @property
    def free(self):
        return ~self.reserved

    def draw(self, rows, cols, value):
        self.modules[rows, cols] = value
        self.reserved[rows, cols] = True

    def draw_finder(self, top, left):
        self.draw(slice(top, top + 7), slice(left, left + 7), FINDER)

    def draw_alignment(self, row, col):
        self.draw(slice(row - 2, row + 3), slice(col - 2, col + 3), ALIGNMENT)

    def draw_timing_row(self, row, start, stop):
        cols = np.arange(start, stop)
        self.draw(row, cols, cols % 2 == 0)

    def draw_timing_col(self, col, start, stop):
        rows = np.arange(start, stop)
        self.draw(rows, col, rows % 2 == 0)

    #%% Reserve phase

    def alignment_centres(self):
        if self.params.is_micro:
            return []
        dim = self.dimension
        locations = tables.alignment_locations(self.params.version)
        centres = []
        for row in locations:
            for col in locations:
                # skip the ones overlapping a finder pattern
                if row < 10 and col < 10:
                    continue
                if row < 10 and col > dim - 10:
                    continue
                if row > dim - 10 and col < 10:
                    continue
                centres.append((row, col))
        return centres

    def reserve(self):
        dim = self.dimension

        for row, col in self.alignment_centres():
            self.draw_alignment(row, col)

        self.draw_finder(0, 0)
        self.draw(7, slice(0, 8), False)
        self.draw(slice(0, 7), 7, False)

        if self.params.is_micro:
            # format area
            self.draw(8, slice(1, 9), False)
            self.draw(slice(1, 8), 8, False)

            self.draw_timing_row(0, 8, dim)
            self.draw_timing_col(0, 8, dim)
        else:
            self.draw(8, slice(0, 9), False)
            self.draw(slice(0, 8), 8, False)

            self.draw_finder(0, dim - 7)
            self.draw(7, slice(dim - 8, dim), False)
            self.draw(slice(0, 7), dim - 8, False)
            self.draw(8, slice(dim - 8, dim), False)

            self.draw_finder(dim - 7, 0)
            self.draw(dim - 8, slice(0, 8), False)
            self.draw(slice(dim - 7, dim), 7, False)
            self.draw(slice(dim - 7, dim), 8, False)
            # dark module
            self.draw(dim - 8, 8, True)

            self.draw_timing_row(6, 8, dim - 8)
            self.draw_timing_col(6, 8, dim - 8)

            if self.params.version >= 7:
                self.draw(slice(dim - 11, dim - 8), slice(0, 6), False)
                self.draw(slice(0, 6), slice(dim - 11, dim - 8), False)
        return self

    #%% Fill phase

    def placement_order(self):
        """Free cells in zig-zag order: column pairs right to left, alternating up and down."""
        dim = self.dimension
        micro = self.params.is_micro
        min_index = 1 if micro else 0
        timing = 0 if micro else 6

        order = []
        up = True
        col = dim - 1
        while col >= min_index:
            if col == timing:
                col -= 1
            rows = range(dim - 1, min_index - 1, -1) if up else range(min_index, dim)
            for row in rows:
                for c in (col, col - 1):
                    if not self.reserved[row, c]:
                        order.append((row, c))
            up = not up
            col -= 2
        return order

    def fill(self, bits):
        order = self.placement_order()
        if len(bits) > len(order):
            raise CapacityExceededError(f"{len(bits)} bits do not fit {len(order)} free modules")
        values = np.zeros(len(order), dtype=np.bool_)
        values[:len(bits)] = bits
        rows, cols = zip(*order)
        # cells past the end of the bit sequence stay light
        self.modules[list(rows), list(cols)] = values
        return self

    #%% Masking

    def apply_mask(self, mask_id):
        # XOR is its own inverse: applying twice restores the grid
        self.modules ^= mask_pattern(mask_id, self.dimension) & self.free
        return self
