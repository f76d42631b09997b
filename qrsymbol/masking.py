"""Data mask patterns and the penalty scoring used to choose between them."""

import logging

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from . import tables

logger = logging.getLogger(__name__)

FINDER_LIKE = (
    np.array([1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0], dtype=np.bool_),
    np.array([0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 1], dtype=np.bool_),
)


def mask_condition(mask_id, i, j):
    """True where mask `mask_id` inverts the module at row i, column j (scalars or arrays)."""
    if mask_id == 0:
        return (i + j) % 2 == 0
    if mask_id == 1:
        return i % 2 == 0
    if mask_id == 2:
        return j % 3 == 0
    if mask_id == 3:
        return (i + j) % 3 == 0
    if mask_id == 4:
        return ((i // 2) + (j // 3)) % 2 == 0
    if mask_id == 5:
        return (i * j) % 2 + (i * j) % 3 == 0
    if mask_id == 6:
        return ((i * j) % 2 + (i * j) % 3) % 2 == 0
    if mask_id == 7:
        return ((i + j) % 2 + (i * j) % 3) % 2 == 0
    raise ValueError(f"no data mask {mask_id}")


def mask_pattern(mask_id, dimension):
    i, j = np.indices((dimension, dimension))
    return mask_condition(mask_id, i, j)


#%% Normal symbol penalties

def _run_lengths(line):
    edges = np.flatnonzero(line[1:] != line[:-1]) + 1
    return np.diff(np.concatenate(([0], edges, [len(line)])))


def penalty_runs(modules):
    """N1: runs of five or more same-coloured modules in a row or column score run length - 2."""
    penalty = 0
    for lines in (modules, modules.T):
        for line in lines:
            runs = _run_lengths(line)
            penalty += int(np.sum(runs[runs >= 5] - 2))
    return penalty


def penalty_blocks(modules):
    """N2: 3 for every 2x2 block of one colour."""
    corner = modules[:-1, :-1]
    same = (corner == modules[1:, :-1]) & (corner == modules[:-1, 1:]) & (corner == modules[1:, 1:])
    return 3 * int(np.count_nonzero(same))


def penalty_finder_like(modules):
    """N3: 40 for every 1:1:3:1:1 pattern with four light modules on one side."""
    if modules.shape[0] < 11:
        return 0
    count = 0
    for lines in (modules, modules.T):
        windows = sliding_window_view(lines, 11, axis=1)
        for pattern in FINDER_LIKE:
            count += int(np.count_nonzero(np.all(windows == pattern, axis=-1)))
    return 40 * count


def penalty_balance(modules):
    """N4: 10 for every full 5% the dark share deviates from 50%."""
    percent = int(np.count_nonzero(modules)) * 100 // modules.size
    down = percent - percent % 5
    up = down if percent % 5 == 0 else down + 5
    return min(abs(up - 50), abs(down - 50)) // 5 * 10


def evaluate_normal(modules):
    return (
        penalty_runs(modules)
        + penalty_blocks(modules)
        + penalty_finder_like(modules)
        + penalty_balance(modules)
    )


def evaluate_micro(modules):
    """Dark modules along the right and bottom edges, timing modules excluded; higher is better."""
    sum1 = int(np.count_nonzero(modules[1:, -1]))
    sum2 = int(np.count_nonzero(modules[-1, 1:]))
    return min(sum1, sum2) * 16 + max(sum1, sum2)


#%% Selection

def evaluate(grid, candidate):
    grid.apply_mask(candidate.id)
    try:
        if grid.params.is_micro:
            return evaluate_micro(grid.modules)
        return evaluate_normal(grid.modules)
    finally:
        grid.apply_mask(candidate.id)


def select_mask(grid):
    """Apply the best mask to `grid`; returns the winning MaskCandidate."""
    candidates = tables.mask_candidates(grid.params.symbol)
    scores = np.array([evaluate(grid, candidate) for candidate in candidates])

    if grid.params.is_micro:
        best_i = int(np.argmax(scores))
    else:
        best_i = int(np.argmin(scores))
    winner = candidates[best_i]
    logger.debug("%s mask scores %s, chose mask %d", grid.params.description, scores.tolist(), winner.id)

    grid.apply_mask(winner.id)
    return winner
