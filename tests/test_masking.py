from __future__ import annotations

import numpy as np
import pytest

from qrsymbol import masking, tables
from qrsymbol.bitstream import encode_payload
from qrsymbol.ecc import add_error_correction
from qrsymbol.matrix import ModuleGrid
from qrsymbol.model import ErrorCorrection, Mode, SymbolParameters, SymbolType


def _filled_grid(params, payload):
    bits = add_error_correction(params, encode_payload(params, payload, payload.encode()))
    return ModuleGrid(params).reserve().fill(bits)


NORMAL_1M = SymbolParameters(SymbolType.NORMAL, 1, ErrorCorrection.M, Mode.ALPHANUMERIC)
MICRO_M2L = SymbolParameters(SymbolType.MICRO, 2, ErrorCorrection.L, Mode.ALPHANUMERIC)


def test_mask_patterns() -> None:
    assert masking.mask_pattern(0, 3).tolist() == [[True, False, True], [False, True, False], [True, False, True]]
    assert masking.mask_pattern(1, 2).tolist() == [[True, True], [False, False]]
    assert masking.mask_pattern(2, 4)[0].tolist() == [True, False, False, True]
    with pytest.raises(ValueError):
        masking.mask_condition(8, 0, 0)


def test_mask_conditions_at_origin() -> None:
    # every pattern inverts the top-left module
    for mask_id in range(8):
        assert masking.mask_condition(mask_id, 0, 0)


@pytest.mark.parametrize("mask_id", range(8))
def test_apply_mask_twice_restores_grid(mask_id) -> None:
    grid = _filled_grid(NORMAL_1M, "HELLO WORLD")
    before = grid.modules.copy()
    grid.apply_mask(mask_id)
    assert np.array_equal(grid.modules[grid.reserved], before[grid.reserved])
    grid.apply_mask(mask_id)
    assert np.array_equal(grid.modules, before)


def test_penalty_runs() -> None:
    assert masking.penalty_runs(np.ones((7, 7), dtype=np.bool_)) == 70
    line = np.array([[1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 1]], dtype=np.bool_)
    # one run of six light modules in the row, columns are single modules
    assert masking.penalty_runs(line) == 4


def test_penalty_blocks() -> None:
    assert masking.penalty_blocks(np.ones((3, 3), dtype=np.bool_)) == 12
    assert masking.penalty_blocks(masking.mask_pattern(0, 5)) == 0


def test_penalty_finder_like() -> None:
    modules = np.zeros((11, 11), dtype=np.bool_)
    modules[5] = masking.FINDER_LIKE[0]
    assert masking.penalty_finder_like(modules) == 40
    modules[:, 8] = masking.FINDER_LIKE[1]
    assert masking.penalty_finder_like(modules) == 80
    assert masking.penalty_finder_like(np.zeros((10, 10), dtype=np.bool_)) == 0


def test_penalty_finder_like_checks_last_window() -> None:
    modules = np.zeros((12, 12), dtype=np.bool_)
    modules[0, 1:] = masking.FINDER_LIKE[1]
    assert masking.penalty_finder_like(modules) == 40


def test_penalty_balance() -> None:
    assert masking.penalty_balance(np.ones((4, 4), dtype=np.bool_)) == 100
    assert masking.penalty_balance(np.array([[1, 0], [0, 1]], dtype=np.bool_)) == 0
    modules = np.zeros(100, dtype=np.bool_)
    modules[:58] = True
    # 58% lies between 55% and 60%, the nearer multiple scores
    assert masking.penalty_balance(modules.reshape(10, 10)) == 10


def test_micro_score_excludes_timing_modules() -> None:
    modules = np.zeros((11, 11), dtype=np.bool_)
    modules[:, -1] = True
    modules[-1, 0:4] = True
    # right edge 10 dark, bottom edge 4 dark (cols 1-3 and the corner)
    assert masking.evaluate_micro(modules) == 4 * 16 + 10


def test_evaluate_leaves_grid_unchanged() -> None:
    grid = _filled_grid(NORMAL_1M, "HELLO WORLD")
    before = grid.modules.copy()
    for candidate in tables.MASKS:
        masking.evaluate(grid, candidate)
    assert np.array_equal(grid.modules, before)


def test_normal_selection_picks_lowest_penalty() -> None:
    grid = _filled_grid(NORMAL_1M, "HELLO WORLD")
    scores = [masking.evaluate(grid, candidate) for candidate in tables.MASKS]
    unmasked = grid.modules.copy()
    winner = masking.select_mask(grid)
    assert winner.id == scores.index(min(scores))
    assert np.array_equal(grid.modules, unmasked ^ (masking.mask_pattern(winner.id, 21) & grid.free))


def test_micro_selection_picks_highest_score() -> None:
    grid = _filled_grid(MICRO_M2L, "AB12")
    candidates = tables.mask_candidates(SymbolType.MICRO)
    scores = [masking.evaluate(grid, candidate) for candidate in candidates]
    winner = masking.select_mask(grid)
    assert winner == candidates[scores.index(max(scores))]
    assert winner.micro_id in (0, 1, 2, 3)


def test_selection_is_deterministic() -> None:
    winners = {masking.select_mask(_filled_grid(NORMAL_1M, "HELLO WORLD")).id for _ in range(3)}
    assert len(winners) == 1
