from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from . import settings
from .bitstream import encode_payload
from .ecc import add_error_correction
from .masking import select_mask
from .matrix import ModuleGrid
from .metadata import add_format_information, add_version_information
from .model import ErrorCorrection, Mode, Module, SymbolParameters, SymbolType
from .selector import choose_parameters, split_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class EncodedSymbol:
    """A finished QR symbol: chosen parameters plus the read-only module grid."""

    parameters: SymbolParameters
    mask: int
    modules: np.ndarray

    @property
    def symbol_type(self) -> SymbolType:
        return self.parameters.symbol

    @property
    def version(self) -> int:
        return self.parameters.version

    @property
    def error_correction(self) -> ErrorCorrection:
        return self.parameters.error_correction

    @property
    def mode(self) -> Mode:
        return self.parameters.mode

    @property
    def description(self) -> str:
        return self.parameters.description

    @property
    def dimension(self) -> int:
        return self.modules.shape[0]

    def is_dark(self, row: int, col: int) -> bool:
        return bool(self.modules[row, col])

    def module(self, row: int, col: int) -> Module:
        return Module.DARK if self.modules[row, col] else Module.LIGHT

    def __str__(self) -> str:
        return self.description


def build_symbol(params: SymbolParameters, payload: str | bytes) -> EncodedSymbol:
    """Run the pipeline for already chosen parameters."""
    text, data = split_payload(payload)
    bitstream = encode_payload(params, text, data)
    bits = add_error_correction(params, bitstream)

    grid = ModuleGrid(params).reserve()
    grid.fill(bits)
    winner = select_mask(grid)
    mask_id = winner.micro_id if params.is_micro else winner.id
    add_format_information(grid, mask_id)
    add_version_information(grid)

    modules = grid.modules.copy()
    modules.flags.writeable = False
    return EncodedSymbol(params, mask_id, modules)


def encode(
    payload: str | bytes,
    min_error_correction: ErrorCorrection | None = None,
    allow_micro: bool | None = None,
) -> EncodedSymbol:
    """Encode `payload` into the smallest symbol with at least `min_error_correction`.

    `None` arguments fall back to QRSYMBOL_ERROR_CORRECTION and
    QRSYMBOL_ALLOW_MICRO.
    """
    if min_error_correction is None:
        min_error_correction = settings.get_error_correction()
    if allow_micro is None:
        allow_micro = settings.get_allow_micro()

    params = choose_parameters(payload, min_error_correction, allow_micro)
    symbol = build_symbol(params, payload)
    logger.info("encoded %s (%s, mask %d)", symbol.description, params.mode.value, symbol.mask)
    return symbol
