"""Presentation of finished symbols. Nothing here changes the encoded grid."""

import logging

import numpy as np
from matplotlib import image

from . import settings

logger = logging.getLogger(__name__)


def quiet_zone_width(symbol):
    return 2 if symbol.parameters.is_micro else 4


def with_quiet_zone(symbol):
    margin = quiet_zone_width(symbol)
    size = symbol.dimension + 2 * margin
    qz = np.zeros((size, size), dtype=np.bool_)
    qz[margin:margin + symbol.dimension, margin:margin + symbol.dimension] = symbol.modules
    return qz


def to_array(symbol, module_size=None, quiet_zone=None):
    """Pixel array, 1.0 for dark, each module `module_size` pixels wide."""
    if module_size is None:
        module_size = settings.get_module_size()
    if quiet_zone is None:
        quiet_zone = settings.get_quiet_zone()
    if module_size < 1:
        raise ValueError(f"module size must be positive, got {module_size}")

    raster = with_quiet_zone(symbol) if quiet_zone else symbol.modules
    return np.kron(raster.astype(np.float64), np.ones((module_size, module_size)))


def save(symbol, path, module_size=None, quiet_zone=None):
    pixel = to_array(symbol, module_size, quiet_zone)
    image.imsave(path, pixel, cmap="Greys", vmin=0.0, vmax=1.0)
    logger.info("wrote %s to %s", symbol.description, path)
    return path


def to_text(symbol, quiet_zone=None, dark="██", light="  "):
    if quiet_zone is None:
        quiet_zone = settings.get_quiet_zone()
    raster = with_quiet_zone(symbol) if quiet_zone else symbol.modules
    return "\n".join("".join(dark if cell else light for cell in row) for row in raster)
