"""GF(256) arithmetic for the Reed-Solomon error correction words.

The exponent table (alpha^n for n = 0..254, primitive polynomial 0x11d)
ships as ``data/logtable.csv`` and is loaded once at import. Everything
here is read-only afterwards.
"""

import os

import numpy as np
import pandas as pd

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")

MAX_ERROR_WORDS = 30


def _load_exponents():
    logtable = pd.read_csv(os.path.join(DATA_DIR, "logtable.csv"), sep=";")
    exp = logtable.sort_values("alpha")["dec"].to_numpy(dtype=np.int64)
    if exp.shape != (255,) or sorted(exp) != list(range(1, 256)):
        raise RuntimeError("logtable.csv is not a GF(256) exponent table")
    return exp


EXP = _load_exponents()
LOG = np.zeros(256, dtype=np.int64)
LOG[EXP] = np.arange(255)
EXP.flags.writeable = False
LOG.flags.writeable = False


def alpha2dec(n):
    return int(EXP[n % 255])


def dec2alpha(n):
    if n == 0:
        raise ValueError("0 has no logarithm in GF(256)")
    return int(LOG[n])


def multiply(a, b):
    if a == 0 or b == 0:
        return 0
    return int(EXP[(LOG[a] + LOG[b]) % 255])


def _generator(degree):
    # product of (x - alpha^i) for i < degree, coefficients highest power first
    poly = [1]
    for i in range(degree):
        root = alpha2dec(i)
        nxt = poly + [0]
        for j, coef in enumerate(poly):
            nxt[j + 1] ^= multiply(coef, root)
        poly = nxt
    exponents = np.array([dec2alpha(coef) for coef in poly], dtype=np.int64)
    exponents.flags.writeable = False
    return exponents


# exponent notation, e.g. degree 2 -> [0, 25, 1]
GENERATOR_POLYNOMIALS = tuple(_generator(n) for n in range(MAX_ERROR_WORDS + 1))
