"""
Stage 5 — Per-Column Shift Solver (chi-squared fit)
===================================================
With the key length fixed, each column is a Caesar cipher. For every
rotation s of the English expectation the column is scored

    χ²(s) = Σ_i (observed[i] − expected[(i+s) mod 26])² / expected[(i+s) mod 26]

and the smallest χ² wins (first minimum, so ties go to the smaller s).
Zero-expectation slots are skipped rather than treated as infinite.

The winning rotation maps ciphertext letters back onto English, which is
the inverse of what the key letter did: keyChar = (26 − s) mod 26.
"""

import numpy as np

from ..frequency import ALPHABET, ENGLISH, FrequencyModel, letter_counts
from .stage1_normalize import normalize
from .stage3_ioc import column_groups


def chi_squared(observed: np.ndarray, expected: np.ndarray) -> float:
    mask = expected > 0
    diff = observed[mask] - expected[mask]
    return float(np.sum(diff * diff / expected[mask]))


class ShiftSolver:
    """Recover one key letter per column by chi-squared fitting."""

    def __init__(self, model: FrequencyModel = ENGLISH):
        self.model = model

    def rotation_statistics(self, column: str) -> np.ndarray:
        """χ² for each of the 26 rotations of the expected distribution."""
        observed = letter_counts(column)
        expected = self.model.expected_counts(len(column))
        # np.roll(e, -s)[i] == e[(i + s) % 26]
        return np.array([chi_squared(observed, np.roll(expected, -s)) for s in range(26)])

    def best_rotation(self, column: str) -> int:
        return int(np.argmin(self.rotation_statistics(column)))

    def key_shift(self, column: str) -> int:
        """The additive shift the key letter applied to this column."""
        return (26 - self.best_rotation(column)) % 26

    def solve(self, text: str, key_length: int) -> str:
        """Best-fit key of `key_length` letters. Non-letters are ignored."""
        if key_length < 1:
            raise ValueError("key_length must be at least 1.")
        text = normalize(text)
        return "".join(ALPHABET[self.key_shift(col)] for col in column_groups(text, key_length))
