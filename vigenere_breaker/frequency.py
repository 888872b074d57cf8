"""
Frequency Model — English letter statistics
===========================================
The one piece of process-wide state in the engine: the expected relative
frequency of each letter A–Z in English text, plus the reference index of
coincidence (0.067) that a monoalphabetic English column exhibits.

The table is built once at import time and is read-only afterwards: the
backing numpy vector is flagged non-writeable and the letter mapping is
exposed through a MappingProxyType.

Dependencies: numpy
"""

import string
from types import MappingProxyType

import numpy as np

ALPHABET = string.ascii_uppercase

ENGLISH_FREQ = {
    'A': 0.082, 'B': 0.015, 'C': 0.028, 'D': 0.043, 'E': 0.127,
    'F': 0.022, 'G': 0.020, 'H': 0.061, 'I': 0.070, 'J': 0.002,
    'K': 0.008, 'L': 0.040, 'M': 0.024, 'N': 0.067, 'O': 0.075,
    'P': 0.019, 'Q': 0.001, 'R': 0.060, 'S': 0.063, 'T': 0.091,
    'U': 0.028, 'V': 0.010, 'W': 0.023, 'X': 0.001, 'Y': 0.020,
    'Z': 0.001,
}

ENGLISH_IOC = 0.067


def letter_counts(text: str) -> np.ndarray:
    """
    Count A–Z occurrences in already-normalized text.
    Returns a 26-slot integer vector indexed by letter (A=0 … Z=25).
    """
    codes = np.frombuffer(text.encode("ascii"), dtype=np.uint8).astype(np.intp) - ord("A")
    return np.bincount(codes, minlength=26)


class FrequencyModel:
    """Immutable letter-frequency table with its reference IoC."""

    def __init__(self, frequencies: dict, reference_ioc: float):
        if sorted(frequencies) != list(ALPHABET):
            raise ValueError("Frequency table must cover exactly the letters A-Z.")
        vector = np.array([frequencies[c] for c in ALPHABET], dtype=float)
        vector.setflags(write=False)
        self._vector = vector
        self._frequencies = MappingProxyType(dict(frequencies))
        self._reference_ioc = float(reference_ioc)

    @property
    def frequencies(self) -> MappingProxyType:
        return self._frequencies

    @property
    def vector(self) -> np.ndarray:
        return self._vector

    @property
    def reference_ioc(self) -> float:
        return self._reference_ioc

    def expected_counts(self, n: int) -> np.ndarray:
        """Expected per-letter counts for a sample of `n` letters."""
        return self._vector * n

    def __getitem__(self, letter: str) -> float:
        return self._frequencies[letter]

    def __repr__(self):
        return f"FrequencyModel(26 letters, ioc={self._reference_ioc})"


ENGLISH = FrequencyModel(ENGLISH_FREQ, ENGLISH_IOC)
