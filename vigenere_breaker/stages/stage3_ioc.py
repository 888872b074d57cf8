"""
Stage 3 — Index of Coincidence
==============================
IoC = Σ f(c)·(f(c) − 1) / (N·(N − 1))

the probability that two letters drawn from a text are the same. A
monoalphabetic substitution leaves it unchanged, so when the ciphertext
is cut into columns at the true key length (or a multiple of it) every
column looks like shifted English and averages near 0.067. At a wrong
length the columns mix several alphabets and flatten towards 1/26 ≈ 0.038.

Each length 1..MAX_KEY_LENGTH is scored −|avgIoC − 0.067|, so sorting
descending puts the most English-looking segmentation first.
"""

from typing import List

import numpy as np

from ..frequency import ENGLISH, FrequencyModel, letter_counts
from ..results import KeyLengthCandidate
from .stage1_normalize import normalize


def column_groups(text: str, key_length: int) -> List[str]:
    """Split text into `key_length` columns by position modulo key_length."""
    return [text[i::key_length] for i in range(key_length)]


def index_of_coincidence(column: str) -> float:
    n = len(column)
    if n <= 1:
        return 0.0
    counts = letter_counts(column)
    return float(np.sum(counts * (counts - 1))) / (n * (n - 1))


class IoCEstimator:
    """Rank candidate key lengths by average column IoC."""

    MAX_KEY_LENGTH = 20

    def __init__(self, model: FrequencyModel = ENGLISH,
                 max_key_length: int = MAX_KEY_LENGTH):
        if max_key_length < 1:
            raise ValueError("max_key_length must be at least 1.")
        self.model          = model
        self.max_key_length = max_key_length

    def average_ioc(self, text: str, key_length: int) -> float:
        groups = column_groups(text, key_length)
        return sum(index_of_coincidence(g) for g in groups) / key_length

    def rank(self, text: str) -> List[KeyLengthCandidate]:
        """
        One candidate per testable length, best first (ties: shorter first).

        A length is testable only when each of its columns holds at least
        two letters; below that the column IoC is undefined.
        """
        text = normalize(text)
        reference = self.model.reference_ioc
        candidates = []
        for length in range(1, self.max_key_length + 1):
            if len(text) < 2 * length:
                break
            distance = abs(self.average_ioc(text, length) - reference)
            candidates.append(KeyLengthCandidate(length, -distance, "ioc"))
        candidates.sort(key=lambda c: (-c.evidence_score, c.length))
        return candidates
