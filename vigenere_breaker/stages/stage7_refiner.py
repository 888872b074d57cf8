"""
Stage 7 — Key Refiner (greedy hill climb)
=========================================
Chi-squared picks each key letter in isolation; the refiner checks the
whole decryption. Every position of the current key is nudged by −2, −1,
+1 and +2 (mod 26), one position at a time, giving 4 × len(key) neighbours
per round. A neighbour replaces the current key only if it scores strictly
higher. Rounds repeat until nothing improves or MAX_ROUNDS is reached.

Not exhaustive and not guaranteed to find the global optimum.
"""

import logging
from typing import Callable, Iterator, Tuple

from ..cipher import decrypt
from ..frequency import ALPHABET
from .stage6_scorer import score_english_text

logger = logging.getLogger(__name__)


def reduce_period(key: str) -> str:
    """CIPHERCIPHER -> CIPHER; keys with no shorter period come back as-is."""
    for period in range(1, len(key) // 2 + 1):
        if len(key) % period == 0 and key[:period] * (len(key) // period) == key:
            return key[:period]
    return key


class KeyRefiner:

    OFFSETS    = (-2, -1, 1, 2)
    MAX_ROUNDS = 50

    def __init__(self, scorer: Callable[[str], float] = score_english_text,
                 max_rounds: int = MAX_ROUNDS):
        if max_rounds < 1:
            raise ValueError("max_rounds must be at least 1.")
        self.scorer     = scorer
        self.max_rounds = max_rounds

    def neighbours(self, key: str) -> Iterator[str]:
        for pos, letter in enumerate(key):
            base = ALPHABET.index(letter)
            for offset in self.OFFSETS:
                yield key[:pos] + ALPHABET[(base + offset) % 26] + key[pos + 1:]

    def refine(self, text: str, key: str) -> Tuple[str, float]:
        """Return (best key, its score) reachable from `key` by the hill climb."""
        best_key   = key
        best_score = self.scorer(decrypt(text, key))
        for round_no in range(self.max_rounds):
            improved = False
            for candidate in self.neighbours(best_key):
                score = self.scorer(decrypt(text, candidate))
                if score > best_score:
                    best_key, best_score, improved = candidate, score, True
            if not improved:
                break
            logger.debug(f"Refine round {round_no + 1}: key={best_key} score={best_score:.3f}")
        return best_key, best_score
