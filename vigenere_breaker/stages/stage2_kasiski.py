"""
Stage 2 — Kasiski Examination
=============================
A plaintext fragment that recurs at two offsets congruent modulo the key
length is encrypted identically both times, so the distance between
repeated ciphertext n-grams tends to be a multiple of the key length.

For each window of 3, 4 and 5 letters every substring is indexed by its
offsets; substrings seen at least twice become RepeatMatch records. The
first two offsets give the representative distance. Longer repeats are
stronger evidence, so the records are ordered longest first and only the
top ten are kept.

Historical note: Friedrich Kasiski, 1863; Charles Babbage found the same
attack a decade earlier but never published it.
"""

from collections import defaultdict
from functools import reduce
from math import gcd
from typing import List, Optional, Sequence

from ..results import KeyLengthCandidate, RepeatMatch


class KasiskiExaminer:
    """Repeat finder plus divisibility evidence for key lengths."""

    WINDOWS    = (3, 4, 5)
    TOP_N      = 10
    MIN_LENGTH = 2    # a length-1 "repeat" says nothing about the key
    MAX_LENGTH = 20

    def __init__(self, windows: Sequence[int] = WINDOWS, top_n: int = TOP_N):
        if not windows or min(windows) < 2:
            raise ValueError("Kasiski windows must be at least 2 letters long.")
        if top_n < 1:
            raise ValueError("top_n must be positive.")
        self.windows = tuple(windows)
        self.top_n   = top_n

    def find_repeats(self, text: str) -> List[RepeatMatch]:
        """Repeated n-grams of normalized text, longest first, top `top_n`."""
        matches = []
        for size in self.windows:
            offsets = defaultdict(list)
            for i in range(len(text) - size + 1):
                offsets[text[i:i + size]].append(i)
            for sequence, positions in offsets.items():
                if len(positions) >= 2:
                    matches.append(RepeatMatch(sequence, tuple(positions)))
        # stable sort: equal-length repeats keep discovery order
        matches.sort(key=lambda m: len(m.sequence), reverse=True)
        return matches[:self.top_n]

    def length_evidence(self, repeats: Sequence[RepeatMatch],
                        min_length: int = MIN_LENGTH,
                        max_length: int = MAX_LENGTH) -> List[KeyLengthCandidate]:
        """
        Score each length in [min_length, max_length] by how many repeats
        have a primary distance divisible by it.

        Lengths with no supporting repeat are left out. Ranked by count,
        ties going to the larger length: a larger length dividing the same
        distances is the more specific explanation of them.
        """
        evidence = []
        for length in range(max(min_length, 1), max_length + 1):
            hits = sum(1 for m in repeats if m.primary_distance % length == 0)
            if hits:
                evidence.append(KeyLengthCandidate(length, float(hits), "kasiski"))
        evidence.sort(key=lambda c: (c.evidence_score, c.length), reverse=True)
        return evidence

    @staticmethod
    def estimate_length(repeats: Sequence[RepeatMatch]) -> Optional[int]:
        """GCD of the primary distances; the first distance if the GCD is < 2."""
        if not repeats:
            return None
        distances = [m.primary_distance for m in repeats]
        estimate = reduce(gcd, distances)
        if estimate < 2:
            estimate = distances[0]
        return estimate
