"""
Stage 4 — Key-Length Selector
=============================
Fuses the Kasiski and IoC rankings into at most five lengths to attack.
The two lists are interleaved (Kasiski first), duplicates dropped, and the
result capped. With no evidence from either side the fixed default set
3..7 is used.
"""

from itertools import chain, zip_longest
from typing import List, Sequence

from ..results import KeyLengthCandidate


class KeyLengthSelector:

    MAX_CANDIDATES  = 5
    KASISKI_RANGE   = (2, 15)
    DEFAULT_LENGTHS = (3, 4, 5, 6, 7)

    def __init__(self, max_candidates: int = MAX_CANDIDATES):
        if max_candidates < 1:
            raise ValueError("max_candidates must be at least 1.")
        self.max_candidates = max_candidates

    def select(self, kasiski: Sequence[KeyLengthCandidate],
               ioc: Sequence[KeyLengthCandidate]) -> List[KeyLengthCandidate]:
        lo, hi = self.KASISKI_RANGE
        kasiski = [c for c in kasiski if lo <= c.length <= hi]
        if not kasiski and not ioc:
            return [KeyLengthCandidate(length, 0.0, "default")
                    for length in self.DEFAULT_LENGTHS[:self.max_candidates]]

        selected, seen = [], set()
        for candidate in chain.from_iterable(zip_longest(kasiski, ioc)):
            if candidate is None or candidate.length in seen:
                continue
            seen.add(candidate.length)
            selected.append(candidate)
            if len(selected) == self.max_candidates:
                break
        return selected
