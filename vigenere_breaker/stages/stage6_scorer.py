"""
Stage 6 — Candidate Scorer ("Englishness")
==========================================
A fixed, deterministic heuristic. Higher means more plausible English.

    (a) Σ freq(c) over ETAOINSHRDLU, with E and T counted twice
    (b) − 3 · freq(c) for each of J, Q, X, Z
    (c) + 0.5 per occurrence of TH, HE, IN, ER, AN, RE
    (d) + 3 · (1 − |vowel ratio − 0.40|)
    (e) + 2 · vowel/consonant alternation rate

Used both to rank the per-length key candidates and to drive the key
refiner's hill climb.
"""

from collections import Counter

from .stage1_normalize import normalize

COMMON_LETTERS = "ETAOINSHRDLU"
DOUBLE_WEIGHT  = frozenset("ET")
RARE_LETTERS   = "JQXZ"
DIGRAPHS       = frozenset(("TH", "HE", "IN", "ER", "AN", "RE"))
VOWELS         = frozenset("AEIOU")
VOWEL_TARGET   = 0.40


def score_english_text(text: str) -> float:
    text = normalize(text)
    n = len(text)
    if n == 0:
        return 0.0
    counts = Counter(text)

    score = sum(counts[c] / n * (2 if c in DOUBLE_WEIGHT else 1) for c in COMMON_LETTERS)
    score -= 3 * sum(counts[c] / n for c in RARE_LETTERS)
    score += 0.5 * sum(1 for i in range(n - 1) if text[i:i + 2] in DIGRAPHS)

    vowels = sum(counts[v] for v in VOWELS)
    score += 3 * (1 - abs(vowels / n - VOWEL_TARGET))

    if n > 1:
        alternations = sum(1 for a, b in zip(text, text[1:]) if (a in VOWELS) != (b in VOWELS))
        score += 2 * alternations / (n - 1)
    return score
