"""
Stage 1 — Text Normalizer
=========================
Every later stage works on NormalizedText: the A–Z letters of the input,
uppercased, in their original order. Digits, punctuation, whitespace and
anything outside the ASCII alphabet are discarded.
"""

import re

_NON_LETTERS = re.compile(r"[^A-Za-z]")


def normalize(text: str) -> str:
    """Strip non-letters and uppercase. Total: never raises on a str."""
    return _NON_LETTERS.sub("", text).upper()
