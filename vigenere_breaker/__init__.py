"""
vigenere_breaker — Repeating-key substitution cryptanalysis
===========================================================
Recover the key length, the key and the plaintext of a Vigenère-style
ciphertext with no prior knowledge of either.

Stages:
    1  NORMALIZE    — strip non-letters, uppercase
    2  KASISKI      — repeated n-grams and their distances
    3  IoC          — index of coincidence per candidate length
    4  KEY LENGTH   — fuse Kasiski + IoC evidence, at most 5 lengths
    5  CHI-SQUARED  — best-fit shift for every column
    6  SCORER       — "Englishness" of a candidate decryption
    7  REFINER      — hill climb over neighbouring keys

License: Apache 2.0
"""

__version__  = "1.0.0"

from .cipher                        import VigenereCipher, encrypt, decrypt
from .engine                        import VigenereBreaker
from .frequency                     import ENGLISH, FrequencyModel
from .results                       import (BreakResult, KeyCandidate, KeyLengthAnalysis,
                                            KeyLengthCandidate, RepeatMatch)
from .stages.stage1_normalize       import normalize
from .stages.stage6_scorer          import score_english_text

__all__ = [
    "VigenereBreaker",
    "VigenereCipher",
    "encrypt",
    "decrypt",
    "normalize",
    "score_english_text",
    "FrequencyModel",
    "ENGLISH",
    "BreakResult",
    "KeyCandidate",
    "KeyLengthAnalysis",
    "KeyLengthCandidate",
    "RepeatMatch",
]
