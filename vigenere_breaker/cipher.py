"""
Cipher Transform — repeating-key (Vigenère) substitution
========================================================
The shared primitive under every stage that has to try a key.

    encrypt:  C[i] = (P[i] + K[i mod |K|]) mod 26
    decrypt:  P[i] = (C[i] - K[i mod |K|] + 26) mod 26

Both directions normalize their inputs first: non-letters are dropped, so
the output is always NormalizedText. An empty key (after normalization)
is a no-op and the input comes back untouched. Callers that would rather
fail on a bad key use the strict VigenereCipher class.
"""

from .frequency import ALPHABET
from .stages.stage1_normalize import normalize


def _apply_key(text: str, key: str, direction: int) -> str:
    shifts = [ALPHABET.index(c) for c in normalize(key)]
    if not shifts:
        return text
    period = len(shifts)
    return "".join(
        ALPHABET[(ALPHABET.index(ch) + direction * shifts[i % period]) % 26]
        for i, ch in enumerate(normalize(text))
    )


def encrypt(plaintext: str, key: str) -> str:
    """Encrypt plaintext with a repeating key. Empty key returns input unchanged."""
    return _apply_key(plaintext, key, +1)


def decrypt(ciphertext: str, key: str) -> str:
    """Decrypt ciphertext with a repeating key. Empty key returns input unchanged."""
    return _apply_key(ciphertext, key, -1)


class VigenereCipher:
    """
    Vigenère cipher bound to one key.

    Unlike the module-level functions this rejects keys that would make
    the transform a no-op.
    """

    def __init__(self, key: str):
        if not key or not key.isalpha() or not normalize(key):
            raise ValueError("Vigenère key must be alphabetic.")
        self._key = normalize(key)

    @property
    def key(self) -> str:
        return self._key

    def encrypt(self, plaintext: str) -> str:
        """Encrypt plaintext string. Non-letters are dropped."""
        return encrypt(plaintext, self._key)

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt ciphertext string."""
        return decrypt(ciphertext, self._key)

    def __repr__(self):
        return f"VigenereCipher(period={len(self._key)})"
