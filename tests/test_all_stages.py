"""
vigenere_breaker — Stage-by-stage Test Suite
============================================
Run with:  python -m pytest tests/ -v
       or:  python tests/test_all_stages.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import random

import numpy as np
import pytest

from vigenere_breaker.cipher                    import VigenereCipher, encrypt, decrypt
from vigenere_breaker.frequency                 import ALPHABET, ENGLISH, FrequencyModel, ENGLISH_FREQ, letter_counts
from vigenere_breaker.results                   import KeyLengthCandidate, RepeatMatch
from vigenere_breaker.stages.stage1_normalize   import normalize
from vigenere_breaker.stages.stage2_kasiski     import KasiskiExaminer
from vigenere_breaker.stages.stage3_ioc         import IoCEstimator, column_groups, index_of_coincidence
from vigenere_breaker.stages.stage4_keylength   import KeyLengthSelector
from vigenere_breaker.stages.stage5_chisquared  import ShiftSolver, chi_squared
from vigenere_breaker.stages.stage6_scorer      import score_english_text
from vigenere_breaker.stages.stage7_refiner     import KeyRefiner, reduce_period

from samples import ENGLISH_SAMPLE, RANDOM_SEED

KEY        = "CIPHER"
PLAINTEXT  = normalize(ENGLISH_SAMPLE)
CIPHERTEXT = encrypt(PLAINTEXT, KEY)

# ── Frequency model ───────────────────────────────────────────────────────────
def test_frequency_table_is_complete():
    assert len(ENGLISH.vector) == 26
    assert abs(sum(ENGLISH.frequencies.values()) - 1.0) < 0.01
    assert ENGLISH["E"] == 0.127
    assert ENGLISH.reference_ioc == 0.067

def test_frequency_table_is_read_only():
    with pytest.raises(ValueError):
        ENGLISH.vector[0] = 0.5
    with pytest.raises(TypeError):
        ENGLISH.frequencies["E"] = 0.5

def test_frequency_table_rejects_partial_alphabet():
    partial = dict(ENGLISH_FREQ)
    del partial["Z"]
    with pytest.raises(ValueError):
        FrequencyModel(partial, 0.067)

def test_letter_counts():
    counts = letter_counts("ABBZ")
    assert counts.shape == (26,)
    assert counts[0] == 1 and counts[1] == 2 and counts[25] == 1
    assert letter_counts("").sum() == 0

# ── Cipher transform ──────────────────────────────────────────────────────────
def test_cipher_known_vector():
    assert encrypt("ATTACKATDAWN", "LEMON") == "LXFOPVEFRNHR"
    assert decrypt("LXFOPVEFRNHR", "LEMON") == "ATTACKATDAWN"

def test_cipher_drops_non_letters():
    assert encrypt("attack at dawn!", "lemon") == "LXFOPVEFRNHR"
    assert decrypt("lxfo-pvef rnhr", "LEMON") == "ATTACKATDAWN"

@pytest.mark.parametrize("plaintext,key", [
    ("HelloWorld", "KEY"),
    ("thequickbrownfoxjumpsoverthelazydog", "Z"),
    ("ABC", "CIPHER"),
])
def test_cipher_roundtrip(plaintext, key):
    assert decrypt(encrypt(plaintext, key), key) == plaintext.upper()

def test_cipher_empty_key_is_noop():
    assert decrypt("ABC", "") == "ABC"
    assert encrypt("ABC", "") == "ABC"
    assert encrypt("a b", "123") == "a b"

def test_vigenere_cipher_class():
    v  = VigenereCipher("cipher")
    ct = v.encrypt("Attack at dawn")
    assert ct != "ATTACKATDAWN"
    assert v.decrypt(ct) == "ATTACKATDAWN"
    assert v.key == "CIPHER"

@pytest.mark.parametrize("bad_key", ["", "CIPHER KEY", "12345"])
def test_vigenere_cipher_class_rejects_bad_key(bad_key):
    with pytest.raises(ValueError):
        VigenereCipher(bad_key)

# ── Stage 1: normalize ────────────────────────────────────────────────────────
def test_normalize_strips_and_uppercases():
    assert normalize("Hello, World! 123") == "HELLOWORLD"
    assert normalize("straße café") == "STRAECAF"
    assert normalize("") == ""

def test_normalize_is_idempotent():
    once = normalize(ENGLISH_SAMPLE)
    assert normalize(once) == once

# ── Stage 2: Kasiski ──────────────────────────────────────────────────────────
CRAFTED = "QWERTYUIOPQWERZXCVBNM"   # QWER at 0 and 10 → distance 2 × 5

def test_kasiski_finds_crafted_repeat():
    repeats = KasiskiExaminer().find_repeats(CRAFTED)
    assert repeats[0] == RepeatMatch("QWER", (0, 10))
    assert repeats[0].primary_distance == 10
    assert {r.sequence for r in repeats} == {"QWER", "QWE", "WER"}

def test_kasiski_orders_longest_first_and_caps():
    repeats = KasiskiExaminer().find_repeats(CIPHERTEXT)
    assert len(repeats) <= KasiskiExaminer.TOP_N
    lengths = [len(r.sequence) for r in repeats]
    assert lengths == sorted(lengths, reverse=True)
    assert all(len(r.positions) >= 2 for r in repeats)

def test_kasiski_short_text_has_no_repeats():
    assert KasiskiExaminer().find_repeats("AB") == []
    assert KasiskiExaminer().find_repeats("") == []

def test_kasiski_length_evidence_prefers_larger_on_ties():
    repeats = KasiskiExaminer().find_repeats(CRAFTED)
    evidence = KasiskiExaminer().length_evidence(repeats)
    assert [c.length for c in evidence] == [10, 5, 2]
    assert all(c.evidence_score == 3.0 and c.source == "kasiski" for c in evidence)

def test_kasiski_gcd_estimate():
    repeats = [RepeatMatch("ABC", (0, 12)), RepeatMatch("XYZ", (3, 21))]
    assert KasiskiExaminer.estimate_length(repeats) == 6
    coprime = [RepeatMatch("ABC", (0, 9)), RepeatMatch("XYZ", (3, 7))]
    assert KasiskiExaminer.estimate_length(coprime) == 9
    assert KasiskiExaminer.estimate_length([]) is None

# ── Stage 3: index of coincidence ─────────────────────────────────────────────
def test_column_groups_partition_text():
    groups = column_groups("ABCDEFG", 3)
    assert groups == ["ADG", "BE", "CF"]
    assert sum(len(g) for g in groups) == 7

def test_index_of_coincidence_values():
    assert index_of_coincidence("") == 0.0
    assert index_of_coincidence("A") == 0.0
    assert index_of_coincidence("AAAA") == 1.0
    assert index_of_coincidence(ALPHABET) == 0.0

def test_ioc_ranks_true_length_multiple_first():
    ranked = IoCEstimator().rank(CIPHERTEXT)
    assert len(ranked) == IoCEstimator.MAX_KEY_LENGTH
    assert ranked[0].length % len(KEY) == 0
    assert all(c.evidence_score <= 0 for c in ranked)

def test_ioc_skips_lengths_without_two_letters_per_column():
    assert [c.length for c in IoCEstimator().rank("ABCDE")] == [1, 2]
    assert IoCEstimator().rank("A") == []

def test_ioc_rank_ignores_non_letters():
    raw = ENGLISH_SAMPLE[:400]
    assert IoCEstimator().rank(raw) == IoCEstimator().rank(normalize(raw))

# ── Stage 4: key-length selector ──────────────────────────────────────────────
def test_selector_default_when_no_evidence():
    chosen = KeyLengthSelector().select([], [])
    assert [c.length for c in chosen] == [3, 4, 5, 6, 7]
    assert all(c.source == "default" for c in chosen)

def test_selector_interleaves_dedupes_and_caps():
    kasiski = [KeyLengthCandidate(n, 5.0 - i, "kasiski") for i, n in enumerate([6, 3, 2, 12])]
    ioc     = [KeyLengthCandidate(n, -0.001 * i, "ioc") for i, n in enumerate([6, 12, 18, 1])]
    chosen  = KeyLengthSelector().select(kasiski, ioc)
    assert [c.length for c in chosen] == [6, 3, 12, 2, 18]

def test_selector_restricts_kasiski_range():
    kasiski = [KeyLengthCandidate(18, 9.0, "kasiski"), KeyLengthCandidate(4, 2.0, "kasiski")]
    chosen  = KeyLengthSelector().select(kasiski, [])
    assert [c.length for c in chosen] == [4]

def test_selector_rejects_zero_cap():
    with pytest.raises(ValueError):
        KeyLengthSelector(max_candidates=0)

# ── Stage 5: chi-squared shift solver ─────────────────────────────────────────
@pytest.mark.parametrize("shift", [0, 3, 7, 25])
def test_shift_solver_single_letter_column(shift):
    """A one-letter column fits plaintext E, so the column is E shifted by s."""
    column = ALPHABET[(4 + shift) % 26] * 40
    assert ShiftSolver().key_shift(column) == shift

def test_shift_solver_ties_go_to_smallest_shift():
    stats = ShiftSolver().rotation_statistics("")
    assert np.all(stats == 0.0)
    assert ShiftSolver().best_rotation("") == 0

def test_chi_squared_skips_zero_expectation():
    assert chi_squared(np.array([1, 0]), np.array([0.0, 1.0])) == 1.0
    assert np.isfinite(chi_squared(np.array([5, 5]), np.array([0.0, 0.0])))

def test_shift_solver_recovers_key():
    assert ShiftSolver().solve(CIPHERTEXT, 6) == KEY

def test_shift_solver_rejects_zero_length():
    with pytest.raises(ValueError):
        ShiftSolver().solve(CIPHERTEXT, 0)

def test_shift_solver_ignores_non_letters():
    raw = encrypt(ENGLISH_SAMPLE, KEY).lower()
    spaced = " ".join(raw[i:i + 5] for i in range(0, len(raw), 5)) + "!"
    assert ShiftSolver().solve(spaced, 6) == KEY

# ── Stage 6: scorer ───────────────────────────────────────────────────────────
def test_scorer_english_beats_random_letters():
    rng    = random.Random(RANDOM_SEED)
    noise  = "".join(rng.choice(ALPHABET) for _ in range(len(PLAINTEXT)))
    assert score_english_text(PLAINTEXT) > score_english_text(noise)

def test_scorer_english_beats_ciphertext():
    assert score_english_text(PLAINTEXT) > score_english_text(CIPHERTEXT)

def test_scorer_is_deterministic_and_normalizes():
    assert score_english_text("the cat") == score_english_text("THECAT")
    assert score_english_text(PLAINTEXT) == score_english_text(PLAINTEXT)
    assert score_english_text("") == 0.0

# ── Stage 7: refiner ──────────────────────────────────────────────────────────
def test_refiner_neighbours():
    neighbours = list(KeyRefiner().neighbours("AB"))
    assert len(neighbours) == 8
    assert neighbours[:4] == ["YB", "ZB", "BB", "CB"]

def test_refiner_repairs_near_miss_key():
    key, score = KeyRefiner().refine(CIPHERTEXT, "CIPHFR")
    assert key == KEY
    assert score == score_english_text(PLAINTEXT)

def test_refiner_never_worsens_score():
    start = score_english_text(decrypt(CIPHERTEXT, "QQQQQQ"))
    _, score = KeyRefiner(max_rounds=3).refine(CIPHERTEXT, "QQQQQQ")
    assert score >= start

def test_refiner_empty_key():
    assert KeyRefiner().refine("ABC", "") == ("", score_english_text("ABC"))

@pytest.mark.parametrize("key,expected", [
    ("CIPHERCIPHER", "CIPHER"),
    ("AAA", "A"),
    ("ABAB", "AB"),
    ("CIPHER", "CIPHER"),
    ("ABA", "ABA"),
    ("", ""),
])
def test_reduce_period(key, expected):
    assert reduce_period(key) == expected

# ── run directly ─────────────────────────────────────────────────────────────
if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
