"""
VIGENÈRE BREAKER  |  full cryptanalysis pipeline

    ciphertext ─► normalize ─┬─► Kasiski repeats ─┐
                             └─► IoC ranking ─────┴─► key-length selector
             ─► chi-squared key per length ─► score & rank ─► hill-climb refine
             ─► plaintext

Single-threaded and synchronous. Every stage is a pure function of its
inputs; the only shared state is the read-only frequency model.
"""

import logging
from collections import Counter
from typing import List

from . import cipher
from .frequency import ENGLISH, FrequencyModel
from .results import BreakResult, KeyCandidate, KeyLengthAnalysis
from .stages.stage1_normalize import normalize
from .stages.stage2_kasiski import KasiskiExaminer
from .stages.stage3_ioc import IoCEstimator, column_groups
from .stages.stage4_keylength import KeyLengthSelector
from .stages.stage5_chisquared import ShiftSolver
from .stages.stage6_scorer import score_english_text
from .stages.stage7_refiner import KeyRefiner, reduce_period

logger = logging.getLogger(__name__)


class VigenereBreaker:
    """
    Recover key length, key and plaintext from repeating-key ciphertext.

    Usage:
        breaker = VigenereBreaker()
        result  = breaker.break_cipher(ciphertext)
        result.key, result.plaintext
    """

    LOW_CONFIDENCE_LETTERS = 20
    PROFILE_TOP_LETTERS    = 5

    def __init__(self, max_key_length: int = IoCEstimator.MAX_KEY_LENGTH,
                 max_candidates: int = KeyLengthSelector.MAX_CANDIDATES,
                 max_rounds: int = KeyRefiner.MAX_ROUNDS,
                 model: FrequencyModel = ENGLISH):
        if max_key_length < 2:
            raise ValueError("max_key_length must be at least 2.")
        self.model    = model
        self.kasiski  = KasiskiExaminer()
        self.ioc      = IoCEstimator(model, max_key_length)
        self.selector = KeyLengthSelector(max_candidates)
        self.solver   = ShiftSolver(model)
        self.refiner  = KeyRefiner(score_english_text, max_rounds)
        self._max_key_length = max_key_length

    # -- key length ----------------------------------------------------------

    def analyze_key_length(self, ciphertext: str) -> KeyLengthAnalysis:
        text    = normalize(ciphertext)
        repeats = self.kasiski.find_repeats(text)
        kasiski = self.kasiski.length_evidence(repeats, max_length=self._max_key_length)
        ioc     = self.ioc.rank(text)
        chosen  = self.selector.select(kasiski, ioc)
        estimate = self.kasiski.estimate_length(repeats)
        logger.info(f"Key length: {len(repeats)} repeats, GCD estimate={estimate}, "
                    f"candidates={[c.length for c in chosen]}")
        return KeyLengthAnalysis(
            candidates=tuple(chosen),
            repeats=tuple(repeats),
            kasiski=tuple(kasiski),
            ioc=tuple(ioc),
            estimated_length=estimate,
        )

    # -- key recovery --------------------------------------------------------

    def recover_key(self, ciphertext: str, key_length: int) -> KeyCandidate:
        if key_length < 1:
            raise ValueError("key_length must be at least 1.")
        text  = normalize(ciphertext)
        key   = self.solver.solve(text, key_length)
        score = score_english_text(cipher.decrypt(text, key))
        logger.debug(f"Length {key_length}: key={key} score={score:.3f}")
        return KeyCandidate(key_length, key, score)

    def column_profile(self, ciphertext: str, key_length: int) -> List[dict]:
        """Top letters and their relative frequencies for each column."""
        if key_length < 1:
            raise ValueError("key_length must be at least 1.")
        profile = []
        for column in column_groups(normalize(ciphertext), key_length):
            total = len(column)
            top = Counter(column).most_common(self.PROFILE_TOP_LETTERS)
            profile.append({letter: count / total for letter, count in top})
        return profile

    # -- full pipeline -------------------------------------------------------

    def break_cipher(self, ciphertext: str) -> BreakResult:
        text = normalize(ciphertext)
        low_confidence = len(text) < self.LOW_CONFIDENCE_LETTERS
        if low_confidence:
            logger.warning(f"Only {len(text)} letters of ciphertext; "
                           f"results are low confidence.")

        analysis = self.analyze_key_length(text)
        ranked = sorted((self.recover_key(text, c.length) for c in analysis.candidates),
                        key=lambda c: c.fitness_score, reverse=True)
        best = ranked[0]
        logger.info(f"Best candidate: length={best.length} key={best.key} "
                    f"score={best.fitness_score:.3f}")

        key, score = self.refiner.refine(text, best.key)
        key = reduce_period(key)
        if key != best.key:
            logger.info(f"Refined key: {key} score={score:.3f}")

        return BreakResult(
            key=key,
            plaintext=cipher.decrypt(text, key),
            fitness_score=score,
            analysis=analysis,
            candidates=tuple(ranked),
            low_confidence=low_confidence,
        )

    # -- transform -----------------------------------------------------------

    @staticmethod
    def encrypt(plaintext: str, key: str) -> str:
        return cipher.encrypt(plaintext, key)

    @staticmethod
    def decrypt(ciphertext: str, key: str) -> str:
        return cipher.decrypt(ciphertext, key)

    def __repr__(self):
        return (f"VigenereBreaker(max_key_length={self._max_key_length}, "
                f"max_candidates={self.selector.max_candidates}, "
                f"max_rounds={self.refiner.max_rounds})")
