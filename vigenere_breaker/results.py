"""
Result value types passed between pipeline stages.

All of them are frozen dataclasses: a stage produces them, later stages
read them, nothing mutates them.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class RepeatMatch:
    """A ciphertext n-gram seen at two or more offsets."""

    sequence: str
    positions: Tuple[int, ...]

    @property
    def primary_distance(self) -> int:
        # first two occurrences only, no pairwise-GCD refinement
        return self.positions[1] - self.positions[0]

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "positions": list(self.positions),
            "primary_distance": self.primary_distance,
        }


@dataclass(frozen=True)
class KeyLengthCandidate:
    length: int
    evidence_score: float
    source: str = "ioc"

    def to_dict(self) -> dict:
        return {
            "length": self.length,
            "evidence_score": self.evidence_score,
            "source": self.source,
        }


@dataclass(frozen=True)
class KeyCandidate:
    length: int
    key: str
    fitness_score: float

    def to_dict(self) -> dict:
        return {"length": self.length, "key": self.key, "fitness_score": self.fitness_score}


@dataclass(frozen=True)
class KeyLengthAnalysis:
    """Output of the key-length stages: merged candidates plus the raw evidence."""

    candidates: Tuple[KeyLengthCandidate, ...]
    repeats: Tuple[RepeatMatch, ...]
    kasiski: Tuple[KeyLengthCandidate, ...] = ()
    ioc: Tuple[KeyLengthCandidate, ...] = ()
    estimated_length: Optional[int] = None

    @property
    def lengths(self) -> Tuple[int, ...]:
        return tuple(c.length for c in self.candidates)

    def to_dict(self) -> dict:
        return {
            "candidates": [c.to_dict() for c in self.candidates],
            "repeats": [r.to_dict() for r in self.repeats],
            "estimated_length": self.estimated_length,
        }


@dataclass(frozen=True)
class BreakResult:
    key: str
    plaintext: str
    fitness_score: float
    analysis: KeyLengthAnalysis
    candidates: Tuple[KeyCandidate, ...] = field(default=())
    low_confidence: bool = False

    @property
    def key_length(self) -> int:
        return len(self.key)

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "key_length": self.key_length,
            "plaintext": self.plaintext,
            "fitness_score": self.fitness_score,
            "low_confidence": self.low_confidence,
            "candidates": [c.to_dict() for c in self.candidates],
            "analysis": self.analysis.to_dict(),
        }
