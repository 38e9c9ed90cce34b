"""Difficulty levels and their generation parameters."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class DifficultyProfile:
    """
    Generation parameters of one difficulty level.

    Attributes:
        inter_block_keep_ratio: Fraction of relations crossing block borders
                                that is kept in the puzzle.
        hint_range: Accepted (min, max) number of numeric hints.
        initial_reveals: Cells revealed before uniqueness is checked.
        max_attempts: Attempts before giving up (or falling back).
        allow_fallback: Whether exhaustion may be recovered by one attempt
                        with the hint range widened to (0, 81).
    """
    inter_block_keep_ratio: float
    hint_range: Tuple[int, int]
    initial_reveals: int
    max_attempts: int = 30
    allow_fallback: bool = True

    @property
    def min_hints(self) -> int:
        return self.hint_range[0]

    @property
    def max_hints(self) -> int:
        return self.hint_range[1]


class Difficulty(Enum):
    """Difficulty levels, named as the host passes them in."""
    EASY = "Easy"
    NORMAL = "Normal"
    HARD = "Hard"
    EXPERT = "Expert"
    PURE = "Pure"  # every relation, no numeric hints

    @property
    def profile(self) -> DifficultyProfile:
        return PROFILES[self]

    @property
    def hint_range(self) -> Tuple[int, int]:
        return self.profile.hint_range

    @classmethod
    def from_name(cls, name: str) -> Difficulty:
        """Case-sensitive lookup; unknown names fall back to NORMAL."""
        try:
            return cls(name)
        except ValueError:
            return cls.NORMAL


PROFILES = {
    Difficulty.EASY: DifficultyProfile(0.6, (30, 40), initial_reveals=30),
    Difficulty.NORMAL: DifficultyProfile(0.45, (18, 29), initial_reveals=18),
    Difficulty.HARD: DifficultyProfile(0.3, (8, 17), initial_reveals=8),
    Difficulty.EXPERT: DifficultyProfile(0.15, (1, 7), initial_reveals=1),
    Difficulty.PURE: DifficultyProfile(
        1.0, (0, 0), initial_reveals=0, max_attempts=500, allow_fallback=False
    ),
}
