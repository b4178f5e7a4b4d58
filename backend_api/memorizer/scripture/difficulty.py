from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Difficulty:
    """How many words a practice round hides."""

    name: str
    words_per_round: int


DEFAULT_DIFFICULTY = "medium"


# PUBLIC_INTERFACE
class DifficultyRegistry:
    """Registry mapping difficulty names to words hidden per round."""

    _registry: Dict[str, Difficulty] = {
        "easy": Difficulty("easy", 2),
        "medium": Difficulty("medium", 3),
        "hard": Difficulty("hard", 5),
    }

    @classmethod
    def get(cls, name: str) -> Difficulty:
        """Return the Difficulty for a name, or raise KeyError."""
        key = (name or "").strip().lower()
        if key not in cls._registry:
            raise KeyError(f"Unknown difficulty: {name!r}")
        return cls._registry[key]

    @classmethod
    def register(cls, name: str, words_per_round: int) -> Difficulty:
        """Register or override a named difficulty level."""
        key = (name or "").strip().lower()
        if not key:
            raise ValueError("difficulty name must be a non-empty string")
        level = cls.custom(words_per_round, name=key)
        cls._registry[key] = level
        return level

    @classmethod
    def custom(cls, words_per_round: int, name: str = "custom") -> Difficulty:
        if words_per_round < 1:
            raise ValueError("words_per_round must be at least 1")
        return Difficulty(name, words_per_round)

    @classmethod
    def all(cls) -> List[Difficulty]:
        return sorted(cls._registry.values(), key=lambda d: d.words_per_round)
