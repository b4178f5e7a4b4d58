from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional


def tokenize(text: str) -> List[str]:
    """Split text on runs of whitespace; punctuation stays attached to its word."""
    return (text or "").split()


class Token:
    """One hideable word of a scripture text. The text is fixed at creation."""

    __slots__ = ("_text", "hidden")

    def __init__(self, text: str, hidden: bool = False):
        self._text = text
        self.hidden = hidden

    @property
    def text(self) -> str:
        return self._text

    @property
    def length(self) -> int:
        return len(self.text)

    def hide(self) -> None:
        self.hidden = True

    def show(self) -> None:
        self.hidden = False

    def display_text(self) -> str:
        """Underscores of the same length when hidden, the text otherwise."""
        if self.hidden:
            return "_" * self.length
        return self.text


@dataclass(frozen=True)
class Progress:
    """Snapshot of how much of a session is hidden."""

    hidden_count: int
    visible_count: int
    total_count: int

    @property
    def percent_hidden(self) -> int:
        if self.total_count == 0:
            return 0
        return self.hidden_count * 100 // self.total_count


# PUBLIC_INTERFACE
class WordHidingSession:
    """Visibility state for the tokens of one fixed text.

    Every operation degrades to a no-op instead of raising: hiding with a
    non-positive count, hiding when nothing is visible, and hinting when
    nothing is hidden all just report that nothing happened.
    """

    def __init__(self, tokens: Iterable[str], rng: Optional[random.Random] = None):
        self._tokens: List[Token] = [Token(t) for t in tokens]
        self._rng = rng or random.Random()

    # PUBLIC_INTERFACE
    @classmethod
    def from_text(cls, text: str, rng: Optional[random.Random] = None) -> "WordHidingSession":
        """Build a session from raw text, all tokens visible."""
        return cls(tokenize(text), rng=rng)

    @property
    def tokens(self) -> List[Token]:
        return list(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def _indices(self, hidden: bool) -> List[int]:
        return [i for i, token in enumerate(self._tokens) if token.hidden is hidden]

    # PUBLIC_INTERFACE
    def hide_random(self, count: int) -> int:
        """Hide up to ``count`` currently visible tokens chosen at random.

        Returns the number of tokens actually hidden. Already hidden tokens
        are never picked, so the result is min(count, visible) for count > 0.
        """
        if count <= 0:
            return 0
        visible = self._indices(hidden=False)
        if not visible:
            return 0
        chosen = self._rng.sample(visible, min(count, len(visible)))
        for idx in chosen:
            self._tokens[idx].hide()
        return len(chosen)

    # PUBLIC_INTERFACE
    def hint(self) -> bool:
        """Reveal one random hidden token. Returns False if none was hidden."""
        hidden = self._indices(hidden=True)
        if not hidden:
            return False
        self._tokens[self._rng.choice(hidden)].show()
        return True

    # PUBLIC_INTERFACE
    def reset(self) -> None:
        """Make every token visible again."""
        for token in self._tokens:
            token.show()

    # PUBLIC_INTERFACE
    def is_complete(self) -> bool:
        return all(token.hidden for token in self._tokens)

    # PUBLIC_INTERFACE
    def progress(self) -> Progress:
        hidden = sum(1 for token in self._tokens if token.hidden)
        total = len(self._tokens)
        return Progress(hidden_count=hidden, visible_count=total - hidden, total_count=total)

    # PUBLIC_INTERFACE
    def render(self) -> str:
        """Text with hidden tokens replaced by underscore runs of equal length."""
        return " ".join(token.display_text() for token in self._tokens)

    def original_text(self) -> str:
        """Full text rebuilt from token text, regardless of hidden flags."""
        return " ".join(token.text for token in self._tokens)

    def hidden_indices(self) -> List[int]:
        return self._indices(hidden=True)

    def restore(self, hidden_indices: Iterable[int]) -> None:
        """Reset, then hide exactly the given indices. Out-of-range ones are ignored."""
        self.reset()
        total = len(self._tokens)
        for idx in hidden_indices:
            if 0 <= idx < total:
                self._tokens[idx].hide()
