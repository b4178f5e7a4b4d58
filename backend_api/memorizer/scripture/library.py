from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .reference import FormatError, Reference, parse_reference, render_reference
from .session import WordHidingSession

logger = logging.getLogger(__name__)


DEFAULT_SCRIPTURES: List[Tuple[Reference, str]] = [
    (
        Reference("John", 3, 16),
        "For God so loved the world, that he gave his only begotten Son, that whosoever "
        "believeth in him should not perish, but have everlasting life.",
    ),
    (
        Reference("Proverbs", 3, 5, 6),
        "Trust in the Lord with all thine heart; and lean not unto thine own understanding. "
        "In all thy ways acknowledge him, and he shall direct thy paths.",
    ),
    (
        Reference("Philippians", 4, 13),
        "I can do all things through Christ which strengtheneth me.",
    ),
    (
        Reference("Jeremiah", 29, 11),
        "For I know the thoughts that I think toward you, saith the Lord, thoughts of peace, "
        "and not of evil, to give you an expected end.",
    ),
    (
        Reference("Romans", 8, 28),
        "And we know that all things work together for good to them that love God, to them "
        "who are the called according to his purpose.",
    ),
    (
        Reference("Psalm", 23, 1, 3),
        "The Lord is my shepherd; I shall not want. He maketh me to lie down in green pastures: "
        "he leadeth me beside the still waters. He restoreth my soul: he leadeth me in the "
        "paths of righteousness for his name's sake.",
    ),
    (
        Reference("Isaiah", 40, 31),
        "But they that wait upon the Lord shall renew their strength; they shall mount up with "
        "wings as eagles; they shall run, and not be weary; and they shall walk, and not faint.",
    ),
    (
        Reference("Matthew", 6, 33),
        "But seek ye first the kingdom of God, and his righteousness; and all these things "
        "shall be added unto you.",
    ),
]


@dataclass
class ScriptureEntry:
    """A reference paired with the hideable words of its text."""

    reference: Reference
    session: WordHidingSession

    @property
    def text(self) -> str:
        return self.session.original_text()

    def display_text(self) -> str:
        return f"{render_reference(self.reference)}\n{self.session.render()}"


def _read_records(lines: List[str]) -> Iterator[Tuple[str, str]]:
    """Yield (reference_line, text) pairs from the blank-line separated format."""
    i = 0
    n = len(lines)
    while i < n:
        while i < n and not lines[i].strip():
            i += 1
        if i >= n:
            break
        reference_line = lines[i].strip()
        i += 1

        while i < n and not lines[i].strip():
            i += 1
        text_lines: List[str] = []
        while i < n and lines[i].strip():
            text_lines.append(lines[i].strip())
            i += 1

        if not text_lines:
            logger.warning("Reference %r has no text; skipping.", reference_line)
            continue
        yield reference_line, " ".join(text_lines)


# PUBLIC_INTERFACE
class Library:
    """Ordered collection of scriptures.

    Insertion order is kept and references need not be unique. The random
    source given here is shared with every entry's session.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._entries: List[ScriptureEntry] = []
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ScriptureEntry]:
        return iter(self._entries)

    @property
    def count(self) -> int:
        return len(self._entries)

    # PUBLIC_INTERFACE
    def add(self, reference: Reference, text: str) -> ScriptureEntry:
        """Tokenize text on whitespace and append a new entry."""
        entry = ScriptureEntry(reference, WordHidingSession.from_text(text, rng=self._rng))
        self._entries.append(entry)
        return entry

    # PUBLIC_INTERFACE
    def random_entry(self) -> Optional[ScriptureEntry]:
        """Uniform random pick, or None for an empty library."""
        if not self._entries:
            return None
        return self._rng.choice(self._entries)

    # PUBLIC_INTERFACE
    def get(self, index: int) -> ScriptureEntry:
        """Return the entry at index. Negative indices are not wrapped.

        Raises:
            IndexError: when index is outside [0, count).
        """
        if index < 0 or index >= len(self._entries):
            raise IndexError(f"Scripture index {index} out of range (0..{len(self._entries) - 1}).")
        return self._entries[index]

    def references(self) -> List[str]:
        return [render_reference(entry.reference) for entry in self._entries]

    def load_defaults(self) -> int:
        """Add the built-in scriptures and return how many were added."""
        for reference, text in DEFAULT_SCRIPTURES:
            self.add(reference, text)
        return len(DEFAULT_SCRIPTURES)

    # PUBLIC_INTERFACE
    def load_from_file(self, path: str | os.PathLike) -> int:
        """Append every well-formed record from a library file.

        Records with a malformed reference line are logged and skipped.

        Returns:
            Number of records added.

        Raises:
            FileNotFoundError: if path does not exist.
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Scripture file not found: {path}")

        with open(path, encoding="utf-8") as fh:
            lines = fh.read().splitlines()

        loaded = 0
        for reference_line, text in _read_records(lines):
            try:
                reference = parse_reference(reference_line)
            except FormatError as e:
                logger.warning("Could not parse scripture %r: %s", reference_line, e)
                continue
            self.add(reference, text)
            loaded += 1

        logger.info("Loaded %d scripture(s) from %s", loaded, path)
        return loaded

    # PUBLIC_INTERFACE
    def save_to_file(self, path: str | os.PathLike) -> None:
        """Write every entry as a reference line then a text line.

        Records are separated by one blank line, with none after the last.
        Every entry is reset to fully visible first. Entries with no words
        cannot be represented in the format and are skipped with a warning.
        """
        blocks = []
        for entry in self._entries:
            entry.session.reset()
            if not len(entry.session):
                logger.warning("Scripture %s has no text; not saved.", render_reference(entry.reference))
                continue
            blocks.append(f"{render_reference(entry.reference)}\n{entry.text}\n")

        with open(path, "w", encoding="utf-8", newline="\n") as fh:
            fh.write("\n".join(blocks))

        logger.info("Saved %d scripture(s) to %s", len(blocks), path)
