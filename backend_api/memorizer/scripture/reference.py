from __future__ import annotations

from dataclasses import dataclass


class FormatError(ValueError):
    """Raised when a scripture reference string cannot be parsed."""


_EXPECTED = "Expected 'Book Chapter:Verse' or 'Book Chapter:StartVerse-EndVerse'"


def _parse_number(segment: str, label: str) -> int:
    try:
        value = int(segment.strip())
    except ValueError:
        raise FormatError(f"Invalid {label} {segment!r}. {_EXPECTED}.") from None
    return value


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Reference:
    """A scripture reference such as John 3:16 or Proverbs 3:5-6.

    Fields:
    - book: book name, may contain spaces ("1 John", "Song of Solomon")
    - chapter: chapter number
    - start_verse: first verse
    - end_verse: last verse (equal to start_verse for a single verse)
    """

    book: str
    chapter: int
    start_verse: int
    end_verse: int | None = None

    def __post_init__(self) -> None:
        if self.end_verse is None:
            object.__setattr__(self, "end_verse", self.start_verse)
        book = (self.book or "").strip()
        if not book:
            raise FormatError("Book name must be a non-empty string.")
        object.__setattr__(self, "book", book)
        for label, value in (("chapter", self.chapter), ("start verse", self.start_verse), ("end verse", self.end_verse)):
            if value < 1:
                raise FormatError(f"{label.capitalize()} must be a positive integer, got {value}.")
        if self.start_verse > self.end_verse:
            raise FormatError(
                f"Start verse {self.start_verse} is after end verse {self.end_verse}."
            )

    @property
    def is_verse_range(self) -> bool:
        return self.start_verse != self.end_verse

    @classmethod
    def parse(cls, value: str) -> "Reference":
        return parse_reference(value)

    def __str__(self) -> str:
        return render_reference(self)


# PUBLIC_INTERFACE
def parse_reference(value: str) -> Reference:
    """Parse "<book> <chapter>:<start>[-<end>]" into a Reference.

    The book name is everything before the last space.

    Raises:
        FormatError: when there is no space, the chapter/verse part does not
            have exactly one colon, a number does not parse, or the range is
            reversed.
    """
    text = (value or "").strip()
    book, sep, chapter_verse = text.rpartition(" ")
    if not sep:
        raise FormatError(f"Invalid reference {value!r}. {_EXPECTED}.")

    parts = chapter_verse.split(":")
    if len(parts) != 2:
        raise FormatError(f"Invalid chapter:verse {chapter_verse!r}. {_EXPECTED}.")

    chapter = _parse_number(parts[0], "chapter")
    verse_part = parts[1]
    if "-" in verse_part:
        verses = verse_part.split("-")
        if len(verses) != 2:
            raise FormatError(f"Invalid verse range {verse_part!r}. {_EXPECTED}.")
        start = _parse_number(verses[0], "start verse")
        end = _parse_number(verses[1], "end verse")
    else:
        start = end = _parse_number(verse_part, "verse")

    return Reference(book=book.strip(), chapter=chapter, start_verse=start, end_verse=end)


# PUBLIC_INTERFACE
def render_reference(reference: Reference) -> str:
    """Render a Reference back to its canonical string form."""
    if reference.is_verse_range:
        return f"{reference.book} {reference.chapter}:{reference.start_verse}-{reference.end_verse}"
    return f"{reference.book} {reference.chapter}:{reference.start_verse}"
