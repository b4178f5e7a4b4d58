from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from .scripture import FormatError, Reference, WordHidingSession, render_reference


# PUBLIC_INTERFACE
class TimeStampedModel(models.Model):
    """Abstract base model providing created/updated timestamps.

    Notes:
        Only field declarations and Meta options live here so that importing
        this module does not trigger AppRegistryNotReady during Django startup.
    """
    created_at = models.DateTimeField(auto_now_add=True, help_text="Time when the record was created.")
    updated_at = models.DateTimeField(auto_now=True, help_text="Time when the record was last updated.")

    class Meta:
        abstract = True


# PUBLIC_INTERFACE
class Scripture(TimeStampedModel):
    """A stored scripture text with its reference.

    Fields:
    - book, chapter, start_verse, end_verse: the reference parts
    - text: full text, whitespace-normalized
    - is_active: whether this scripture can be picked for new practice sessions
    """
    book = models.CharField(max_length=64, db_index=True, help_text="Book name, e.g. 'John' or '1 Peter'.")
    chapter = models.PositiveSmallIntegerField()
    start_verse = models.PositiveSmallIntegerField()
    end_verse = models.PositiveSmallIntegerField()
    text = models.TextField(help_text="Scripture text; words are split on whitespace.")
    is_active = models.BooleanField(default=True, help_text="If true, can be picked for new practice sessions.")

    class Meta:
        ordering = ["id"]
        verbose_name = "Scripture"
        verbose_name_plural = "Scriptures"

    def save(self, *args, **kwargs):
        # Normalize whitespace runs so token boundaries round-trip
        if self.text:
            self.text = " ".join(self.text.split())
        if self.end_verse is None:
            self.end_verse = self.start_verse
        super().save(*args, **kwargs)

    def clean(self):
        """Reject rows whose reference or text could not be read back."""
        super().clean()
        if not (self.text or "").split():
            raise ValidationError({"text": "Scripture text must contain at least one word."})
        # Missing numbers are already reported by clean_fields().
        if self.chapter is None or self.start_verse is None:
            return
        try:
            self.reference
        except FormatError as e:
            raise ValidationError(str(e)) from e

    @property
    def reference(self) -> Reference:
        return Reference(self.book, self.chapter, self.start_verse, self.end_verse)

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @classmethod
    def from_reference(cls, reference: Reference, text: str) -> "Scripture":
        """Build an unsaved instance from a core Reference."""
        return cls(
            book=reference.book,
            chapter=reference.chapter,
            start_verse=reference.start_verse,
            end_verse=reference.end_verse,
            text=text,
        )

    def __str__(self) -> str:  # pragma: no cover
        return render_reference(self.reference)


# PUBLIC_INTERFACE
class PracticeSession(TimeStampedModel):
    """One practice run over a scripture's words.

    Fields:
    - scripture: the text being memorized
    - hidden_indices: JSON list of token indices currently hidden
    - difficulty: difficulty name (easy, medium, hard or custom)
    - words_per_round: how many words one round hides
    - hints_used: number of hints consumed in this session
    - rounds_played: number of hide rounds applied
    - is_completed: whether every word is hidden
    - started_at / ended_at: session timing
    """
    scripture = models.ForeignKey(Scripture, on_delete=models.PROTECT, related_name="practice_sessions")
    hidden_indices = models.JSONField(default=list, blank=True, help_text="Indices of hidden words.")
    difficulty = models.CharField(max_length=16, default="medium", help_text="Difficulty level name.")
    words_per_round = models.PositiveSmallIntegerField(default=3, help_text="Words hidden per round.")
    hints_used = models.IntegerField(default=0, help_text="Number of hints used in this session.")
    rounds_played = models.IntegerField(default=0, help_text="Number of hide rounds applied.")
    is_completed = models.BooleanField(default=False)
    started_at = models.DateTimeField(default=timezone.now)
    ended_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Practice Session"
        verbose_name_plural = "Practice Sessions"

    def build_session(self, rng=None) -> WordHidingSession:
        """Rebuild the in-memory word state from the stored hidden indices."""
        session = WordHidingSession.from_text(self.scripture.text, rng=rng)
        session.restore(self.hidden_indices or [])
        return session

    def store_session(self, session: WordHidingSession) -> None:
        """Copy word state back onto the model and update completion; does not save."""
        self.hidden_indices = session.hidden_indices()
        completed = session.is_complete()
        if completed and not self.is_completed:
            self.ended_at = timezone.now()
        elif not completed:
            self.ended_at = None
        self.is_completed = completed

    def __str__(self) -> str:  # pragma: no cover
        return f"Practice #{self.pk} - {self.scripture}"
