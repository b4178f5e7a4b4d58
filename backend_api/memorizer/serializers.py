from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from .models import PracticeSession, Scripture
from .scripture import DEFAULT_DIFFICULTY, DifficultyRegistry


def _difficulty_choices():
    return [(d.name, d.name) for d in DifficultyRegistry.all()]


def _get_session(session_id: int) -> PracticeSession:
    try:
        return PracticeSession.objects.select_related("scripture").get(pk=session_id)
    except PracticeSession.DoesNotExist:
        raise serializers.ValidationError({"session_id": "Session not found."})


# PUBLIC_INTERFACE
class ScriptureSerializer(serializers.ModelSerializer):
    """A stored scripture with its rendered reference."""

    reference = serializers.SerializerMethodField()
    word_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Scripture
        fields = ["id", "reference", "text", "word_count"]

    def get_reference(self, obj: Scripture) -> str:
        return str(obj.reference)


# PUBLIC_INTERFACE
class StartPracticeRequestSerializer(serializers.Serializer):
    """Request payload to start a practice session.

    Fields:
    - scripture_id (optional): scripture to practice; random active one if omitted
    - difficulty (optional, default 'medium'): easy | medium | hard
    - words_per_round (optional): custom words hidden per round, overrides difficulty
    """

    scripture_id = serializers.IntegerField(required=False, allow_null=True)
    difficulty = serializers.ChoiceField(required=False, choices=[], default=DEFAULT_DIFFICULTY)
    words_per_round = serializers.IntegerField(required=False, min_value=1, max_value=50, allow_null=True)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Resolve lazily so levels registered after import are accepted.
        self.fields["difficulty"].choices = _difficulty_choices()

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        scripture_id = attrs.get("scripture_id")
        if scripture_id is not None:
            try:
                attrs["scripture"] = Scripture.objects.get(pk=scripture_id, is_active=True)
            except Scripture.DoesNotExist:
                raise serializers.ValidationError({"scripture_id": "Scripture not found."})

        custom = attrs.get("words_per_round")
        if custom:
            attrs["level"] = DifficultyRegistry.custom(custom)
        else:
            attrs["level"] = DifficultyRegistry.get(attrs.get("difficulty") or DEFAULT_DIFFICULTY)
        return attrs


# PUBLIC_INTERFACE
class SessionActionRequestSerializer(serializers.Serializer):
    """Request payload for hide/hint/reset on an existing session."""

    session_id = serializers.IntegerField()

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        attrs["session"] = _get_session(attrs["session_id"])
        return attrs


# PUBLIC_INTERFACE
class SessionStateSerializer(serializers.Serializer):
    """Current state of a practice session."""

    session_id = serializers.IntegerField()
    scripture_id = serializers.IntegerField()
    reference = serializers.CharField()
    display_text = serializers.CharField(help_text="Text with hidden words shown as underscores.")
    hidden_count = serializers.IntegerField()
    visible_count = serializers.IntegerField()
    total_count = serializers.IntegerField()
    percent_hidden = serializers.IntegerField()
    is_completed = serializers.BooleanField()
    difficulty = serializers.CharField()
    words_per_round = serializers.IntegerField()
    hints_used = serializers.IntegerField()
    rounds_played = serializers.IntegerField()


# PUBLIC_INTERFACE
class HideResponseSerializer(SessionStateSerializer):
    """Session state after a hide round."""

    hidden_this_round = serializers.IntegerField()


# PUBLIC_INTERFACE
class HintResponseSerializer(SessionStateSerializer):
    """Session state after a hint request."""

    revealed = serializers.BooleanField(help_text="False when no word was hidden.")


# PUBLIC_INTERFACE
class DifficultySerializer(serializers.Serializer):
    name = serializers.CharField()
    words_per_round = serializers.IntegerField()
