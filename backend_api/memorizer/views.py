from __future__ import annotations

import logging
import random
from typing import Any, Dict

from django.conf import settings
from django.db import transaction
from drf_yasg.utils import swagger_auto_schema
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from .models import PracticeSession, Scripture
from .scripture import DifficultyRegistry, WordHidingSession
from .serializers import (
    DifficultySerializer,
    HideResponseSerializer,
    HintResponseSerializer,
    ScriptureSerializer,
    SessionActionRequestSerializer,
    SessionStateSerializer,
    StartPracticeRequestSerializer,
)

logger = logging.getLogger(__name__)


def _rng() -> random.Random:
    """Random source for one request."""
    return random.Random()


def _session_state(practice: PracticeSession, words: WordHidingSession) -> Dict[str, Any]:
    """Public state payload for a practice session."""
    progress = words.progress()
    return {
        "session_id": practice.id,
        "scripture_id": practice.scripture_id,
        "reference": str(practice.scripture.reference),
        "display_text": words.render(),
        "hidden_count": progress.hidden_count,
        "visible_count": progress.visible_count,
        "total_count": progress.total_count,
        "percent_hidden": progress.percent_hidden,
        "is_completed": practice.is_completed,
        "difficulty": practice.difficulty,
        "words_per_round": practice.words_per_round,
        "hints_used": practice.hints_used,
        "rounds_played": practice.rounds_played,
    }


def _ensure_can_use_hint(practice: PracticeSession) -> None:
    """Raise ValueError when the configured per-session hint cap is reached."""
    max_hints = getattr(settings, "SCRIPTURE_MAX_HINTS", 0)
    if max_hints and practice.hints_used >= max_hints:
        raise ValueError("Maximum hints used for this session.")


# PUBLIC_INTERFACE
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def health(request):
    """Health check endpoint for the API.

    Returns:
    - 200 OK with {"message": "Server is up!"}
    """
    return Response({"message": "Server is up!"})


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="list_scriptures",
    operation_summary="List scriptures",
    operation_description="Returns active scriptures in insertion order.",
    responses={200: ScriptureSerializer(many=True)},
    tags=["library"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def list_scriptures(request):
    """List active scriptures available for practice."""
    qs = Scripture.objects.filter(is_active=True).order_by("id")
    return Response(ScriptureSerializer(qs, many=True).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="list_difficulties",
    operation_summary="List difficulty levels",
    operation_description="Returns named difficulty levels and how many words each round hides.",
    responses={200: DifficultySerializer(many=True)},
    tags=["meta"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def list_difficulties(request):
    """List the registered difficulty levels."""
    levels = [{"name": d.name, "words_per_round": d.words_per_round} for d in DifficultyRegistry.all()]
    return Response(DifficultySerializer(levels, many=True).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="start_practice",
    operation_summary="Start a practice session",
    operation_description="""
Create a practice session over a scripture with every word visible.

Request body:
- scripture_id (int, optional): random active scripture if omitted
- difficulty (optional, default 'medium'): easy | medium | hard
- words_per_round (int, optional): custom count, overrides difficulty

Response: session state.
""",
    request_body=StartPracticeRequestSerializer,
    responses={200: SessionStateSerializer},
    tags=["practice"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def start_practice(request):
    """Start a new practice session."""
    serializer = StartPracticeRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    vd = serializer.validated_data

    scripture = vd.get("scripture")
    if scripture is None:
        scripture = Scripture.objects.filter(is_active=True).order_by("?").first()
    if not scripture:
        return Response(
            {"error": "No scriptures available to practice."},
            status=status.HTTP_400_BAD_REQUEST,
        )

    level = vd["level"]
    practice = PracticeSession.objects.create(
        scripture=scripture,
        difficulty=level.name,
        words_per_round=level.words_per_round,
    )
    logger.info("Started practice %s on %s (%s)", practice.id, scripture, level.name)

    words = practice.build_session()
    return Response(SessionStateSerializer(_session_state(practice, words)).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="hide_words",
    operation_summary="Hide a round of words",
    operation_description="""
Hide up to words_per_round random words that are still visible.
A completed session is returned unchanged with hidden_this_round = 0.
""",
    request_body=SessionActionRequestSerializer,
    responses={200: HideResponseSerializer},
    tags=["practice"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def hide_words(request):
    """Apply one hide round to a session."""
    serializer = SessionActionRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    practice: PracticeSession = serializer.validated_data["session"]

    words = practice.build_session(rng=_rng())
    with transaction.atomic():
        hidden = words.hide_random(practice.words_per_round)
        if hidden:
            practice.rounds_played += 1
        was_completed = practice.is_completed
        practice.store_session(words)
        practice.save()

    if practice.is_completed and not was_completed:
        logger.info("Practice %s completed after %d round(s)", practice.id, practice.rounds_played)

    resp = _session_state(practice, words)
    resp["hidden_this_round"] = hidden
    return Response(HideResponseSerializer(resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="request_hint",
    operation_summary="Reveal one hidden word",
    operation_description="""
Reveal one random hidden word. revealed is false when nothing was hidden;
hints_used only counts successful reveals. Returns 400 when the configured
per-session hint limit (SCRIPTURE_MAX_HINTS) is reached.
""",
    request_body=SessionActionRequestSerializer,
    responses={200: HintResponseSerializer},
    tags=["practice"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def request_hint(request):
    """Reveal one hidden word of a session."""
    serializer = SessionActionRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    practice: PracticeSession = serializer.validated_data["session"]

    try:
        _ensure_can_use_hint(practice)
    except ValueError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

    words = practice.build_session(rng=_rng())
    with transaction.atomic():
        revealed = words.hint()
        if revealed:
            practice.hints_used += 1
            practice.store_session(words)
            practice.save()

    resp = _session_state(practice, words)
    resp["revealed"] = revealed
    return Response(HintResponseSerializer(resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="reset_practice",
    operation_summary="Restart a practice session",
    operation_description="Make every word visible again and clear completion.",
    request_body=SessionActionRequestSerializer,
    responses={200: SessionStateSerializer},
    tags=["practice"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def reset_practice(request):
    """Reset a session so all words are visible."""
    serializer = SessionActionRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    practice: PracticeSession = serializer.validated_data["session"]

    words = practice.build_session()
    words.reset()
    with transaction.atomic():
        practice.store_session(words)
        practice.save()

    return Response(SessionStateSerializer(_session_state(practice, words)).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="practice_detail",
    operation_summary="Get practice session state",
    operation_description="""
Fetch the current display text and progress of a session.

Path parameters:
- session_id (int): Session identifier.
""",
    responses={200: SessionStateSerializer},
    tags=["practice"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def get_practice_detail(request, session_id: int):
    """Retrieve a practice session by ID."""
    try:
        practice = PracticeSession.objects.select_related("scripture").get(pk=session_id)
    except PracticeSession.DoesNotExist:
        return Response({"error": "Session not found."}, status=status.HTTP_404_NOT_FOUND)

    words = practice.build_session()
    return Response(SessionStateSerializer(_session_state(practice, words)).data, status=status.HTTP_200_OK)
