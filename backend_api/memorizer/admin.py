from django.contrib import admin

from .models import Scripture, PracticeSession


@admin.register(Scripture)
class ScriptureAdmin(admin.ModelAdmin):
    list_display = ("__str__", "book", "chapter", "start_verse", "end_verse", "is_active", "created_at")
    list_filter = ("is_active", "book")
    search_fields = ("book", "text")
    ordering = ("id",)


@admin.register(PracticeSession)
class PracticeSessionAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "scripture",
        "difficulty",
        "words_per_round",
        "rounds_played",
        "hints_used",
        "is_completed",
        "started_at",
        "ended_at",
    )
    list_filter = ("is_completed", "difficulty")
    search_fields = ("scripture__book", "scripture__text")
    readonly_fields = ("hidden_indices", "created_at", "updated_at")
