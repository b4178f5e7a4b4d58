import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Scripture",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, help_text="Time when the record was created.")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Time when the record was last updated.")),
                ("book", models.CharField(db_index=True, help_text="Book name, e.g. 'John' or '1 Peter'.", max_length=64)),
                ("chapter", models.PositiveSmallIntegerField()),
                ("start_verse", models.PositiveSmallIntegerField()),
                ("end_verse", models.PositiveSmallIntegerField()),
                ("text", models.TextField(help_text="Scripture text; words are split on whitespace.")),
                ("is_active", models.BooleanField(default=True, help_text="If true, can be picked for new practice sessions.")),
            ],
            options={
                "verbose_name": "Scripture",
                "verbose_name_plural": "Scriptures",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="PracticeSession",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, help_text="Time when the record was created.")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Time when the record was last updated.")),
                ("hidden_indices", models.JSONField(blank=True, default=list, help_text="Indices of hidden words.")),
                ("difficulty", models.CharField(default="medium", help_text="Difficulty level name.", max_length=16)),
                ("words_per_round", models.PositiveSmallIntegerField(default=3, help_text="Words hidden per round.")),
                ("hints_used", models.IntegerField(default=0, help_text="Number of hints used in this session.")),
                ("rounds_played", models.IntegerField(default=0, help_text="Number of hide rounds applied.")),
                ("is_completed", models.BooleanField(default=False)),
                ("started_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("ended_at", models.DateTimeField(blank=True, null=True)),
                (
                    "scripture",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="practice_sessions",
                        to="memorizer.scripture",
                    ),
                ),
            ],
            options={
                "verbose_name": "Practice Session",
                "verbose_name_plural": "Practice Sessions",
                "ordering": ["-created_at"],
            },
        ),
    ]
