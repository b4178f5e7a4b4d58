from django.apps import AppConfig


class MemorizerConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "memorizer"
    verbose_name = "Scripture Memorizer"
