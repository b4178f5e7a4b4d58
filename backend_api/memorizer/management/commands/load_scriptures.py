from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from memorizer.models import Scripture
from memorizer.scripture import Library
from memorizer.seed_utils import store_library


class Command(BaseCommand):
    help = "Load scriptures from a library file (reference line, text lines, blank line)."

    def add_arguments(self, parser):
        parser.add_argument(
            "path",
            nargs="?",
            default=None,
            help="Library file to read. Defaults to settings.SCRIPTURE_LIBRARY_PATH.",
        )
        parser.add_argument(
            "--replace",
            action="store_true",
            help="Deactivate existing scriptures before loading.",
        )

    def handle(self, *args, **options):
        # PUBLIC_INTERFACE
        path = options["path"] or settings.SCRIPTURE_LIBRARY_PATH
        library = Library()
        try:
            loaded = library.load_from_file(path)
        except FileNotFoundError as e:
            raise CommandError(str(e)) from e

        with transaction.atomic():
            if options["replace"]:
                # PracticeSession.scripture is PROTECT; deactivate rather than delete.
                Scripture.objects.filter(is_active=True).update(is_active=False)
            store_library(library)

        self.stdout.write(self.style.SUCCESS(f"Loaded {loaded} scriptures from {path}."))
