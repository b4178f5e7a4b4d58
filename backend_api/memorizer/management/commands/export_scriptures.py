from django.conf import settings
from django.core.management.base import BaseCommand

from memorizer.seed_utils import library_from_db


class Command(BaseCommand):
    help = "Write all active scriptures to a library file."

    def add_arguments(self, parser):
        parser.add_argument(
            "path",
            nargs="?",
            default=None,
            help="Library file to write. Defaults to settings.SCRIPTURE_LIBRARY_PATH.",
        )

    def handle(self, *args, **options):
        # PUBLIC_INTERFACE
        path = options["path"] or settings.SCRIPTURE_LIBRARY_PATH
        library = library_from_db()
        library.save_to_file(path)
        self.stdout.write(self.style.SUCCESS(f"Exported {len(library)} scriptures to {path}."))
