from django.core.management.base import BaseCommand
from memorizer.models import Scripture
from memorizer.seed_utils import ensure_default_scriptures


class Command(BaseCommand):
    help = "Seed the built-in scriptures if the Scriptures table is empty."

    def handle(self, *args, **options):
        # PUBLIC_INTERFACE
        # This command is idempotent and safe to run multiple times.
        count_before = Scripture.objects.count()
        if count_before > 0:
            self.stdout.write(self.style.WARNING(f"Scriptures already present: {count_before}. No action taken."))
            return

        inserted = ensure_default_scriptures()
        self.stdout.write(self.style.SUCCESS(f"Seeded {inserted} scriptures."))
