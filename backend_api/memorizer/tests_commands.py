import os
import tempfile
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, override_settings

from memorizer.models import PracticeSession, Scripture
from memorizer.scripture import Library


class ScriptureCommandTests(TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, "scriptures.txt")

    def test_seed_is_idempotent(self):
        out = StringIO()
        call_command("seed_scriptures", stdout=out)
        self.assertEqual(Scripture.objects.count(), 8)
        call_command("seed_scriptures", stdout=out)
        self.assertEqual(Scripture.objects.count(), 8)
        self.assertIn("already present", out.getvalue())

    def test_load_scriptures(self):
        with open(self.path, "w", encoding="utf-8") as fh:
            fh.write("John 11:35\nJesus wept.\n\nbad line\ntext\n\n1 Peter 5:7\nCasting all your care\nupon him.\n")
        out = StringIO()
        call_command("load_scriptures", self.path, stdout=out)
        self.assertIn("Loaded 2 scriptures", out.getvalue())
        self.assertEqual([str(s) for s in Scripture.objects.order_by("id")], ["John 11:35", "1 Peter 5:7"])
        self.assertEqual(Scripture.objects.get(book="1 Peter").text, "Casting all your care upon him.")

    def test_load_replace_deactivates_existing(self):
        call_command("seed_scriptures", stdout=StringIO())
        PracticeSession.objects.create(scripture=Scripture.objects.first())
        with open(self.path, "w", encoding="utf-8") as fh:
            fh.write("John 11:35\nJesus wept.\n")
        call_command("load_scriptures", self.path, "--replace", stdout=StringIO())
        self.assertEqual(Scripture.objects.filter(is_active=True).count(), 1)
        self.assertEqual(Scripture.objects.count(), 9)

    def test_load_missing_file(self):
        with self.assertRaises(CommandError):
            call_command("load_scriptures", os.path.join(self.tmp.name, "missing.txt"), stdout=StringIO())

    def test_export_round_trip(self):
        call_command("seed_scriptures", stdout=StringIO())
        with override_settings(SCRIPTURE_LIBRARY_PATH=self.path):
            call_command("export_scriptures", stdout=StringIO())

        library = Library()
        self.assertEqual(library.load_from_file(self.path), 8)
        expected = [(str(s.reference), s.text) for s in Scripture.objects.order_by("id")]
        self.assertEqual([(str(e.reference), e.text) for e in library], expected)
