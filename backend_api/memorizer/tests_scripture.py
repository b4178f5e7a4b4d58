import os
import random
import tempfile

from django.test import SimpleTestCase

from memorizer.scripture import (
    DifficultyRegistry,
    FormatError,
    Library,
    Reference,
    WordHidingSession,
    parse_reference,
    render_reference,
)

JOHN_3_16 = (
    "For God so loved the world, that he gave his only begotten Son, that whosoever "
    "believeth in him should not perish, but have everlasting life."
)


class WordHidingSessionTests(SimpleTestCase):
    def setUp(self):
        self.session = WordHidingSession.from_text(JOHN_3_16, rng=random.Random(7))
        self.total = len(JOHN_3_16.split())

    def test_starts_fully_visible(self):
        progress = self.session.progress()
        self.assertEqual(progress.total_count, self.total)
        self.assertEqual(progress.hidden_count, 0)
        self.assertEqual(progress.visible_count, self.total)
        self.assertFalse(self.session.is_complete())
        self.assertEqual(self.session.render(), JOHN_3_16)

    def test_hide_one_at_a_time_completes_after_n_calls(self):
        for _ in range(self.total):
            self.assertEqual(self.session.hide_random(1), 1)
        self.assertTrue(self.session.is_complete())
        self.assertEqual(self.session.progress().hidden_count, self.total)
        self.assertEqual(self.session.hide_random(1), 0)

    def test_hide_never_rehides(self):
        hidden_total = 0
        for count in (3, 5, 2, 7, 100):
            hidden_total += self.session.hide_random(count)
            self.assertEqual(self.session.progress().hidden_count, hidden_total)
        self.assertEqual(hidden_total, self.total)

    def test_hide_caps_at_visible_count(self):
        self.session.hide_random(self.total - 2)
        self.assertEqual(self.session.hide_random(10), 2)

    def test_hide_non_positive_count_is_noop(self):
        self.assertEqual(self.session.hide_random(0), 0)
        self.assertEqual(self.session.hide_random(-3), 0)
        self.assertEqual(self.session.progress().hidden_count, 0)

    def test_hint_with_nothing_hidden_changes_nothing(self):
        before = self.session.render()
        self.assertFalse(self.session.hint())
        self.assertEqual(self.session.render(), before)

    def test_hint_reveals_exactly_one(self):
        self.session.hide_random(4)
        self.assertTrue(self.session.hint())
        self.assertEqual(self.session.progress().hidden_count, 3)

    def test_render_hidden_tokens_as_underscores(self):
        session = WordHidingSession(["Jesus", "wept."], rng=random.Random(1))
        session.hide_random(2)
        self.assertEqual(session.render(), "_____ _____")

    def test_reset_restores_original_text(self):
        self.session.hide_random(10)
        self.session.reset()
        self.assertEqual(self.session.render(), JOHN_3_16)
        self.assertEqual(self.session.progress().hidden_count, 0)

    def test_whitespace_runs_collapse(self):
        session = WordHidingSession.from_text("  Jesus \n\t wept.  ")
        self.assertEqual(len(session), 2)
        self.assertEqual(session.render(), "Jesus wept.")

    def test_empty_session_is_noop(self):
        session = WordHidingSession([])
        self.assertEqual(session.hide_random(3), 0)
        self.assertFalse(session.hint())
        self.assertEqual(session.render(), "")
        self.assertEqual(session.progress().percent_hidden, 0)
        self.assertTrue(session.is_complete())

    def test_token_text_is_read_only(self):
        token = self.session.tokens[0]
        with self.assertRaises(AttributeError):
            token.text = "Changed"
        token.hide()
        self.assertEqual(self.session.original_text(), JOHN_3_16)

    def test_restore_ignores_out_of_range(self):
        self.session.restore([0, 2, 999, -1])
        self.assertEqual(self.session.hidden_indices(), [0, 2])

    def test_same_seed_same_choices(self):
        a = WordHidingSession.from_text(JOHN_3_16, rng=random.Random(42))
        b = WordHidingSession.from_text(JOHN_3_16, rng=random.Random(42))
        a.hide_random(5)
        b.hide_random(5)
        self.assertEqual(a.hidden_indices(), b.hidden_indices())


class ReferenceTests(SimpleTestCase):
    def test_parse_single_verse(self):
        ref = parse_reference("John 3:16")
        self.assertEqual(ref, Reference("John", 3, 16, 16))
        self.assertFalse(ref.is_verse_range)
        self.assertEqual(render_reference(ref), "John 3:16")

    def test_parse_verse_range(self):
        ref = parse_reference("Proverbs 3:5-6")
        self.assertEqual((ref.book, ref.chapter, ref.start_verse, ref.end_verse), ("Proverbs", 3, 5, 6))
        self.assertTrue(ref.is_verse_range)
        self.assertEqual(str(ref), "Proverbs 3:5-6")

    def test_book_with_spaces(self):
        ref = Reference.parse("Song of Solomon 2:4")
        self.assertEqual(ref.book, "Song of Solomon")
        self.assertEqual(ref.chapter, 2)

    def test_invalid_strings(self):
        invalid = [
            "Invalid", "John 3", "John 3:16:1", "John x:16", "John 3:a", "John 3:5-",
            "John 3:1-2-3", " 3:16", "", "John 0:1", "John 3:0", "John 3:0-2",
        ]
        for value in invalid:
            with self.subTest(value=value):
                with self.assertRaises(FormatError):
                    parse_reference(value)

    def test_reversed_range_rejected(self):
        with self.assertRaises(FormatError):
            parse_reference("Psalm 23:3-1")
        with self.assertRaises(FormatError):
            Reference("John", 3, 5, 4)

    def test_non_positive_numbers_rejected(self):
        for args in [("John", 0, 1), ("John", 3, 0), ("John", 3, 0, 2), ("John", -1, 5)]:
            with self.subTest(args=args):
                with self.assertRaises(FormatError):
                    Reference(*args)

    def test_book_is_stripped(self):
        ref = Reference(" John ", 3, 16)
        self.assertEqual(ref.book, "John")
        self.assertEqual(ref, parse_reference(str(ref)))
        with self.assertRaises(FormatError):
            Reference("   ", 3, 16)

    def test_format_error_is_value_error(self):
        self.assertTrue(issubclass(FormatError, ValueError))


class LibraryTests(SimpleTestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, "scriptures.txt")

    def _write(self, content):
        with open(self.path, "w", encoding="utf-8") as fh:
            fh.write(content)

    def test_get_out_of_range(self):
        library = Library()
        library.add(Reference("John", 11, 35), "Jesus wept.")
        self.assertEqual(library.get(0).text, "Jesus wept.")
        with self.assertRaises(IndexError):
            library.get(-1)
        with self.assertRaises(IndexError):
            library.get(library.count)

    def test_random_entry(self):
        self.assertIsNone(Library().random_entry())
        library = Library(rng=random.Random(3))
        library.load_defaults()
        self.assertIn(library.random_entry(), list(library))

    def test_load_defaults(self):
        library = Library()
        self.assertEqual(library.load_defaults(), 8)
        self.assertEqual(library.references()[:2], ["John 3:16", "Proverbs 3:5-6"])

    def test_round_trip_ignores_hidden_state(self):
        library = Library(rng=random.Random(5))
        library.load_defaults()
        library.get(0).session.hide_random(6)
        library.get(5).session.hide_random(100)
        originals = [(e.reference, e.text) for e in library]

        library.save_to_file(self.path)
        self.assertEqual(library.get(5).session.progress().hidden_count, 0)

        loaded = Library()
        self.assertEqual(loaded.load_from_file(self.path), len(originals))
        self.assertEqual([(e.reference, e.text) for e in loaded], originals)

    def test_save_skips_entries_without_words(self):
        library = Library()
        library.add(Reference("John", 11, 35), "   ")
        library.add(Reference("Romans", 8, 28), "And we know.")
        with self.assertLogs("memorizer.scripture.library", level="WARNING"):
            library.save_to_file(self.path)

        loaded = Library()
        self.assertEqual(loaded.load_from_file(self.path), 1)
        self.assertEqual([(str(e.reference), e.text) for e in loaded], [("Romans 8:28", "And we know.")])

    def test_round_trip_keeps_padded_book_equal(self):
        library = Library()
        library.add(Reference("1 John ", 4, 8), "God is love.")
        library.save_to_file(self.path)
        loaded = Library()
        loaded.load_from_file(self.path)
        self.assertEqual(loaded.get(0).reference, library.get(0).reference)

    def test_save_format(self):
        library = Library()
        library.add(Reference("John", 11, 35), "Jesus   wept.")
        library.add(Reference("Proverbs", 3, 5, 6), "Trust in the Lord.")
        library.save_to_file(self.path)
        with open(self.path, encoding="utf-8") as fh:
            self.assertEqual(fh.read(), "John 11:35\nJesus wept.\n\nProverbs 3:5-6\nTrust in the Lord.\n")

    def test_load_joins_lines_and_skips_malformed(self):
        self._write(
            "\n\nJohn 3:16\nFor God so loved\n  the world.\n\n"
            "Not a reference\nSome text here.\n\n"
            "Psalm 23:1-3\n\nThe Lord is my shepherd.\n\n"
            "Romans 8:28\n"
        )
        library = Library()
        with self.assertLogs("memorizer.scripture.library", level="WARNING"):
            loaded = library.load_from_file(self.path)
        self.assertEqual(loaded, 2)
        self.assertEqual(library.references(), ["John 3:16", "Psalm 23:1-3"])
        self.assertEqual(library.get(0).text, "For God so loved the world.")

    def test_load_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            Library().load_from_file(os.path.join(self.tmp.name, "missing.txt"))

    def test_entries_share_library_rng(self):
        a, b = Library(rng=random.Random(9)), Library(rng=random.Random(9))
        a.load_defaults()
        b.load_defaults()
        a.get(1).session.hide_random(4)
        b.get(1).session.hide_random(4)
        self.assertEqual(a.get(1).session.hidden_indices(), b.get(1).session.hidden_indices())


class DifficultyRegistryTests(SimpleTestCase):
    def test_builtin_levels(self):
        self.assertEqual(DifficultyRegistry.get("easy").words_per_round, 2)
        self.assertEqual(DifficultyRegistry.get(" HARD ").words_per_round, 5)
        self.assertEqual([d.name for d in DifficultyRegistry.all()][:3], ["easy", "medium", "hard"])

    def test_unknown_level(self):
        with self.assertRaises(KeyError):
            DifficultyRegistry.get("impossible")

    def test_custom_level(self):
        self.assertEqual(DifficultyRegistry.custom(4).words_per_round, 4)
        with self.assertRaises(ValueError):
            DifficultyRegistry.custom(0)
