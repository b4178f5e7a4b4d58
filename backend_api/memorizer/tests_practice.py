import random
from unittest import mock

from django.core.exceptions import ValidationError
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APITestCase

from memorizer.models import PracticeSession, Scripture
from memorizer.scripture import Reference
from memorizer.seed_utils import ensure_default_scriptures


class PracticeFlowTests(APITestCase):
    def setUp(self):
        self.scripture = Scripture.from_reference(Reference("John", 11, 35), "Jesus wept  and prayed.")
        self.scripture.save()
        patcher = mock.patch("memorizer.views._rng", side_effect=lambda: random.Random(11))
        patcher.start()
        self.addCleanup(patcher.stop)

    def _start(self, **payload):
        payload.setdefault("scripture_id", self.scripture.id)
        resp = self.client.post(reverse("start-practice"), payload, format="json")
        self.assertEqual(resp.status_code, 200)
        return resp.json()

    def test_start_practice_success(self):
        data = self._start(difficulty="easy")
        self.assertEqual(data["reference"], "John 11:35")
        self.assertEqual(data["display_text"], "Jesus wept and prayed.")
        self.assertEqual(data["total_count"], 4)
        self.assertEqual(data["hidden_count"], 0)
        self.assertEqual(data["words_per_round"], 2)
        self.assertFalse(data["is_completed"])

    def test_start_random_scripture(self):
        resp = self.client.post(reverse("start-practice"), {}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["scripture_id"], self.scripture.id)
        self.assertEqual(resp.json()["difficulty"], "medium")

    def test_start_without_scriptures(self):
        Scripture.objects.update(is_active=False)
        resp = self.client.post(reverse("start-practice"), {}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.json())

    def test_start_unknown_scripture(self):
        resp = self.client.post(reverse("start-practice"), {"scripture_id": 9999}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_custom_words_per_round(self):
        data = self._start(words_per_round=3)
        self.assertEqual(data["difficulty"], "custom")
        self.assertEqual(data["words_per_round"], 3)

    def test_hide_until_complete_then_reset(self):
        session_id = self._start(difficulty="easy")["session_id"]

        first = self.client.post(reverse("hide-words"), {"session_id": session_id}, format="json").json()
        self.assertEqual(first["hidden_this_round"], 2)
        self.assertEqual(first["percent_hidden"], 50)
        self.assertFalse(first["is_completed"])

        second = self.client.post(reverse("hide-words"), {"session_id": session_id}, format="json").json()
        self.assertEqual(second["hidden_this_round"], 2)
        self.assertTrue(second["is_completed"])
        self.assertEqual(second["display_text"], "_____ ____ ___ _______")
        self.assertEqual(second["rounds_played"], 2)

        third = self.client.post(reverse("hide-words"), {"session_id": session_id}, format="json").json()
        self.assertEqual(third["hidden_this_round"], 0)
        self.assertEqual(third["rounds_played"], 2)

        reset = self.client.post(reverse("reset-practice"), {"session_id": session_id}, format="json").json()
        self.assertEqual(reset["display_text"], "Jesus wept and prayed.")
        self.assertFalse(reset["is_completed"])
        self.assertIsNone(PracticeSession.objects.get(pk=session_id).ended_at)

    def test_hint(self):
        session_id = self._start(difficulty="medium")["session_id"]

        nothing = self.client.post(reverse("request-hint"), {"session_id": session_id}, format="json").json()
        self.assertFalse(nothing["revealed"])
        self.assertEqual(nothing["hints_used"], 0)

        self.client.post(reverse("hide-words"), {"session_id": session_id}, format="json")
        hint = self.client.post(reverse("request-hint"), {"session_id": session_id}, format="json").json()
        self.assertTrue(hint["revealed"])
        self.assertEqual(hint["hidden_count"], 2)
        self.assertEqual(hint["hints_used"], 1)
        self.assertEqual(len(PracticeSession.objects.get(pk=session_id).hidden_indices), 2)

    @override_settings(SCRIPTURE_MAX_HINTS=1)
    def test_hint_limit(self):
        session_id = self._start(difficulty="hard")["session_id"]
        self.client.post(reverse("hide-words"), {"session_id": session_id}, format="json")
        ok = self.client.post(reverse("request-hint"), {"session_id": session_id}, format="json")
        self.assertEqual(ok.status_code, 200)
        blocked = self.client.post(reverse("request-hint"), {"session_id": session_id}, format="json")
        self.assertEqual(blocked.status_code, 400)
        self.assertIn("error", blocked.json())

    def test_action_on_missing_session(self):
        resp = self.client.post(reverse("hide-words"), {"session_id": 9999}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_practice_detail(self):
        session_id = self._start()["session_id"]
        resp = self.client.get(reverse("practice-detail", kwargs={"session_id": session_id}))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["session_id"], session_id)

        missing = self.client.get(reverse("practice-detail", kwargs={"session_id": 9999}))
        self.assertEqual(missing.status_code, 404)


class LibraryEndpointTests(APITestCase):
    def test_list_scriptures_in_order(self):
        self.assertEqual(ensure_default_scriptures(), 8)
        self.assertEqual(ensure_default_scriptures(), 0)
        resp = self.client.get(reverse("scripture-list"))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(len(data), 8)
        self.assertEqual(data[0]["reference"], "John 3:16")
        self.assertEqual(data[1]["reference"], "Proverbs 3:5-6")
        self.assertEqual(data[2]["word_count"], 10)

    def test_list_difficulties(self):
        resp = self.client.get(reverse("difficulty-list"))
        self.assertEqual(resp.status_code, 200)
        levels = {d["name"]: d["words_per_round"] for d in resp.json()}
        self.assertEqual(levels["easy"], 2)
        self.assertEqual(levels["medium"], 3)
        self.assertEqual(levels["hard"], 5)

    def test_health(self):
        resp = self.client.get(reverse("Health"))
        self.assertEqual(resp.status_code, 200)


class ScriptureModelTests(TestCase):
    def test_clean_rejects_unreadable_reference(self):
        for fields in [
            {"book": "John", "chapter": 3, "start_verse": 5, "end_verse": 4},
            {"book": "  ", "chapter": 3, "start_verse": 16, "end_verse": 16},
            {"book": "John", "chapter": 0, "start_verse": 1, "end_verse": 1},
        ]:
            with self.subTest(fields=fields):
                with self.assertRaises(ValidationError):
                    Scripture(text="Jesus wept.", **fields).full_clean()
        self.assertFalse(Scripture.objects.exists())

    def test_clean_rejects_blank_text(self):
        scripture = Scripture(book="John", chapter=11, start_verse=35, end_verse=35, text="   ")
        with self.assertRaises(ValidationError):
            scripture.full_clean()

    def test_clean_accepts_valid_row(self):
        Scripture(book="John", chapter=11, start_verse=35, end_verse=35, text="Jesus wept.").full_clean()
