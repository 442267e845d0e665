import datetime
from unittest.mock import patch

from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase
from django.utils import timezone

from core.exceptions import PersistenceFailure
from history.models import WatchHistory
from history.services import get_last_watched, upsert_watch_history
from history.store import WatchHistoryStore
from playback.types import WatchHistoryRecord
from providers.base import MediaKind

User = get_user_model()


class WatchHistoryUpsertTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            id=42,
            username="viewer",
            password="pass",
        )

    def make_record(self, **overrides):
        fields = {
            "user_id": self.user.id,
            "media_type": MediaKind.MOVIE,
            "media_id": "550",
            "watched_at": timezone.now(),
        }
        fields.update(overrides)
        return WatchHistoryRecord(**fields)

    def test_second_write_for_same_title_replaces_first(self):
        first_at = timezone.now() - datetime.timedelta(hours=1)
        second_at = timezone.now()

        upsert_watch_history(self.make_record(watched_at=first_at))
        upsert_watch_history(self.make_record(watched_at=second_at))

        self.assertEqual(WatchHistory.objects.count(), 1)
        entry = WatchHistory.objects.get()
        self.assertEqual(entry.user_id, 42)
        self.assertEqual(entry.watched_at, second_at)

    def test_episode_switch_updates_existing_series_row(self):
        upsert_watch_history(self.make_record(
            media_type=MediaKind.SERIES,
            media_id="1399",
            season_number=1,
            episode_number=1,
            episode_name="Winter Is Coming",
        ))
        upsert_watch_history(self.make_record(
            media_type=MediaKind.SERIES,
            media_id="1399",
            season_number=1,
            episode_number=2,
            episode_name="The Kingsroad",
        ))

        entry = WatchHistory.objects.get(media_id="1399")
        self.assertEqual(entry.media_type, "tv")
        self.assertEqual(entry.episode_number, 2)
        self.assertEqual(entry.episode_name, "The Kingsroad")

    def test_movie_and_series_with_same_id_are_separate(self):
        upsert_watch_history(self.make_record(media_id="100"))
        upsert_watch_history(self.make_record(
            media_type=MediaKind.SERIES,
            media_id="100",
            season_number=1,
            episode_number=1,
        ))

        self.assertEqual(WatchHistory.objects.count(), 2)

    def test_get_last_watched(self):
        upsert_watch_history(self.make_record(
            media_type=MediaKind.SERIES,
            media_id="1399",
            season_number=3,
            episode_number=9,
        ))

        record = get_last_watched(42, "tv", "1399")

        self.assertEqual(record.media_type, MediaKind.SERIES)
        self.assertEqual((record.season_number, record.episode_number), (3, 9))
        self.assertIsNone(get_last_watched(42, MediaKind.SERIES, "missing"))


class WatchHistoryStoreTests(SimpleTestCase):
    databases = "__all__"

    def test_database_errors_become_persistence_failures(self):
        record = WatchHistoryRecord(
            user_id=1,
            media_type=MediaKind.MOVIE,
            media_id="550",
            watched_at=timezone.now(),
        )

        with patch(
            "history.store.upsert_watch_history",
            side_effect=DatabaseError("locked"),
        ):
            with self.assertRaises(PersistenceFailure):
                async_to_sync(WatchHistoryStore().upsert)(record)
