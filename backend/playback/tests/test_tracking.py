import asyncio
from unittest.mock import AsyncMock

from django.test import SimpleTestCase

from playback.tracking import WatchProgressTracker
from playback.tests.fakes import RecordingStore
from providers.base import MediaKind, PlaybackRequest

DELAY = 0.05
SETTLE = 0.2

MOVIE = PlaybackRequest(media_kind=MediaKind.MOVIE, media_id="550")
PILOT = PlaybackRequest(media_kind=MediaKind.SERIES, media_id="1399", season=1, episode=1)


class WatchProgressTrackerTests(SimpleTestCase):
    def setUp(self):
        self.store = RecordingStore()
        self.tracker = WatchProgressTracker(self.store, delay=DELAY)

    def tearDown(self):
        self.tracker.close()

    async def test_anonymous_viewers_are_not_tracked(self):
        self.tracker.observe(None, MOVIE)
        await asyncio.sleep(SETTLE)

        self.assertEqual(self.store.records, [])
        self.assertFalse(self.tracker.has_pending_write)

    async def test_burst_of_observations_writes_once(self):
        for _ in range(5):
            self.tracker.observe(42, MOVIE)
        await asyncio.sleep(SETTLE)

        self.assertEqual(len(self.store.records), 1)

    async def test_last_observation_in_burst_wins(self):
        for episode in range(1, 5):
            self.tracker.observe(42, PILOT.with_episode(1, episode), f"Episode {episode}")
        await asyncio.sleep(SETTLE)

        self.assertEqual(len(self.store.records), 1)
        record = self.store.records[0]
        self.assertEqual(record.episode_number, 4)
        self.assertEqual(record.episode_name, "Episode 4")

    async def test_write_waits_for_quiet_period(self):
        self.tracker.observe(42, MOVIE)
        self.assertTrue(self.tracker.has_pending_write)
        self.assertEqual(self.store.records, [])

        await asyncio.sleep(SETTLE)
        self.assertEqual(len(self.store.records), 1)

    async def test_same_request_is_written_at_most_once(self):
        self.tracker.observe(42, MOVIE)
        await asyncio.sleep(SETTLE)
        self.tracker.observe(42, MOVIE)
        await asyncio.sleep(SETTLE)

        self.assertEqual(len(self.store.records), 1)
        self.assertTrue(self.tracker.is_tracked(MOVIE))

    async def test_new_request_after_quiet_period_writes_again(self):
        self.tracker.observe(42, PILOT, "Winter Is Coming")
        await asyncio.sleep(SETTLE)
        self.tracker.observe(42, PILOT.with_episode(1, 2), "The Kingsroad")
        await asyncio.sleep(SETTLE)

        self.assertEqual(len(self.store.records), 2)
        self.assertEqual(self.store.records[1].episode_number, 2)

    async def test_reset_allows_tracking_the_same_request_again(self):
        self.tracker.observe(42, MOVIE)
        await asyncio.sleep(SETTLE)

        self.tracker.reset()
        self.tracker.observe(42, MOVIE)
        await asyncio.sleep(SETTLE)

        self.assertEqual(len(self.store.records), 2)

    async def test_reset_cancels_pending_write(self):
        self.tracker.observe(42, MOVIE)
        self.tracker.reset()
        await asyncio.sleep(SETTLE)

        self.assertEqual(self.store.records, [])

    async def test_no_write_after_close(self):
        self.tracker.observe(42, MOVIE)
        self.tracker.close()
        await asyncio.sleep(SETTLE)
        self.tracker.observe(42, MOVIE)
        await asyncio.sleep(SETTLE)

        self.assertEqual(self.store.records, [])

    async def test_movie_record_has_no_episode_fields(self):
        self.tracker.observe(42, MOVIE, "ignored")
        await asyncio.sleep(SETTLE)

        record = self.store.records[0]
        self.assertEqual(record.user_id, 42)
        self.assertEqual(record.media_type, MediaKind.MOVIE)
        self.assertEqual(record.media_id, "550")
        self.assertIsNone(record.season_number)
        self.assertIsNone(record.episode_number)
        self.assertIsNone(record.episode_name)
        self.assertIsNotNone(record.watched_at)

    async def test_persistence_failure_is_swallowed_and_not_retried(self):
        store = RecordingStore(fail=True)
        tracker = WatchProgressTracker(store, delay=DELAY)

        tracker.observe(42, MOVIE)
        await asyncio.sleep(SETTLE)
        tracker.observe(42, MOVIE)
        await asyncio.sleep(SETTLE)

        self.assertTrue(tracker.is_tracked(MOVIE))
        self.assertFalse(tracker.has_pending_write)
        tracker.close()

    def test_default_delay_comes_from_settings(self):
        self.assertEqual(WatchProgressTracker(self.store).delay, 2.0)

    async def test_unexpected_store_error_is_logged_and_swallowed(self):
        store = RecordingStore()
        store.upsert = AsyncMock(side_effect=RuntimeError("boom"))
        tracker = WatchProgressTracker(store, delay=DELAY)

        with self.assertLogs("playback.tracking", level="ERROR") as logs:
            tracker.observe(42, MOVIE)
            await tracker.wait()

        self.assertIn("Unexpected error updating watch history", logs.output[0])
        self.assertTrue(tracker.is_tracked(MOVIE))
        tracker.close()
