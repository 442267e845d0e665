import logging

from django.conf import settings
from django.utils import timezone

from core.exceptions import PersistenceFailure
from playback.scheduling import DelayedCall
from playback.types import WatchHistoryRecord

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 2.0


class WatchProgressTracker:
    """
    Records "user is watching X" for one playback session.

    Each ``observe`` call restarts a quiet-period timer; only the last
    observation within the window is written. After a write fires, the same
    request is not written again until ``reset()`` is called or a different
    request is observed. Writes are upserts on (user, media type, media id).
    """

    def __init__(self, store, *, delay=None):
        self.store = store
        if delay is None:
            delay = getattr(
                settings,
                "WATCH_HISTORY_DEBOUNCE_SECONDS",
                DEFAULT_DEBOUNCE_SECONDS,
            )
        self.delay = delay

        self._pending = None
        self._tracked_request = None
        self._closed = False

    @property
    def has_pending_write(self) -> bool:
        return self._pending is not None and self._pending.pending

    @property
    def tracked_request(self):
        return self._tracked_request

    def is_tracked(self, request) -> bool:
        return self._tracked_request is not None and self._tracked_request == request

    def observe(self, user_id, request, episode_label=None):
        if user_id is None or self._closed:
            return

        if self._tracked_request is not None and self._tracked_request != request:
            self._tracked_request = None

        if self.is_tracked(request):
            return

        self._cancel_pending()

        record_fields = {
            "user_id": user_id,
            "media_type": request.media_kind,
            "media_id": request.media_id,
            "season_number": request.season if request.is_series else None,
            "episode_number": request.episode if request.is_series else None,
            "episode_name": episode_label if request.is_series else None,
        }

        async def write():
            self._tracked_request = request
            await self._persist(record_fields)

        self._pending = DelayedCall(self.delay, write)

    async def _persist(self, record_fields):
        record = WatchHistoryRecord(watched_at=timezone.now(), **record_fields)
        try:
            await self.store.upsert(record)
        except PersistenceFailure as exc:
            logger.warning(
                "Error updating watch history for user %s on %s/%s: %s",
                record.user_id,
                record.media_type.value,
                record.media_id,
                exc,
            )
            return
        except Exception:
            logger.exception(
                "Unexpected error updating watch history for user %s on %s/%s",
                record.user_id,
                record.media_type.value,
                record.media_id,
            )
            return

        logger.debug(
            "Tracked %s/%s for user %s",
            record.media_type.value,
            record.media_id,
            record.user_id,
        )

    def reset(self):
        self._cancel_pending()
        self._tracked_request = None

    def close(self):
        self._cancel_pending()
        self._closed = True

    async def wait(self):
        if self._pending is not None:
            await self._pending.wait()

    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
