from channels.db import database_sync_to_async
from django.db import DatabaseError

from core.exceptions import PersistenceFailure

from .services import get_last_watched, upsert_watch_history


class WatchHistoryStore:
    """
    Async access to watch history for the playback consumer. Database errors
    surface as PersistenceFailure.
    """

    async def upsert(self, record):
        try:
            await database_sync_to_async(upsert_watch_history)(record)
        except DatabaseError as exc:
            raise PersistenceFailure(f"Could not save watch history: {exc}") from exc

    async def last_watched(self, user_id, media_type, media_id):
        try:
            return await database_sync_to_async(get_last_watched)(
                user_id,
                media_type,
                media_id,
            )
        except DatabaseError as exc:
            raise PersistenceFailure(f"Could not read watch history: {exc}") from exc
