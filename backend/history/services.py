from playback.types import WatchHistoryRecord
from providers.base import MediaKind

from .models import WatchHistory


def upsert_watch_history(record: WatchHistoryRecord) -> WatchHistory:
    """
    Insert or replace the single history row for (user, media type, media id).
    """
    entry, _ = WatchHistory.objects.update_or_create(
        user_id=record.user_id,
        media_type=MediaKind.parse(record.media_type).value,
        media_id=str(record.media_id),
        defaults={
            "season_number": record.season_number,
            "episode_number": record.episode_number,
            "episode_name": record.episode_name,
            "watched_at": record.watched_at,
        },
    )
    return entry


def to_record(entry: WatchHistory) -> WatchHistoryRecord:
    return WatchHistoryRecord(
        user_id=entry.user_id,
        media_type=MediaKind.parse(entry.media_type),
        media_id=entry.media_id,
        season_number=entry.season_number,
        episode_number=entry.episode_number,
        episode_name=entry.episode_name,
        watched_at=entry.watched_at,
    )


def find_last_watched(user_id, media_type, media_id):
    return (
        WatchHistory.objects
        .filter(
            user_id=user_id,
            media_type=MediaKind.parse(media_type).value,
            media_id=str(media_id),
        )
        .first()
    )


def get_last_watched(user_id, media_type, media_id):
    entry = find_last_watched(user_id, media_type, media_id)
    if entry is None:
        return None
    return to_record(entry)
