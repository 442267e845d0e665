import logging

from core.exceptions import PersistenceFailure, ResolutionFailure
from playback.types import EpisodeReference
from providers.base import MediaKind
from providers.tmdb_client import get_season_details

logger = logging.getLogger(__name__)


class EpisodeResolver:
    """
    Season listings and "last watched" lookups for series playback.

    Only the currently selected season is kept; asking for another season
    replaces it. Lookup failures are logged and reported as an empty listing
    or ``None`` so callers can fall back to season 1, episode 1.
    """

    def __init__(self, *, history=None, fetch_season=None):
        self.history = history
        self._fetch_season = fetch_season
        self._cache_key = None
        self._episodes = []

    async def list_episodes(self, series_id, season) -> list[EpisodeReference]:
        key = (str(series_id), season)
        if key == self._cache_key:
            return list(self._episodes)

        fetch = self._fetch_season or get_season_details
        try:
            payload = await fetch(series_id, season)
        except ResolutionFailure as exc:
            logger.warning("Episode lookup failed for %s season %s: %s", series_id, season, exc)
            return []

        episodes = self._parse_episodes(payload, season)

        self._cache_key = key
        self._episodes = episodes
        return list(episodes)

    def _parse_episodes(self, payload, season) -> list[EpisodeReference]:
        episodes = []
        for item in (payload or {}).get("episodes") or []:
            try:
                episodes.append(EpisodeReference.from_tmdb(item, season))
            except (KeyError, TypeError, ValueError):
                logger.debug("Skipping malformed episode entry: %r", item)
        return sorted(episodes, key=lambda episode: episode.episode_number)

    def forget(self):
        self._cache_key = None
        self._episodes = []

    async def last_watched(self, user_id, series_id):
        if user_id is None or self.history is None:
            return None

        try:
            return await self.history.last_watched(user_id, MediaKind.SERIES, series_id)
        except PersistenceFailure as exc:
            logger.warning("Last watched lookup failed for %s: %s", series_id, exc)
            return None
