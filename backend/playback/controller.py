import logging

from django.db import models

from core.exceptions import (
    InvalidRequestError,
    InvalidTransitionError,
    ResolutionFailure,
)
from playback.surface import EmbeddingSurface
from providers.base import MediaKind, PlaybackRequest
from providers.registry import default_key, describe
from providers.sandbox import build_embed_view

logger = logging.getLogger(__name__)


class PlaybackState(models.TextChoices):
    IDLE = "IDLE"
    RESOLVING = "RESOLVING"
    READY = "READY"
    SWITCHING_PROVIDER = "SWITCHING_PROVIDER"
    SWITCHING_EPISODE = "SWITCHING_EPISODE"
    ERROR = "ERROR"


ALLOWED_TRANSITIONS = {
    PlaybackState.IDLE: {PlaybackState.RESOLVING, PlaybackState.READY, PlaybackState.ERROR},
    PlaybackState.RESOLVING: {PlaybackState.READY, PlaybackState.ERROR},
    PlaybackState.READY: {
        PlaybackState.SWITCHING_PROVIDER,
        PlaybackState.SWITCHING_EPISODE,
        PlaybackState.RESOLVING,
        PlaybackState.READY,
        PlaybackState.ERROR,
    },
    PlaybackState.SWITCHING_PROVIDER: {PlaybackState.READY, PlaybackState.ERROR},
    PlaybackState.SWITCHING_EPISODE: {PlaybackState.RESOLVING, PlaybackState.ERROR},
    PlaybackState.ERROR: {PlaybackState.RESOLVING, PlaybackState.READY, PlaybackState.ERROR},
}


class PlaybackController:
    """
    Coordinates provider choice, episode selection and the embedding surface
    for one viewing session.

    The controller is created when the viewer opens the player and closed when
    they leave; ``close()`` (or leaving an ``async with`` block) cancels any
    pending history write and unmounts the surface.
    """

    def __init__(
        self,
        *,
        resolver,
        tracker,
        user_id=None,
        surface=None,
        provider=None,
        on_change=None,
    ):
        self.resolver = resolver
        self.tracker = tracker
        self.user_id = user_id
        self.surface = surface or EmbeddingSurface()
        self.provider = describe(provider or default_key())
        self.on_change = on_change

        self.state = PlaybackState.IDLE
        self.request = None
        self.episodes = []
        self.episode = None
        self.view = None
        self.error = None

        self._attempted = None
        self._closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    # ---------- transitions ----------

    def _can_transition(self, target):
        return target in ALLOWED_TRANSITIONS.get(self.state, set())

    async def _transition(self, target):
        if not self._can_transition(target):
            raise InvalidTransitionError(
                f"Cannot move from {self.state} to {target}"
            )
        logger.debug("Playback %s -> %s", self.state, target)
        self.state = target
        await self._notify()

    async def _notify(self):
        if self.on_change is not None:
            await self.on_change(self)

    async def _fail(self, exc):
        self.error = str(exc)
        self.view = None
        self.tracker.reset()
        if self.surface.mounted:
            await self.surface.unmount()
        await self._transition(PlaybackState.ERROR)

    # ---------- operations ----------

    async def open(self, media_type, media_id, season=None, episode=None, provider=None):
        """
        Start playback of a title. A series opened without a position resumes
        from the viewer's last watched episode, or season 1 episode 1.

        ``provider`` selects the player for this title without rendering the
        previous one with it.
        """
        descriptor = describe(provider) if provider else self.provider
        self._ensure_open()

        if descriptor.key != self.provider.key:
            self.provider = descriptor
            self.tracker.reset()

        try:
            kind = MediaKind.parse(media_type)
            media_id = str(media_id if media_id is not None else "").strip()
            if not media_id:
                raise InvalidRequestError("media_id is required")

            if kind is MediaKind.SERIES and season is None and episode is None:
                season, episode = await self._seed_position(media_id)

            request = PlaybackRequest.parse(
                media_type=kind,
                media_id=media_id,
                season=season,
                episode=episode,
            )
        except InvalidRequestError as exc:
            self._attempted = None
            await self._fail(exc)
            raise

        if self.request is None or self.request.media_id != request.media_id:
            self.resolver.forget()
        await self._load(request)

    async def switch_provider(self, key):
        descriptor = describe(key)
        self._ensure_open()

        if descriptor.key == self.provider.key:
            return

        if self.state != PlaybackState.READY:
            self.provider = descriptor
            await self._notify()
            return

        await self._transition(PlaybackState.SWITCHING_PROVIDER)
        self.provider = descriptor
        self.tracker.reset()
        await self._render()

    async def select_episode(self, season, episode):
        self._ensure_open()

        if self.request is None or not self.request.is_series:
            raise InvalidRequestError("Episode selection requires series playback")

        request = self.request.with_episode(season, episode)

        if self.state == PlaybackState.READY:
            if request == self.request:
                return
            await self._transition(PlaybackState.SWITCHING_EPISODE)

        await self._load(request)

    async def retry(self):
        self._ensure_open()

        if self.state != PlaybackState.ERROR or self._attempted is None:
            raise InvalidRequestError("Nothing to retry")

        await self._load(self._attempted)

    async def close(self):
        if self._closed:
            return
        self._closed = True
        self.tracker.close()
        if self.surface.mounted:
            await self.surface.unmount()

    # ---------- internals ----------

    def _ensure_open(self):
        if self._closed:
            raise InvalidTransitionError("Playback session is closed")

    async def _seed_position(self, series_id):
        record = await self.resolver.last_watched(self.user_id, series_id)
        if record is None:
            return 1, 1
        return record.season_number or 1, record.episode_number or 1

    async def _load(self, request):
        self._attempted = request
        self.error = None

        if request.is_series:
            await self._transition(PlaybackState.RESOLVING)
            try:
                episodes = await self.resolver.list_episodes(request.media_id, request.season)
            except ResolutionFailure as exc:
                logger.warning("Could not resolve %s: %s", request.media_id, exc)
                await self._fail(exc)
                return

            if not episodes and (request.season, request.episode) != (1, 1):
                logger.info(
                    "No episodes for %s season %s, falling back to S1E1",
                    request.media_id,
                    request.season,
                )
                request = request.with_episode(1, 1)
                self._attempted = request

            self.episodes = episodes
            self.episode = next(
                (
                    item for item in episodes
                    if item.season_number == request.season
                    and item.episode_number == request.episode
                ),
                None,
            )
        else:
            self.episodes = []
            self.episode = None

        self.request = request
        await self._render()

    async def _render(self):
        view = build_embed_view(self.provider, self.request)

        if self.surface.mounted:
            await self.surface.unmount()
        await self.surface.mount(view)
        self.view = view

        await self._transition(PlaybackState.READY)

        self.tracker.observe(
            self.user_id,
            self.request,
            self.episode.name if self.episode else None,
        )

    @property
    def now_playing(self):
        if self.request is None or not self.request.is_series:
            return None
        label = f"S{self.request.season} E{self.request.episode}"
        if self.episode and self.episode.name:
            label = f"{label} · {self.episode.name}"
        return label

    @property
    def shows_advisory(self) -> bool:
        return self.view is not None and self.view.advisory is not None

    def snapshot(self) -> dict:
        return {
            "state": self.state.value,
            "provider": self.provider.key,
            "request": self.request.to_dict() if self.request else None,
            "episode": self.episode.to_dict() if self.episode else None,
            "episodes": [item.to_dict() for item in self.episodes],
            "now_playing": self.now_playing,
            "embed": self.view.to_dict() if self.view else None,
            "error": self.error,
        }
