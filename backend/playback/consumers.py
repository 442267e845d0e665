import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from core.exceptions import PlaybackError
from history.store import WatchHistoryStore
from playback.controller import PlaybackController
from playback.episodes import EpisodeResolver
from playback.surface import EmbeddingSurface
from playback.tracking import WatchProgressTracker
from providers.registry import available_providers, default_key
from providers.serializers import ProviderSerializer

logger = logging.getLogger(__name__)


class WebsocketSurface(EmbeddingSurface):
    def __init__(self, consumer):
        super().__init__()
        self.consumer = consumer

    async def mount(self, view):
        await super().mount(view)
        await self.consumer.send_event("EMBED_MOUNTED", **view.to_dict())

    async def unmount(self):
        await super().unmount()
        if not self.consumer.closing:
            await self.consumer.send_event("EMBED_UNMOUNTED")


class PlaybackConsumer(AsyncWebsocketConsumer):
    """
    One websocket connection is one viewing session: the controller lives
    from connect to disconnect.
    """

    closing = False

    async def connect(self):
        self.user = self.scope.get("user")
        user_id = self.user.id if self.user is not None and self.user.is_authenticated else None

        store = WatchHistoryStore()
        self.controller = PlaybackController(
            resolver=EpisodeResolver(history=store),
            tracker=WatchProgressTracker(store),
            user_id=user_id,
            surface=WebsocketSurface(self),
            on_change=self.send_state,
        )

        await self.accept()

        serializer = ProviderSerializer(
            available_providers(),
            many=True,
            context={"default": default_key()},
        )
        await self.send_event("PROVIDERS", providers=serializer.data)
        await self.send_state(self.controller)

    async def disconnect(self, close_code):
        self.closing = True
        if hasattr(self, "controller"):
            await self.controller.close()

    async def send_event(self, event_type, **payload):
        await self.send(text_data=json.dumps({"type": event_type, **payload}))

    async def send_state(self, controller):
        await self.send_event("PLAYBACK_STATE", **controller.snapshot())

    async def send_error(self, exc):
        await self.send_event("ERROR", code=exc.code, message=str(exc))

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or "")
        except json.JSONDecodeError:
            return

        if not isinstance(data, dict):
            return

        event_type = data.get("type")
        handler = {
            "OPEN": self.handle_open,
            "SWITCH_PROVIDER": self.handle_switch_provider,
            "SELECT_EPISODE": self.handle_select_episode,
            "RETRY": self.handle_retry,
        }.get(event_type)

        if handler is None:
            return

        try:
            await handler(data)
        except PlaybackError as exc:
            logger.info("Playback %s rejected: %s", event_type, exc)
            await self.send_error(exc)

    async def handle_open(self, data):
        await self.controller.open(
            data.get("media_type"),
            data.get("media_id"),
            season=data.get("season"),
            episode=data.get("episode"),
            provider=data.get("provider"),
        )

    async def handle_switch_provider(self, data):
        await self.controller.switch_provider(data.get("provider"))

    async def handle_select_episode(self, data):
        await self.controller.select_episode(data.get("season"), data.get("episode"))

    async def handle_retry(self, data):
        await self.controller.retry()
