from dataclasses import dataclass
from typing import Optional, Tuple

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from core.exceptions import UnknownProviderError
from providers.base import PlaybackRequest
from providers.embed import EmbedLayout, build_embed_url


@dataclass(frozen=True)
class ProviderDescriptor:
    key: str
    name: str
    icon: str  # "film" | "tv"
    layout: EmbedLayout
    sandbox: Optional[Tuple[str, ...]] = None
    has_ads: bool = False
    ad_blocking: str = "strict"  # "strict" | "custom"

    @property
    def is_sandboxed(self) -> bool:
        return self.sandbox is not None

    def build_url(self, request: PlaybackRequest) -> str:
        return build_embed_url(self.layout, request)


STRICT_SANDBOX = (
    "allow-same-origin",
    "allow-scripts",
    "allow-forms",
    "allow-presentation",
)


PROVIDERS = {
    "videasy": ProviderDescriptor(
        key="videasy",
        name="Videasy",
        icon="film",
        sandbox=STRICT_SANDBOX + ("allow-modals",),
        layout=EmbedLayout(
            base_url="https://player.videasy.net",
            query=(
                ("color", "3B82F6"),
                ("autoplayNextEpisode", "true"),
                ("episodeSelector", "true"),
                ("adblock", "true"),
                ("hideAds", "true"),
            ),
            series_query=(("nextEpisode", "true"),),
        ),
    ),
    "vidsrc": ProviderDescriptor(
        key="vidsrc",
        name="VidSrc",
        icon="film",
        sandbox=STRICT_SANDBOX,
        layout=EmbedLayout(base_url="https://vidsrc.su/embed"),
    ),
    "moviesapi": ProviderDescriptor(
        key="moviesapi",
        name="MoviesAPI",
        icon="tv",
        sandbox=None,
        has_ads=True,
        ad_blocking="custom",
        layout=EmbedLayout(
            base_url="https://moviesapi.club",
            series_path="tv/{id}-{season}-{episode}",
        ),
    ),
    "vidora": ProviderDescriptor(
        key="vidora",
        name="Vidora",
        icon="film",
        sandbox=STRICT_SANDBOX,
        layout=EmbedLayout(
            base_url="https://vidora.su",
            query=(
                ("autoplay", "true"),
                ("colour", "6366f1"),
                ("autonextepisode", "true"),
                ("pausescreen", "true"),
                ("adblock", "true"),
            ),
        ),
    ),
}


def describe(key: str) -> ProviderDescriptor:
    provider = PROVIDERS.get(key)
    if not provider:
        raise UnknownProviderError(f"Unknown provider: {key}")
    return provider


def default_key() -> str:
    key = getattr(settings, "PLAYBACK_DEFAULT_PROVIDER", "videasy")
    if key not in PROVIDERS:
        raise ImproperlyConfigured(
            f"PLAYBACK_DEFAULT_PROVIDER {key!r} is not a registered provider"
        )
    return key


def available_providers() -> list[ProviderDescriptor]:
    return list(PROVIDERS.values())
