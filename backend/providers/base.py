# providers/base.py

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from core.exceptions import InvalidRequestError


class MediaKind(str, Enum):
    MOVIE = "movie"
    SERIES = "tv"

    @classmethod
    def parse(cls, value) -> "MediaKind":
        if isinstance(value, cls):
            return value

        normalized = str(value or "").strip().lower()
        if normalized == "series":
            return cls.SERIES

        try:
            return cls(normalized)
        except ValueError:
            raise InvalidRequestError(f"Unsupported media type: {value!r}") from None


def _coerce_number(value, name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidRequestError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidRequestError(f"{name} must be an integer") from None


@dataclass(frozen=True)
class PlaybackRequest:
    media_kind: MediaKind
    media_id: str
    season: Optional[int] = None
    episode: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.media_kind, MediaKind):
            raise InvalidRequestError("media_kind must be a MediaKind")

        if not self.media_id or not str(self.media_id).strip():
            raise InvalidRequestError("media_id is required")

        has_season = self.season is not None
        has_episode = self.episode is not None

        if has_season != has_episode:
            raise InvalidRequestError("season and episode must be given together")

        if self.media_kind is MediaKind.SERIES and not has_season:
            raise InvalidRequestError("TV playback requires season and episode")

        if self.media_kind is MediaKind.MOVIE and has_season:
            raise InvalidRequestError("Movie playback does not take season or episode")

        if has_season and (self.season < 0 or self.episode < 1):
            raise InvalidRequestError("season must be >= 0 and episode >= 1")

    @classmethod
    def parse(cls, *, media_type, media_id, season=None, episode=None) -> "PlaybackRequest":
        """
        Build a request from loosely typed input (query params, websocket frames).
        """
        return cls(
            media_kind=MediaKind.parse(media_type),
            media_id=str(media_id).strip() if media_id is not None else "",
            season=_coerce_number(season, "season"),
            episode=_coerce_number(episode, "episode"),
        )

    @property
    def is_series(self) -> bool:
        return self.media_kind is MediaKind.SERIES

    def with_episode(self, season, episode) -> "PlaybackRequest":
        return replace(
            self,
            season=_coerce_number(season, "season"),
            episode=_coerce_number(episode, "episode"),
        )

    def to_dict(self) -> dict:
        return {
            "media_type": self.media_kind.value,
            "media_id": self.media_id,
            "season": self.season,
            "episode": self.episode,
        }

