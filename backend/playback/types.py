# playback/types.py

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from django.conf import settings
from django.utils.dateparse import parse_date

from providers.base import MediaKind


@dataclass(frozen=True)
class EpisodeReference:
    season_number: int
    episode_number: int
    name: str
    air_date: Optional[date] = None
    overview: str = ""
    still_path: Optional[str] = None

    @classmethod
    def from_tmdb(cls, item: dict, season: int) -> "EpisodeReference":
        air_date = item.get("air_date")
        try:
            parsed_air_date = parse_date(air_date) if air_date else None
        except ValueError:
            parsed_air_date = None

        return cls(
            season_number=int(item.get("season_number", season)),
            episode_number=int(item["episode_number"]),
            name=item.get("name") or "",
            air_date=parsed_air_date,
            overview=item.get("overview") or "",
            still_path=item.get("still_path"),
        )

    @property
    def still_url(self) -> Optional[str]:
        if not self.still_path:
            return None
        base = getattr(settings, "TMDB_IMAGE_BASE_URL", "https://image.tmdb.org/t/p")
        return f"{base}/w300{self.still_path}"

    def to_dict(self) -> dict:
        return {
            "season": self.season_number,
            "episode": self.episode_number,
            "name": self.name,
            "air_date": self.air_date.isoformat() if self.air_date else None,
            "overview": self.overview,
            "still_url": self.still_url,
        }


@dataclass(frozen=True)
class WatchHistoryRecord:
    user_id: int
    media_type: MediaKind
    media_id: str
    watched_at: datetime
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    episode_name: Optional[str] = None
