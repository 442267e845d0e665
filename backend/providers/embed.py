# providers/embed.py

from dataclasses import dataclass
from typing import Tuple
from urllib.parse import quote, urlencode

from core.exceptions import InvalidRequestError
from providers.base import MediaKind, PlaybackRequest


@dataclass(frozen=True)
class EmbedLayout:
    """
    Path and query data for one provider. ``{id}``, ``{season}`` and
    ``{episode}`` are substituted into the path templates.
    """

    base_url: str
    movie_path: str = "movie/{id}"
    series_path: str = "tv/{id}/{season}/{episode}"
    query: Tuple[Tuple[str, str], ...] = ()
    series_query: Tuple[Tuple[str, str], ...] = ()


def build_embed_url(layout: EmbedLayout, request: PlaybackRequest) -> str:
    media_id = quote(str(request.media_id), safe="")

    if request.media_kind is MediaKind.MOVIE:
        path = layout.movie_path.format(id=media_id)
        params = list(layout.query)
    else:
        if request.season is None or request.episode is None:
            raise InvalidRequestError("TV playback requires season and episode")

        path = layout.series_path.format(
            id=media_id,
            season=request.season,
            episode=request.episode,
        )
        params = list(layout.query) + list(layout.series_query)

    url = f"{layout.base_url.rstrip('/')}/{path}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return url
