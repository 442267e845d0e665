import asyncio
import logging

import httpx
from django.conf import settings

from core.exceptions import ResolutionFailure

logger = logging.getLogger(__name__)

MAX_RETRY_AFTER_SECONDS = 5.0


def _base_url() -> str:
    return getattr(settings, "TMDB_BASE_URL", "https://api.themoviedb.org/3")


async def _backoff(delay: float):
    await asyncio.sleep(delay)


def _retry_after(response: httpx.Response) -> float:
    try:
        delay = float(response.headers.get("retry-after", 1))
    except ValueError:
        delay = 1.0
    return min(max(delay, 0.0), MAX_RETRY_AFTER_SECONDS)


async def _get_json(client: httpx.AsyncClient, path: str, api_key: str) -> dict:
    url = f"{_base_url()}{path}"
    params = {"api_key": api_key}

    response = await client.get(url, params=params)
    if response.status_code == 429:
        delay = _retry_after(response)
        logger.info("TMDB rate limited on %s, retrying in %.1fs", path, delay)
        await _backoff(delay)
        response = await client.get(url, params=params)

    response.raise_for_status()
    return response.json()


async def get_season_details(series_id: str, season: int, *, client=None) -> dict:
    """
    Fetch ``/tv/{series_id}/season/{season}``. Any transport or HTTP error is
    raised as ResolutionFailure.
    """
    api_key = getattr(settings, "TMDB_API_KEY", None)
    if not api_key:
        raise ResolutionFailure("TMDB_API_KEY is not configured")

    path = f"/tv/{series_id}/season/{season}"

    try:
        if client is not None:
            return await _get_json(client, path, api_key)

        timeout = getattr(settings, "TMDB_TIMEOUT_SECONDS", 10.0)
        async with httpx.AsyncClient(timeout=timeout) as owned_client:
            return await _get_json(owned_client, path, api_key)
    except httpx.HTTPError as exc:
        raise ResolutionFailure(
            f"Could not fetch season {season} of series {series_id}: {exc}"
        ) from exc
    except ValueError as exc:
        raise ResolutionFailure(f"Malformed season payload for series {series_id}") from exc
