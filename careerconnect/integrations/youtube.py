"""YouTube Data API client

Reads the recent uploads, playlists and channel details of the mosque channel
shown on the public site. All calls are plain ``GET`` requests authenticated
with an API key passed as the ``key`` query parameter.

Responses are mapped to flat dictionaries (see ``map_video`` and friends)
so the API layer and the cached ``youtubeRecentVideos`` setting share one
shape.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from careerconnect.core.errors import YouTubeApiError
from careerconnect.core.monitoring import log_integration_call

DEFAULT_BASE_URL = "https://youtube.googleapis.com/youtube/v3"


def _thumbnail(snippet: Dict[str, Any]) -> Optional[str]:
    thumbnails = snippet.get("thumbnails") or {}
    for size in ("high", "default"):
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return url
    return None


def map_video(item: Dict[str, Any]) -> Dict[str, Any]:
    """Map a ``search`` result or ``videos`` item to a video dict."""
    raw_id = item.get("id")
    video_id = raw_id.get("videoId") if isinstance(raw_id, dict) else raw_id
    snippet = item.get("snippet") or {}
    return {
        "id": video_id,
        "title": snippet.get("title", ""),
        "description": snippet.get("description", ""),
        "thumbnail": _thumbnail(snippet),
        "published_at": snippet.get("publishedAt"),
        "channel_title": snippet.get("channelTitle"),
    }


def map_playlist(item: Dict[str, Any]) -> Dict[str, Any]:
    snippet = item.get("snippet") or {}
    return {
        "id": item.get("id"),
        "title": snippet.get("title", ""),
        "description": snippet.get("description", ""),
        "thumbnail": _thumbnail(snippet),
        "item_count": int((item.get("contentDetails") or {}).get("itemCount", 0)),
    }


def map_playlist_item(item: Dict[str, Any]) -> Dict[str, Any]:
    snippet = item.get("snippet") or {}
    return {
        "id": (snippet.get("resourceId") or {}).get("videoId") or item.get("id"),
        "title": snippet.get("title", ""),
        "description": snippet.get("description", ""),
        "thumbnail": _thumbnail(snippet),
        "published_at": snippet.get("publishedAt"),
        "channel_title": snippet.get("channelTitle"),
    }


def map_channel(item: Dict[str, Any]) -> Dict[str, Any]:
    snippet = item.get("snippet") or {}
    stats = item.get("statistics") or {}
    return {
        "id": item.get("id"),
        "title": snippet.get("title", ""),
        "description": snippet.get("description", ""),
        "thumbnail": _thumbnail(snippet),
        "subscriber_count": int(stats.get("subscriberCount", 0)),
        "video_count": int(stats.get("videoCount", 0)),
        "view_count": int(stats.get("viewCount", 0)),
    }


class YouTubeClient:
    """Thin async wrapper over the YouTube Data API v3.

    Args:
        api_key: Google API key with the YouTube Data API enabled.
        base_url: API root, overridable for tests.
        client: Optional shared ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._http = client or httpx.AsyncClient(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    async def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self._base_url}/{endpoint}"
        query = {**params, "key": self._api_key}
        self._logger.debug("YouTubeClient: GET %s", url)
        started = time.perf_counter()
        try:
            response = await self._http.get(url, params=query)
        except httpx.HTTPError as exc:
            log_integration_call("youtube", endpoint, None, (time.perf_counter() - started) * 1000)
            raise YouTubeApiError(f"YouTube request failed: {exc}") from exc

        log_integration_call("youtube", endpoint, response.status_code, (time.perf_counter() - started) * 1000)
        if response.status_code >= 400:
            raise YouTubeApiError(
                f"HTTP error: {response.status_code}",
                status_code=response.status_code,
                details=response.text,
            )
        return response.json()

    async def get_recent_videos(self, channel_id: str, max_results: int = 10) -> List[Dict[str, Any]]:
        data = await self._get(
            "search",
            {
                "part": "snippet",
                "channelId": channel_id,
                "maxResults": max_results,
                "order": "date",
                "type": "video",
            },
        )
        return [map_video(item) for item in data.get("items", [])]

    async def get_playlists(self, channel_id: str, max_results: int = 50) -> List[Dict[str, Any]]:
        data = await self._get(
            "playlists",
            {"part": "snippet,contentDetails", "channelId": channel_id, "maxResults": max_results},
        )
        return [map_playlist(item) for item in data.get("items", [])]

    async def get_playlist_items(self, playlist_id: str, max_results: int = 50) -> List[Dict[str, Any]]:
        data = await self._get(
            "playlistItems",
            {"part": "snippet", "playlistId": playlist_id, "maxResults": max_results},
        )
        return [map_playlist_item(item) for item in data.get("items", [])]

    async def get_channel(self, channel_id: str) -> Dict[str, Any]:
        data = await self._get("channels", {"part": "snippet,statistics", "id": channel_id})
        items = data.get("items") or []
        if not items:
            raise YouTubeApiError(f"Channel {channel_id} not found", status_code=404)
        return map_channel(items[0])

    async def aclose(self) -> None:
        await self._http.aclose()
