"""
YouTube channel endpoints and the cron job that refreshes the cached
recent-videos list.
"""

from __future__ import annotations

import json
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.repositories import SettingRepository
from careerconnect.core.errors import YouTubeApiError
from careerconnect.core.logging_config import get_logger
from careerconnect.core.models.io.integrations import ChannelRead, PlaylistRead, VideoRead
from careerconnect.integrations import YouTubeClient
from careerconnect.server.auth import get_current_user
from careerconnect.server.core.config import settings
from careerconnect.server.services.deps import get_youtube_client

router = APIRouter(tags=["youtube"], dependencies=[Depends(get_current_user)])
# The cron job authenticates with the shared cron secret instead of a user token
cron_router = APIRouter(tags=["youtube"])
logger = get_logger(__name__)

RECENT_VIDEOS_KEY = "youtubeRecentVideos"
RECENT_VIDEOS_LIMIT = 10


def _channel_id() -> str:
    channel_id = settings.integrations.youtube_channel_id
    if not channel_id:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="YouTube channel is not configured")
    return channel_id


@router.get(
    "/youtube/recent-videos",
    response_model=List[VideoRead],
    summary="Recent Videos",
    description="Latest uploads of the configured channel. Falls back to the cached list when the API fails.",
    responses={502: {"description": "YouTube API failure and nothing cached"}},
)
async def recent_videos(
    session: AsyncSession = Depends(get_session),
    youtube: YouTubeClient = Depends(get_youtube_client),
) -> List[VideoRead]:
    channel_id = _channel_id()
    try:
        videos = await youtube.get_recent_videos(channel_id, max_results=RECENT_VIDEOS_LIMIT)
    except YouTubeApiError as e:
        cached = await SettingRepository(session).get_value(RECENT_VIDEOS_KEY)
        if cached is None:
            raise
        logger.warning(f"YouTube API failed, serving cached videos: {e}")
        return [VideoRead.model_validate(v) for v in json.loads(cached)]
    return [VideoRead.model_validate(v) for v in videos]


@router.get("/youtube/playlists", response_model=List[PlaylistRead], summary="Channel Playlists")
async def playlists(youtube: YouTubeClient = Depends(get_youtube_client)) -> List[PlaylistRead]:
    return [PlaylistRead.model_validate(p) for p in await youtube.get_playlists(_channel_id())]


@router.get(
    "/youtube/playlist-items",
    response_model=List[VideoRead],
    summary="Playlist Items",
    responses={400: {"description": "playlist_id is required"}},
)
async def playlist_items(
    playlist_id: Optional[str] = Query(None),
    youtube: YouTubeClient = Depends(get_youtube_client),
) -> List[VideoRead]:
    if not playlist_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="playlist_id is required")
    return [VideoRead.model_validate(v) for v in await youtube.get_playlist_items(playlist_id)]


@router.get(
    "/youtube/channel",
    response_model=ChannelRead,
    summary="Channel Info",
    responses={404: {"description": "Channel not found"}},
)
async def channel(youtube: YouTubeClient = Depends(get_youtube_client)) -> ChannelRead:
    try:
        data = await youtube.get_channel(_channel_id())
    except YouTubeApiError as e:
        if e.status_code == status.HTTP_404_NOT_FOUND:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        raise
    return ChannelRead.model_validate(data)


@cron_router.get(
    "/cron/youtube",
    summary="Refresh Cached Videos",
    description="Fetch the latest uploads and store them in the youtubeRecentVideos setting.",
    responses={401: {"description": "Missing or wrong cron secret"}},
)
async def cron_youtube(
    authorization: Optional[str] = Header(None),
    session: AsyncSession = Depends(get_session),
    youtube: YouTubeClient = Depends(get_youtube_client),
):
    secret = settings.integrations.cron_secret
    if not secret or authorization != f"Bearer {secret}":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    videos = await youtube.get_recent_videos(_channel_id(), max_results=RECENT_VIDEOS_LIMIT)
    await SettingRepository(session).upsert(RECENT_VIDEOS_KEY, json.dumps(videos))
    logger.info(f"Cached {len(videos)} recent YouTube videos")
    return {"message": "YouTube data sync completed", "count": len(videos)}
