"""
I/O models for data coming back from third-party integrations.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class VideoRead(BaseModel):
    id: str
    title: str
    description: str = ""
    thumbnail: Optional[str] = None
    published_at: Optional[str] = None
    channel_title: Optional[str] = None


class PlaylistRead(BaseModel):
    id: str
    title: str
    description: str = ""
    thumbnail: Optional[str] = None
    item_count: int = 0


class ChannelRead(BaseModel):
    id: str
    title: str
    description: str = ""
    thumbnail: Optional[str] = None
    subscriber_count: int = 0
    video_count: int = 0
    view_count: int = 0


class IdCardData(BaseModel):
    """Fields read from an Indonesian identity card (KTP)."""

    nik: Optional[str] = None
    nama: Optional[str] = None
    tempat_tgl_lahir: Optional[str] = None
    jenis_kelamin: Optional[str] = None
    alamat: Optional[str] = None
    berlaku_hingga: Optional[str] = None


class OcrExtractResponse(BaseModel):
    text: str
    data: IdCardData
