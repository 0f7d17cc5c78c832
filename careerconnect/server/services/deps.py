"""
Integration client dependencies.

Each factory builds a client from settings. Tests replace them through
``app.dependency_overrides``. HTTP-backed clients are closed when the
request finishes.
"""

from typing import AsyncIterator

from careerconnect.integrations import (
    EmailClient,
    GoogleSheetsClient,
    LlamaOcrClient,
    LocalBlobStorage,
    YouTubeClient,
)
from careerconnect.server.core.config import settings


async def get_youtube_client() -> AsyncIterator[YouTubeClient]:
    config = settings.integrations
    client = YouTubeClient(config.google_api_key or "", base_url=config.youtube_api_base)
    try:
        yield client
    finally:
        await client.aclose()


async def get_sheets_client() -> AsyncIterator[GoogleSheetsClient]:
    config = settings.integrations
    client = GoogleSheetsClient(
        config.google_sheets_api_key or "",
        access_token=config.google_sheets_access_token,
        base_url=config.sheets_api_base,
    )
    try:
        yield client
    finally:
        await client.aclose()


async def get_ocr_client() -> AsyncIterator[LlamaOcrClient]:
    config = settings.integrations
    client = LlamaOcrClient(config.llama_ocr_api_key or "", endpoint=config.llama_ocr_endpoint)
    try:
        yield client
    finally:
        await client.aclose()


def get_email_client() -> EmailClient:
    config = settings.integrations
    return EmailClient(
        config.email_endpoint,
        config.email_api_key,
        sender=config.email_from,
        development=config.is_development,
    )


def get_storage() -> LocalBlobStorage:
    return LocalBlobStorage(settings.integrations.upload_dir)
