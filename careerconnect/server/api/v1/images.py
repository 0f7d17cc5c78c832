"""
Image and file upload endpoints.

Files are stored through ``LocalBlobStorage``; images additionally get an
``images`` row linking them to the record they illustrate.
"""

from __future__ import annotations

import json
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import Image
from careerconnect.core.database.repositories import ImageRepository, SettingRepository
from careerconnect.core.logging_config import get_logger
from careerconnect.core.models.io.settings import ImageRead, SelectedImages
from careerconnect.integrations import LocalBlobStorage
from careerconnect.server.auth import get_current_user
from careerconnect.server.core.constant import MAX_UPLOAD_SIZE
from careerconnect.server.services.deps import get_storage

router = APIRouter(tags=["images"], dependencies=[Depends(get_current_user)])
logger = get_logger(__name__)

SELECTED_HERO_IMAGES_KEY = "selectedHeroImageIds"


async def _read_checked(upload: UploadFile, images_only: bool) -> bytes:
    if images_only and not (upload.content_type or "").startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"{upload.filename}: only image files are allowed"
        )
    data = await upload.read()
    if len(data) > MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"{upload.filename}: file size must be less than 5MB"
        )
    return data


@router.get(
    "/images",
    response_model=List[ImageRead],
    summary="List Images",
    responses={400: {"description": "related_id and related_type are required"}},
)
async def list_images(
    related_id: Optional[str] = None,
    related_type: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
) -> List[ImageRead]:
    if not related_id or not related_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="related_id and related_type are required"
        )
    return [ImageRead.model_validate(i) for i in await ImageRepository(session).list_related(related_id, related_type)]


@router.delete("/images", summary="Delete Image", responses={404: {"description": "Image not found"}})
async def delete_image(
    id: int,
    session: AsyncSession = Depends(get_session),
    storage: LocalBlobStorage = Depends(get_storage),
):
    repo = ImageRepository(session)
    image = await repo.get_by_id(id)
    if image is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    await repo.delete(image.id)
    storage.delete(image.url)
    return {"success": True}


@router.post("/images/selected", summary="Select Hero Images", description="Store the ids of the hero images shown.")
async def select_images(payload: SelectedImages, session: AsyncSession = Depends(get_session)):
    await SettingRepository(session).upsert(SELECTED_HERO_IMAGES_KEY, json.dumps(payload.ids))
    return {"success": True, "ids": payload.ids}


@router.post(
    "/images/upload",
    response_model=List[ImageRead],
    status_code=status.HTTP_201_CREATED,
    summary="Upload Images",
    description="Upload one or more images (at most 5MB each) attached to a record.",
    responses={400: {"description": "Not an image or too large"}},
)
async def upload_images(
    files: List[UploadFile] = File(...),
    related_id: str = Form(...),
    related_type: str = Form(...),
    alt: Optional[str] = Form(None),
    session: AsyncSession = Depends(get_session),
    storage: LocalBlobStorage = Depends(get_storage),
) -> List[ImageRead]:
    contents = [(upload, await _read_checked(upload, images_only=True)) for upload in files]
    repo = ImageRepository(session)
    created = []
    try:
        for upload, data in contents:
            url = storage.save(storage.safe_name(upload.filename or "image"), data)
            image = await repo.stage(
                Image(url=url, alt=alt or upload.filename, related_id=related_id, related_type=related_type)
            )
            created.append(image)
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    logger.info(f"Uploaded {len(created)} images for {related_type}/{related_id}")
    return [ImageRead.model_validate(i) for i in created]


@router.post(
    "/upload",
    summary="Upload File",
    description="Store a single file of any type (at most 5MB) and return its URL.",
    responses={400: {"description": "File too large"}},
)
async def upload_file(file: UploadFile = File(...), storage: LocalBlobStorage = Depends(get_storage)):
    data = await _read_checked(file, images_only=False)
    return {"url": storage.save(storage.safe_name(file.filename or "file"), data)}
