"""
Site settings endpoints.

Settings are a flat key/value table of strings. Besides the generic
endpoints there are typed views for the animal group size, custom groups,
the site logo and the hero banner images.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.entities import CustomGroup
from careerconnect.core.database.repositories import CustomGroupRepository, ImageRepository, SettingRepository
from careerconnect.core.errors import ValidationFailedError
from careerconnect.core.logging_config import get_logger
from careerconnect.core.models.io.settings import (
    CustomGroupCreate,
    CustomGroupRead,
    CustomGroupUpdate,
    GroupSizeUpdate,
    ImageRead,
    LogoSettings,
    SettingRead,
    SettingsBulkUpdate,
    SettingUpsert,
)
from careerconnect.integrations import LocalBlobStorage
from careerconnect.server.auth import require_admin
from careerconnect.server.core.constant import MAX_UPLOAD_SIZE
from careerconnect.server.services.deps import get_storage
from careerconnect.server.services.settings import SettingsService, setting_text

router = APIRouter(tags=["settings"], dependencies=[Depends(require_admin)])
logger = get_logger(__name__)

LOGO_IMAGE_KEY = "logoImage"
LOGO_TITLE_KEY = "logoTitle"
HERO_RELATED_TYPE = "hero"


@router.get("", response_model=List[SettingRead], summary="List Settings")
async def list_settings(session: AsyncSession = Depends(get_session)) -> List[SettingRead]:
    return [SettingRead.model_validate(s) for s in await SettingRepository(session).list_all()]


@router.post(
    "",
    response_model=SettingRead,
    summary="Upsert Setting",
    responses={400: {"description": "key and value are required"}},
)
async def upsert_setting(payload: SettingUpsert, session: AsyncSession = Depends(get_session)) -> SettingRead:
    if not payload.key or payload.value is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="key and value are required")
    setting = await SettingRepository(session).upsert(payload.key, setting_text(payload.value))
    return SettingRead.model_validate(setting)


@router.post(
    "/bulk",
    summary="Bulk Upsert Settings",
    description="Upsert several settings in one transaction.",
    responses={400: {"description": "settings object is required"}},
)
async def bulk_upsert(payload: SettingsBulkUpdate, session: AsyncSession = Depends(get_session)):
    if not payload.settings:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="settings object is required")
    count = await SettingsService(session).bulk_upsert(payload.settings)
    return {"success": True, "updated": count}


@router.put(
    "/groups",
    summary="Set Group Size",
    description="Change how many animals form one group and relabel every animal accordingly.",
    responses={400: {"description": "Missing or out of range items_per_group"}},
)
async def update_group_size(payload: GroupSizeUpdate, session: AsyncSession = Depends(get_session)):
    if payload.items_per_group is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "items_per_group is required"},
        )
    try:
        data = await SettingsService(session).update_group_size(payload.items_per_group)
    except ValidationFailedError as e:
        return JSONResponse(status_code=e.status_code, content={"success": False, "error": e.message})
    return {"success": True, "data": data}


@router.get("/groups/custom", response_model=List[CustomGroupRead], summary="List Custom Groups")
async def list_custom_groups(session: AsyncSession = Depends(get_session)) -> List[CustomGroupRead]:
    return [CustomGroupRead.model_validate(g) for g in await CustomGroupRepository(session).list_all()]


@router.post(
    "/groups/create",
    response_model=CustomGroupRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Custom Group",
    responses={400: {"description": "name, item_count and animal_type are required"}},
)
async def create_custom_group(
    payload: CustomGroupCreate, session: AsyncSession = Depends(get_session)
) -> CustomGroupRead:
    if not payload.name or payload.item_count is None or payload.animal_type is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="name, item_count and animal_type are required"
        )
    group = CustomGroup(**payload.model_dump())
    return CustomGroupRead.model_validate(await CustomGroupRepository(session).create(group))


@router.put(
    "/groups/{group_id}",
    response_model=CustomGroupRead,
    summary="Update Custom Group",
    responses={404: {"description": "Group not found"}},
)
async def update_custom_group(
    group_id: int, payload: CustomGroupUpdate, session: AsyncSession = Depends(get_session)
) -> CustomGroupRead:
    repo = CustomGroupRepository(session)
    group = await repo.get_by_id(group_id)
    if group is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(group, key, value)
    return CustomGroupRead.model_validate(await repo.update(group))


@router.delete("/groups/{group_id}", summary="Delete Custom Group", responses={404: {"description": "Group not found"}})
async def delete_custom_group(group_id: int, session: AsyncSession = Depends(get_session)):
    if not await CustomGroupRepository(session).delete(group_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return {"success": True}


@router.get("/logo", response_model=LogoSettings, summary="Get Logo Settings")
async def get_logo(session: AsyncSession = Depends(get_session)) -> LogoSettings:
    repo = SettingRepository(session)
    return LogoSettings(
        logo_image=await repo.get_value(LOGO_IMAGE_KEY),
        logo_title=await repo.get_value(LOGO_TITLE_KEY),
    )


@router.put(
    "/logo",
    summary="Update Logo Settings",
    description="Only the fields present in the body are written; null values are stored as empty strings.",
    responses={400: {"description": "No update data provided"}},
)
async def update_logo(payload: LogoSettings, session: AsyncSession = Depends(get_session)):
    keys = {"logo_image": LOGO_IMAGE_KEY, "logo_title": LOGO_TITLE_KEY}
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No update data provided")
    await SettingsService(session).bulk_upsert({keys[k]: v or "" for k, v in changes.items()})
    return {"success": True, "data": changes}


@router.post(
    "/upload/logo",
    summary="Upload Logo",
    description="Store a logo image and point the logo setting at it.",
    responses={400: {"description": "Not an image or too large"}},
)
async def upload_logo(
    logo: UploadFile = File(...),
    session: AsyncSession = Depends(get_session),
    storage: LocalBlobStorage = Depends(get_storage),
):
    data = await logo.read()
    if not (logo.content_type or "").startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image files are allowed")
    if len(data) > MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File size must be less than 5MB")
    url = storage.save(storage.safe_name(logo.filename or "logo"), data)
    await SettingRepository(session).upsert(LOGO_IMAGE_KEY, url)
    logger.info(f"Logo uploaded to {url}")
    return {"success": True, "data": {"url": url}}


@router.get("/hero-images", response_model=List[ImageRead], summary="List Hero Images")
async def list_hero_images(session: AsyncSession = Depends(get_session)) -> List[ImageRead]:
    images = await ImageRepository(session).list_related(None, HERO_RELATED_TYPE)
    return [ImageRead.model_validate(i) for i in images]


@router.delete(
    "/hero-images/{image_id}",
    summary="Delete Hero Image",
    description="Delete the image row and its stored file.",
    responses={404: {"description": "Image not found"}},
)
async def delete_hero_image(
    image_id: int,
    session: AsyncSession = Depends(get_session),
    storage: LocalBlobStorage = Depends(get_storage),
):
    repo = ImageRepository(session)
    image = await repo.get_by_id(image_id)
    if image is None or image.related_type != HERO_RELATED_TYPE:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    await repo.delete(image.id)
    storage.delete(image.url)
    return {"success": True}
