"""
Identity card OCR endpoint used to prefill sponsor and recipient forms.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from careerconnect.core.errors import OcrApiError
from careerconnect.core.logging_config import get_logger
from careerconnect.core.models.io.integrations import OcrExtractResponse
from careerconnect.integrations import IdCardDataExtractor, LlamaOcrClient
from careerconnect.server.auth import get_current_user
from careerconnect.server.core.constant import MAX_UPLOAD_SIZE, OCR_ALLOWED_CONTENT_TYPES
from careerconnect.server.services.deps import get_ocr_client

router = APIRouter(tags=["ocr"], dependencies=[Depends(get_current_user)])
logger = get_logger(__name__)


@router.post(
    "/ocr-extract",
    response_model=OcrExtractResponse,
    summary="Extract KTP Data",
    description="Read the fields of an identity card photo. Structured extraction is tried first, "
    "then plain text extraction parsed by label.",
    responses={
        400: {"description": "Unsupported file, file too large or no text detected"},
        502: {"description": "OCR service failure"},
    },
)
async def ocr_extract(
    image: UploadFile = File(...),
    ocr: LlamaOcrClient = Depends(get_ocr_client),
) -> OcrExtractResponse:
    content_type = image.content_type or ""
    if content_type not in OCR_ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Only JPEG, PNG and WebP images are allowed",
        )
    data = await image.read()
    if len(data) > MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File size must be less than 5MB")

    try:
        fields = await ocr.extract_structured(data, content_type)
        text = "\n".join(v for v in fields.model_dump().values() if v)
        return OcrExtractResponse(text=text, data=fields)
    except OcrApiError as e:
        logger.info(f"Structured OCR unavailable, falling back to text extraction: {e}")

    lines = await ocr.extract_text(data, content_type)
    if not lines:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No text detected in image")
    return OcrExtractResponse(text="\n".join(lines), data=IdCardDataExtractor().extract(lines))
