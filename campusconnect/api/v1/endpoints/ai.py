# File: campusconnect/api/v1/endpoints/ai.py
import logging
from typing import Any
from fastapi import APIRouter, Depends
from campusconnect import schemas
from campusconnect.api import deps
from campusconnect.services.ai_content import BannerGenerator, DescriptionGenerator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/generate-description", response_model=schemas.DescriptionResponse)
def generate_description(
    request: schemas.DescriptionRequest,
    generator: DescriptionGenerator = Depends(deps.get_description_generator),
) -> Any:
    return generator.generate(request)


@router.post("/generate-banner", response_model=schemas.BannerResponse)
def generate_banner(
    request: schemas.BannerRequest,
    generator: BannerGenerator = Depends(deps.get_banner_generator),
) -> Any:
    logger.info(f"Banner requested, colorScheme={request.color_scheme or 'DEFAULT'}")
    banner = generator.generate(request)
    return schemas.BannerResponse(success=True, banner=banner)
