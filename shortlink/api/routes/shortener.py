"""Short URL creation and lookup endpoints."""

from fastapi import APIRouter, Depends, Path, status
from loguru import logger

from shortlink.api import schemas
from shortlink.api.dependencies import get_shortener_service
from shortlink.services.shortener import ShortUrlService

router = APIRouter(tags=["shortener"])

ERROR_RESPONSES = {
    503: {"model": schemas.ErrorResponse, "description": "Storage backend unavailable"},
}


@router.post(
    "/urls",
    response_model=schemas.ShortUrlResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Invalid short code or target URL"},
        409: {"model": schemas.ErrorResponse, "description": "Short code already exists"},
        **ERROR_RESPONSES,
    }
)
async def create_short_url(
    url_data: schemas.ShortUrlCreateRequest,
    shortener_service: ShortUrlService = Depends(get_shortener_service),
):
    short_url = await shortener_service.create_short_url(url_data.short, url_data.target)
    logger.info(f"Created short URL {short_url.short} -> {short_url.target}")
    return schemas.ShortUrlResponse.from_entity(short_url)


@router.get(
    "/urls/{short}",
    response_model=schemas.ShortUrlResponse,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "Short code not found"},
        **ERROR_RESPONSES,
    }
)
async def get_short_url(
    short: str = Path(description="The short code to look up"),
    shortener_service: ShortUrlService = Depends(get_shortener_service),
):
    short_url = await shortener_service.resolve_short_url(short)
    return schemas.ShortUrlResponse.from_entity(short_url)
