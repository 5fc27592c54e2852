"""Short code redirection endpoint."""

from fastapi import APIRouter, Depends, status
from loguru import logger
from starlette.responses import RedirectResponse

from shortlink.api.dependencies import get_shortener_service
from shortlink.services.shortener import ShortUrlService

# Create router with tags
router = APIRouter(tags=["redirect"])


@router.get(
    "/{short}",
    response_class=RedirectResponse,
    status_code=status.HTTP_307_TEMPORARY_REDIRECT
)
async def redirect_to_target(
    short: str,
    shortener_service: ShortUrlService = Depends(get_shortener_service),
):
    """Redirect to the target URL of a short code."""
    short_url = await shortener_service.resolve_short_url(short)
    logger.debug(f"Redirecting {short} -> {short_url.target}")
    return RedirectResponse(
        url=short_url.target,
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )
