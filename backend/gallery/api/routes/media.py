"""Media listing — the gallery's single read endpoint."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from gallery.api.deps import get_lister
from gallery.config import settings
from gallery.schemas.media import ErrorResponse, MediaItem
from gallery.services.errors import MediaListingError
from gallery.services.media_lister import MediaLister

logger = logging.getLogger(__name__)

router = APIRouter()


def _cache_control() -> str:
    return (
        f"public, s-maxage={int(settings.cache_ttl_seconds)}, "
        f"stale-while-revalidate={settings.stale_while_revalidate_seconds}"
    )


@router.get(
    "/media",
    response_model=list[MediaItem],
    responses={500: {"model": ErrorResponse}},
)
async def list_media(lister: MediaLister = Depends(get_lister)):
    """Ordered image/video listing for the gallery grid."""
    try:
        items, hit = await lister.list_media()
    except MediaListingError as e:
        logger.error("Media listing failed: %s", e)
        return JSONResponse(status_code=500, content={"error": str(e)})

    return JSONResponse(
        content=[
            item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in items
        ],
        headers={
            "Cache-Control": _cache_control(),
            "X-Cache": "HIT" if hit else "MISS",
        },
    )
