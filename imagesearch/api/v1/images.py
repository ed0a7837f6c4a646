"""Image search API.

Endpoints:
  POST /v1/images/search - Google Images results as structured records
"""

import logging

from fastapi import APIRouter, HTTPException

from imagesearch.schemas.images import ImageSearchRequest, ImageSearchResponse
from imagesearch.services.filters import resolve_filters
from imagesearch.services.google_images import google_images

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/search",
    response_model=ImageSearchResponse,
    summary="Google Images search",
    description=(
        "Search Google Images and return the full-size image URL, the page it "
        "was found on and that page's host for each result. A single results "
        "page is loaded, so at most ~100 images are returned. limit=0 returns "
        "every image on the page. Supports colour, colour type, licence, type, "
        "time range, aspect ratio and format filters."
    ),
    response_description="Structured Google Images data",
)
async def search(request: ImageSearchRequest):
    """Search Google Images and return structured image records."""
    try:
        tokens = resolve_filters(**request.filter_options())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return await google_images(query=request.query, limit=request.limit, filter_tokens=tokens)
