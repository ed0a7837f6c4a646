"""Google Images search service.

Fetches google.com/search?tbm=isch&q=<query> via a single HTTP GET and
extracts the image records embedded in its AF_initDataCallback block. Only one
page is loaded per search, which yields roughly 100 images at most.

The bulk download workflow walks the extracted candidates in page order and
reports how many of the requested images it could not deliver, instead of
failing when some assets cannot be fetched.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from imagesearch.exceptions import InvalidImageError, TransportError
from imagesearch.schemas.images import ImageRecord, ImageSearchResponse
from imagesearch.services.downloader import download_image, next_free_stem, slugify
from imagesearch.services.extractor import extract
from imagesearch.services.fetcher import fetch_page, is_blocked, new_client
from imagesearch.services.filters import build_query_url

logger = logging.getLogger(__name__)


@dataclass
class DownloadResult:
    """Files written by download_images() and the shortfall against the request."""

    paths: list[Path] = field(default_factory=list)
    missing: int = 0


async def search_images(
    query: str,
    limit: int = 0,
    filter_tokens: list[str] | tuple[str, ...] = (),
    client: httpx.AsyncClient | None = None,
) -> list[ImageRecord]:
    """Search for ``query`` and return up to ``limit`` image records (0 = all)."""
    url = build_query_url(query, filter_tokens)
    page = await fetch_page(url, client)

    if is_blocked(page):
        logger.warning("Google Images: CAPTCHA/block page returned for '%s'", query)

    images = extract(page, limit)
    logger.info("Google Images: %d images for '%s'", len(images), query)
    return images


async def image_urls(
    query: str,
    limit: int = 0,
    filter_tokens: list[str] | tuple[str, ...] = (),
    client: httpx.AsyncClient | None = None,
) -> list[str]:
    """Search for ``query`` and return only the image URLs."""
    images = await search_images(query, limit, filter_tokens, client)
    return [image.asset_url for image in images]


async def google_images(
    query: str,
    limit: int = 0,
    filter_tokens: list[str] | tuple[str, ...] = (),
    client: httpx.AsyncClient | None = None,
) -> ImageSearchResponse:
    """Search and wrap the records in an API response with timing."""
    t0 = time.time()
    images = await search_images(query, limit, filter_tokens, client)
    return ImageSearchResponse(
        success=bool(images),
        query=query,
        total_results=len(images),
        time_taken=round(time.time() - t0, 3),
        images=images,
    )


async def download_images(
    query: str,
    limit: int,
    directory: Path | str,
    filter_tokens: list[str] | tuple[str, ...] = (),
    client: httpx.AsyncClient | None = None,
) -> DownloadResult:
    """Search for ``query`` and download up to ``limit`` images into ``directory``.

    ``limit=0`` tries every image found. Files are named after the query with
    the first free numeric suffix (``cats0.jpg``, ``cats1.png``, ...). A failed
    asset is skipped and the next candidate tried; ``missing`` counts the
    requested images that could not be delivered.

    Downloads run one at a time. Concurrent callers writing into the same
    directory must serialise themselves, since name probing is not atomic.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    directory = Path(directory).resolve()
    own_client = client is None
    if own_client:
        client = new_client()

    result = DownloadResult()
    try:
        images = await search_images(query, 0, filter_tokens, client)
        target = limit or len(images)
        stem = slugify(query)
        suffix = 0

        for image in images:
            if len(result.paths) >= target:
                break
            name, suffix = next_free_stem(directory, stem, suffix)
            try:
                path = await download_image(image.asset_url, directory, name, client)
            except (TransportError, InvalidImageError, OSError) as e:
                logger.warning("Skipping %s: %s", image.asset_url[:120], e)
                continue
            result.paths.append(path)
    finally:
        if own_client:
            await client.aclose()

    result.missing = target - len(result.paths)
    logger.info(
        "Google Images: downloaded %d/%d images for '%s' into %s",
        len(result.paths), target, query, directory,
    )
    return result
