"""HTTP fetch of search pages and image assets.

One GET per call with fixed headers, no retries. Every failure surfaces as
TransportError.
"""

import logging

import httpx

from imagesearch.config import settings
from imagesearch.exceptions import TransportError

logger = logging.getLogger(__name__)


def request_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.USER_AGENT,
        "Accept-Language": "en-US,en;q=0.9",
    }


def new_client() -> httpx.AsyncClient:
    """AsyncClient configured for search and asset requests."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=settings.HTTP_TIMEOUT,
        headers=request_headers(),
    )


async def fetch_bytes(url: str, client: httpx.AsyncClient | None = None) -> httpx.Response:
    """GET ``url`` and return the response, raising TransportError on failure.

    A caller-supplied client is used as-is and left open.
    """
    if client is None:
        async with new_client() as own_client:
            return await fetch_bytes(url, own_client)

    try:
        resp = await client.get(url, headers=request_headers())
    except httpx.HTTPError as e:
        logger.warning("HTTP error for %s: %s", url[:120], e)
        raise TransportError(f"Request failed for {url}: {e}", url=url) from e

    if not resp.is_success:
        logger.warning("HTTP %d for %s", resp.status_code, url[:120])
        raise TransportError(
            f"HTTP {resp.status_code} for {url}",
            url=url,
            status_code=resp.status_code,
        )
    return resp


async def fetch_page(url: str, client: httpx.AsyncClient | None = None) -> str:
    """Fetch a page and return its decoded text."""
    resp = await fetch_bytes(url, client)
    logger.debug("Fetched %d chars from %s", len(resp.text), url[:120])
    return resp.text


def is_blocked(page: str) -> bool:
    low = page.lower()
    return "unusual traffic" in low or "captcha" in low
