"""Image downloading: type detection and de-duplicated file naming."""

import glob
import logging
import re
from pathlib import Path

import httpx
from filetype import guess

from imagesearch.exceptions import InvalidImageError
from imagesearch.services.fetcher import fetch_bytes

logger = logging.getLogger(__name__)

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def slugify(value: str, fallback: str = "image") -> str:
    """Filesystem-friendly ASCII slug for use as a file stem."""
    normalized = value.encode("ascii", "ignore").decode("ascii").lower()
    normalized = _SLUG_PATTERN.sub("-", normalized).strip("-")
    return normalized or fallback


def detect_image_extension(data: bytes, content_type: str | None = None) -> str | None:
    """Guess an image file extension from the file signature, then Content-Type.

    Returns a lowercase extension without the dot, or None if the data is not
    an image.
    """
    kind = guess(data)
    if kind is not None:
        if not kind.mime.startswith("image/"):
            return None
        ext = kind.extension.lower()
        return "jpg" if ext == "jpeg" else ext

    if not content_type:
        return None
    parts = content_type.split(";")[0].strip().lower().split("/")
    if len(parts) == 2 and parts[0] == "image" and parts[1]:
        ext = parts[1].split("+")[0]
        return "jpg" if ext == "jpeg" else ext
    return None


def next_free_stem(directory: Path, stem: str, start: int = 0) -> tuple[str, int]:
    """Return the first ``f"{stem}{n}"`` (n >= start) with no file of any extension.

    The probe is not atomic: two writers targeting the same directory can pick
    the same name. Callers downloading concurrently into one directory must
    serialise around this call and the write that follows.
    """
    suffix = start
    pattern = glob.escape(str(directory / stem))
    while glob.glob(f"{pattern}{suffix}.*"):
        suffix += 1
    return f"{stem}{suffix}", suffix


async def download_image(
    url: str,
    directory: Path | str,
    name: str,
    client: httpx.AsyncClient | None = None,
) -> Path:
    """Download an image into ``directory`` as ``name`` plus the detected extension.

    An existing file with the same name and extension is overwritten; use
    next_free_stem() to pick a unique name.

    Raises:
        TransportError: the request failed.
        InvalidImageError: the response is not an image.
        OSError: the file could not be written.
    """
    directory = Path(directory).resolve()
    directory.mkdir(parents=True, exist_ok=True)

    resp = await fetch_bytes(url, client)
    content_type = resp.headers.get("Content-Type")
    data = resp.content

    extension = detect_image_extension(data, content_type)
    if extension is None:
        raise InvalidImageError(url, content_type)

    destination = directory / f"{name}.{extension}"
    destination.write_bytes(data)
    logger.debug("Saved %s (%d bytes) to %s", url[:120], len(data), destination)
    return destination
