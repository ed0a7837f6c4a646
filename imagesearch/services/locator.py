"""Locate the embedded image data in a Google Images results page.

The results are injected as the last AF_initDataCallback block on the page:

    AF_initDataCallback({key: 'ds:1', hash: '2', data:[...], sideChannel: {}});</script>

Earlier blocks carry unrelated datasets, so the search runs from the end.
"""

import html
import logging

from imagesearch.config import settings
from imagesearch.exceptions import PHASE_LOCATE, ExtractionFormatError

logger = logging.getLogger(__name__)


def locate_payload(
    page: str,
    *,
    marker: str | None = None,
    close_marker: str | None = None,
    trailing_trim: int | None = None,
) -> str:
    """Carve the JSON array out of the page and HTML-unescape it.

    Raises ExtractionFormatError(phase="locate") when the marker, the opening
    bracket or the closing script tag cannot be found.
    """
    marker = marker or settings.DATA_MARKER
    close_marker = close_marker or settings.SCRIPT_CLOSE_MARKER
    trailing_trim = settings.TRAILING_TRIM if trailing_trim is None else trailing_trim

    script_start = page.rfind(marker)
    if script_start == -1:
        raise ExtractionFormatError(
            f"Structure marker not found: no {marker!r} in page ({len(page)} chars)",
            phase=PHASE_LOCATE,
            step="marker",
        )

    array_start = page.find("[", script_start)
    if array_start == -1:
        raise ExtractionFormatError(
            f"Structure marker not found: no '[' after {marker!r}",
            phase=PHASE_LOCATE,
            step="array_start",
        )

    script_end = page.find(close_marker, array_start)
    if script_end == -1:
        raise ExtractionFormatError(
            f"Structure marker not found: no {close_marker!r} after data array",
            phase=PHASE_LOCATE,
            step="script_end",
        )

    array_end = script_end - trailing_trim
    if array_end <= array_start:
        raise ExtractionFormatError(
            f"Structure marker not found: {close_marker!r} too close to data array "
            f"for a {trailing_trim}-char trailer",
            phase=PHASE_LOCATE,
            step="script_end",
        )

    payload = html.unescape(page[array_start:array_end])
    logger.debug("Located %d-char data payload at offset %d", len(payload), array_start)
    return payload
