"""Google Images extractor - positional AF_initDataCallback parser.

Decodes the payload carved out by the locator and walks a fixed,
reverse-engineered path to the image entries. Every access goes through a
guarded step so a shifted index surfaces as ExtractionFormatError naming the
step, never as a bare IndexError/KeyError/TypeError.
"""

import json
import logging

from imagesearch.exceptions import (
    PHASE_ENTRY,
    PHASE_NAVIGATE,
    DecodeError,
    ExtractionFormatError,
)
from imagesearch.schemas.images import ImageRecord
from imagesearch.services.locator import locate_payload

logger = logging.getLogger(__name__)

# ===================================================================
# Field index mapping (reverse-engineered)
# ===================================================================
#
#   data[56][1][0][0][1][0]        = list of candidate entries
#
# Per entry:
#   entry[0][0]["444383007"]       = image slot
#   slot[1]                        = details, null when the slot has no image
#   details[3][0]                  = full-size image URL
#   details[9]["2003"]             = source info
#   source_info[2]                 = URL of the page hosting the image
#   source_info[17]                = host of that page
#
# The slot key has no upstream meaning and is the value most likely to move
# between page revisions.

IMAGE_SLOT_KEY = "444383007"
SOURCE_INFO_KEY = "2003"

ENTRY_LIST_PATH = (56, 1, 0, 0, 1, 0)
SLOT_PATH = (0, 0, IMAGE_SLOT_KEY)
ASSET_URL_PATH = (3, 0)
SOURCE_INFO_PATH = (9, SOURCE_INFO_KEY)
SOURCE_URL_INDEX = 2
SOURCE_HOST_INDEX = 17

_MISSING = object()


# ===================================================================
# Guarded navigation
# ===================================================================


def _step(current, key):
    """One guarded access: list index for int keys, mapping lookup for str keys."""
    if isinstance(key, int):
        if isinstance(current, list) and 0 <= key < len(current):
            return current[key]
        return _MISSING
    if isinstance(current, dict) and key in current:
        return current[key]
    return _MISSING


def _format_path(path) -> str:
    return "".join(f"[{key!r}]" if isinstance(key, str) else f"[{key}]" for key in path)


def _describe_failure(current, key) -> str:
    if current is None:
        return "value is null"
    if isinstance(key, int):
        if not isinstance(current, list):
            return f"expected array, got {type(current).__name__}"
        return f"index {key} out of range (length {len(current)})"
    if not isinstance(current, dict):
        return f"expected object, got {type(current).__name__}"
    return f"missing key {key!r}"


def safe_get(data, *path, default=None):
    """Safely traverse a decoded JSON tree by index/key chain."""
    current = data
    for key in path:
        current = _step(current, key)
        if current is _MISSING:
            return default
    return current if current is not None else default


def navigate(data, path, phase: str, *, label: str = "data"):
    """Traverse ``path`` or raise ExtractionFormatError naming the failed step.

    A null anywhere along the path (including the final value) is a failure.
    """
    current = data
    for depth, key in enumerate(path):
        nxt = _step(current, key)
        if nxt is _MISSING or nxt is None:
            reason = _describe_failure(current, key) if nxt is _MISSING else "value is null"
            step = label + _format_path(path[: depth + 1])
            raise ExtractionFormatError(
                f"Unexpected structure at {step}: {reason}",
                phase=phase,
                step=step,
            )
        current = nxt
    return current


def _string_at(data, path, label: str) -> str:
    value = navigate(data, path, PHASE_ENTRY, label=label)
    if not isinstance(value, str) or not value:
        step = label + _format_path(path)
        raise ExtractionFormatError(
            f"Unexpected structure at {step}: expected non-empty string, got {value!r}",
            phase=PHASE_ENTRY,
            step=step,
        )
    return value


# ===================================================================
# Parser
# ===================================================================


def _parse_entry(entry) -> ImageRecord | None:
    """Project one candidate entry into an ImageRecord.

    Returns None for an empty image slot. Raises ExtractionFormatError
    (phase="entry") when the entry is malformed.
    """
    slot = navigate(entry, SLOT_PATH, PHASE_ENTRY, label="entry")
    details = _step(slot, 1)
    if details is _MISSING:
        step = "entry" + _format_path(SLOT_PATH + (1,))
        raise ExtractionFormatError(
            f"Unexpected structure at {step}: {_describe_failure(slot, 1)}",
            phase=PHASE_ENTRY,
            step=step,
        )
    if details is None:
        return None

    asset_url = _string_at(details, ASSET_URL_PATH, "details")
    source_info = navigate(details, SOURCE_INFO_PATH, PHASE_ENTRY, label="details")
    source_url = _string_at(source_info, (SOURCE_URL_INDEX,), "source_info")
    source_host = _string_at(source_info, (SOURCE_HOST_INDEX,), "source_info")

    return ImageRecord(asset_url=asset_url, source_url=source_url, source_host=source_host)


def parse_payload(payload: str, limit: int = 0) -> list[ImageRecord]:
    """Decode a located JSON payload and return its image records in page order."""
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Located payload is not valid JSON: {e}") from e
    except RecursionError as e:
        raise DecodeError("Located payload is nested too deeply to decode") from e

    if not isinstance(data, list):
        raise ExtractionFormatError(
            f"Unexpected structure at data: expected array, got {type(data).__name__}",
            phase=PHASE_NAVIGATE,
            step="data",
        )

    entries = navigate(data, ENTRY_LIST_PATH, PHASE_NAVIGATE)
    if not isinstance(entries, list):
        step = "data" + _format_path(ENTRY_LIST_PATH)
        raise ExtractionFormatError(
            f"Unexpected structure at {step}: expected array, got {type(entries).__name__}",
            phase=PHASE_NAVIGATE,
            step=step,
        )

    images: list[ImageRecord] = []
    empty = 0
    dropped = 0

    for index, entry in enumerate(entries):
        try:
            image = _parse_entry(entry)
        except ExtractionFormatError as e:
            dropped += 1
            logger.debug("Dropping image entry %d: %s", index, e)
            continue
        if image is None:
            empty += 1
            continue
        images.append(image)

    if dropped:
        logger.warning(
            "Google Images: dropped %d malformed entries of %d", dropped, len(entries)
        )
    logger.info(
        "Google Images: parsed %d images from %d entries (%d empty slots)",
        len(images), len(entries), empty,
    )

    if limit and len(images) > limit:
        images = images[:limit]
    return images


def extract(page: str, limit: int = 0) -> list[ImageRecord]:
    """Extract image records from a Google Images results page.

    At most ``limit`` records are returned unless ``limit`` is 0, in which case
    every record on the page is returned.

    Raises:
        ExtractionFormatError: the data block or the entry list is not where
            it is expected (phase "locate" or "navigate").
        DecodeError: the located data block is not valid JSON.
        ValueError: ``limit`` is negative.
    """
    return parse_payload(locate_payload(page), limit)
