"""imagesearch -- structured Google Images results."""

from imagesearch.exceptions import (
    DecodeError,
    ExtractionFormatError,
    ImageSearchError,
    InvalidImageError,
    TransportError,
)
from imagesearch.schemas.images import ImageRecord
from imagesearch.services.downloader import download_image
from imagesearch.services.extractor import extract
from imagesearch.services.filters import build_query_url, resolve_filters
from imagesearch.services.google_images import (
    DownloadResult,
    download_images,
    image_urls,
    search_images,
)
from imagesearch.version import __version__

__all__ = [
    # Version
    "__version__",
    # Extraction
    "extract",
    "ImageRecord",
    # Search
    "build_query_url",
    "resolve_filters",
    "search_images",
    "image_urls",
    # Downloads
    "download_image",
    "download_images",
    "DownloadResult",
    # Exceptions
    "ImageSearchError",
    "TransportError",
    "ExtractionFormatError",
    "DecodeError",
    "InvalidImageError",
]
