"""imagesearch exception hierarchy.

Every error raised by the package inherits from ImageSearchError. The
subclasses separate a failed fetch from a page whose embedded data no longer
has the expected shape, so callers can report upstream drift distinctly.
"""

PHASE_LOCATE = "locate"
PHASE_NAVIGATE = "navigate"
PHASE_ENTRY = "entry"


class ImageSearchError(Exception):
    """Base exception for all imagesearch errors."""

    error_type = "imagesearch_error"


class TransportError(ImageSearchError):
    """Fetching a page or asset failed (network error, timeout, non-2xx)."""

    error_type = "transport_error"

    def __init__(self, message: str, *, url: str = "", status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ExtractionFormatError(ImageSearchError):
    """The embedded data was not where or what it was expected to be.

    ``phase`` is one of ``"locate"``, ``"navigate"`` or ``"entry"``; ``step``
    names the access that failed, e.g. ``"[56][1]"``.
    """

    error_type = "extraction_format_error"

    def __init__(self, message: str, *, phase: str, step: str = ""):
        super().__init__(message)
        self.phase = phase
        self.step = step

    def __str__(self) -> str:
        base = super().__str__()
        if self.step:
            return f"{base} (phase={self.phase}, step={self.step})"
        return f"{base} (phase={self.phase})"


class DecodeError(ImageSearchError):
    """The located payload was not valid JSON."""

    error_type = "decode_error"


class InvalidImageError(ImageSearchError):
    """Downloaded bytes are not a recognised image format."""

    error_type = "invalid_image"

    def __init__(self, url: str, content_type: str | None = None):
        self.url = url
        self.content_type = content_type
        super().__init__(f"Invalid image format for {url} (Content-Type={content_type or 'unknown'})")
