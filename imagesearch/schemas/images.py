"""Pydantic schemas for image search results and the HTTP API."""

from pydantic import BaseModel, Field


# --- Records ---

class ImageRecord(BaseModel):
    """One image result: the asset, the page it was found on, and that page's host."""

    model_config = {"frozen": True}

    asset_url: str = Field(..., min_length=1, description="Direct URL of the image file")
    source_url: str = Field(..., min_length=1, description="URL of the page the image was found on")
    source_host: str = Field(..., min_length=1, description="Host of the source page (e.g. example.com)")


# --- Request ---

class ImageSearchRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=2048, description="Search query")
    limit: int = Field(0, ge=0, description="Maximum number of images (0 = all found on the page)")
    colour: str | None = Field(None, description="Dominant colour")
    colour_type: str | None = Field(None, description="color, grayscale or transparent")
    licence: str | None = Field(None, description="Usage rights")
    type: str | None = Field(None, description="Image type")
    time_range: str | None = Field(None, description="Upload time window")
    aspect_ratio: str | None = Field(None, description="Aspect ratio")
    format: str | None = Field(None, description="File format")

    def filter_options(self) -> dict[str, str | None]:
        return {
            "colour": self.colour,
            "colour_type": self.colour_type,
            "licence": self.licence,
            "type": self.type,
            "time_range": self.time_range,
            "aspect_ratio": self.aspect_ratio,
            "format": self.format,
        }


# --- Response ---

class ImageSearchResponse(BaseModel):
    success: bool = True
    query: str
    total_results: int = 0
    time_taken: float = Field(..., description="API response time in seconds")
    images: list[ImageRecord] = []


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    error_type: str
    phase: str | None = Field(None, description="Extraction phase that failed: locate, navigate or entry")
    request_id: str | None = Field(None, description="X-Request-ID of the failed request, for log lookup")
