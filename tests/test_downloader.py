"""Tests for image download helpers."""
import httpx
import pytest

from imagesearch.exceptions import InvalidImageError, TransportError
from imagesearch.services.downloader import (
    detect_image_extension,
    download_image,
    next_free_stem,
    slugify,
)

from _fixtures import GIF_BYTES, JPEG_BYTES, PNG_BYTES


class TestDetectImageExtension:
    def test_signatures(self):
        assert detect_image_extension(PNG_BYTES) == "png"
        assert detect_image_extension(JPEG_BYTES) == "jpg"
        assert detect_image_extension(GIF_BYTES) == "gif"

    def test_signature_wins_over_header(self):
        assert detect_image_extension(PNG_BYTES, "image/jpeg") == "png"

    def test_falls_back_to_content_type(self):
        assert detect_image_extension(b"????", "image/jpeg; charset=binary") == "jpg"

    def test_not_an_image(self):
        assert detect_image_extension(b"<html></html>", "text/html") is None
        assert detect_image_extension(b"<html></html>") is None
        assert detect_image_extension(b"%PDF-1.7 rest", "image/png") is None


class TestNextFreeStem:
    def test_empty_directory(self, tmp_path):
        assert next_free_stem(tmp_path, "cats") == ("cats0", 0)

    def test_any_extension_counts(self, tmp_path):
        (tmp_path / "cats0.jpg").write_bytes(b"x")
        (tmp_path / "cats1.png").write_bytes(b"x")
        assert next_free_stem(tmp_path, "cats") == ("cats2", 2)

    def test_start_suffix(self, tmp_path):
        assert next_free_stem(tmp_path, "cats", 5) == ("cats5", 5)

    def test_missing_directory(self, tmp_path):
        assert next_free_stem(tmp_path / "nope", "cats") == ("cats0", 0)


class TestSlugify:
    def test_basic(self):
        assert slugify("Mountain Lake / Sunset!") == "mountain-lake-sunset"

    def test_fallback(self):
        assert slugify("日本") == "image"


class TestDownloadImage:
    @pytest.mark.asyncio
    async def test_writes_detected_extension(self, tmp_path):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, content=PNG_BYTES, headers={"Content-Type": "image/png"})
        )
        async with httpx.AsyncClient(transport=transport) as client:
            path = await download_image("https://img.example.com/a", tmp_path / "out", "cat0", client)

        assert path == (tmp_path / "out" / "cat0.png").resolve()
        assert path.read_bytes() == PNG_BYTES

    @pytest.mark.asyncio
    async def test_rejects_non_image(self, tmp_path):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html></html>", headers={"Content-Type": "text/html"})
        )
        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(InvalidImageError):
                await download_image("https://img.example.com/a", tmp_path, "cat0", client)
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_http_error(self, tmp_path):
        transport = httpx.MockTransport(lambda request: httpx.Response(404))
        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(TransportError):
                await download_image("https://img.example.com/a", tmp_path, "cat0", client)
