"""Integration tests for FastAPI endpoints (contract tests)."""

import fitz
import pytest
from httpx import AsyncClient, ASGITransport
from pic4pdf.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.mark.asyncio
class TestHealthEndpoint:
    async def test_health_returns_ok(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["version"] == "1.0.0"


@pytest.mark.asyncio
class TestPageSizesEndpoint:
    async def test_list_page_sizes(self, client):
        resp = await client.get("/v1/page-sizes")
        assert resp.status_code == 200
        sizes = {s["name"]: s for s in resp.json()}
        assert len(sizes) == 9
        assert sizes["A4"]["w"] == 595.28
        assert sizes["Letter"]["h"] == 792


@pytest.mark.asyncio
class TestLayoutEndpoint:
    async def test_fill_crop(self, client):
        resp = await client.post("/v1/layout", json={
            "width_px": 316, "height_px": 317, "page_size": "A4", "unit": "pt", "mode": "fill",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["unit"] == "pt"
        assert data["crop"] == {"x1": 45, "y1": 0, "x2": 270, "y2": 317, "must_crop": True}
        assert data["placement"]["h"] == 841.89

    async def test_center_in_millimeters(self, client):
        resp = await client.post("/v1/layout", json={
            "width_px": 316, "height_px": 317, "unit": "mm", "mode": "center",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["page"]["w"] == pytest.approx(210.0, abs=0.01)
        assert data["crop"]["must_crop"] is False

    async def test_landscape_custom_page(self, client):
        resp = await client.post("/v1/layout", json={
            "width_px": 100, "height_px": 100, "unit": "in",
            "page_width": 4, "page_height": 6, "landscape": True, "mode": "fit",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["page"] == {"w": 6, "h": 4}
        assert data["placement"]["h"] == 4

    async def test_unknown_unit_returns_422(self, client):
        resp = await client.post("/v1/layout", json={
            "width_px": 10, "height_px": 10, "unit": "px",
        })
        assert resp.status_code == 422
        assert resp.json()["detail"]["error_code"] == "UNSUPPORTED_UNIT"

    async def test_unknown_page_size_returns_422(self, client):
        resp = await client.post("/v1/layout", json={
            "width_px": 10, "height_px": 10, "page_size": "B5",
        })
        assert resp.status_code == 422
        assert resp.json()["detail"]["error_code"] == "UNKNOWN_PAGE_SIZE"

    @pytest.mark.parametrize("side", ["page_width", "page_height"])
    async def test_lone_custom_page_side_returns_422(self, client, side):
        resp = await client.post("/v1/layout", json={
            "width_px": 10, "height_px": 10, "page_size": "A4", side: 300,
        })
        assert resp.status_code == 422
        assert "given together" in str(resp.json()["detail"])

    async def test_zero_pixels_rejected(self, client):
        resp = await client.post("/v1/layout", json={"width_px": 0, "height_px": 10})
        assert resp.status_code == 422


@pytest.mark.asyncio
class TestImagesToPdfEndpoint:
    async def test_converts_uploads(self, client, png_316x317, jpeg_640x480):
        resp = await client.post(
            "/v1/images-to-pdf",
            params={"page_size": "Letter", "mode": "fill", "crop": "true"},
            files=[
                ("files", ("square.png", png_316x317, "image/png")),
                ("files", ("photo.jpg", jpeg_640x480, "image/jpeg")),
            ],
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert resp.headers["x-page-count"] == "2"
        doc = fitz.open(stream=resp.content, filetype="pdf")
        assert len(doc) == 2
        assert doc[0].rect.width == pytest.approx(612)
        doc.close()

    async def test_content_type_used_without_extension(self, client, png_316x317):
        resp = await client.post(
            "/v1/images-to-pdf",
            files=[("files", ("upload", png_316x317, "image/png"))],
        )
        assert resp.status_code == 200

    async def test_unsupported_upload_returns_422(self, client):
        resp = await client.post(
            "/v1/images-to-pdf",
            files=[("files", ("notes.txt", b"hello", "text/plain"))],
        )
        assert resp.status_code == 422
        assert resp.json()["detail"]["error_code"] == "IMAGE_TYPE_UNSUPPORTED"

    async def test_missing_files_returns_422(self, client):
        resp = await client.post("/v1/images-to-pdf")
        assert resp.status_code == 422
