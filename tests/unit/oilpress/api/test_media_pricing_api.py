"""API tests for uploads and the pricing helpers."""

import httpx
import pytest

from src.oilpress_admin.api.http.app_data import ApplicationDependencies
from src.oilpress_admin.core.services import MediaUploadService
from tests.utils import form_field, solid_image

API = "/api/v1"


def _png(name: str = "oil.png"):
    return (name, solid_image(4, 4), "image/png")


@pytest.fixture
def failing_host(client, db_service, media_config, compression_config):
    """Client whose image host rejects every upload as unauthorized."""
    service = MediaUploadService(
        media_config=media_config,
        compression_config=compression_config,
        transport=httpx.MockTransport(lambda request: httpx.Response(401)),
    )
    client.app.state.app_dependencies = ApplicationDependencies(
        database_service=db_service, media_service=service
    )
    return client


class TestMediaRoutes:
    def test_upload_images(self, client, upload_requests):
        response = client.post(
            f"{API}/media/images",
            files=[("files", _png("a.png")), ("files", _png("b.png"))],
            data={"folder": "dev-admin/gifts"},
        )
        assert response.status_code == 200
        body = response.json()
        assert [url.rsplit("/", 1)[-1] for url in body["urls"]] == ["a.png", "b.png"]
        assert body["warnings"] == []
        assert len(upload_requests) == 2

    def test_section_picks_the_upload_folder(self, client, upload_requests):
        response = client.post(
            f"{API}/media/images", files=[("files", _png())], data={"section": "banners"}
        )
        assert response.status_code == 200
        assert form_field(upload_requests[0], "folder") == "dev-admin/banners"

    def test_explicit_folder_wins_over_section(self, client, upload_requests):
        client.post(
            f"{API}/media/images",
            files=[("files", _png())],
            data={"section": "banners", "folder": "campaigns/diwali"},
        )
        assert form_field(upload_requests[0], "folder") == "campaigns/diwali"

    def test_unknown_section(self, client, upload_requests):
        response = client.post(
            f"{API}/media/images", files=[("files", _png())], data={"section": "invoices"}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Unknown upload section: invoices"
        assert upload_requests == []

    def test_invalid_image_type(self, client, upload_requests):
        response = client.post(
            f"{API}/media/images", files=[("files", ("notes.txt", b"hello", "text/plain"))]
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Please select a valid image file (JPEG, PNG, GIF, or WebP)"
        assert upload_requests == []

    def test_host_rejection(self, failing_host):
        response = failing_host.post(f"{API}/media/images", files=[("files", _png())])
        assert response.status_code == 502
        assert "Unsigned" in response.json()["detail"]

    def test_upload_video(self, client, upload_requests):
        response = client.post(
            f"{API}/media/videos", files={"file": ("clip.mp4", b"\x00" * 64, "video/mp4")}
        )
        assert response.status_code == 200
        assert str(upload_requests[0].url).endswith("/video/upload")
        assert form_field(upload_requests[0], "folder") == "dev-admin/testimonials"

    def test_video_rejects_images(self, client):
        response = client.post(f"{API}/media/videos", files={"file": _png()})
        assert response.status_code == 400
        assert response.json()["detail"] == "Unsupported file type: image/png"

    def test_validate_only(self, client, upload_requests):
        response = client.post(f"{API}/media/validate", files={"file": _png()})
        assert response.json() == {"is_valid": True, "error": None, "warning": None}
        assert upload_requests == []

    def test_optimized_url_from_delivery_url(self, client):
        response = client.get(
            f"{API}/media/optimized-url",
            params={"url": "https://res.cloudinary.com/test-cloud/image/upload/v1/abc123.jpg", "width": 400},
        )
        assert response.json() == {
            "public_id": "abc123",
            "url": "https://res.cloudinary.com/test-cloud/image/upload/q_auto:good,w_400,c_scale/abc123",
        }

    def test_optimized_url_needs_input(self, client):
        assert client.get(f"{API}/media/optimized-url").status_code == 422


class TestPricingRoutes:
    def test_preview(self, client):
        response = client.get(f"{API}/pricing/preview", params={"actual_mrp": 140, "discount": 15})
        assert response.json()["selling_mrp"] == 119

    def test_preview_rejects_large_discount(self, client):
        response = client.get(f"{API}/pricing/preview", params={"actual_mrp": 140, "discount": 120})
        assert response.status_code == 422

    def test_discount(self, client):
        response = client.get(f"{API}/pricing/discount", params={"actual_mrp": 180, "selling_mrp": 165})
        assert response.json()["discount"] == 8
