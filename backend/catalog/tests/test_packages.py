import io
import json
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from PIL import Image
from rest_framework.test import APIClient

from catalog.models import TourPackage


def _image_file(name: str = "cover.png") -> SimpleUploadedFile:
    buffer = io.BytesIO()
    Image.new("RGB", (32, 32), color="green").save(buffer, format="PNG")
    buffer.seek(0)
    return SimpleUploadedFile(name, buffer.read(), content_type="image/png")


@pytest.fixture(autouse=True)
def stub_image_host(settings):
    settings.IMAGE_HOST_USE_STUB = True
    settings.IMAGE_HOST_STUB_URL = "https://img.test"


@pytest.fixture
def client():
    return APIClient()


def _package(n: int) -> TourPackage:
    return TourPackage.objects.create(
        package_name=f"Package {n}",
        location="Sylhet",
        price="100.00",
        images=[f"https://img.test/{n}.png"],
    )


@pytest.mark.django_db
def test_create_package_uploads_images(client):
    response = client.post(
        reverse("package-list"),
        {
            "package_name": "Tea Gardens",
            "location": "Sreemangal",
            "price": "120.50",
            "about": "Estates and rainforest.",
            "tour_plan": json.dumps([{"day": 1, "title": "Estates"}]),
            "images": [_image_file("a.png"), _image_file("b.png")],
        },
        format="multipart",
    )

    assert response.status_code == 201
    body = response.json()
    assert body["tour_plan"] == [{"day": 1, "title": "Estates"}]
    assert len(body["images"]) == 2
    assert all(url.startswith("https://img.test/package-") for url in body["images"])
    assert body["images"][0].endswith("-a.png")
    assert TourPackage.objects.get().price == Decimal("120.50")


@pytest.mark.django_db
def test_create_package_requires_images(client):
    response = client.post(
        reverse("package-list"),
        {"package_name": "Tea Gardens", "location": "Sreemangal", "price": "120"},
        format="multipart",
    )

    assert response.status_code == 400
    assert TourPackage.objects.count() == 0


@pytest.mark.django_db
def test_create_package_rejects_bad_tour_plan(client):
    response = client.post(
        reverse("package-list"),
        {
            "package_name": "Tea Gardens",
            "location": "Sreemangal",
            "price": "120",
            "tour_plan": json.dumps({"day": 1}),
            "images": [_image_file()],
        },
        format="multipart",
    )

    assert response.status_code == 400
    assert "tour_plan" in response.json()


@pytest.mark.django_db
def test_oversized_image_is_rejected(client, settings):
    settings.IMAGE_MAX_UPLOAD_BYTES = 10

    response = client.post(
        reverse("package-list"),
        {"package_name": "Tea", "location": "Sylhet", "price": "10", "images": [_image_file()]},
        format="multipart",
    )

    assert response.status_code == 400
    assert TourPackage.objects.count() == 0


@pytest.mark.django_db
def test_list_detail_and_random(client):
    packages = [_package(n) for n in range(5)]

    listing = client.get(reverse("package-list")).json()
    assert len(listing) == 5

    detail = client.get(reverse("package-detail", args=[packages[0].pk]))
    assert detail.status_code == 200
    assert detail.json()["package_name"] == "Package 0"
    assert client.get(reverse("package-detail", args=[9999])).status_code == 404

    sample = client.get(reverse("package-random")).json()
    assert len(sample) == 3
    assert len({item["id"] for item in sample}) == 3
