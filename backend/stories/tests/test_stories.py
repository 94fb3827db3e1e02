import io

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from PIL import Image
from rest_framework.test import APIClient

from core.exceptions import ImageUploadError
from core.services import image_host
from stories.models import Story


def _image_file(name: str = "photo.jpg") -> SimpleUploadedFile:
    buffer = io.BytesIO()
    Image.new("RGB", (16, 16), color="orange").save(buffer, format="JPEG")
    buffer.seek(0)
    return SimpleUploadedFile(name, buffer.read(), content_type="image/jpeg")


@pytest.fixture(autouse=True)
def stub_image_host(settings):
    settings.IMAGE_HOST_USE_STUB = True
    settings.IMAGE_HOST_STUB_URL = "https://img.test"


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def story(db):
    return Story.objects.create(
        title="Three days in the mangroves",
        text="Spotted deer and kingfishers.",
        email="tara@example.com",
        images=["https://img.test/one.jpg", "https://img.test/two.jpg"],
    )


@pytest.mark.django_db
def test_create_story(client):
    response = client.post(
        reverse("story-list"),
        {
            "title": "Sunset at Inani",
            "text": "Coral rocks and a long walk back.",
            "email": "tara@example.com",
            "images": [_image_file()],
        },
        format="multipart",
    )

    assert response.status_code == 201
    body = response.json()
    assert len(body["images"]) == 1
    assert body["images"][0].startswith("https://img.test/story-")
    assert body["updated_at"] is None


@pytest.mark.django_db
def test_create_story_requires_fields_and_image(client):
    no_image = client.post(
        reverse("story-list"),
        {"title": "T", "text": "x", "email": "tara@example.com"},
        format="multipart",
    )
    no_title = client.post(
        reverse("story-list"),
        {"text": "x", "email": "tara@example.com", "images": [_image_file()]},
        format="multipart",
    )

    assert no_image.status_code == 400
    assert no_title.status_code == 400
    assert "title" in no_title.json()
    assert Story.objects.count() == 0


@pytest.mark.django_db
def test_image_host_failure_maps_to_bad_gateway(client, monkeypatch):
    def failing_upload(self, content, name):
        raise ImageUploadError()

    monkeypatch.setattr(image_host.StubImageHost, "upload", failing_upload)

    response = client.post(
        reverse("story-list"),
        {"title": "T", "text": "x", "email": "tara@example.com", "images": [_image_file()]},
        format="multipart",
    )

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to upload image."


def test_list_stories(client, story):
    response = client.get(reverse("story-list"))

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [story.pk]


def test_update_story_images(client, story):
    response = client.patch(
        reverse("story-detail", args=[story.pk]),
        {
            "title": "Four days in the mangroves",
            "remove_images[]": ["https://img.test/one.jpg", "https://img.test/not-there.jpg"],
            "images": [_image_file("new.jpg")],
        },
        format="multipart",
    )

    assert response.status_code == 200
    body = response.json()
    assert body["removed_images"] == ["https://img.test/one.jpg"]
    assert len(body["added_images"]) == 1
    assert body["story"]["title"] == "Four days in the mangroves"
    assert body["story"]["images"] == ["https://img.test/two.jpg"] + body["added_images"]
    assert body["story"]["updated_at"] is not None


def test_update_story_with_json_body(client, story):
    response = client.patch(
        reverse("story-detail", args=[story.pk]),
        {"remove_images": "https://img.test/two.jpg"},
        format="json",
    )

    assert response.status_code == 200
    story.refresh_from_db()
    assert story.images == ["https://img.test/one.jpg"]


def test_delete_story(client, story):
    url = reverse("story-detail", args=[story.pk])

    assert client.delete(url).status_code == 204
    assert client.delete(url).status_code == 404
