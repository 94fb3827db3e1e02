import base64
import types

import pytest
import requests
from django.core.files.uploadedfile import SimpleUploadedFile

from core.exceptions import ImageUploadError, ValidationError
from core.services import image_host


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.payload is None:
            raise ValueError("no json")
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def _client(session):
    return image_host.ImgBBClient(
        "imgbb-key",
        upload_url="https://imgbb.test/upload",
        timeout=5,
        session=session,
    )


def test_upload_posts_base64_payload():
    session = FakeSession(FakeResponse({"data": {"url": "https://i.ibb.co/abc/photo.png"}}))

    url = _client(session).upload(b"\x89PNG", "photo.png")

    assert url == "https://i.ibb.co/abc/photo.png"
    called_url, kwargs = session.calls[0]
    assert called_url == "https://imgbb.test/upload"
    assert kwargs["params"] == {"key": "imgbb-key"}
    assert kwargs["timeout"] == 5
    assert base64.b64decode(kwargs["data"]["image"]) == b"\x89PNG"
    assert kwargs["data"]["name"] == "photo.png"


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(FakeResponse({"error": "bad"}, status_code=400)),
        FakeSession(error=requests.ConnectionError("offline")),
        FakeSession(FakeResponse({"success": False})),
        FakeSession(FakeResponse(None)),
    ],
)
def test_upload_failures_raise_image_upload_error(session):
    with pytest.raises(ImageUploadError):
        _client(session).upload(b"data", "photo.png")


def test_client_requires_api_key():
    with pytest.raises(RuntimeError):
        image_host.ImgBBClient("")


def test_context_manager_closes_session():
    session = FakeSession()

    with _client(session):
        pass

    assert session.closed


def test_upload_file_names_and_size_limit(settings, monkeypatch):
    settings.IMAGE_MAX_UPLOAD_BYTES = 8
    monkeypatch.setattr(image_host, "time", types.SimpleNamespace(time=lambda: 1718000000.123))
    host = image_host.StubImageHost("https://img.test/")

    url = image_host.upload_file(host, SimpleUploadedFile("tiny.png", b"1234"), prefix="story")

    assert url == "https://img.test/story-1718000000123-tiny.png"
    assert host.uploaded == [url]
    with pytest.raises(ValidationError):
        image_host.upload_file(host, SimpleUploadedFile("big.png", b"123456789"), prefix="story")


def test_get_image_host_selection(settings):
    settings.IMAGE_HOST_USE_STUB = False
    settings.IMGBB_API_KEY = "imgbb-key"
    client = image_host.get_image_host()
    assert isinstance(client, image_host.ImgBBClient)
    client.close()

    settings.IMGBB_API_KEY = ""
    assert isinstance(image_host.get_image_host(), image_host.StubImageHost)
