from __future__ import annotations

import base64
import logging
import time
from typing import Iterable, List, Optional

import requests
from django.conf import settings

from core.exceptions import ImageUploadError, ValidationError

logger = logging.getLogger(__name__)


def _upload_name(prefix: str, filename: str) -> str:
    stamp = int(time.time() * 1000)
    return f"{prefix}-{stamp}-{filename}" if prefix else f"{stamp}-{filename}"


class ImgBBClient:
    """
    Upload images to ImgBB and return their public URLs.

    The client owns a ``requests.Session``; close it (or use the client as a
    context manager) once the request that needed it is finished.
    """

    def __init__(
        self,
        api_key: str,
        *,
        upload_url: str = "https://api.imgbb.com/1/upload",
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise RuntimeError("IMGBB_API_KEY is not configured.")
        self.api_key = api_key
        self.upload_url = upload_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def upload(self, content: bytes, name: str) -> str:
        payload = {
            "image": base64.b64encode(content).decode("ascii"),
            "name": name,
        }
        try:
            response = self.session.post(
                self.upload_url,
                params={"key": self.api_key},
                data=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()["data"]["url"]
        except requests.RequestException as exc:
            logger.exception("Error uploading %s to ImgBB: %s", name, exc)
            raise ImageUploadError() from exc
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Unexpected ImgBB response for %s: %s", name, exc)
            raise ImageUploadError() from exc

    def upload_files(self, files: Iterable, prefix: str = "") -> List[str]:
        return [upload_file(self, file, prefix) for file in files]

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class StubImageHost:
    """
    Stand-in for ImgBB in tests and local development.

    Returns predictable URLs built from the upload name so the rest of the flow
    stores something that looks like a hosted image.
    """

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")
        self.uploaded: list[str] = []

    def upload(self, content: bytes, name: str) -> str:
        url = f"{self.base_url}/{name}"
        self.uploaded.append(url)
        return url

    def upload_files(self, files: Iterable, prefix: str = "") -> List[str]:
        return [upload_file(self, file, prefix) for file in files]

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def upload_file(host, file, prefix: str = "") -> str:
    """Upload one Django uploaded file through ``host``."""
    max_bytes = settings.IMAGE_MAX_UPLOAD_BYTES
    if file.size is not None and file.size > max_bytes:
        raise ValidationError(f"{file.name} exceeds the {max_bytes // (1024 * 1024)} MB upload limit.")
    file.seek(0)
    return host.upload(file.read(), _upload_name(prefix, file.name))


def _should_use_stub() -> bool:
    if getattr(settings, "IMAGE_HOST_USE_STUB", False):
        return True
    return not getattr(settings, "IMGBB_API_KEY", "")


def get_image_host():
    if _should_use_stub():
        return StubImageHost(settings.IMAGE_HOST_STUB_URL)
    return ImgBBClient(
        settings.IMGBB_API_KEY,
        upload_url=settings.IMGBB_UPLOAD_URL,
        timeout=settings.IMAGE_HOST_TIMEOUT,
    )
