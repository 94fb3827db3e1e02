from django.http import HttpResponse
from rest_framework import status
from rest_framework.response import Response

from core.exceptions import ImageUploadError, ServiceError, ValidationError
from core.services.image_host import get_image_host


def welcome(request):
    return HttpResponse("Lets go on a tour!!!", content_type="text/plain")


def error_body(exc: ServiceError) -> dict:
    """Response body for a service error: field errors as-is, anything else under ``detail``."""
    if isinstance(exc.detail, dict):
        return exc.detail
    return {"detail": exc.detail}


def list_param(data, name: str) -> list:
    """
    Read a repeated form field, accepting both ``name`` and ``name[]``.

    Multipart bodies arrive as a ``QueryDict``; JSON bodies may carry a list or a
    single string.
    """
    values = []
    for key in (name, f"{name}[]"):
        if hasattr(data, "getlist"):
            values.extend(data.getlist(key))
            continue
        value = data.get(key)
        if isinstance(value, (list, tuple)):
            values.extend(value)
        elif value:
            values.append(value)
    return [value for value in values if value]


def upload_images(files, prefix: str):
    """
    Push uploaded files to the image host.

    Returns ``(urls, None)`` on success or ``(None, response)`` with the error
    response the view should return.
    """
    try:
        with get_image_host() as host:
            return host.upload_files(files, prefix=prefix), None
    except ValidationError as exc:
        return None, Response(error_body(exc), status=status.HTTP_400_BAD_REQUEST)
    except ImageUploadError as exc:
        return None, Response(error_body(exc), status=status.HTTP_502_BAD_GATEWAY)
