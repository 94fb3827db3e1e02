import logging

from django.utils import timezone
from rest_framework import mixins, status, viewsets
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from core.api import list_param, upload_images

from .models import Story
from .serializers import StorySerializer

logger = logging.getLogger(__name__)


class StoryViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    Travel stories with hosted images.

    Creation needs at least one image. A partial update can drop existing image
    URLs (``remove_images``) and append newly uploaded ``images`` in one call.
    """

    serializer_class = StorySerializer
    queryset = Story.objects.all()
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        files = request.FILES.getlist("images")
        if not files:
            return Response(
                {"detail": "At least one image is required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        urls, error = upload_images(files, prefix="story")
        if error is not None:
            return error

        story = serializer.save(images=urls)
        logger.info("Created story %s for %s", story.pk, story.email)
        return Response(self.get_serializer(story).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        story = self.get_object()
        serializer = self.get_serializer(story, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        removed = [url for url in list_param(request.data, "remove_images") if url in story.images]
        added = []
        files = request.FILES.getlist("images")
        if files:
            added, error = upload_images(files, prefix="story")
            if error is not None:
                return error

        images = [url for url in story.images if url not in removed] + added
        story = serializer.save(images=images, updated_at=timezone.now())
        logger.info("Updated story %s: %d removed, %d added", story.pk, len(removed), len(added))

        return Response(
            {
                "story": self.get_serializer(story).data,
                "removed_images": removed,
                "added_images": added,
            }
        )
