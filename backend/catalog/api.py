import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from core.api import upload_images

from .models import TourPackage
from .serializers import TourPackageSerializer

logger = logging.getLogger(__name__)

RANDOM_SAMPLE_SIZE = 3


class PackageViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = TourPackageSerializer
    queryset = TourPackage.objects.all()
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

        urls, error = upload_images(files, prefix="package")
        if error is not None:
            return error

        package = serializer.save(images=urls)
        logger.info("Created package %s with %d images", package.pk, len(urls))
        return Response(self.get_serializer(package).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"])
    def random(self, request, *args, **kwargs):
        packages = TourPackage.objects.order_by("?")[:RANDOM_SAMPLE_SIZE]
        return Response(self.get_serializer(packages, many=True).data)
