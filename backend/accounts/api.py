import logging

from django.shortcuts import get_object_or_404
from rest_framework import mixins, status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import GuideApplication, UserProfile
from .serializers import GuideApplicationSerializer, UserProfileSerializer, UserRoleSerializer

logger = logging.getLogger(__name__)


class UserListCreateView(APIView):
    """List every user or register a new one by email."""

    def get(self, request, *args, **kwargs):
        users = UserProfile.objects.all()
        return Response(UserProfileSerializer(users, many=True).data)

    def post(self, request, *args, **kwargs):
        serializer = UserProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        if UserProfile.objects.filter(email__iexact=email).exists():
            return Response(
                {"detail": "User already exists."},
                status=status.HTTP_409_CONFLICT,
            )
        user = serializer.save()
        logger.info("Registered user %s", user.email)
        return Response(UserProfileSerializer(user).data, status=status.HTTP_201_CREATED)


class UserRoleView(APIView):
    def get(self, request, email, *args, **kwargs):
        user = get_object_or_404(UserProfile, email__iexact=email)
        return Response({"role": user.role})

    def patch(self, request, email, *args, **kwargs):
        serializer = UserRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        role = serializer.validated_data["role"]

        matched = UserProfile.objects.filter(email__iexact=email).update(role=role)
        if matched == 0:
            return Response({"detail": "User not found."}, status=status.HTTP_404_NOT_FOUND)
        logger.info("Changed role of %s to %s", email, role)
        return Response({"email": email, "role": role})


class GuideApplicationViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = GuideApplicationSerializer
    queryset = GuideApplication.objects.all()
