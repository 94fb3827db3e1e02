from rest_framework import serializers

from .models import GuideApplication, UserProfile


class UserProfileSerializer(serializers.ModelSerializer):
    """Public fields for a site user; the email is the natural key."""

    class Meta:
        model = UserProfile
        fields = ["id", "email", "name", "photo", "role", "created_at"]
        read_only_fields = ["id", "created_at"]
        # Uniqueness is reported by the view as a conflict, not a field error.
        extra_kwargs = {"email": {"validators": []}}

    def validate_email(self, value: str) -> str:
        return value.lower()


class UserRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=UserProfile.ROLES)


class GuideApplicationSerializer(serializers.ModelSerializer):
    class Meta:
        model = GuideApplication
        fields = ["id", "name", "email", "photo", "title", "reason", "cv_link", "created_at"]
        read_only_fields = ["id", "created_at"]
