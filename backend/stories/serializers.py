from rest_framework import serializers

from .models import Story


class StorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Story
        fields = ["id", "title", "text", "email", "images", "created_at", "updated_at"]
        read_only_fields = ["id", "images", "created_at", "updated_at"]
