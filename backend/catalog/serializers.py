from decimal import Decimal

from rest_framework import serializers

from .models import TourPackage


class TourPackageSerializer(serializers.ModelSerializer):
    """
    Package fields for both reads and multipart creation.

    ``tour_plan`` may be sent as a JSON-encoded string inside a form body.
    ``images`` are never written directly; the view fills them from uploads.
    """

    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    tour_plan = serializers.JSONField(required=False)

    class Meta:
        model = TourPackage
        fields = [
            "id",
            "package_name",
            "location",
            "price",
            "about",
            "tour_plan",
            "images",
            "created_at",
        ]
        read_only_fields = ["id", "images", "created_at"]

    def validate_tour_plan(self, value):
        if value in (None, ""):
            return []
        if not isinstance(value, list):
            raise serializers.ValidationError("Tour plan must be a list.")
        return value
