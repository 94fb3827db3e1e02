from decimal import Decimal

from django.utils.dateparse import parse_datetime
from rest_framework import serializers

from bookings.models import Booking


class TourDateField(serializers.DateField):
    """Date field that also accepts the ISO datetimes browser date pickers send."""

    def to_internal_value(self, value):
        if isinstance(value, str) and "T" in value:
            try:
                parsed = parse_datetime(value.strip())
            except ValueError:
                parsed = None
            if parsed is not None:
                return parsed.date()
        return super().to_internal_value(value)


class GuideSnapshotSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True, default="")
    name = serializers.CharField()
    photo = serializers.CharField(required=False, allow_blank=True, default="")
    email = serializers.EmailField()

    def to_internal_value(self, data):
        if isinstance(data, dict) and "id" not in data and "_id" in data:
            data = {**data, "id": data["_id"]}
        return super().to_internal_value(data)


class BookingCreateSerializer(serializers.Serializer):
    package_name = serializers.CharField(max_length=200)
    tourist_name = serializers.CharField(max_length=200)
    tourist_email = serializers.EmailField()
    tourist_image = serializers.CharField(required=False, allow_blank=True, default="")
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    tour_date = TourDateField()
    selected_guide = GuideSnapshotSerializer()


class BookingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_id",
            "package_name",
            "tourist_name",
            "tourist_email",
            "tourist_image",
            "price",
            "tour_date",
            "tour_guide",
            "status",
            "payment_status",
            "booking_date",
            "updated_at",
            "cancelled_at",
            "payment_date",
            "payment_transaction_id",
            "payment_intent_id",
        ]
        read_only_fields = fields


class BookingDecisionSerializer(serializers.Serializer):
    status = serializers.CharField()
