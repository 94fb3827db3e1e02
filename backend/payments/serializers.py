from rest_framework import serializers

from payments.models import PaymentTransaction


class PaymentIntentRequestSerializer(serializers.Serializer):
    booking_id = serializers.CharField()
    amount = serializers.DecimalField(max_digits=None, decimal_places=None)
    currency = serializers.CharField(required=False, allow_blank=True, max_length=10)


class PaymentConfirmationRequestSerializer(serializers.Serializer):
    payment_intent_id = serializers.CharField()
    booking_id = serializers.CharField()


class PaymentTransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentTransaction
        fields = [
            "id",
            "transaction_id",
            "booking_id",
            "booking_object_id",
            "payment_intent_id",
            "amount",
            "currency",
            "status",
            "payment_method",
            "stripe_charge_id",
            "payment_date",
            "tourist_email",
            "package_name",
        ]
        read_only_fields = fields
