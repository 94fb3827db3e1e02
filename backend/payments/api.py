from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.services.lifecycle import build_booking_lifecycle
from core.api import error_body
from core.exceptions import GatewayError, NotFoundError, PaymentNotCompletedError, ValidationError
from payments.models import PaymentTransaction
from payments.serializers import (
    PaymentConfirmationRequestSerializer,
    PaymentIntentRequestSerializer,
    PaymentTransactionSerializer,
)
from payments.services.ledger import PaymentLedger


class CreatePaymentIntentView(APIView):
    """Create a Stripe payment intent for a pending booking."""

    def post(self, request, *args, **kwargs):
        serializer = PaymentIntentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            result = build_booking_lifecycle().request_payment_intent(
                data["booking_id"],
                data["amount"],
                data.get("currency") or None,
            )
        except ValidationError as exc:
            return Response(error_body(exc), status=status.HTTP_400_BAD_REQUEST)
        except NotFoundError as exc:
            return Response(error_body(exc), status=status.HTTP_404_NOT_FOUND)
        except GatewayError as exc:
            return Response(
                {"detail": "Failed to create payment intent.", "error": str(exc.detail)},
                status=status.HTTP_502_BAD_GATEWAY,
            )

        return Response(
            {
                "client_secret": result.client_secret,
                "payment_intent_id": result.payment_intent_id,
            },
            status=status.HTTP_201_CREATED,
        )


class ConfirmPaymentView(APIView):
    """
    Re-check a payment intent with Stripe and record the settlement.

    A 200 response means the ledger holds the payment. When the booking itself
    could not be advanced the body carries ``booking_updated: false`` and a
    ``warning`` so the client can flag the booking for reconciliation.
    """

    def post(self, request, *args, **kwargs):
        serializer = PaymentConfirmationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            result = build_booking_lifecycle().confirm_payment(
                data["payment_intent_id"],
                data["booking_id"],
            )
        except ValidationError as exc:
            return Response(error_body(exc), status=status.HTTP_400_BAD_REQUEST)
        except PaymentNotCompletedError as exc:
            return Response(
                {"detail": exc.detail, "payment_status": exc.payment_status},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except NotFoundError as exc:
            return Response(error_body(exc), status=status.HTTP_404_NOT_FOUND)
        except GatewayError as exc:
            return Response(
                {"detail": "Failed to confirm payment.", "error": str(exc.detail)},
                status=status.HTTP_502_BAD_GATEWAY,
            )

        payload = {
            "detail": "Payment confirmed and booking updated successfully.",
            "payment_status": result.payment_status,
            "transaction_id": result.transaction.transaction_id,
            "payment_transaction_id": result.transaction.pk,
            "booking_updated": result.booking_updated,
        }
        if result.warning is not None:
            payload["detail"] = "Payment confirmed successfully."
            payload["warning"] = str(result.warning)
        if result.replayed:
            payload["detail"] = "Payment already recorded."
            payload["replayed"] = True
        return Response(payload, status=status.HTTP_200_OK)


class PaymentTransactionListView(generics.ListAPIView):
    serializer_class = PaymentTransactionSerializer
    queryset = PaymentTransaction.objects.all()
    filterset_fields = ["booking_id", "tourist_email", "currency", "payment_intent_id"]


class PaymentHistoryView(APIView):
    def get(self, request, identifier, *args, **kwargs):
        transactions = PaymentLedger().history(identifier)
        return Response(PaymentTransactionSerializer(transactions, many=True).data)
