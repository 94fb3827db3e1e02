"""
Booking lifecycle: creation, guide decisions, cancellation and payment settlement.

Status moves ``pending -> accepted | rejected | cancelled``; a settled payment
moves ``pending`` or ``accepted`` to ``in review``. Every step is a short
sequence of independent store and gateway calls made within one request.
Ledger and booking writes are not wrapped in a transaction, so a confirmation
can record money in the ledger without advancing the booking; that outcome is
returned as a success carrying a ``PartialUpdateWarning``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from django.conf import settings
from django.utils import timezone

from bookings.models import Booking
from bookings.serializers import BookingCreateSerializer
from bookings.services.payments import SUCCEEDED, from_minor_units, get_payment_gateway
from bookings.services.stores import BookingStore
from core.exceptions import (
    GatewayError,
    NotFoundError,
    PartialUpdateWarning,
    PaymentNotCompletedError,
    ValidationError,
)
from core.identifiers import generate_booking_id, generate_transaction_id
from payments.models import PaymentTransaction
from payments.services.ledger import PaymentLedger

logger = logging.getLogger(__name__)

GUIDE_DECISIONS = (Booking.ACCEPTED, Booking.REJECTED)


@dataclass
class PaymentIntentResult:
    client_secret: Optional[str]
    payment_intent_id: str


@dataclass
class ConfirmationResult:
    transaction: PaymentTransaction
    payment_status: str
    booking_updated: bool
    warning: Optional[PartialUpdateWarning] = None
    replayed: bool = False


class BookingLifecycle:
    def __init__(
        self,
        *,
        store: BookingStore,
        ledger: PaymentLedger,
        gateway,
        default_currency: str = "usd",
        deduplicate_intents: bool = False,
    ):
        self.store = store
        self.ledger = ledger
        self.gateway = gateway
        self.default_currency = default_currency
        self.deduplicate_intents = deduplicate_intents

    def create(self, data: Mapping[str, Any]) -> Booking:
        serializer = BookingCreateSerializer(data=data)
        if not serializer.is_valid():
            raise ValidationError(serializer.errors)
        values = serializer.validated_data
        guide = values["selected_guide"]

        booking = self.store.insert(
            booking_id=generate_booking_id(),
            package_name=values["package_name"],
            tourist_name=values["tourist_name"],
            tourist_email=values["tourist_email"],
            tourist_image=values.get("tourist_image", ""),
            price=values["price"],
            tour_date=values["tour_date"],
            tour_guide={
                "id": guide.get("id", ""),
                "name": guide["name"],
                "photo": guide.get("photo", ""),
                "email": guide["email"],
            },
            status=Booking.PENDING,
            payment_status=Booking.UNPAID,
            booking_date=timezone.now(),
        )
        logger.info("Created booking %s for %s", booking.booking_id, booking.tourist_email)
        return booking

    def bookings_for_tourist(self, email: str) -> list[Booking]:
        return self.store.find(tourist_email=email, order_by=["-booking_date", "-id"])

    def tours_for_guide(self, email: str) -> list[Booking]:
        return self.store.find(tour_guide__email=email, order_by=["-booking_date", "-id"])

    def cancel(self, identifier) -> Booking:
        booking = self.store.resolve(identifier)
        if booking is None:
            raise NotFoundError("Booking not found or cannot be cancelled.")
        matched = self.store.update_one(
            {"pk": booking.pk, "status": Booking.PENDING},
            {"status": Booking.CANCELLED, "cancelled_at": timezone.now()},
        )
        if matched == 0:
            raise NotFoundError("Booking not found or cannot be cancelled.")
        logger.info("Cancelled booking %s", booking.booking_id)
        return self.store.find_one(pk=booking.pk)

    def decide(self, booking_id: str, status: str) -> Booking:
        decision = (status or "").strip().lower()
        if decision not in GUIDE_DECISIONS:
            raise ValidationError('Invalid status. Must be "accepted" or "rejected".')
        matched = self.store.update_one(
            {"booking_id": booking_id, "status": Booking.PENDING},
            {"status": decision, "updated_at": timezone.now()},
        )
        if matched == 0:
            raise NotFoundError("Booking not found or no longer pending.")
        logger.info("Booking %s %s by guide", booking_id, decision)
        return self.store.find_one(booking_id=booking_id)

    def request_payment_intent(self, identifier, amount, currency: Optional[str] = None) -> PaymentIntentResult:
        if not identifier or amount in (None, ""):
            raise ValidationError("Amount and booking ID are required.")

        booking = self.store.resolve(identifier, status=Booking.PENDING)
        if booking is None:
            raise NotFoundError("Booking not found or not eligible for payment.")

        intent = self.gateway.create_intent(
            amount,
            (currency or self.default_currency).lower(),
            metadata={
                "booking_id": booking.booking_id,
                "tourist_email": booking.tourist_email,
                "package_name": booking.package_name,
            },
        )
        return PaymentIntentResult(client_secret=intent.client_secret, payment_intent_id=intent.id)

    def confirm_payment(self, payment_intent_id: str, identifier) -> ConfirmationResult:
        if not payment_intent_id or not identifier:
            raise ValidationError("Payment intent ID and booking ID are required.")

        intent = self.gateway.retrieve_intent(payment_intent_id)
        if intent.status != SUCCEEDED:
            logger.info("Payment intent %s not completed: %s", payment_intent_id, intent.status)
            raise PaymentNotCompletedError(intent.status)

        booking = self.store.resolve(identifier)
        if booking is None:
            raise NotFoundError("Booking not found.")

        if self.deduplicate_intents:
            existing = self.ledger.find_one(payment_intent_id=payment_intent_id)
            if existing is not None:
                logger.info("Payment intent %s already recorded as %s", payment_intent_id, existing.transaction_id)
                return ConfirmationResult(
                    transaction=existing,
                    payment_status=intent.status,
                    booking_updated=booking.payment_status == Booking.PAID,
                    replayed=True,
                )

        payment_method = intent.payment_method_details
        if payment_method is None and intent.payment_method_id:
            payment_method = self._retrieve_payment_method(intent.payment_method_id)

        now = timezone.now()
        transaction = self.ledger.insert(
            booking_id=booking.booking_id,
            booking_object_id=booking.pk,
            payment_intent_id=payment_intent_id,
            amount=from_minor_units(intent.amount, intent.currency),
            currency=intent.currency,
            status=PaymentTransaction.SUCCEEDED,
            payment_method=payment_method,
            payment_date=now,
            transaction_id=generate_transaction_id(),
            stripe_charge_id=intent.charge_id,
            tourist_email=booking.tourist_email,
            package_name=booking.package_name,
        )
        logger.info("Recorded transaction %s for booking %s", transaction.transaction_id, booking.booking_id)

        matched = self.store.update_one(
            {"booking_id": booking.booking_id, "status__in": Booking.PAYABLE_STATUSES},
            {
                "status": Booking.IN_REVIEW,
                "payment_status": Booking.PAID,
                "payment_date": now,
                "payment_transaction_id": transaction.transaction_id,
                "payment_intent_id": payment_intent_id,
                "updated_at": now,
            },
        )
        if matched == 0:
            warning = PartialUpdateWarning("Payment succeeded but booking status update failed.")
            logger.warning(
                "Transaction %s recorded but booking %s was not advanced (status %s)",
                transaction.transaction_id,
                booking.booking_id,
                booking.status,
            )
            return ConfirmationResult(
                transaction=transaction,
                payment_status=intent.status,
                booking_updated=False,
                warning=warning,
            )

        return ConfirmationResult(transaction=transaction, payment_status=intent.status, booking_updated=True)

    def _retrieve_payment_method(self, method_id: str) -> Optional[Dict[str, Any]]:
        try:
            return self.gateway.retrieve_payment_method(method_id)
        except GatewayError as exc:
            logger.warning("Could not retrieve payment method %s: %s", method_id, exc)
            return None


def build_booking_lifecycle() -> BookingLifecycle:
    """Wire the lifecycle with the configured store, ledger and payment gateway."""
    return BookingLifecycle(
        store=BookingStore(),
        ledger=PaymentLedger(),
        gateway=get_payment_gateway(),
        default_currency=settings.PAYMENT_DEFAULT_CURRENCY,
        deduplicate_intents=settings.PAYMENTS_DEDUPLICATE_INTENTS,
    )
