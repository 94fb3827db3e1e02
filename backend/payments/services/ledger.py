from __future__ import annotations

from typing import Optional

from django.db.models import Q

from bookings.services.stores import native_id
from payments.models import PaymentTransaction


class PaymentLedger:
    """Append-only access to settled payment transactions."""

    model = PaymentTransaction

    def insert(self, **fields) -> PaymentTransaction:
        return self.model.objects.create(**fields)

    def find_one(self, **filters) -> Optional[PaymentTransaction]:
        return self.model.objects.filter(**filters).first()

    def find(self, **filters) -> list[PaymentTransaction]:
        return list(self.model.objects.filter(**filters).order_by("-payment_date", "-id"))

    def history(self, booking_identifier) -> list[PaymentTransaction]:
        """Transactions for a booking given either its generated id or its primary key."""
        condition = Q(booking_id=str(booking_identifier).strip())
        pk = native_id(booking_identifier)
        if pk is not None:
            condition |= Q(booking_object_id=pk)
        return list(self.model.objects.filter(condition).order_by("-payment_date", "-id"))
