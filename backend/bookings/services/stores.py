from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from bookings.models import Booking


def native_id(identifier) -> Optional[int]:
    """Return ``identifier`` as a primary key when it looks like one."""
    if isinstance(identifier, int):
        return identifier
    value = str(identifier or "").strip()
    if value.isdigit():
        return int(value)
    return None


class BookingStore:
    """
    Document-style access to booking records.

    Callers see insert / find / update-one semantics; every write touches a
    single booking row and nothing spans more than one call.
    """

    model = Booking

    def insert(self, **fields) -> Booking:
        return self.model.objects.create(**fields)

    def find_one(self, **filters) -> Optional[Booking]:
        return self.model.objects.filter(**filters).first()

    def find(self, *, order_by: Sequence[str] | None = None, **filters) -> list[Booking]:
        queryset = self.model.objects.filter(**filters)
        if order_by:
            queryset = queryset.order_by(*order_by)
        return list(queryset)

    def update_one(self, filters: Dict[str, Any], changes: Dict[str, Any]) -> int:
        """Apply ``changes`` to the first booking matching ``filters``; return the matched count."""
        pk = self.model.objects.filter(**filters).values_list("pk", flat=True).first()
        if pk is None:
            return 0
        # Filters are re-applied so a concurrent status change makes this a no-op.
        return self.model.objects.filter(pk=pk).filter(**filters).update(**changes)

    def resolve(self, identifier, **filters) -> Optional[Booking]:
        """
        Find a booking by either of its keys.

        A numeric identifier is tried as the primary key first; the generated
        ``booking_id`` is the fallback and the only key tried for anything else.
        """
        pk = native_id(identifier)
        if pk is not None:
            booking = self.find_one(pk=pk, **filters)
            if booking is not None:
                return booking
        return self.find_one(booking_id=str(identifier).strip(), **filters)
