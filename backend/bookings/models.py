from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from core.identifiers import generate_booking_id


class Booking(models.Model):
    """Reservation of a tour package by a tourist with a snapshot of the chosen guide."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    IN_REVIEW = "in review"
    STATUSES = [
        (PENDING, "Pending"),
        (ACCEPTED, "Accepted"),
        (REJECTED, "Rejected"),
        (CANCELLED, "Cancelled"),
        (IN_REVIEW, "In review"),
    ]
    # Statuses a settled payment may advance to IN_REVIEW.
    PAYABLE_STATUSES = (PENDING, ACCEPTED)

    UNPAID = "unpaid"
    PAID = "paid"
    PAYMENT_STATUSES = [
        (UNPAID, "Unpaid"),
        (PAID, "Paid"),
    ]

    booking_id = models.CharField(
        max_length=40,
        unique=True,
        editable=False,
        default=generate_booking_id,
    )
    package_name = models.CharField(max_length=200)
    tourist_name = models.CharField(max_length=200)
    tourist_email = models.EmailField(db_index=True)
    tourist_image = models.CharField(max_length=500, blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    tour_date = models.DateField()
    tour_guide = models.JSONField(default=dict)
    status = models.CharField(max_length=20, choices=STATUSES, default=PENDING)
    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUSES, default=UNPAID)
    booking_date = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    payment_date = models.DateTimeField(null=True, blank=True)
    payment_transaction_id = models.CharField(max_length=40, blank=True)
    payment_intent_id = models.CharField(max_length=200, blank=True)

    class Meta:
        ordering = ["-booking_date", "-id"]

    def __str__(self):
        return f"{self.booking_id} {self.package_name} ({self.status})"

    @property
    def guide_email(self) -> str:
        return (self.tour_guide or {}).get("email", "")
