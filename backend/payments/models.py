from django.db import models
from django.utils import timezone

from core.identifiers import generate_transaction_id


class PaymentTransaction(models.Model):
    """
    One settled payment, written once when a booking's payment is confirmed.

    Rows are never updated. Booking keys are stored as plain values so the
    ledger survives an administrative delete of the booking.
    """

    SUCCEEDED = "succeeded"
    STATUSES = [
        (SUCCEEDED, "Succeeded"),
    ]

    booking_id = models.CharField(max_length=40, db_index=True)
    booking_object_id = models.BigIntegerField(null=True, blank=True)
    payment_intent_id = models.CharField(max_length=200, db_index=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=10, default="usd")
    status = models.CharField(max_length=20, choices=STATUSES, default=SUCCEEDED)
    payment_method = models.JSONField(null=True, blank=True)
    payment_date = models.DateTimeField(default=timezone.now)
    transaction_id = models.CharField(max_length=40, unique=True, default=generate_transaction_id)
    stripe_charge_id = models.CharField(max_length=200, null=True, blank=True)
    tourist_email = models.EmailField(blank=True)
    package_name = models.CharField(max_length=200, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-payment_date", "-id"]

    def __str__(self):
        return f"{self.transaction_id} {self.amount} {self.currency.upper()}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Payment transactions are append-only.")
        super().save(*args, **kwargs)
