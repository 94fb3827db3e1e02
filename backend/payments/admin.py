from django.contrib import admin

from .models import PaymentTransaction


@admin.register(PaymentTransaction)
class PaymentTransactionAdmin(admin.ModelAdmin):
    """Ledger rows are append-only; the admin only reads them."""

    list_display = ("transaction_id", "booking_id", "amount", "currency", "status", "payment_date")
    list_filter = ("status", "currency")
    search_fields = ("transaction_id", "booking_id", "payment_intent_id", "tourist_email")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
