from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_id",
        "package_name",
        "tourist_email",
        "tour_date",
        "status",
        "payment_status",
        "booking_date",
    )
    list_filter = ("status", "payment_status")
    search_fields = ("booking_id", "package_name", "tourist_email")
    readonly_fields = ("booking_id", "booking_date", "payment_transaction_id", "payment_intent_id")
