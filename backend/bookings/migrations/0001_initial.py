import decimal

import django.core.validators
import django.utils.timezone
from django.db import migrations, models

import core.identifiers


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("booking_id", models.CharField(default=core.identifiers.generate_booking_id, editable=False, max_length=40, unique=True)),
                ("package_name", models.CharField(max_length=200)),
                ("tourist_name", models.CharField(max_length=200)),
                ("tourist_email", models.EmailField(db_index=True, max_length=254)),
                ("tourist_image", models.CharField(blank=True, max_length=500)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.01"))])),
                ("tour_date", models.DateField()),
                ("tour_guide", models.JSONField(default=dict)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("accepted", "Accepted"), ("rejected", "Rejected"), ("cancelled", "Cancelled"), ("in review", "In review")], default="pending", max_length=20)),
                ("payment_status", models.CharField(choices=[("unpaid", "Unpaid"), ("paid", "Paid")], default="unpaid", max_length=10)),
                ("booking_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("payment_date", models.DateTimeField(blank=True, null=True)),
                ("payment_transaction_id", models.CharField(blank=True, max_length=40)),
                ("payment_intent_id", models.CharField(blank=True, max_length=200)),
            ],
            options={
                "ordering": ["-booking_date", "-id"],
            },
        ),
    ]
