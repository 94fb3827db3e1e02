import django.utils.timezone
from django.db import migrations, models

import core.identifiers


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PaymentTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("booking_id", models.CharField(db_index=True, max_length=40)),
                ("booking_object_id", models.BigIntegerField(blank=True, null=True)),
                ("payment_intent_id", models.CharField(db_index=True, max_length=200)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("currency", models.CharField(default="usd", max_length=10)),
                ("status", models.CharField(choices=[("succeeded", "Succeeded")], default="succeeded", max_length=20)),
                ("payment_method", models.JSONField(blank=True, null=True)),
                ("payment_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("transaction_id", models.CharField(default=core.identifiers.generate_transaction_id, max_length=40, unique=True)),
                ("stripe_charge_id", models.CharField(blank=True, max_length=200, null=True)),
                ("tourist_email", models.EmailField(blank=True, max_length=254)),
                ("package_name", models.CharField(blank=True, max_length=200)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-payment_date", "-id"],
            },
        ),
    ]
