from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone
from django.utils.text import slugify

from accounts.models import UserProfile
from bookings.models import Booking
from catalog.models import TourPackage
from stories.models import Story

SEED_IMAGE_BASE = "https://i.ibb.co/seed"

PACKAGES = [
    {
        "package_name": "Sundarbans Mangrove Cruise",
        "location": "Khulna",
        "price": Decimal("250.00"),
        "about": "Three days on the water through the largest mangrove forest.",
        "tour_plan": [
            {"day": 1, "title": "Boarding at Mongla", "description": "Settle in and cruise to Harbaria."},
            {"day": 2, "title": "Kotka beach", "description": "Forest walk and wildlife watching."},
            {"day": 3, "title": "Return", "description": "Morning canal trip and return to Mongla."},
        ],
    },
    {
        "package_name": "Tea Gardens of Sylhet",
        "location": "Sreemangal",
        "price": Decimal("120.00"),
        "about": "Estates, rainforest trails and a seven-layer tea tasting.",
        "tour_plan": [
            {"day": 1, "title": "Estates", "description": "Guided estate walk."},
            {"day": 2, "title": "Lawachara", "description": "Rainforest trail."},
        ],
    },
    {
        "package_name": "Cox's Bazar Coastline",
        "location": "Cox's Bazar",
        "price": Decimal("180.00"),
        "about": "Long beach days with a trip to Inani and Himchari.",
        "tour_plan": [
            {"day": 1, "title": "Arrival", "description": "Sunset on Laboni beach."},
        ],
    },
]


class Command(BaseCommand):
    help = "Populate the local development database with sample data."

    def handle(self, *args, **options):
        if not settings.DEBUG:
            raise CommandError("Refusing to seed data while DEBUG is False.")

        with transaction.atomic():
            self.stdout.write(self.style.MIGRATE_HEADING("Creating users"))
            tourist = self._ensure_user("tourist@example.test", "Tara Tourist", UserProfile.TOURIST)
            guide = self._ensure_user("guide@example.test", "Gabe Guide", UserProfile.GUIDE)
            self._ensure_user("admin@example.test", "Ada Admin", UserProfile.ADMIN)

            self.stdout.write(self.style.MIGRATE_HEADING("Creating tour packages"))
            packages = [self._ensure_package(data) for data in PACKAGES]

            self.stdout.write(self.style.MIGRATE_HEADING("Creating a story"))
            Story.objects.get_or_create(
                title="Three days in the mangroves",
                email=tourist.email,
                defaults={
                    "text": "Spotted deer, kingfishers and one very shy crocodile.",
                    "images": [f"{SEED_IMAGE_BASE}/story-mangroves.jpg"],
                },
            )

            self.stdout.write(self.style.MIGRATE_HEADING("Creating a pending booking"))
            booking = Booking.objects.filter(
                tourist_email=tourist.email,
                package_name=packages[0].package_name,
                status=Booking.PENDING,
            ).first()
            if booking is None:
                booking = Booking.objects.create(
                    package_name=packages[0].package_name,
                    tourist_name=tourist.name,
                    tourist_email=tourist.email,
                    tourist_image=tourist.photo,
                    price=packages[0].price,
                    tour_date=(timezone.now() + timedelta(days=30)).date(),
                    tour_guide={
                        "id": str(guide.pk),
                        "name": guide.name,
                        "photo": guide.photo,
                        "email": guide.email,
                    },
                )

        self.stdout.write(self.style.SUCCESS("Development seed data created."))
        self.stdout.write(self.style.NOTICE(f"Pending booking {booking.booking_id} for {tourist.email}"))

    def _ensure_user(self, email: str, name: str, role: str) -> UserProfile:
        user, created = UserProfile.objects.get_or_create(
            email=email,
            defaults={
                "name": name,
                "role": role,
                "photo": f"{SEED_IMAGE_BASE}/{email.split('@')[0]}.jpg",
            },
        )
        if not created and user.role != role:
            user.role = role
            user.save(update_fields=["role"])
        if created:
            self.stdout.write(f"  created {role} {email}")
        return user

    def _ensure_package(self, data: dict) -> TourPackage:
        package, _ = TourPackage.objects.update_or_create(
            package_name=data["package_name"],
            defaults={
                "location": data["location"],
                "price": data["price"],
                "about": data["about"],
                "tour_plan": data["tour_plan"],
                "images": [f"{SEED_IMAGE_BASE}/{slugify(data['location'])}.jpg"],
            },
        )
        return package
