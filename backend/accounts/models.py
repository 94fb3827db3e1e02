from django.db import models
from django.utils import timezone


class UserProfile(models.Model):
    TOURIST = "tourist"
    GUIDE = "guide"
    ADMIN = "admin"
    ROLES = [
        (TOURIST, "Tourist"),
        (GUIDE, "Tour guide"),
        (ADMIN, "Admin"),
    ]

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=200, blank=True)
    photo = models.CharField(max_length=500, blank=True)
    role = models.CharField(max_length=20, choices=ROLES, default=TOURIST)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.email} ({self.role})"


class GuideApplication(models.Model):
    name = models.CharField(max_length=200)
    email = models.EmailField(db_index=True)
    photo = models.CharField(max_length=500, blank=True)
    title = models.CharField(max_length=200)
    reason = models.TextField()
    cv_link = models.URLField(max_length=500)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Application from {self.email}"
