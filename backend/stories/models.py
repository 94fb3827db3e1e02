from django.db import models
from django.utils import timezone


class Story(models.Model):
    title = models.CharField(max_length=200)
    text = models.TextField()
    email = models.EmailField(db_index=True)
    images = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "stories"

    def __str__(self):
        return self.title
