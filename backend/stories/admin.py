from django.contrib import admin

from .models import Story


@admin.register(Story)
class StoryAdmin(admin.ModelAdmin):
    list_display = ("title", "email", "created_at", "updated_at")
    search_fields = ("title", "email")
