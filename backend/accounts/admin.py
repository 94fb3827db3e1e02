from django.contrib import admin

from .models import GuideApplication, UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("email", "name", "role", "created_at")
    list_filter = ("role",)
    search_fields = ("email", "name")


@admin.register(GuideApplication)
class GuideApplicationAdmin(admin.ModelAdmin):
    list_display = ("email", "name", "title", "created_at")
    search_fields = ("email", "name")
