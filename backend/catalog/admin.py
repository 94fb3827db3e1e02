from django.contrib import admin

from .models import TourPackage


@admin.register(TourPackage)
class TourPackageAdmin(admin.ModelAdmin):
    list_display = ("package_name", "location", "price", "created_at")
    search_fields = ("package_name", "location")
