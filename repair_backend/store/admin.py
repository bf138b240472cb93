# store/admin.py

from django.contrib import admin

from store.models import Store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at", "updated_at")
    readonly_fields = ("password_hash", "created_at", "updated_at")
    search_fields = ("name",)
