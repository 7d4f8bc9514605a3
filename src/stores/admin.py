"""Django admin configuration for the stores app."""
from django.contrib import admin

from stores.models import Business, Sequence, Store, StoreUser


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "currency", "timezone", "is_active", "created_at")
    list_filter = ("is_active", "currency")
    search_fields = ("name", "code", "legal_name", "email", "phone")
    readonly_fields = ("id", "created_at", "updated_at")
    list_per_page = 50


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "business", "phone", "email", "is_active", "created_at")
    list_filter = ("is_active", "business")
    search_fields = ("name", "code", "business__name", "email", "phone", "address")
    readonly_fields = ("id", "created_at", "updated_at")
    list_select_related = ("business",)
    list_per_page = 50


@admin.register(StoreUser)
class StoreUserAdmin(admin.ModelAdmin):
    list_display = ("user", "store", "is_default")
    list_filter = ("is_default", "store")
    search_fields = ("user__email", "store__name")
    list_select_related = ("user", "store")


@admin.register(Sequence)
class SequenceAdmin(admin.ModelAdmin):
    list_display = ("store", "prefix", "year", "next_number")
    list_filter = ("prefix", "year")
    list_select_related = ("store",)
