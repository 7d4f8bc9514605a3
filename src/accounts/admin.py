from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from commissions.models import CommissionTier
from stores.models import StoreUser

from .models import User


class StoreMembershipInline(admin.TabularInline):
    model = StoreUser
    fk_name = "user"
    fields = ("store", "is_default")
    extra = 0


class PersonalTierInline(admin.TabularInline):
    """Employee-specific tiers; they replace the position's tiers entirely."""

    model = CommissionTier
    fk_name = "user"
    fields = ("business", "tier_number", "name", "target_amount", "commission_rate", "target_period", "is_active")
    extra = 0


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("email", "get_full_name", "role", "position_type", "is_active")
    list_filter = ("role", "position_type", "is_active")
    search_fields = ("email", "first_name", "last_name")
    ordering = ("email",)
    inlines = [StoreMembershipInline, PersonalTierInline]

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Identite", {"fields": ("first_name", "last_name", "phone")}),
        ("Poste en boutique", {"fields": ("role", "position_type")}),
        ("Acces", {"fields": ("is_active", "is_staff", "is_superuser", "groups")}),
        ("Historique", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("email", "role", "position_type", "password1", "password2"),
        }),
    )
