from django.contrib import admin

from .models import CommissionPayment, CommissionTier


@admin.register(CommissionTier)
class CommissionTierAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "business",
        "tier_number",
        "role_type",
        "user",
        "target_amount",
        "commission_rate",
        "target_period",
        "is_active",
    )
    list_filter = ("business", "role_type", "target_period", "is_active")
    search_fields = ("name", "user__email")
    list_select_related = ("business", "user")


@admin.register(CommissionPayment)
class CommissionPaymentAdmin(admin.ModelAdmin):
    list_display = (
        "user",
        "business",
        "period_type",
        "period_label",
        "sale_amount",
        "commission_rate",
        "commission_amount",
        "is_paid",
        "paid_at",
    )
    list_filter = ("business", "period_type", "is_paid")
    search_fields = ("user__email", "period_label")
    readonly_fields = ("id", "created_at", "updated_at", "paid_at", "paid_by")
    list_select_related = ("business", "user", "paid_by")
