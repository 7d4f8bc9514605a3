from django.contrib import admin

from .models import SalesGoal


@admin.register(SalesGoal)
class SalesGoalAdmin(admin.ModelAdmin):
    list_display = (
        "business",
        "user",
        "goal_type",
        "target_amount",
        "target_count",
        "start_date",
        "end_date",
        "position_type",
        "is_active",
        "achieved_at",
    )
    list_filter = ("business", "goal_type", "position_type", "is_active")
    search_fields = ("user__email",)
    list_select_related = ("business", "user")
    readonly_fields = ("id", "created_at", "updated_at", "achieved_at")
