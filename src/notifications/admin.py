"""Admin configuration for the notifications app."""
from django.contrib import admin
from django.utils import timezone

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "business", "user", "notification_type", "is_read", "created_at")
    list_filter = ("notification_type", "is_read", "business", "created_at")
    search_fields = ("title", "message")
    readonly_fields = ("id", "created_at", "updated_at", "read_at")
    date_hierarchy = "created_at"
    list_select_related = ("business", "user")
    actions = ("mark_selected_as_read",)

    @admin.action(description="Marquer selection comme lue")
    def mark_selected_as_read(self, request, queryset):
        queryset.update(is_read=True, read_at=timezone.now())
