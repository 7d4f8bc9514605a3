from django.contrib import admin

from .models import ReorderPoint, WorkflowExecution, WorkflowRule


@admin.register(WorkflowRule)
class WorkflowRuleAdmin(admin.ModelAdmin):
    list_display = ("name", "business", "workflow_type", "is_active", "execution_count", "last_triggered")
    list_filter = ("business", "workflow_type", "is_active")
    search_fields = ("name",)
    readonly_fields = ("id", "created_at", "updated_at", "execution_count", "last_triggered")
    list_select_related = ("business",)


@admin.register(WorkflowExecution)
class WorkflowExecutionAdmin(admin.ModelAdmin):
    list_display = ("rule", "inventory_item", "status", "manual_trigger", "started_at", "completed_at", "resolved_at")
    list_filter = ("status", "manual_trigger", "rule__workflow_type")
    readonly_fields = (
        "id",
        "created_at",
        "updated_at",
        "status",
        "action_results",
        "error",
        "started_at",
        "completed_at",
        "resolved_at",
    )
    list_select_related = ("rule", "inventory_item__product")
    date_hierarchy = "created_at"


@admin.register(ReorderPoint)
class ReorderPointAdmin(admin.ModelAdmin):
    list_display = ("product", "store", "reorder_point", "reorder_quantity", "auto_generate_po", "is_active", "last_triggered")
    list_filter = ("auto_generate_po", "is_active", "store")
    search_fields = ("product__name", "product__sku")
    readonly_fields = ("last_triggered",)
    list_select_related = ("product", "store")
