from django.contrib import admin

from inventory.models import InventoryItem, InventoryMovement


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ("product", "store", "quantity_on_hand", "low_stock_threshold", "max_stock")
    list_filter = ("store",)
    search_fields = ("product__name", "product__sku")
    list_select_related = ("product", "store")


@admin.register(InventoryMovement)
class InventoryMovementAdmin(admin.ModelAdmin):
    list_display = ("item", "movement_type", "quantity", "quantity_after", "actor", "created_at")
    list_filter = ("movement_type", "created_at")
    search_fields = ("item__product__name", "reference")
    list_select_related = ("item__product", "actor")
    date_hierarchy = "created_at"
