from django.contrib import admin

from .models import PurchaseOrder, PurchaseOrderLine, Supplier


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ("name", "business", "contact_name", "lead_time_days", "is_active")
    list_filter = ("is_active", "business")
    search_fields = ("name", "contact_name", "email")


class LineInline(admin.TabularInline):
    model = PurchaseOrderLine
    fields = ("product", "quantity_ordered", "unit_cost", "line_total")
    readonly_fields = ("line_total",)
    extra = 0


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(admin.ModelAdmin):
    list_display = ("po_number", "supplier", "store", "source", "status", "expected_date", "subtotal", "open_order")
    list_filter = ("source", "status", "store__business")
    search_fields = ("po_number", "supplier__name")
    readonly_fields = ("po_number", "subtotal", "source", "created_by")
    inlines = [LineInline]

    @admin.display(boolean=True, description="En cours")
    def open_order(self, obj):
        return obj.is_open
