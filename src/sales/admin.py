from django.contrib import admin

from sales.models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("__str__", "store", "seller", "sale_type", "status", "total", "completed_at")
    list_filter = ("status", "sale_type", "store")
    search_fields = ("order_number", "seller__email")
    inlines = [OrderItemInline]
    list_select_related = ("store", "seller")
    date_hierarchy = "created_at"
