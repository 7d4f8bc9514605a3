from django.contrib import admin

from catalog.models import Category, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "business", "is_active")
    list_filter = ("is_active", "business")
    search_fields = ("name",)
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "sku", "business", "category", "supplier", "selling_price", "is_active")
    list_filter = ("is_active", "business", "category")
    search_fields = ("name", "sku")
    list_select_related = ("business", "category", "supplier")
    readonly_fields = ("id", "created_at", "updated_at")
