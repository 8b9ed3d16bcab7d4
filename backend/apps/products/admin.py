from django.contrib import admin

from .models import Category, Color, Product, ProductImage, Size


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'name_ar', 'slug', 'is_active', 'created_at')
    list_filter = ('is_active',)
    search_fields = ('name', 'name_ar', 'description')
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Color)
class ColorAdmin(admin.ModelAdmin):
    list_display = ('name', 'name_ar', 'hex_code')
    search_fields = ('name', 'name_ar', 'hex_code')


@admin.register(Size)
class SizeAdmin(admin.ModelAdmin):
    list_display = ('name', 'name_ar', 'sort_order')
    list_editable = ('sort_order',)


class ProductImageInline(admin.TabularInline):
    """Imágenes del producto (principal + galería)"""
    model = ProductImage
    extra = 1


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'price', 'discount_price', 'stock',
                    'is_active', 'is_gift', 'sales_count', 'created_at')
    list_filter = ('is_active', 'is_gift', 'category', 'colors', 'sizes')
    search_fields = ('name', 'name_ar', 'description')
    prepopulated_fields = {'slug': ('name',)}
    filter_horizontal = ('colors', 'sizes')
    readonly_fields = ('views_count', 'sales_count', 'created_at', 'updated_at')
    inlines = [ProductImageInline]
    actions = ['mark_active', 'mark_inactive']

    @admin.action(description="Activate selected products")
    def mark_active(self, request, queryset):
        queryset.update(is_active=True)

    @admin.action(description="Deactivate selected products")
    def mark_inactive(self, request, queryset):
        queryset.update(is_active=False)
