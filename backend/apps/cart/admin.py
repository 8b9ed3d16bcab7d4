from django.contrib import admin

from .models import Cart, CartItem


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    readonly_fields = ('unit_price', 'total_price')


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ('user', 'item_count', 'subtotal', 'total', 'updated_at')
    search_fields = ('user__email', 'user__username')
    readonly_fields = ('subtotal', 'tax', 'shipping', 'total', 'created_at', 'updated_at')
    inlines = [CartItemInline]
