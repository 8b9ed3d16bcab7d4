from rest_framework import serializers

from .images import ProductImagesMixin, absolute_media_url
from .models import Category, Color, Product, Size

# =============================================================================
# E-COMMERCE ARCHITECTURE: Catalog Serializers
# =============================================================================
# STATUS: Completo
# PURPOSE: API pública del catálogo - solo información necesaria para comprar
# BUSINESS LOGIC: Precio vigente (con descuento), imágenes con URL absoluta
# =============================================================================

class CategorySerializer(serializers.ModelSerializer):
    display_name = serializers.ReadOnlyField()
    product_count = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = ['id', 'name', 'name_ar', 'display_name', 'slug', 'description', 'product_count']
        read_only_fields = ['slug']

    def get_product_count(self, obj):
        # anotado en la vista de categorías; si no, se cuenta
        annotated = getattr(obj, 'active_product_count', None)
        if annotated is not None:
            return annotated
        return obj.products.filter(is_active=True).count()


class NavCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'name_ar', 'slug']


class ColorSerializer(serializers.ModelSerializer):
    display_name = serializers.ReadOnlyField()
    icon_url = serializers.SerializerMethodField()

    class Meta:
        model = Color
        fields = ['id', 'name', 'name_ar', 'display_name', 'hex_code', 'icon_url']

    def get_icon_url(self, obj):
        return absolute_media_url(obj.icon, self.context.get('request')) or ''


class SizeSerializer(serializers.ModelSerializer):
    display_name = serializers.ReadOnlyField()

    class Meta:
        model = Size
        fields = ['id', 'name', 'name_ar', 'display_name']


class ProductSerializer(ProductImagesMixin, serializers.ModelSerializer):
    """Serializer para lista de productos (vista del cliente)"""
    display_name = serializers.ReadOnlyField()
    category = NavCategorySerializer(read_only=True)
    current_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    has_discount = serializers.ReadOnlyField()
    in_stock = serializers.ReadOnlyField(source='is_available')

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'name_ar', 'display_name', 'slug', 'price',
            'current_price', 'has_discount', 'stock', 'in_stock', 'is_gift',
            'category', 'created_at'
        ]


class ProductDetailSerializer(ProductSerializer):
    """Serializer para detalle de producto (vista del cliente)"""
    colors = ColorSerializer(many=True, read_only=True)
    sizes = SizeSerializer(many=True, read_only=True)
    is_favorite = serializers.SerializerMethodField()

    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + [
            'description', 'description_ar', 'discount_price', 'discount_from',
            'discount_to', 'colors', 'sizes', 'views_count', 'sales_count', 'updated_at', 'is_favorite'
        ]

    def get_is_favorite(self, obj):
        request = self.context.get('request')
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated:
            return False
        return user.has_favorite(obj)
