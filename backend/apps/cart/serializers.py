from rest_framework import serializers

from apps.products.images import product_thumbnail_url
from apps.products.models import Product
from core.conf import store_setting

from .models import Cart, CartItem


class CartProductSerializer(serializers.ModelSerializer):
    image = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = ['id', 'name', 'name_ar', 'slug', 'image']

    def get_image(self, obj):
        return product_thumbnail_url(obj, self.context.get('request'))


class CartItemSerializer(serializers.ModelSerializer):
    product_id = serializers.ReadOnlyField()
    product = CartProductSerializer(read_only=True)

    class Meta:
        model = CartItem
        fields = ['id', 'product_id', 'product', 'quantity', 'unit_price',
                  'total_price', 'product_options']


class CartSerializer(serializers.ModelSerializer):
    items = CartItemSerializer(many=True, read_only=True)
    item_count = serializers.ReadOnlyField()
    is_empty = serializers.ReadOnlyField()

    class Meta:
        model = Cart
        fields = ['id', 'items', 'subtotal', 'tax', 'shipping', 'discount',
                  'total', 'item_count', 'is_empty']


def cart_summary(cart):
    return {'item_count': cart.item_count, 'total': str(cart.total)}


# =============================================================================
# Entrada de los endpoints del carrito
# =============================================================================

class AddToCartSerializer(serializers.Serializer):
    product_id = serializers.PrimaryKeyRelatedField(
        queryset=Product.objects.active(),
        source='product',
    )
    quantity = serializers.IntegerField(min_value=1, default=1)
    product_options = serializers.DictField(required=False, default=dict)

    def validate_quantity(self, value):
        max_quantity = store_setting('MAX_QUANTITY_PER_ITEM')
        if value > max_quantity:
            raise serializers.ValidationError(f"Ensure this value is less than or equal to {max_quantity}.")
        return value

    def validate(self, attrs):
        # color y talla elegidos deben pertenecer al producto
        product = attrs['product']
        options = attrs.get('product_options') or {}
        unknown = set(options) - {'color', 'size'}
        if unknown:
            raise serializers.ValidationError(
                {'product_options': f"Unsupported options: {', '.join(sorted(unknown))}"}
            )
        for option, relation in (('color', product.colors), ('size', product.sizes)):
            value = options.get(option)
            if value is None:
                continue
            try:
                value = int(value)
            except (TypeError, ValueError):
                raise serializers.ValidationError({'product_options': f"Invalid {option}"}) from None
            if not relation.filter(pk=value).exists():
                raise serializers.ValidationError(
                    {'product_options': f"{option.capitalize()} not available for this product"}
                )
            options[option] = value
        attrs['product_options'] = options
        return attrs


class UpdateCartItemSerializer(serializers.Serializer):
    item_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=0)


class RemoveCartItemSerializer(serializers.Serializer):
    item_id = serializers.IntegerField()
