from rest_framework import serializers

from apps.users.models import normalize_phone

from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    product_id = serializers.ReadOnlyField()
    product_slug = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = ['id', 'product_id', 'product_slug', 'product_name', 'quantity',
                  'unit_price', 'total_price', 'product_options']

    def get_product_slug(self, obj):
        return obj.product.slug if obj.product else None


class OrderListSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = ['id', 'order_number', 'status', 'status_display', 'payment_method',
                  'total', 'item_count', 'created_at']

    def get_item_count(self, obj):
        return sum(item.quantity for item in obj.items.all())


class OrderDetailSerializer(OrderListSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    can_be_cancelled = serializers.ReadOnlyField()
    estimated_delivery = serializers.DateField(read_only=True)

    class Meta(OrderListSerializer.Meta):
        fields = OrderListSerializer.Meta.fields + [
            'shipping_name', 'shipping_email', 'shipping_phone', 'shipping_address',
            'shipping_city', 'shipping_postal_code', 'notes', 'subtotal', 'tax_amount',
            'shipping_cost', 'discount_amount', 'items', 'can_be_cancelled',
            'estimated_delivery', 'cancelled_at', 'updated_at'
        ]


class CustomerInfoSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(max_length=255)
    phone = serializers.CharField(max_length=20)
    address = serializers.CharField(max_length=500)
    city = serializers.CharField(max_length=100)
    postal_code = serializers.CharField(max_length=10, required=False, allow_blank=True)

    def validate_phone(self, value):
        phone = normalize_phone(value)
        if len(phone) < 8:
            raise serializers.ValidationError("Enter a valid phone number.")
        return phone


class CheckoutSerializer(serializers.Serializer):
    """Datos del checkout: cliente, método de pago y notas"""
    customer_info = CustomerInfoSerializer()
    payment_method = serializers.ChoiceField(choices=Order.PAYMENT_METHOD_CHOICES)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')

    def shipping_fields(self):
        info = self.validated_data['customer_info']
        return {
            'shipping_name': info['name'],
            'shipping_email': info['email'],
            'shipping_phone': info['phone'],
            'shipping_address': info['address'],
            'shipping_city': info['city'],
            'shipping_postal_code': info.get('postal_code', ''),
        }
