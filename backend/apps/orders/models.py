from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.cart.pricing import ZERO
from core.conf import store_setting

# =============================================================================
# E-COMMERCE ARCHITECTURE: Orders
# =============================================================================
# STATUS: Completo
# PURPOSE: Pedidos generados desde el carrito en el checkout
# BUSINESS LOGIC:
# - pending → confirmed → processing → shipped → delivered | cancelled
# - Las líneas guardan una copia del nombre y precio del producto
# - Cancelable solo en pending/confirmed y dentro del límite de horas
# =============================================================================


class Order(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('confirmed', 'Confirmed'),
        ('processing', 'Processing'),
        ('shipped', 'Shipped'),
        ('delivered', 'Delivered'),
        ('cancelled', 'Cancelled'),
    ]
    PAYMENT_METHOD_CHOICES = [
        ('cash_on_delivery', 'Cash on Delivery'),
        ('credit_card', 'Credit Card'),
        ('bank_transfer', 'Bank Transfer'),
    ]
    CANCELLABLE_STATUSES = ('pending', 'confirmed')

    order_number = models.CharField(max_length=32, unique=True)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name='orders', on_delete=models.PROTECT)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES)

    # Datos de envío
    shipping_name = models.CharField(max_length=255)
    shipping_email = models.EmailField()
    shipping_phone = models.CharField(max_length=20)
    shipping_address = models.CharField(max_length=500)
    shipping_city = models.CharField(max_length=100)
    shipping_postal_code = models.CharField(max_length=10, blank=True)
    notes = models.TextField(blank=True)

    # Totales copiados del carrito
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=ZERO)
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=ZERO)
    shipping_cost = models.DecimalField(max_digits=12, decimal_places=2, default=ZERO)
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=ZERO)
    total = models.DecimalField(max_digits=12, decimal_places=2, default=ZERO)

    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status']),
        ]

    def __str__(self):
        return f"{self.order_number} ({self.get_status_display()})"

    @property
    def cancellation_deadline(self):
        hours = store_setting('CANCELLATION_TIME_LIMIT_HOURS')
        return self.created_at + timedelta(hours=hours)

    @property
    def can_be_cancelled(self):
        return (self.status in self.CANCELLABLE_STATUSES and
                timezone.now() <= self.cancellation_deadline)

    @property
    def estimated_delivery(self):
        return (self.created_at + timedelta(days=store_setting('ESTIMATED_DELIVERY_DAYS'))).date()


class OrderItem(models.Model):
    order = models.ForeignKey(Order, related_name='items', on_delete=models.CASCADE)
    product = models.ForeignKey('products.Product', related_name='order_items',
                                on_delete=models.SET_NULL, null=True)
    product_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    product_options = models.JSONField(default=dict, blank=True)

    def __str__(self):
        return f"{self.quantity} x {self.product_name}"
