"""
Checkout: convierte el carrito en pedido y gestiona la cancelación.
"""

import logging
import random

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.cart.models import Cart
from apps.products.models import Product
from core.conf import store_setting

from .models import Order, OrderItem

logger = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 10


class CheckoutError(ValueError):
    """El pedido no puede crearse o modificarse"""


def generate_order_number():
    """PREFIJO-AAAAMMDD-NNNN, único entre los pedidos existentes"""
    prefix = store_setting('ORDER_NUMBER_PREFIX')
    day = timezone.now().strftime('%Y%m%d')
    for _ in range(ORDER_NUMBER_ATTEMPTS):
        candidate = f"{prefix}-{day}-{random.randint(1000, 9999)}"
        if not Order.objects.filter(order_number=candidate).exists():
            return candidate
    raise CheckoutError("Could not allocate an order number, please retry")


def place_order(user, shipping, payment_method, notes=''):
    """
    Crea el pedido a partir del carrito del usuario.

    Bloquea los productos, verifica y descuenta stock, copia las líneas y
    totales del carrito y lo vacía. Todo o nada.
    """
    cart = Cart.for_user(user)
    for _ in range(2):
        try:
            with transaction.atomic():
                return _place_order(cart, user, shipping, payment_method, notes)
        except IntegrityError:
            # colisión de order_number entre dos checkouts simultáneos
            logger.warning("Order number collision for user %s, retrying", user.pk)
    raise CheckoutError("Could not place the order, please retry")


def _place_order(cart, user, shipping, payment_method, notes):
    items = list(cart.items.select_related('product').order_by('pk'))
    if not items:
        raise CheckoutError("Cart is empty")

    product_ids = [item.product_id for item in items]
    products = Product.objects.select_for_update().in_bulk(product_ids)

    for item in items:
        product = products[item.product_id]
        if not product.is_active:
            raise CheckoutError(f"'{product.name}' is no longer available")
        if product.stock < item.quantity:
            raise CheckoutError(f"Only {product.stock} units of '{product.name}' in stock")

    cart.calculate_totals()
    order = Order.objects.create(
        order_number=generate_order_number(),
        user=user,
        payment_method=payment_method,
        notes=notes,
        subtotal=cart.subtotal,
        tax_amount=cart.tax,
        shipping_cost=cart.shipping,
        discount_amount=cart.discount,
        total=cart.total,
        **shipping,
    )
    for item in items:
        product = products[item.product_id]
        product.decrement_stock(item.quantity)
        OrderItem.objects.create(
            order=order,
            product=product,
            product_name=product.name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total_price=item.total_price,
            product_options=item.product_options,
        )

    cart.clear()
    logger.info("Order %s placed by %s (total %s)", order.order_number, user.email, order.total)
    return order


@transaction.atomic
def cancel_order(order):
    """Cancela el pedido y devuelve el stock de sus líneas"""
    order = Order.objects.select_for_update().get(pk=order.pk)
    if not order.can_be_cancelled:
        raise CheckoutError(
            f"Order {order.order_number} can no longer be cancelled (status: {order.status})"
        )

    for item in order.items.select_related('product'):
        if item.product is not None:
            item.product.restore_stock(item.quantity)

    order.status = 'cancelled'
    order.cancelled_at = timezone.now()
    order.save(update_fields=['status', 'cancelled_at', 'updated_at'])
    logger.info("Order %s cancelled", order.order_number)
    return order
