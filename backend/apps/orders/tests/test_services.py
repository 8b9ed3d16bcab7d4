# backend/apps/orders/tests/test_services.py
import re
from datetime import timedelta
from decimal import Decimal

import pytest
from django.test import override_settings
from django.utils import timezone

from apps.cart.models import Cart
from apps.orders.models import Order
from apps.orders.services import CheckoutError, cancel_order, generate_order_number, place_order

SHIPPING = {
    'shipping_name': 'Test User',
    'shipping_email': 'test@example.com',
    'shipping_phone': '+966500000010',
    'shipping_address': 'Olaya St 1',
    'shipping_city': 'Riyadh',
    'shipping_postal_code': '12211',
}


@pytest.fixture
def cart(user, product, color):
    cart = Cart.for_user(user)
    cart.add_item(product, 3, {'color': color.id})
    return cart


@pytest.mark.django_db
class TestPlaceOrder:

    def test_order_number_format(self):
        assert re.fullmatch(r'ORD-\d{8}-\d{4}', generate_order_number())

    @override_settings(STOREFRONT={'ORDER_NUMBER_PREFIX': 'PLT'})
    def test_order_number_prefix(self):
        assert generate_order_number().startswith('PLT-')

    def test_place_order_from_cart(self, user, cart, product, color):
        order = place_order(user, SHIPPING, 'cash_on_delivery', notes='Leave at the door')

        assert order.status == 'pending'
        assert order.subtotal == Decimal('300.00')
        assert order.tax_amount == Decimal('45.00')
        assert order.shipping_cost == Decimal('50.00')
        assert order.total == Decimal('395.00')
        assert order.shipping_city == 'Riyadh'
        assert order.notes == 'Leave at the door'

        item = order.items.get()
        assert item.product == product
        assert item.product_name == 'Fiddle Leaf Fig'
        assert item.quantity == 3
        assert item.product_options == {'color': color.id}

        product.refresh_from_db()
        assert product.stock == 7
        assert product.sales_count == 3
        assert Cart.for_user(user).is_empty

    def test_empty_cart(self, user):
        with pytest.raises(CheckoutError, match='Cart is empty'):
            place_order(user, SHIPPING, 'cash_on_delivery')

    def test_stock_changed_since_added(self, user, cart, product):
        product.stock = 2
        product.save()

        with pytest.raises(CheckoutError, match='in stock'):
            place_order(user, SHIPPING, 'cash_on_delivery')

        # nada cambia si el pedido falla
        assert not Order.objects.exists()
        assert not Cart.for_user(user).is_empty

    def test_product_deactivated_since_added(self, user, cart, product):
        product.is_active = False
        product.save()

        with pytest.raises(CheckoutError, match='no longer available'):
            place_order(user, SHIPPING, 'cash_on_delivery')


@pytest.mark.django_db
class TestCancelOrder:

    @pytest.fixture
    def order(self, user, cart):
        return place_order(user, SHIPPING, 'credit_card')

    def test_cancel_restores_stock(self, order, product):
        cancelled = cancel_order(order)

        assert cancelled.status == 'cancelled'
        assert cancelled.cancelled_at is not None
        product.refresh_from_db()
        assert product.stock == 10
        assert product.sales_count == 0

    def test_cannot_cancel_twice(self, order):
        cancel_order(order)
        with pytest.raises(CheckoutError, match='can no longer be cancelled'):
            cancel_order(order)

    def test_cannot_cancel_shipped(self, order):
        order.status = 'shipped'
        order.save()
        with pytest.raises(CheckoutError):
            cancel_order(order)

    def test_cannot_cancel_after_time_limit(self, order):
        Order.objects.filter(pk=order.pk).update(created_at=timezone.now() - timedelta(hours=25))
        order.refresh_from_db()

        assert order.can_be_cancelled is False
        with pytest.raises(CheckoutError):
            cancel_order(order)

    def test_cancel_with_deleted_product(self, order, product):
        product.delete()
        order.refresh_from_db()

        assert cancel_order(order).status == 'cancelled'

    def test_estimated_delivery(self, order):
        assert order.estimated_delivery == (order.created_at + timedelta(days=3)).date()
