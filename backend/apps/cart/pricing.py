from decimal import ROUND_HALF_UP, Decimal

from core.conf import store_setting

CENT = Decimal('0.01')
ZERO = Decimal('0.00')


def money(value):
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_tax(subtotal):
    return money(subtotal * store_setting('TAX_RATE'))


def calculate_shipping(subtotal):
    """Envío gratis a partir del umbral; un carrito vacío no paga envío"""
    if subtotal <= 0:
        return ZERO
    if subtotal >= store_setting('FREE_SHIPPING_THRESHOLD'):
        return ZERO
    return money(store_setting('SHIPPING_COST'))


def calculate_totals(subtotal, discount=ZERO):
    subtotal = money(subtotal)
    tax = calculate_tax(subtotal)
    shipping = calculate_shipping(subtotal)
    total = max(ZERO, subtotal + tax + shipping - money(discount))
    return {
        'subtotal': subtotal,
        'tax': tax,
        'shipping': shipping,
        'discount': money(discount),
        'total': money(total),
    }
