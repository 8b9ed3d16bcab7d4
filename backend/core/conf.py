from decimal import Decimal

from django.conf import settings

# Valores por defecto si el proyecto no define STOREFRONT completo
DEFAULTS = {
    'TAX_RATE': '0.15',
    'FREE_SHIPPING_THRESHOLD': '500',
    'SHIPPING_COST': '50',
    'MAX_QUANTITY_PER_ITEM': 999,
    'ORDER_NUMBER_PREFIX': 'ORD',
    'CANCELLATION_TIME_LIMIT_HOURS': 24,
    'LATEST_PRODUCTS_LIMIT': 8,
    'ESTIMATED_DELIVERY_DAYS': 3,
    'PLACEHOLDER_IMAGE': '/static/images/placeholder-product.jpg',
}

MONEY_SETTINGS = {'TAX_RATE', 'FREE_SHIPPING_THRESHOLD', 'SHIPPING_COST'}


def store_setting(name):
    """Lee un valor de settings.STOREFRONT; los importes se devuelven como Decimal."""
    if name not in DEFAULTS:
        raise KeyError(f"Unknown store setting: {name}")
    value = getattr(settings, 'STOREFRONT', {}).get(name, DEFAULTS[name])
    if name in MONEY_SETTINGS:
        return Decimal(str(value))
    return value
