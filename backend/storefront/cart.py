"""
Carrito visto desde el cliente.

CartClient habla con /api/cart/ usando la sesión autenticada. CartActions es
lo que usa la ficha de producto: "añadir al carrito" pasa por el gate, así
que un visitante anónimo ve el modal de login y la acción se completa sola
cuando inicia sesión.
"""

import logging

from .session import ApiRequestError
from .surface import AuthTab

logger = logging.getLogger(__name__)


class CartRequestError(ApiRequestError):
    pass


class CartClient:
    def __init__(self, session):
        self.session = session

    def get(self):
        return self._call('GET', '/api/cart/')['cart']

    def add(self, product_id, quantity=1, options=None):
        payload = {'product_id': product_id, 'quantity': quantity}
        if options:
            payload['product_options'] = options
        return self._call('POST', '/api/cart/add/', payload)

    def update(self, item_id, quantity):
        return self._call('POST', '/api/cart/update/', {'item_id': item_id, 'quantity': quantity})

    def remove(self, item_id):
        return self._call('POST', '/api/cart/remove/', {'item_id': item_id})

    def clear(self):
        return self._call('POST', '/api/cart/clear/')

    def _call(self, method, path, payload=None):
        return self.session.call_json(
            method, path, payload,
            error_class=CartRequestError,
            default_error='Cart request failed.',
        )


class CartActions:
    def __init__(self, gate, client):
        self.gate = gate
        self.client = client
        self.last_result = None

    def add_to_cart(self, product_id, quantity=1, options=None, on_added=None):
        def action():
            result = self.client.add(product_id, quantity, options)
            self.last_result = result
            logger.info("Added product %s (x%s) to cart", product_id, quantity)
            if on_added is not None:
                on_added(result)

        self.gate.require_auth(action, AuthTab.LOGIN)
