"""
Favoritos vistos desde el cliente.

El estado se puede consultar sin sesión (siempre false). Marcar o desmarcar
pasa por el gate igual que "añadir al carrito".
"""

import logging

from .session import ApiRequestError
from .surface import AuthTab

logger = logging.getLogger(__name__)


class FavoriteRequestError(ApiRequestError):
    pass


class FavoritesClient:
    def __init__(self, session):
        self.session = session

    def status(self, product_id):
        return self._call('GET', product_id)['is_favorite']

    def toggle(self, product_id):
        return self._call('POST', product_id)

    def _call(self, method, product_id):
        return self.session.call_json(
            method, f'/api/products/{product_id}/favorite/',
            error_class=FavoriteRequestError,
            default_error='Could not update favorites.',
        )


class ProductActions:
    def __init__(self, gate, favorites):
        self.gate = gate
        self.favorites = favorites
        self.last_result = None

    def toggle_favorite(self, product_id, on_toggled=None):
        def action():
            result = self.favorites.toggle(product_id)
            self.last_result = result
            logger.info("Product %s favorite=%s", product_id, result['is_favorite'])
            if on_toggled is not None:
                on_toggled(result)

        self.gate.require_auth(action, AuthTab.LOGIN)
