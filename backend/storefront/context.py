from .auth_state import AuthState
from .cart import CartActions, CartClient
from .catalog import FavoritesClient, ProductActions
from .config import load_config
from .gate import DeferredActionGate
from .session import AuthSession
from .surface import CredentialSurface


class StorefrontContext:
    """
    Raíz del cliente: un AuthState y una AuthSession compartidos por todos
    los componentes. Cada componente crea su propio gate.
    """

    def __init__(self, config=None, http=None):
        self.config = config if config is not None else load_config()
        self.auth_state = AuthState()
        self.session = AuthSession(
            self.auth_state,
            self.config.api_url,
            http=http,
            timeout=self.config.timeout,
        )
        self.cart = CartClient(self.session)
        self.favorites = FavoritesClient(self.session)

    def create_gate(self):
        return DeferredActionGate(self.auth_state)

    def credential_surface(self, gate):
        return CredentialSurface(self.session, gate.surface_props())

    def cart_actions(self, gate):
        return CartActions(gate, self.cart)

    def product_actions(self, gate):
        return ProductActions(gate, self.favorites)
