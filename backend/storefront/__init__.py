from .auth_state import AuthState, AuthStateError, AuthTransition
from .cart import CartActions, CartClient, CartRequestError
from .catalog import FavoriteRequestError, FavoritesClient, ProductActions
from .context import StorefrontContext
from .gate import DeferredActionGate, GateClosedError
from .session import ApiRequestError, AuthSession, CredentialExchangeError, SessionExpired
from .surface import AuthTab, CredentialSurface, CredentialSurfaceProps

__all__ = [
    'ApiRequestError',
    'AuthSession',
    'AuthState',
    'AuthStateError',
    'AuthTab',
    'AuthTransition',
    'CartActions',
    'CartClient',
    'CartRequestError',
    'CredentialExchangeError',
    'CredentialSurface',
    'CredentialSurfaceProps',
    'DeferredActionGate',
    'FavoriteRequestError',
    'FavoritesClient',
    'GateClosedError',
    'ProductActions',
    'SessionExpired',
    'StorefrontContext',
]
