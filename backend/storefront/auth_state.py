"""
Estado de autenticación compartido por todos los componentes del cliente.

Un único AuthState por sesión de UI. Cualquiera puede leerlo y suscribirse a
sus transiciones; solo el subsistema de autenticación (quien reclama el
writer) puede cambiarlo.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class AuthStateError(RuntimeError):
    """Uso inválido del AuthState (p. ej. un segundo writer)"""


@dataclass(frozen=True)
class AuthTransition:
    previous: bool
    current: bool

    @property
    def became_authenticated(self):
        return not self.previous and self.current

    @property
    def became_anonymous(self):
        return self.previous and not self.current


class Subscription:
    """Handle devuelto por AuthState.subscribe; unsubscribe() es idempotente"""

    def __init__(self, state, callback):
        self._state = state
        self._callback = callback
        self.active = True

    def unsubscribe(self):
        if self.active:
            self.active = False
            self._state._remove(self)

    def _deliver(self, transition):
        if self.active:
            self._callback(transition)


class AuthState:
    def __init__(self, is_authenticated=False):
        self._is_authenticated = bool(is_authenticated)
        self._subscriptions = []
        self._writer = None

    def __repr__(self):
        return f"<AuthState authenticated={self._is_authenticated} subscribers={len(self._subscriptions)}>"

    @property
    def is_authenticated(self):
        return self._is_authenticated

    @property
    def subscriber_count(self):
        return len(self._subscriptions)

    def subscribe(self, callback):
        if not callable(callback):
            raise TypeError("callback must be callable")
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def claim_writer(self):
        """Entrega el único handle de escritura; un segundo reclamo falla"""
        if self._writer is not None:
            raise AuthStateError("AuthState already has a writer")
        self._writer = AuthStateWriter(self)
        return self._writer

    def _remove(self, subscription):
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass

    def _publish(self, value):
        value = bool(value)
        if value == self._is_authenticated:
            return None
        transition = AuthTransition(previous=self._is_authenticated, current=value)
        self._is_authenticated = value
        logger.debug("Auth state changed: %s -> %s", transition.previous, transition.current)

        # copia: un suscriptor puede desuscribirse mientras se notifica
        for subscription in list(self._subscriptions):
            try:
                subscription._deliver(transition)
            except Exception:
                logger.exception("Auth state subscriber %r failed", subscription._callback)
        return transition


class AuthStateWriter:
    """Handle de escritura del AuthState, propiedad del subsistema de autenticación"""

    def __init__(self, state):
        self.state = state

    def set_authenticated(self):
        return self.state._publish(True)

    def set_anonymous(self):
        return self.state._publish(False)
