"""
Gate de acciones que requieren autenticación.

require_auth(action) ejecuta la acción si el usuario ya está autenticado; si
no, la guarda como acción pendiente y pide mostrar el modal de credenciales.
Cuando el AuthState pasa a autenticado, la acción pendiente se ejecuta una
sola vez, se descarta y el modal se cierra.
"""

import logging
from dataclasses import dataclass

from .surface import AuthTab, CredentialSurfaceProps

logger = logging.getLogger(__name__)


class GateClosedError(RuntimeError):
    """Uso de un gate después de close()"""


@dataclass(frozen=True)
class PendingAction:
    action: object
    tab: AuthTab

    def run(self):
        self.action()


class DeferredActionGate:
    def __init__(self, auth_state):
        self._auth_state = auth_state
        self._pending = None
        self._show_auth_modal = False
        self._initial_tab = AuthTab.LOGIN
        self._subscription = auth_state.subscribe(self._on_auth_transition)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def is_authenticated(self):
        return self._auth_state.is_authenticated

    @property
    def show_auth_modal(self):
        return self._show_auth_modal

    @property
    def initial_tab(self):
        return self._initial_tab

    @property
    def pending_action(self):
        return self._pending

    @property
    def has_pending_action(self):
        return self._pending is not None

    @property
    def closed(self):
        return not self._subscription.active

    def require_auth(self, action, initial_tab=AuthTab.LOGIN):
        """
        Ejecuta `action` ya si hay sesión; si no, la deja pendiente y abre
        el modal en la pestaña `initial_tab` ('login' o 'register').

        Una segunda llamada sin sesión reemplaza la acción pendiente; la
        anterior nunca se ejecuta.
        """
        if self.closed:
            raise GateClosedError("require_auth() called on a closed gate")
        if not callable(action):
            raise TypeError("action must be callable")
        tab = AuthTab.parse(initial_tab)

        if self._auth_state.is_authenticated:
            action()
            return

        if self._pending is not None:
            logger.debug("Replacing pending action %r", self._pending.action)
        self._pending = PendingAction(action=action, tab=tab)
        self._initial_tab = tab
        self._show_auth_modal = True

    def open_auth_modal(self, initial_tab=AuthTab.LOGIN):
        """Mostrar el modal sin acción pendiente (p. ej. botón 'Sign in')"""
        self._initial_tab = AuthTab.parse(initial_tab)
        self._show_auth_modal = True

    def close_auth_modal(self):
        """El usuario cerró el modal: la acción pendiente se descarta sin ejecutarse"""
        self._pending = None
        self._show_auth_modal = False

    def surface_props(self):
        return CredentialSurfaceProps(
            visible=self._show_auth_modal,
            on_hide=self.close_auth_modal,
            initial_tab=self._initial_tab.value,
        )

    def close(self):
        """Desuscribe el gate; la acción pendiente se descarta"""
        self._subscription.unsubscribe()
        self.close_auth_modal()

    def _on_auth_transition(self, transition):
        if transition.became_authenticated:
            self._flush_pending()

    def _flush_pending(self):
        # se quita antes de ejecutar: nunca puede dispararse dos veces
        pending, self._pending = self._pending, None
        if pending is None:
            return
        try:
            pending.run()
        except Exception:
            logger.exception("Deferred action %r failed after authentication", pending.action)
        finally:
            # la acción pudo volver a pedir login (p. ej. sesión expirada)
            self._show_auth_modal = self._pending is not None
