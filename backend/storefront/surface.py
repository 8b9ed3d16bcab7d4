"""
Modal de credenciales (login / registro).

Recibe del gate `visible`, `on_hide` e `initial_tab`. El intercambio de
credenciales lo hace AuthSession, que es quien cambia el AuthState; el modal
no sabe nada del gate ni de las acciones pendientes.
"""

import enum
from dataclasses import dataclass

from .session import CredentialExchangeError


class AuthTab(str, enum.Enum):
    LOGIN = 'login'
    REGISTER = 'register'

    @classmethod
    def parse(cls, value):
        try:
            return cls(value)
        except ValueError:
            choices = ', '.join(tab.value for tab in cls)
            raise ValueError(f"Unknown auth tab {value!r} (expected one of: {choices})") from None


@dataclass(frozen=True)
class CredentialSurfaceProps:
    visible: bool
    on_hide: object
    initial_tab: str = AuthTab.LOGIN.value


class CredentialSurface:
    def __init__(self, session, props):
        self.session = session
        self.props = None
        self.active_tab = AuthTab.LOGIN
        self.error = None
        self.loading = False
        self._visible = False
        self.render(props)

    @property
    def visible(self):
        return self._visible

    def render(self, props):
        """Aplica nuevas props; al abrirse vuelve a la pestaña pedida y limpia errores"""
        opening = props.visible and not self._visible
        self.props = props
        self._visible = props.visible
        if opening:
            self.active_tab = AuthTab.parse(props.initial_tab)
            self.error = None

    def switch_tab(self, tab):
        self.active_tab = AuthTab.parse(tab)
        self.error = None

    def submit_login(self, login, password):
        self.active_tab = AuthTab.LOGIN
        return self._submit(self.session.login, login, password)

    def submit_register(self, **fields):
        self.active_tab = AuthTab.REGISTER
        return self._submit(self.session.register, **fields)

    def dismiss(self):
        """Cerrar sin autenticarse (o tras un login correcto)"""
        self._visible = False
        self.props.on_hide()

    def _submit(self, exchange, *args, **kwargs):
        self.error = None
        self.loading = True
        try:
            exchange(*args, **kwargs)
        except CredentialExchangeError as exc:
            # el modal sigue abierto para reintentar
            self.error = exc.message
            return False
        finally:
            self.loading = False
        self.dismiss()
        return True
