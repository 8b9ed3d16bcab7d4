# backend/storefront/tests/test_gate.py
import logging
from unittest import mock

import pytest

from storefront.auth_state import AuthState
from storefront.gate import DeferredActionGate, GateClosedError
from storefront.surface import AuthTab


@pytest.fixture
def state():
    return AuthState()


@pytest.fixture
def writer(state):
    return state.claim_writer()


@pytest.fixture
def gate(state):
    with DeferredActionGate(state) as gate:
        yield gate


class TestRequireAuth:

    def test_authenticated_runs_immediately(self, state, writer, gate):
        writer.set_authenticated()
        action = mock.Mock()

        gate.require_auth(action)

        action.assert_called_once_with()
        assert gate.show_auth_modal is False
        assert gate.has_pending_action is False

    def test_anonymous_defers_and_opens_modal(self, gate):
        action = mock.Mock()

        gate.require_auth(action)

        action.assert_not_called()
        assert gate.show_auth_modal is True
        assert gate.pending_action.action is action
        assert gate.initial_tab is AuthTab.LOGIN

    def test_runs_once_after_login(self, writer, gate):
        action = mock.Mock()
        gate.require_auth(action)

        writer.set_authenticated()

        action.assert_called_once_with()
        assert gate.has_pending_action is False
        assert gate.show_auth_modal is False

        # logout y login de nuevo no la repiten
        writer.set_anonymous()
        writer.set_authenticated()
        action.assert_called_once_with()

    def test_last_request_wins(self, writer, gate):
        first, second = mock.Mock(), mock.Mock()
        gate.require_auth(first)
        gate.require_auth(second, initial_tab='register')

        writer.set_authenticated()

        first.assert_not_called()
        second.assert_called_once_with()

    def test_register_tab(self, gate):
        gate.require_auth(mock.Mock(), initial_tab='register')

        assert gate.initial_tab is AuthTab.REGISTER
        assert gate.surface_props().initial_tab == 'register'

    def test_unknown_tab(self, gate):
        with pytest.raises(ValueError, match='expected one of: login, register'):
            gate.require_auth(mock.Mock(), initial_tab='signup')
        assert gate.show_auth_modal is False

    def test_action_must_be_callable(self, gate):
        with pytest.raises(TypeError):
            gate.require_auth(None)

    def test_logout_keeps_gate_state(self, writer, gate):
        writer.set_authenticated()
        writer.set_anonymous()

        assert gate.show_auth_modal is False
        assert gate.has_pending_action is False

    def test_action_may_request_auth_again(self, writer, gate):
        # la acción pendiente ya se quitó cuando se ejecuta
        inner = mock.Mock()
        gate.require_auth(lambda: gate.require_auth(inner))

        writer.set_authenticated()

        inner.assert_called_once_with()
        assert gate.has_pending_action is False

    def test_action_that_loses_the_session_keeps_modal_open(self, writer, gate):
        inner = mock.Mock()

        def expires_and_retries():
            writer.set_anonymous()
            gate.require_auth(inner)

        gate.require_auth(expires_and_retries)
        writer.set_authenticated()

        inner.assert_not_called()
        assert gate.has_pending_action is True
        assert gate.show_auth_modal is True

        writer.set_authenticated()

        inner.assert_called_once_with()
        assert gate.show_auth_modal is False


class TestCloseAuthModal:

    def test_dismiss_discards_action(self, writer, gate):
        action = mock.Mock()
        gate.require_auth(action)

        gate.close_auth_modal()
        writer.set_authenticated()

        action.assert_not_called()
        assert gate.show_auth_modal is False

    def test_surface_on_hide_closes_modal(self, gate):
        gate.require_auth(mock.Mock())
        props = gate.surface_props()

        assert props.visible is True
        props.on_hide()

        assert gate.show_auth_modal is False
        assert gate.has_pending_action is False

    def test_open_without_action(self, writer, gate):
        gate.open_auth_modal('register')

        assert gate.show_auth_modal is True
        assert gate.has_pending_action is False

        writer.set_authenticated()
        # sin acción pendiente el modal lo cierra quien se autenticó
        assert gate.show_auth_modal is True


class TestFailingAction:

    def test_failure_is_logged_and_cleared(self, writer, gate, caplog):
        action = mock.Mock(side_effect=RuntimeError('cart is down'))
        gate.require_auth(action)

        with caplog.at_level(logging.ERROR, logger='storefront.gate'):
            writer.set_authenticated()

        action.assert_called_once_with()
        assert gate.has_pending_action is False
        assert gate.show_auth_modal is False
        assert 'cart is down' in caplog.text

    def test_failure_when_authenticated_propagates(self, writer, gate):
        writer.set_authenticated()

        with pytest.raises(RuntimeError):
            gate.require_auth(mock.Mock(side_effect=RuntimeError))


class TestLifecycle:

    def test_subscribes_once_and_unsubscribes_on_close(self, state):
        gate = DeferredActionGate(state)
        assert state.subscriber_count == 1

        gate.close()
        gate.close()

        assert state.subscriber_count == 0
        assert gate.closed is True

    def test_close_discards_pending(self, state, writer):
        action = mock.Mock()
        gate = DeferredActionGate(state)
        gate.require_auth(action)

        gate.close()
        writer.set_authenticated()

        action.assert_not_called()
        assert gate.show_auth_modal is False

    def test_closed_gate_rejects_requests(self, state):
        with DeferredActionGate(state) as gate:
            pass

        with pytest.raises(GateClosedError):
            gate.require_auth(mock.Mock())

    def test_gates_are_independent(self, state, writer):
        first_action, second_action = mock.Mock(), mock.Mock()
        first, second = DeferredActionGate(state), DeferredActionGate(state)
        first.require_auth(first_action)
        second.require_auth(second_action)

        first.close_auth_modal()
        writer.set_authenticated()

        first_action.assert_not_called()
        second_action.assert_called_once_with()


class TestScenarios:

    def test_anonymous_shopper_signs_in(self, writer, gate):
        calls = []
        gate.require_auth(lambda: calls.append('A'))
        assert calls == []
        assert gate.show_auth_modal is True

        writer.set_authenticated()

        assert calls == ['A']
        assert gate.show_auth_modal is False

    def test_signed_in_shopper(self, writer, gate):
        writer.set_authenticated()
        calls = []

        gate.require_auth(lambda: calls.append('B'))

        assert calls == ['B']
        assert gate.show_auth_modal is False
