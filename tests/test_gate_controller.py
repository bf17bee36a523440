"""
Startup gate: controller state machine and trusted-cache short-circuit.

Run:
    pytest tests/test_gate_controller.py -v
"""

import asyncio

import httpx

from helpers import TRUSTED_URL, VERIFY_KEY, BrokenSecureStore, approved_body, database_locked
from core.base import GateStatus
from core.events import GATE_STATE_CHANGED
from modules.gate.state import GateState, TOKEN_CACHE_KEY, URL_CACHE_KEY


def _trust(preferences, secure_store, url=TRUSTED_URL, token=VERIFY_KEY):
    preferences.set(URL_CACHE_KEY, url)
    secure_store.save(TOKEN_CACHE_KEY, token)


class TestGateState:
    def test_idle_and_validating_show_loader(self):
        assert GateState.idle().show_loader
        assert GateState.validating().show_loader
        assert not GateState.idle().is_terminal

    def test_terminal_states(self):
        assert GateState.use_native().is_terminal
        approved = GateState.approved(VERIFY_KEY, TRUSTED_URL)
        assert approved.is_terminal and not approved.show_loader

    def test_to_dict(self):
        assert GateState.approved("t", "https://x.test").to_dict() == {
            "status": "approved",
            "token": "t",
            "url": "https://x.test",
            "show_loader": False,
            "terminal": True,
        }


class TestTrustedCache:
    def test_cache_hit_skips_network(self, make_controller, preferences, secure_store):
        _trust(preferences, secure_store)
        controller, requests = make_controller(approved_body())

        state = asyncio.run(controller.activate())

        assert state == GateState.approved(VERIFY_KEY, TRUSTED_URL)
        assert requests == []

    def test_cache_hit_goes_straight_to_approved(self, make_controller, preferences, secure_store):
        _trust(preferences, secure_store)
        controller, _ = make_controller(approved_body())
        seen = []
        controller.subscribe(lambda s: seen.append(s.status))

        asyncio.run(controller.activate())

        assert seen == [GateStatus.APPROVED]

    def test_mismatched_token_validates_again(self, make_controller, preferences, secure_store):
        _trust(preferences, secure_store, token="STALE")
        controller, requests = make_controller(approved_body())

        state = asyncio.run(controller.activate())

        assert state.status == GateStatus.APPROVED
        assert len(requests) == 1
        assert secure_store.load(TOKEN_CACHE_KEY) == VERIFY_KEY

    def test_url_without_token_validates_again(self, make_controller, preferences):
        preferences.set(URL_CACHE_KEY, TRUSTED_URL)
        controller, requests = make_controller("rejected")

        assert asyncio.run(controller.activate()).status == GateStatus.USE_NATIVE
        assert len(requests) == 1

    def test_invalid_cached_url_not_trusted(self, make_controller, preferences, secure_store):
        _trust(preferences, secure_store, url="not a url")
        controller, requests = make_controller(approved_body())

        asyncio.run(controller.activate())

        assert len(requests) == 1

    def test_non_string_cached_url_ignored(self, make_controller, preferences, secure_store):
        preferences.set(URL_CACHE_KEY, {"url": TRUSTED_URL})
        secure_store.save(TOKEN_CACHE_KEY, VERIFY_KEY)
        controller, _ = make_controller(approved_body())

        assert controller.load_trusted_state() is None

    def test_secure_store_error_falls_through_to_network(self, make_controller, preferences):
        preferences.set(URL_CACHE_KEY, TRUSTED_URL)
        controller, requests = make_controller(approved_body(), secure_store=BrokenSecureStore())

        state = asyncio.run(controller.activate())

        assert state.status == GateStatus.APPROVED
        assert len(requests) == 1

    def test_preference_read_failure_falls_through_to_network(self, make_controller, preferences, monkeypatch):
        monkeypatch.setattr(preferences, "get", database_locked)
        controller, requests = make_controller(approved_body())

        state = asyncio.run(controller.activate())

        assert state.status == GateStatus.APPROVED
        assert len(requests) == 1


class TestTransitions:
    def test_network_path_emits_validating_then_result(self, make_controller):
        controller, _ = make_controller(approved_body())
        seen = []
        controller.subscribe(lambda s: seen.append(s.status))

        asyncio.run(controller.activate())

        assert seen == [GateStatus.VALIDATING, GateStatus.APPROVED]

    def test_starts_idle(self, make_controller):
        controller, _ = make_controller(approved_body())
        assert controller.state == GateState.idle()

    def test_terminal_state_is_final(self, make_controller, preferences, secure_store):
        controller, requests = make_controller("rejected")
        assert asyncio.run(controller.activate()).status == GateStatus.USE_NATIVE

        # Even a now-trusted cache cannot move the gate once it has decided
        _trust(preferences, secure_store)
        assert asyncio.run(controller.activate()).status == GateStatus.USE_NATIVE
        assert len(requests) == 1

    def test_concurrent_activations_validate_once(self, make_controller):
        controller, requests = make_controller(approved_body())

        async def run_twice():
            return await asyncio.gather(controller.activate(), controller.activate())

        first, second = asyncio.run(run_twice())
        assert first == second
        assert len(requests) == 1

    def test_exhausted_retries_use_native(self, make_controller):
        controller, requests = make_controller(httpx.ConnectError("offline"))
        assert asyncio.run(controller.activate()).status == GateStatus.USE_NATIVE
        assert len(requests) == 3

    def test_validator_crash_uses_native(self, make_controller):
        controller, _ = make_controller(approved_body())

        async def explode():
            raise RuntimeError("boom")

        controller.validator.validate = explode
        assert asyncio.run(controller.activate()).status == GateStatus.USE_NATIVE

    def test_unsubscribed_callback_not_called(self, make_controller):
        controller, _ = make_controller(approved_body())
        seen = []
        controller.subscribe(seen.append)
        controller.unsubscribe(seen.append)
        asyncio.run(controller.activate())
        assert seen == []

    def test_failing_subscriber_does_not_block_others(self, make_controller):
        controller, _ = make_controller(approved_body())
        seen = []

        def bad(state):
            raise ValueError("subscriber broke")

        controller.subscribe(bad)
        controller.subscribe(seen.append)
        asyncio.run(controller.activate())
        assert [s.status for s in seen] == [GateStatus.VALIDATING, GateStatus.APPROVED]

    def test_transitions_published_on_event_bus(self, make_controller, event_bus):
        controller, _ = make_controller(approved_body())
        events = []
        event_bus.subscribe(GATE_STATE_CHANGED, events.append)

        asyncio.run(controller.activate())

        assert [e.data["status"] for e in events] == ["validating", "approved"]
        assert events[-1].data["url"] == TRUSTED_URL
        assert events[-1].source_module == "gate"
