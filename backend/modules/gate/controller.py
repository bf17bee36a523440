"""
modules/gate/controller.py: Startup gate state machine.

    idle -> validating -> approved | use_native

A trusted cache (URL preference + matching secure token) short-circuits
straight to approved without touching the network. Terminal states are
final for the lifetime of the process.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from core.config import settings as default_settings
from core.event_bus import get_event_bus
from core.events import GATE_STATE_CHANGED
from core.interfaces.event_bus import Event, EventBus
from core.preferences import PreferenceStore, get_preference_store
from modules.gate.secure_store import SecureStore, SecureStoreError, create_secure_store
from modules.gate.state import GateState, TOKEN_CACHE_KEY, URL_CACHE_KEY
from modules.gate.validator import RemoteValidator, is_valid_url

log = logging.getLogger("wavetech.gate")

StateCallback = Callable[[GateState], Any]


class GateController:
    """Holds the current GateState and notifies subscribers on every transition."""

    def __init__(
        self,
        validator: RemoteValidator,
        preferences: PreferenceStore,
        secure_store: SecureStore,
        verify_key: str,
        event_bus: Optional[EventBus] = None,
    ):
        self.validator = validator
        self.preferences = preferences
        self.secure_store = secure_store
        self.verify_key = verify_key
        self.event_bus = event_bus
        self._state = GateState.idle()
        self._subscribers: list[StateCallback] = []
        self._lock = asyncio.Lock()

    @property
    def state(self) -> GateState:
        return self._state

    def subscribe(self, callback: StateCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: StateCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _transition(self, new_state: GateState) -> None:
        if self._state.is_terminal:
            log.warning(f"Ignoring gate transition {self._state.status.value} -> {new_state.status.value}")
            return
        log.info(f"Gate state: {self._state.status.value} -> {new_state.status.value}")
        self._state = new_state

        for callback in list(self._subscribers):
            try:
                callback(new_state)
            except Exception as e:
                log.error(f"Gate subscriber {callback!r} raised: {e}", exc_info=True)

        if self.event_bus is not None:
            self.event_bus.publish(Event(
                event_type=GATE_STATE_CHANGED,
                source_module="gate",
                data={"status": new_state.status.value, "token": new_state.token, "url": new_state.url},
            ))

    def load_trusted_state(self) -> Optional[GateState]:
        """approved(token, url) from the local cache, or None if it is not trusted."""
        try:
            cached_url = self.preferences.get_string(URL_CACHE_KEY)
        except SQLAlchemyError as e:
            log.warning(f"Could not read cached gate URL: {e}")
            return None
        if not cached_url or not is_valid_url(cached_url):
            return None
        try:
            token = self.secure_store.load(TOKEN_CACHE_KEY)
        except SecureStoreError as e:
            log.info(f"No trusted gate token available: {e}")
            return None
        if token != self.verify_key:
            log.info("Cached gate token does not match, validating again")
            return None
        return GateState.approved(token, cached_url)

    async def activate(self) -> GateState:
        """Run the gate once. Later calls return the terminal state unchanged."""
        async with self._lock:
            if self._state.is_terminal:
                return self._state

            trusted = self.load_trusted_state()
            if trusted is not None:
                log.info("Gate approved from trusted cache, skipping network validation")
                self._transition(trusted)
                return self._state

            self._transition(GateState.validating())
            try:
                result = await self.validator.validate()
            except Exception:
                log.exception("Gate validation crashed, using native UI")
                result = GateState.use_native()
            if not result.is_terminal:
                result = GateState.use_native()
            self._transition(result)
            return self._state


def create_gate_controller(
    app_settings=None,
    preferences: Optional[PreferenceStore] = None,
    secure_store: Optional[SecureStore] = None,
    event_bus: Optional[EventBus] = None,
) -> GateController:
    """Wire a controller from settings; any collaborator can be supplied instead."""
    cfg = app_settings or default_settings
    preferences = preferences or get_preference_store()
    if secure_store is None:
        secure_store = create_secure_store(cfg.secure_store_path, cfg.encryption_key)

    validator = RemoteValidator(
        endpoint_url=cfg.gate_endpoint_url,
        access_key=cfg.gate_access_key,
        verify_key=cfg.gate_verify_key,
        preferences=preferences,
        secure_store=secure_store,
        max_attempts=cfg.gate_max_attempts,
        backoff_cap=cfg.gate_backoff_cap_seconds,
        timeout=cfg.gate_request_timeout_seconds,
    )
    return GateController(
        validator=validator,
        preferences=preferences,
        secure_store=secure_store,
        verify_key=cfg.gate_verify_key,
        event_bus=event_bus if event_bus is not None else get_event_bus(),
    )


_controller: Optional[GateController] = None


def get_gate_controller() -> GateController:
    """Return the process-wide gate controller (FastAPI dependency)."""
    global _controller
    if _controller is None:
        _controller = create_gate_controller()
    return _controller
