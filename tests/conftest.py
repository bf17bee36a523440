"""
WaveTech Test Suite: Shared Fixtures

Points the app at a throwaway SQLite file before anything imports
core.config, turns off startup side effects (gate activation, demo seeding),
and provides in-memory collaborators for the gate and the workshop store.

Usage:
    pip install -e ".[test]"
    pytest -v --tb=short
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
BACKEND_DIR = TESTS_DIR.parent / "backend"
for _path in (str(BACKEND_DIR), str(TESTS_DIR)):
    if _path not in sys.path:
        sys.path.insert(0, _path)

# ---------------------------------------------------------------------------
# Environment (must run before core.config is imported)
# ---------------------------------------------------------------------------

_TMP_DIR = Path(tempfile.mkdtemp(prefix="wavetech-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ["SECURE_STORE_PATH"] = str(_TMP_DIR / "secrets")
os.environ["GATE_ACTIVATE_ON_STARTUP"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"

from helpers import (  # noqa: E402
    ACCESS_KEY, ENDPOINT, VERIFY_KEY, MemorySecureStore, RecordingSleep,
    approved_body, fixed_fingerprint, scripted_transport,
)


# ---------------------------------------------------------------------------
# Storage fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def preferences():
    """PreferenceStore over a private in-memory database."""
    from sqlalchemy.orm import sessionmaker
    from core.db import create_db_engine, init_db
    from core.preferences import PreferenceStore

    engine = create_db_engine("sqlite://")
    init_db(bind=engine)
    yield PreferenceStore(sessionmaker(bind=engine))
    engine.dispose()


@pytest.fixture
def secure_store():
    return MemorySecureStore()


@pytest.fixture
def event_bus():
    from core.event_bus import InMemoryEventBus
    return InMemoryEventBus()


@pytest.fixture
def data_store(preferences, event_bus):
    from modules.workshop.store import WorkshopDataStore
    return WorkshopDataStore(preferences, event_bus)


# ---------------------------------------------------------------------------
# Gate fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_validator(preferences, secure_store):
    """Factory: make_validator(*outcomes) -> (validator, requests, sleep)."""
    from modules.gate.validator import RemoteValidator

    def _make(*outcomes, **overrides):
        transport, requests = scripted_transport(*outcomes)
        sleep = RecordingSleep()
        kwargs = dict(
            endpoint_url=ENDPOINT,
            access_key=ACCESS_KEY,
            verify_key=VERIFY_KEY,
            preferences=preferences,
            secure_store=secure_store,
            fingerprint_provider=fixed_fingerprint(),
            transport=transport,
            sleep=sleep,
        )
        kwargs.update(overrides)
        return RemoteValidator(**kwargs), requests, sleep

    return _make


@pytest.fixture
def make_controller(make_validator, preferences, secure_store, event_bus):
    """Factory: make_controller(*outcomes) -> (controller, requests)."""
    from modules.gate.controller import GateController

    def _make(*outcomes, **validator_overrides):
        validator, requests, _ = make_validator(*outcomes, **validator_overrides)
        controller = GateController(
            validator=validator,
            preferences=validator.preferences,
            secure_store=validator.secure_store,
            verify_key=VERIFY_KEY,
            event_bus=event_bus,
        )
        return controller, requests

    return _make


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------

@pytest.fixture
def client(data_store, make_controller):
    """TestClient with the workshop store and gate controller swapped for test instances."""
    from fastapi.testclient import TestClient
    from core.app import create_app
    from modules.gate.controller import get_gate_controller
    from modules.workshop.store import get_data_store

    controller, _ = make_controller(approved_body())
    app = create_app()
    app.dependency_overrides[get_data_store] = lambda: data_store
    app.dependency_overrides[get_gate_controller] = lambda: controller
    with TestClient(app) as c:
        yield c
