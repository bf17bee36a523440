"""
core/preferences.py: Local preference store.

Ordinary (non-secret) key-value settings persisted in the `preferences`
table: the trusted-URL cache of the startup gate and the JSON arrays
behind each workshop record collection.
"""

import logging
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from core.models import Preference

log = logging.getLogger("wavetech.preferences")


class PreferenceStore:
    """Read/write JSON values by key. Every call uses a short-lived session."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def get(self, key: str, default: Any = None) -> Any:
        db = self._session_factory()
        try:
            row = db.query(Preference).filter(Preference.key == key).first()
            return row.value if row is not None else default
        finally:
            db.close()

    def get_string(self, key: str) -> Optional[str]:
        """Return the value only if it is a string, else None."""
        value = self.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: Any) -> None:
        db = self._session_factory()
        try:
            row = db.query(Preference).filter(Preference.key == key).first()
            if row is None:
                db.add(Preference(key=key, value=value))
            else:
                row.value = value
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
        log.debug(f"Preference '{key}' saved")

    def remove(self, key: str) -> None:
        db = self._session_factory()
        try:
            db.query(Preference).filter(Preference.key == key).delete()
            db.commit()
        finally:
            db.close()


_store: Optional[PreferenceStore] = None


def get_preference_store() -> PreferenceStore:
    """Return the application-level preference store bound to SessionLocal."""
    global _store
    if _store is None:
        from core.db import SessionLocal
        _store = PreferenceStore(SessionLocal)
    return _store
