"""
Secure credential storage for the gate's verification token.

SecureStore is the contract the gate depends on; FernetFileSecureStore is the
default backend, an encrypted JSON file of account -> Fernet token. Another
credential backend (OS keyring, HSM) only needs save() and load().
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol, Union

from cryptography.fernet import Fernet, InvalidToken

log = logging.getLogger("wavetech.secure_store")

StatusCode = Union[int, str]


class SecureStoreError(Exception):
    """Base class for secure storage failures."""


class SecretNotFoundError(SecureStoreError):
    """No secret stored for the requested account."""

    def __init__(self, key: str):
        super().__init__(f"No secret stored for '{key}'")
        self.key = key


class UnexpectedStatusError(SecureStoreError):
    """Storage failed for any reason other than a missing entry."""

    def __init__(self, status: StatusCode, message: str = ""):
        super().__init__(message or f"Secure storage failed with status {status!r}")
        self.status = status


class SecureStore(Protocol):
    """Contract for a secret store keyed by account identifier."""

    def save(self, key: str, value: str) -> None:
        """Write a secret, overwriting any existing value."""

    def load(self, key: str) -> str:
        """Return the secret or raise SecretNotFoundError / UnexpectedStatusError."""


class FernetFileSecureStore:
    """Secrets encrypted individually with Fernet in a 0600 JSON file.

    Nothing is cached: every load() reads the file again.
    """

    def __init__(self, path: Union[str, Path], fernet: Fernet):
        self.path = Path(path)
        self._fernet = fernet

    def _read_entries(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise UnexpectedStatusError(e.errno or "io_error", f"Cannot read {self.path}: {e}") from e

        try:
            entries = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as e:
            raise UnexpectedStatusError("corrupt", f"Secure store {self.path} is not valid JSON") from e
        if not isinstance(entries, dict):
            raise UnexpectedStatusError("corrupt", f"Secure store {self.path} must hold a JSON object")
        return entries

    def _write_entries(self, entries: dict[str, str]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(str(tmp_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(entries, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise UnexpectedStatusError(e.errno or "io_error", f"Cannot write {self.path}: {e}") from e

    def save(self, key: str, value: str) -> None:
        entries = self._read_entries()
        entries[key] = self._fernet.encrypt(value.encode("utf-8")).decode("ascii")
        self._write_entries(entries)
        log.debug(f"Stored secret for '{key}'")

    def load(self, key: str) -> str:
        entries = self._read_entries()
        if key not in entries:
            raise SecretNotFoundError(key)
        token = entries[key]
        if not isinstance(token, str):
            raise UnexpectedStatusError("corrupt", f"Entry for '{key}' is not a string")
        try:
            return self._fernet.decrypt(token.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as e:
            raise UnexpectedStatusError("decrypt_failed", f"Cannot decrypt secret for '{key}'") from e


def create_secure_store(path: Union[str, Path], encryption_key: str | None = None) -> FernetFileSecureStore:
    """Build the default store; the key file sits next to the store file."""
    from core.crypto import get_fernet

    store_path = Path(path)
    fernet = get_fernet(encryption_key, key_path=store_path.with_name(store_path.name + ".key"))
    return FernetFileSecureStore(store_path, fernet)
