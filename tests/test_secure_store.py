"""
Secure credential store: Fernet-encrypted file backend.

Run:
    pytest tests/test_secure_store.py -v
"""

import json
import os
import stat

import pytest
from cryptography.fernet import Fernet

from core.crypto import get_fernet, load_or_create_key
from modules.gate.secure_store import (
    FernetFileSecureStore, SecretNotFoundError, SecureStoreError,
    UnexpectedStatusError, create_secure_store,
)


@pytest.fixture
def store(tmp_path):
    return FernetFileSecureStore(tmp_path / "secrets", Fernet(Fernet.generate_key()))


class TestSaveLoad:
    def test_saved_value_loads_back(self, store):
        store.save("account", "s3cret")
        assert store.load("account") == "s3cret"

    def test_save_overwrites(self, store):
        store.save("account", "first")
        store.save("account", "second")
        assert store.load("account") == "second"

    def test_entries_are_independent(self, store):
        store.save("a", "1")
        store.save("b", "2")
        assert (store.load("a"), store.load("b")) == ("1", "2")

    def test_plaintext_never_written(self, store):
        store.save("account", "GJDFHDFHFDJGSDAGKGHK")
        assert "GJDFHDFHFDJGSDAGKGHK" not in store.path.read_text()

    def test_file_is_private(self, store):
        store.save("account", "x")
        mode = stat.S_IMODE(os.stat(store.path).st_mode)
        assert mode & 0o077 == 0

    def test_unicode_round_trip(self, store):
        store.save("account", "clé-✓")
        assert store.load("account") == "clé-✓"


class TestErrors:
    def test_missing_file_is_not_found(self, store):
        with pytest.raises(SecretNotFoundError) as exc:
            store.load("account")
        assert exc.value.key == "account"

    def test_missing_key_is_not_found(self, store):
        store.save("other", "x")
        with pytest.raises(SecretNotFoundError):
            store.load("account")

    def test_errors_share_a_base_class(self):
        assert issubclass(SecretNotFoundError, SecureStoreError)
        assert issubclass(UnexpectedStatusError, SecureStoreError)

    def test_corrupt_file(self, store):
        store.path.write_text("{not json")
        with pytest.raises(UnexpectedStatusError) as exc:
            store.load("account")
        assert exc.value.status == "corrupt"

    def test_non_object_file(self, store):
        store.path.write_text(json.dumps(["a", "b"]))
        with pytest.raises(UnexpectedStatusError):
            store.load("account")

    def test_wrong_key_cannot_decrypt(self, store, tmp_path):
        store.save("account", "x")
        other = FernetFileSecureStore(store.path, Fernet(Fernet.generate_key()))
        with pytest.raises(UnexpectedStatusError) as exc:
            other.load("account")
        assert exc.value.status == "decrypt_failed"

    def test_unwritable_location(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")
        store = FernetFileSecureStore(blocker / "secrets", Fernet(Fernet.generate_key()))
        with pytest.raises(UnexpectedStatusError):
            store.save("account", "x")


class TestKeyHandling:
    def test_key_file_created_once(self, tmp_path):
        key_path = tmp_path / "store.key"
        first = load_or_create_key(key_path)
        assert load_or_create_key(key_path) == first

    def test_explicit_key_wins(self, tmp_path):
        key = Fernet.generate_key().decode()
        fernet = get_fernet(key, key_path=tmp_path / "unused.key")
        assert not (tmp_path / "unused.key").exists()
        assert Fernet(key.encode()).decrypt(fernet.encrypt(b"x")) == b"x"

    def test_invalid_key_rejected(self):
        with pytest.raises(ValueError):
            get_fernet("not-a-fernet-key")

    def test_key_or_path_required(self):
        with pytest.raises(ValueError):
            get_fernet()

    def test_created_store_survives_restart(self, tmp_path):
        path = tmp_path / "secrets"
        create_secure_store(path).save("account", "persisted")
        assert create_secure_store(path).load("account") == "persisted"
        assert (tmp_path / "secrets.key").exists()
