"""
Encryption utilities for secrets kept on disk.

Uses Fernet symmetric encryption. The key comes from ENCRYPTION_KEY or,
when that is unset, from a key file that is generated once and reused.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from cryptography.fernet import Fernet

log = logging.getLogger("wavetech.crypto")


def generate_key() -> str:
    """Generate a new encryption key. Run once and save to .env."""
    return Fernet.generate_key().decode()


def _write_private(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(str(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        f.write(content)


def load_or_create_key(key_path: Union[str, Path]) -> str:
    """Read the key file, creating it with a fresh key if it does not exist."""
    path = Path(key_path)
    if path.is_file():
        return path.read_text().strip()
    key = generate_key()
    _write_private(path, key)
    log.info(f"Generated new encryption key at {path}")
    return key


def get_fernet(key: Optional[str] = None, key_path: Union[str, Path, None] = None) -> Fernet:
    """
    Build a Fernet instance.

    An explicit key wins; otherwise the key file is used (and created).
    Raises ValueError if neither is given or the key is malformed.
    """
    if not key:
        if key_path is None:
            raise ValueError("An encryption key or a key file path is required")
        key = load_or_create_key(key_path)
    try:
        return Fernet(key.encode())
    except (ValueError, TypeError) as e:
        log.error("Encryption key is set but invalid: cannot initialize Fernet")
        raise ValueError("Invalid Fernet encryption key") from e


if __name__ == "__main__":
    # Helper to generate a new key
    print("New encryption key:")
    print(generate_key())
    print("\nAdd this to your .env file as:")
    print("ENCRYPTION_KEY=<key>")
