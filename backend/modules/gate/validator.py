"""
Remote validation round-trip for the startup gate.

GET <endpoint>?p=<access key>&os=..&lng=..&devicemodel=..[&country=..]
Expected body: "<verification token>#<url>".

Transport failures are retried with capped exponential backoff. Any body
that does not match the expected shape is a definitive "use native" and is
never retried.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional
from urllib.parse import urlsplit

import httpx
from sqlalchemy.exc import SQLAlchemyError

from core.preferences import PreferenceStore
from modules.gate.fingerprint import DeviceFingerprint, collect_fingerprint
from modules.gate.secure_store import SecureStore, SecureStoreError
from modules.gate.state import GateState, TOKEN_CACHE_KEY, URL_CACHE_KEY

log = logging.getLogger("wavetech.gate")

RESPONSE_DELIMITER = "#"
_ALLOWED_URL_SCHEMES = ("http", "https")


class GateRequestError(ValueError):
    """The validation request URL could not be built."""


def backoff_delay(attempt: int, cap: float = 30.0) -> float:
    """Seconds to wait after failed attempt number `attempt` (counted from 0)."""
    return float(min(2 ** attempt, cap))


def is_valid_url(value: str) -> bool:
    """Absolute http(s) URL with a host and no embedded whitespace."""
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme.lower() in _ALLOWED_URL_SCHEMES and bool(parts.netloc)


def parse_validation_response(body: str, verify_key: str) -> Optional[tuple[str, str]]:
    """Return (token, url) for an accepted body, None for any other shape."""
    parts = body.strip().split(RESPONSE_DELIMITER)
    if len(parts) != 2:
        return None
    token, url = parts
    if token != verify_key or not is_valid_url(url):
        return None
    return token, url


def build_request_url(endpoint_url: str, access_key: str, fingerprint: DeviceFingerprint) -> str:
    """Validation URL with the fixed query parameter order."""
    params = [
        ("p", access_key),
        ("os", fingerprint.system_info),
        ("lng", fingerprint.language_code),
        ("devicemodel", fingerprint.model_identifier),
    ]
    if fingerprint.region_code:
        params.append(("country", fingerprint.region_code))

    try:
        url = httpx.URL(endpoint_url, params=params)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise GateRequestError(f"Invalid gate endpoint {endpoint_url!r}: {e}") from e
    if url.scheme not in _ALLOWED_URL_SCHEMES or not url.host:
        raise GateRequestError(f"Gate endpoint must be an absolute http(s) URL: {endpoint_url!r}")
    return str(url)


class RemoteValidator:
    """Performs validate() -> approved | use_native."""

    def __init__(
        self,
        *,
        endpoint_url: str,
        access_key: str,
        verify_key: str,
        preferences: PreferenceStore,
        secure_store: SecureStore,
        fingerprint_provider: Callable[[], DeviceFingerprint] = collect_fingerprint,
        max_attempts: int = 3,
        backoff_cap: float = 30.0,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.endpoint_url = endpoint_url
        self.access_key = access_key
        self.verify_key = verify_key
        self.preferences = preferences
        self.secure_store = secure_store
        self.fingerprint_provider = fingerprint_provider
        self.max_attempts = max_attempts
        self.backoff_cap = backoff_cap
        self.timeout = timeout
        self._transport = transport
        self._sleep = sleep

    def request_url(self) -> str:
        return build_request_url(self.endpoint_url, self.access_key, self.fingerprint_provider())

    async def validate(self) -> GateState:
        try:
            url = self.request_url()
        except Exception as e:
            log.warning(f"Gate request URL could not be built, using native UI: {e}")
            return GateState.use_native()

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            for attempt in range(self.max_attempts):
                try:
                    body = await self._fetch_text(client, url)
                except httpx.HTTPError as e:
                    remaining = self.max_attempts - attempt - 1
                    log.warning(
                        f"Gate validation attempt {attempt + 1}/{self.max_attempts} failed: {e!r}"
                    )
                    if remaining == 0:
                        log.info("Gate validation retries exhausted, using native UI")
                        return GateState.use_native()
                    await self._sleep(backoff_delay(attempt, self.backoff_cap))
                    continue

                accepted = parse_validation_response(body, self.verify_key)
                if accepted is None:
                    log.info("Gate validation rejected by server response, using native UI")
                    return GateState.use_native()

                token, trusted_url = accepted
                self._persist_trust(token, trusted_url)
                log.info(f"Gate validation approved on attempt {attempt + 1}")
                return GateState.approved(token, trusted_url)

        return GateState.use_native()

    async def _fetch_text(self, client: httpx.AsyncClient, url: str) -> str:
        resp = await client.get(url)
        resp.raise_for_status()
        return resp.content.decode("utf-8", errors="replace")

    def _persist_trust(self, token: str, url: str) -> None:
        # Approval stands even when either half of the trust record cannot be stored.
        try:
            self.preferences.set(URL_CACHE_KEY, url)
        except SQLAlchemyError as e:
            log.warning(f"Could not persist trusted gate URL: {e}")
        try:
            self.secure_store.save(TOKEN_CACHE_KEY, token)
        except SecureStoreError as e:
            log.warning(f"Could not persist gate verification token: {e}")
