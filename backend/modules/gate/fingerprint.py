"""Device fingerprint values sent as gate query parameters.

Everything here is side-effect free and never validates what it reads:
the values are passed through to the validation endpoint as-is.
"""

from __future__ import annotations

import locale
import os
import platform
from dataclasses import dataclass
from typing import Optional

DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class DeviceFingerprint:
    """Values reported to the validation endpoint."""

    region_code: Optional[str]
    language_code: str
    system_info: str
    model_identifier: str


def _preferred_locale_tag() -> Optional[str]:
    # LANGUAGE lists preferences in order ("de_AT:de:en"); take the first.
    language = os.environ.get("LANGUAGE", "").split(":")[0].strip()
    if language:
        return language
    try:
        tag = locale.getlocale()[0]
    except ValueError:
        tag = None
    return tag or os.environ.get("LC_ALL") or os.environ.get("LANG") or None


def _split_locale_tag(tag: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Split "en_US.UTF-8" / "pt-BR" / "de" into (language, region)."""
    if not tag:
        return None, None
    tag = tag.split(".")[0].split("@")[0]
    if tag in ("C", "POSIX"):
        return None, None
    parts = tag.replace("_", "-").split("-")
    language = parts[0] or None
    region = None
    for part in parts[1:]:
        # Skip script subtags such as "Hans" in zh-Hans-CN
        if (len(part) == 2 and part.isalpha()) or (len(part) == 3 and part.isdigit()):
            region = part.upper()
            break
    return language, region


def region_code(locale_tag: Optional[str] = None) -> Optional[str]:
    """Region of the current locale, or None when the locale has none."""
    tag = locale_tag if locale_tag is not None else _preferred_locale_tag()
    return _split_locale_tag(tag)[1]


def language_code(locale_tag: Optional[str] = None) -> str:
    """Lower-cased language part of the preferred locale, "en" if unknown."""
    tag = locale_tag if locale_tag is not None else _preferred_locale_tag()
    language = _split_locale_tag(tag)[0]
    return language.lower() if language else DEFAULT_LANGUAGE


def system_info() -> str:
    """OS name and version, e.g. "Linux 6.8.0"."""
    return f"{platform.system()} {platform.release()}".strip()


def decode_machine_identifier(raw: bytes) -> str:
    """Decode a fixed-size machine-type buffer, dropping the trailing NUL padding."""
    return raw.rstrip(b"\x00").decode("utf-8", errors="replace")


def model_identifier() -> str:
    """Hardware model identifier of this machine (uname machine field)."""
    if hasattr(os, "uname"):
        raw = os.uname().machine.encode("utf-8")
    else:
        raw = platform.machine().encode("utf-8")
    return decode_machine_identifier(raw)


def collect_fingerprint() -> DeviceFingerprint:
    tag = _preferred_locale_tag()
    return DeviceFingerprint(
        region_code=region_code(tag),
        language_code=language_code(tag),
        system_info=system_info(),
        model_identifier=model_identifier(),
    )
