"""
Device fingerprint: locale parsing and machine identifiers.

Run:
    pytest tests/test_fingerprint.py -v
"""

from unittest.mock import patch

import pytest

from modules.gate import fingerprint
from modules.gate.fingerprint import (
    decode_machine_identifier, language_code, region_code, system_info,
)


class TestRegionCode:
    @pytest.mark.parametrize("tag,expected", [
        ("en_US.UTF-8", "US"),
        ("pt-BR", "BR"),
        ("de_at", "AT"),
        ("zh-Hans-CN", "CN"),
        ("es-419", "419"),
        ("sr_RS@latin", "RS"),
    ])
    def test_region_extracted(self, tag, expected):
        assert region_code(tag) == expected

    @pytest.mark.parametrize("tag", ["de", "C", "POSIX", "C.UTF-8", ""])
    def test_no_region(self, tag):
        assert region_code(tag) is None


class TestLanguageCode:
    @pytest.mark.parametrize("tag,expected", [
        ("en_US.UTF-8", "en"),
        ("PT-br", "pt"),
        ("fr", "fr"),
    ])
    def test_language_lowercased(self, tag, expected):
        assert language_code(tag) == expected

    @pytest.mark.parametrize("tag", ["", "C", "POSIX"])
    def test_defaults_to_english(self, tag):
        assert language_code(tag) == "en"


class TestPreferredLocale:
    def test_language_env_first_entry_wins(self, monkeypatch):
        monkeypatch.setenv("LANGUAGE", "de_AT:de:en")
        assert fingerprint._preferred_locale_tag() == "de_AT"

    def test_falls_back_to_process_locale(self, monkeypatch):
        monkeypatch.delenv("LANGUAGE", raising=False)
        with patch("locale.getlocale", return_value=("fr_CA", "UTF-8")):
            assert fingerprint._preferred_locale_tag() == "fr_CA"

    def test_falls_back_to_lang(self, monkeypatch):
        monkeypatch.delenv("LANGUAGE", raising=False)
        monkeypatch.delenv("LC_ALL", raising=False)
        monkeypatch.setenv("LANG", "ja_JP.UTF-8")
        with patch("locale.getlocale", return_value=(None, None)):
            assert fingerprint._preferred_locale_tag() == "ja_JP.UTF-8"


class TestMachineIdentifiers:
    def test_trailing_nul_padding_dropped(self):
        assert decode_machine_identifier(b"iPhone14,2\x00\x00\x00\x00") == "iPhone14,2"

    def test_invalid_utf8_replaced(self):
        assert decode_machine_identifier(b"ab\xffcd\x00") == "ab�cd"

    def test_system_info_combines_name_and_release(self):
        with patch("platform.system", return_value="Linux"), \
                patch("platform.release", return_value="6.8.0"):
            assert system_info() == "Linux 6.8.0"

    def test_collect_fingerprint(self, monkeypatch):
        monkeypatch.setenv("LANGUAGE", "it_IT")
        fp = fingerprint.collect_fingerprint()
        assert (fp.language_code, fp.region_code) == ("it", "IT")
        assert fp.model_identifier
        assert fp.system_info
