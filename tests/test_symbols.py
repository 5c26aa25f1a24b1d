"""
Tests for Symbols and Logger — Visual vocabulary and status lines

Tests Unicode/ASCII detection, text sanitisation and marker-prefixed logging.
"""

import io
import os
from unittest.mock import patch

from praxis.presentation.logger import Logger, debug_enabled
from praxis.presentation.symbols import (
    ASCII, UNICODE, get_symbols, normalize_quotes, safe_print,
    sanitize_control_chars, supports_unicode,
)


BADGES = ("check_pass", "check_warn", "check_fail", "stale", "not_validated", "stopped", "cache")


class TestSymbolSets:
    """Test symbol set completeness."""

    def test_both_sets_have_badges(self):
        for name in BADGES:
            assert getattr(UNICODE, name)
            assert getattr(ASCII, name)

    def test_ascii_is_printable(self):
        """ASCII symbols are all printable ASCII."""
        for name in BADGES + ("info", "success", "warning", "error", "debug", "arrow", "bullet"):
            sym = getattr(ASCII, name)
            assert all(32 <= ord(c) <= 126 for c in sym), f"Non-printable ASCII in {sym}"


class TestSymbolSelection:
    """Test symbol set selection logic."""

    def test_explicit_unicode(self):
        assert get_symbols("unicode") is UNICODE

    def test_explicit_ascii(self):
        assert get_symbols("ascii") is ASCII

    def test_auto_respects_detection(self):
        """Auto mode uses detection result."""
        with patch('praxis.presentation.symbols.supports_unicode', return_value=True):
            assert get_symbols("auto") is UNICODE
            assert get_symbols(None) is UNICODE

        with patch('praxis.presentation.symbols.supports_unicode', return_value=False):
            assert get_symbols("auto") is ASCII


class TestUnicodeDetection:
    """Test Unicode support detection."""

    def test_utf8_lang_enables_unicode(self):
        with patch.dict(os.environ, {'LANG': 'en_US.UTF-8', 'PRAXIS_ASCII_ONLY': '', 'PRAXIS_UNICODE': ''}):
            with patch('praxis.presentation.symbols.sys.stdout', io.StringIO()):
                assert supports_unicode() is True

    def test_ascii_only_env_disables(self):
        with patch.dict(os.environ, {'PRAXIS_ASCII_ONLY': '1', 'LANG': 'en_US.UTF-8'}):
            assert supports_unicode() is False

    def test_unicode_env_enables(self):
        with patch.dict(os.environ, {'PRAXIS_UNICODE': 'true', 'PRAXIS_ASCII_ONLY': ''}):
            assert supports_unicode() is True


class TestSanitization:
    """Text coming back from the classifier."""

    def test_control_chars_stripped(self):
        assert sanitize_control_chars("a\x00b\x1b[31mc\x7f") == "ab[31mc"

    def test_whitespace_preserved(self):
        assert sanitize_control_chars("a\n\tb\r") == "a\n\tb\r"

    def test_quotes_folded(self):
        assert normalize_quotes('"a" “b” ‘c’') == "'a' 'b' 'c'"

    def test_empty(self):
        assert sanitize_control_chars("") == ""
        assert normalize_quotes("") == ""


class TestSafePrint:

    def test_writes_to_stream(self):
        out = io.StringIO()
        safe_print("hello", file=out)
        assert out.getvalue() == "hello\n"

    def test_falls_back_on_encoding_error(self):
        raw = io.BytesIO()
        stream = io.TextIOWrapper(raw, encoding="ascii")
        safe_print("→ done ✓", file=stream)
        stream.flush()
        assert raw.getvalue().decode("ascii") == "-> done [OK]\n"


class TestLogger:

    def _logger(self):
        out = io.StringIO()
        return Logger(output=out, symbols=ASCII), out

    def test_markers(self):
        logger, out = self._logger()
        logger.info("one")
        logger.success("two")
        logger.warn("three")
        logger.error("four")
        assert out.getvalue().splitlines() == [
            "[INFO] one", "[OK] two", "[WARN] three", "[ERROR] four",
        ]

    def test_debug_hidden_by_default(self):
        logger, out = self._logger()
        logger.debug("quiet")
        assert out.getvalue() == ""
        assert debug_enabled() is False

    def test_debug_shown_when_enabled(self, monkeypatch):
        monkeypatch.setenv("PRAXIS_DEBUG", "1")
        logger, out = self._logger()
        logger.debug("loud")
        assert out.getvalue() == "[DEBUG] loud\n"
