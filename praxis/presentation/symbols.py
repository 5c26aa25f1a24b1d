"""
Symbols — Visual vocabulary for compile and validation states

Progressive enhancement: Unicode when supported, ASCII fallback.
Configurable via display.symbols setting.

Also provides safe output utilities:
- safe_print(): Encoding-safe printing for untrusted content
- sanitize_control_chars(): Security sanitization for LLM output
- normalize_quotes(): Quote folding for text persisted as JSON
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Safe Output Utilities (Two-Layer Defense)
# =============================================================================
# Layer 1 (Security): sanitize_control_chars() - strips dangerous control chars
# Layer 2 (Encoding): safe_print() - handles display encoding gracefully

# Common Unicode to ASCII replacements for display
UNICODE_TO_ASCII = {
    '→': '->',
    '←': '<-',
    '…': '...',
    '–': '-',
    '—': '--',
    '“': '"',
    '”': '"',
    '‘': "'",
    '’': "'",
    '•': '*',
    '✓': '[OK]',
    '⚠': '[!]',
    '❌': '[ERR]',
}

# Quote characters folded to a single apostrophe before persisting LLM text
QUOTE_CHARS = ('"', '“', '”', '‘', '’')


def sanitize_control_chars(text: str) -> str:
    """
    Layer 1 (Security): Remove dangerous control characters from LLM output.

    Strips control chars that could:
    - Manipulate terminal display (ANSI escapes)
    - Cause parsing issues (null bytes, DEL, etc.)

    Preserves: newlines (\\n), tabs (\\t), carriage returns (\\r)

    Args:
        text: Raw text from LLM or untrusted source

    Returns:
        Sanitized text safe for storage and display
    """
    if not text:
        return text

    result = []
    for char in text:
        code = ord(char)
        if code == 127:
            continue
        if code >= 32 or code in (9, 10, 13):  # \t, \n, \r
            result.append(char)

    return ''.join(result)


def normalize_quotes(text: str) -> str:
    """Fold straight and typographic quotes to a plain apostrophe."""
    if not text:
        return text
    for quote in QUOTE_CHARS:
        text = text.replace(quote, "'")
    return text


def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    Layer 2 (Encoding): Print with graceful encoding fallback.

    Handles UnicodeEncodeError by replacing unencodable characters
    with ASCII equivalents or '?' as last resort.

    Args:
        text: Text to print (may contain any Unicode)
        end: String appended after text (default: newline)
        file: Output stream (default: sys.stdout)
    """
    if file is None:
        file = sys.stdout

    try:
        print(text, end=end, file=file)
    except UnicodeEncodeError:
        safe_text = text
        for unicode_char, ascii_equiv in UNICODE_TO_ASCII.items():
            safe_text = safe_text.replace(unicode_char, ascii_equiv)

        try:
            print(safe_text, end=end, file=file)
        except UnicodeEncodeError:
            # Last resort: replace all unencodable chars with ?
            encoding = getattr(file, 'encoding', 'utf-8') or 'utf-8'
            encoded = safe_text.encode(encoding, errors='replace')
            print(encoded.decode(encoding), end=end, file=file)


@dataclass(frozen=True)
class SymbolSet:
    """Complete set of symbols for log levels and validation states."""
    # Log levels
    info: str
    success: str
    warning: str
    error: str
    debug: str

    # Validation badges
    check_pass: str
    check_warn: str
    check_fail: str
    stale: str
    not_validated: str
    stopped: str
    cache: str

    # Structural
    arrow: str
    bullet: str
    rule: str


UNICODE = SymbolSet(
    info='ℹ',
    success='✓',
    warning='⚠',
    error='✗',
    debug='·',
    check_pass='✓ PASS',
    check_warn='⚠ WARN',
    check_fail='✗ FAIL',
    stale='↻ STALE',
    not_validated='○ NOT VALIDATED',
    stopped='■ STOPPED',
    cache='≡ CACHE',
    arrow='→',
    bullet='•',
    rule='─',
)

ASCII = SymbolSet(
    info='[INFO]',
    success='[OK]',
    warning='[WARN]',
    error='[ERROR]',
    debug='[DEBUG]',
    check_pass='[PASS]',
    check_warn='[WARN]',
    check_fail='[FAIL]',
    stale='[STALE]',
    not_validated='[NOT VALIDATED]',
    stopped='[STOPPED]',
    cache='[CACHE]',
    arrow='->',
    bullet='-',
    rule='=',
)


def supports_unicode() -> bool:
    """
    Check if environment likely supports Unicode output.

    Conservative: defaults to ASCII if uncertain.
    """
    if os.environ.get('PRAXIS_ASCII_ONLY', '').lower() in ('1', 'true', 'yes'):
        return False
    if os.environ.get('PRAXIS_UNICODE', '').lower() in ('1', 'true', 'yes'):
        return True

    stdout_encoding = getattr(sys.stdout, 'encoding', None)
    if stdout_encoding:
        encoding_lower = stdout_encoding.lower().replace('-', '').replace('_', '')
        if encoding_lower.startswith('cp') or encoding_lower in ('ascii', 'latin1', 'iso88591'):
            return False

    lang = os.environ.get('LANG', '').lower()
    lc_all = os.environ.get('LC_ALL', '').lower()
    if 'utf-8' in lang or 'utf8' in lang:
        return True
    if 'utf-8' in lc_all or 'utf8' in lc_all:
        return True

    term_program = os.environ.get('TERM_PROGRAM', '')
    if term_program in ('vscode', 'iTerm.app', 'Apple_Terminal', 'Hyper'):
        return True

    if os.environ.get('WT_SESSION'):
        return True

    if stdout_encoding and 'utf' in stdout_encoding.lower():
        return True

    return False


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Get appropriate symbol set based on preference or auto-detection.

    Args:
        preference: "unicode", "ascii", or "auto" (None = auto)

    Returns:
        Appropriate SymbolSet for the environment
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII
